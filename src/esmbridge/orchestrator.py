# src/esmbridge/orchestrator.py
"""Run webpack as a replacement of the legacy bundler.

Builds run strictly one at a time: the index bundle first (when the package
has a main entry), then every export in declaration order. Concurrent
backend runs would share the working directory and scratch artifacts.
"""

import asyncio
import math
import time
from pathlib import Path
from typing import Any

from .backend import Backend, DryRunBackend, WebpackBackend
from .config.config_types import BuildConfigResolved
from .constants import EXPORT_CONFIG_ARTIFACT, INDEX_CONFIG_ARTIFACT
from .errors import BackendBuildError
from .introspect import NodeSymbolIntrospector, SymbolIntrospector
from .logs import getAppLogger
from .scratch import ScratchDir
from .webpack_config import (
    WebpackConfig,
    build_export_configs,
    build_index_config,
    dump_config,
    entry_name,
)


async def _run_backend(
    backend: Backend,
    config: WebpackConfig,
    *,
    report: bool,
) -> None:
    entry = entry_name(config)
    getAppLogger().info("📦 Bundling %s", entry)
    try:
        await backend.run(config, report=report)
    except BackendBuildError:
        raise
    except Exception as e:
        raise BackendBuildError(entry, output=f"{type(e).__name__}: {e}") from e


async def run_webpack_as_bundler(
    project_dir: Path,
    build_cfg: BuildConfigResolved,
    transpile_options: dict[str, Any],
    *,
    backend: Backend | None = None,
    introspector: SymbolIntrospector | None = None,
    scratch: ScratchDir | None = None,
) -> float:
    """Generate and run every bundle of the package; return elapsed seconds.

    Any failure (symbol resolution, config assembly or a backend run) stops
    the sequence; nothing after the failing entry is built.
    """
    logger = getAppLogger()
    start = time.monotonic()

    scratch = scratch or ScratchDir.create(build_cfg["scratch_root"])
    introspector = introspector or NodeSymbolIntrospector(project_dir)
    backend = backend or WebpackBackend(project_dir, scratch)
    report = build_cfg["report"]

    logger.debug("Scratch artifacts in %s", scratch.path)

    index_config = build_index_config(build_cfg, transpile_options)
    if index_config is not None:
        scratch.create_temp_file(INDEX_CONFIG_ARTIFACT, dump_config(index_config))
        await _run_backend(backend, index_config, report=report)
    else:
        logger.debug("No main entry configured; skipping index bundle")

    export_configs = build_export_configs(
        build_cfg, introspector=introspector, scratch=scratch
    )

    for i, config in enumerate(export_configs):
        if report:
            scratch.create_temp_file(
                EXPORT_CONFIG_ARTIFACT.format(index=i), dump_config(config)
            )
        await _run_backend(backend, config, report=report)

    lapse = time.monotonic() - start
    logger.info("✅ ESM bundling took %ds", math.floor(lapse))
    return lapse


def run_bundler(build_cfg: BuildConfigResolved) -> float:
    """Synchronous entry point used by the CLI."""
    backend: Backend | None = DryRunBackend() if build_cfg["dry_run"] else None
    return asyncio.run(
        run_webpack_as_bundler(
            build_cfg["project_dir"],
            build_cfg,
            build_cfg["babel"],
            backend=backend,
        )
    )
