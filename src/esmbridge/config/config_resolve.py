# src/esmbridge/config/config_resolve.py


import argparse
import copy
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from esmbridge.constants import (
    DEFAULT_BUILD_MODE,
    DEFAULT_DRY_RUN,
    DEFAULT_ENV_BUILD_MODE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_NAMESPACE,
    DEFAULT_OUT_DIR,
    DEFAULT_REPORT,
    DEFAULT_STRICT_CONFIG,
    DEFAULT_TRANSPILE_OPTIONS,
    BuildMode,
)
from esmbridge.logs import getAppLogger

from .config_types import (
    BuildConfig,
    BuildConfigResolved,
    ExportItem,
    MetaBuildConfigResolved,
    OriginType,
    RootConfig,
)


def resolve_build_mode(env: Mapping[str, str] | None = None) -> BuildMode:
    """Read the build-mode signal from the environment.

    Only an exact ``development`` selects development; anything else,
    including an unset variable, is a production build.
    """
    env = os.environ if env is None else env
    if env.get(DEFAULT_ENV_BUILD_MODE) == "development":
        return "development"
    return DEFAULT_BUILD_MODE


def normalize_export_item(item: str | ExportItem) -> ExportItem:
    """Accept the bare-string shorthand and return a fresh ExportItem."""
    if isinstance(item, str):
        return {"name": item}

    normalized: ExportItem = {"name": item["name"]}
    if "symbols" in item:
        symbols = item["symbols"]
        normalized["symbols"] = symbols if isinstance(symbols, str) else list(symbols)
    if "format" in item:
        normalized["format"] = item["format"]
    return normalized


def _resolve_path(raw: str | Path, base: Path) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve()


def resolve_config(  # noqa: PLR0912
    root_cfg: RootConfig,
    args: argparse.Namespace,
    config_dir: Path,
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> BuildConfigResolved:
    """Merge CLI args, config file, environment and defaults.

    Precedence: CLI > config > environment > defaults. Paths given on the
    command line are relative to `cwd`; paths from the config file are
    relative to the project dir (the config file's directory by default).
    """
    logger = getAppLogger()
    build: BuildConfig = root_cfg.get("build", {})
    origin: OriginType = "config" if build else "cli"

    # --- project dir ---
    project_dir_arg = getattr(args, "project_dir", None)
    if project_dir_arg:
        project_dir = _resolve_path(project_dir_arg, cwd)
    else:
        project_dir = config_dir.resolve()
    logger.trace("[resolve] project_dir=%s", project_dir)

    # --- main entry ---
    main: Path | None = None
    main_arg = getattr(args, "main", None)
    if main_arg:
        main = _resolve_path(main_arg, cwd)
    elif build.get("main"):
        main = _resolve_path(build["main"], project_dir)

    # --- output dir ---
    output_arg = getattr(args, "output", None)
    if output_arg:
        output = _resolve_path(output_arg, cwd)
    else:
        output = _resolve_path(build.get("output", DEFAULT_OUT_DIR), project_dir)

    # --- report ---
    report_arg = getattr(args, "report", None)
    if report_arg is not None:
        report = bool(report_arg)
    else:
        report = bool(build.get("report", DEFAULT_REPORT))

    # --- build mode ---
    mode_arg = getattr(args, "mode", None)
    build_mode: BuildMode = mode_arg if mode_arg else resolve_build_mode(env)

    # --- log level & strictness ---
    log_level = (
        getattr(args, "log_level", None)
        or build.get("log_level")
        or root_cfg.get("log_level")
        or DEFAULT_LOG_LEVEL
    )
    strict_config = build.get(
        "strict_config", root_cfg.get("strict_config", DEFAULT_STRICT_CONFIG)
    )

    # --- scratch dir ---
    scratch_arg = getattr(args, "scratch_dir", None)
    scratch_root = _resolve_path(scratch_arg, cwd) if scratch_arg else None

    exports = [normalize_export_item(item) for item in build.get("exports", [])]
    babel: dict[str, Any] = copy.deepcopy(build.get("babel", DEFAULT_TRANSPILE_OPTIONS))

    meta: MetaBuildConfigResolved = {
        "cli_root": cwd,
        "config_root": config_dir,
        "origin": origin,
    }

    resolved: BuildConfigResolved = {
        "project_dir": project_dir,
        "main": main,
        "imports": copy.deepcopy(build.get("imports", {})),
        "exports": exports,
        "output": output,
        "report": report,
        "namespace": build.get("namespace", DEFAULT_NAMESPACE),
        "babel": babel,
        "build_mode": build_mode,
        "log_level": log_level,
        "strict_config": strict_config,
        "dry_run": bool(getattr(args, "dry_run", DEFAULT_DRY_RUN)),
        "scratch_root": scratch_root,
        "__meta__": meta,
    }

    logger.debug(
        "Resolved build: main=%s, %d export(s), output=%s, mode=%s, report=%s",
        main,
        len(exports),
        output,
        build_mode,
        report,
    )
    return resolved
