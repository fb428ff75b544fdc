# src/esmbridge/__init__.py

"""esmbridge: bundle a package and its exports as ECMAScript modules.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use, custom integrations, or plugins.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()                    → CLI entrypoint
    - run_webpack_as_bundler()  → Build the index bundle and every export
    - build_export_config()     → Webpack config for one declared export
    - render_bridge_source()    → ESM bridge text for a CommonJS package
    - resolve_config()          → Merge CLI args with config files
"""

from .actions import get_metadata
from .backend import Backend, DryRunBackend, WebpackBackend
from .bridge import render_bridge_source, synthesize_bridge
from .cli import main
from .config import (
    BuildConfig,
    BuildConfigResolved,
    ExportItem,
    ImportsConfig,
    RootConfig,
    find_config,
    load_and_validate_config,
    load_config,
    normalize_export_item,
    parse_config,
    resolve_build_mode,
    resolve_config,
    validate_config,
)
from .constants import (
    DEFAULT_BUILD_MODE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_NAMESPACE,
    DEFAULT_OUT_DIR,
    DEFAULT_STRICT_CONFIG,
    EXPORT_EXTERNALS_DEPTH,
    INDEX_EXTERNALS_DEPTH,
)
from .errors import BackendBuildError, EsmBridgeError, SymbolResolutionError
from .externals import assemble_externals, convert_imports_to_externals
from .introspect import (
    IntrospectionError,
    NodeSymbolIntrospector,
    StaticSymbolIntrospector,
    SymbolIntrospector,
)
from .logs import getAppLogger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
)
from .orchestrator import run_bundler, run_webpack_as_bundler
from .resolver import make_symbol_surface, resolve_export
from .scratch import ScratchDir
from .types import ResolvedExportDescriptor, SymbolSurface
from .utils import flatten_pkg_name
from .webpack_config import (
    build_export_config,
    build_export_configs,
    build_index_config,
)


__all__ = [  # noqa: RUF022
    # actions
    "get_metadata",
    # backend
    "Backend",
    "DryRunBackend",
    "WebpackBackend",
    # bridge
    "render_bridge_source",
    "synthesize_bridge",
    # cli
    "main",
    # config
    "BuildConfig",
    "BuildConfigResolved",
    "ExportItem",
    "ImportsConfig",
    "RootConfig",
    "find_config",
    "load_and_validate_config",
    "load_config",
    "normalize_export_item",
    "parse_config",
    "resolve_build_mode",
    "resolve_config",
    "validate_config",
    # constants
    "DEFAULT_BUILD_MODE",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_NAMESPACE",
    "DEFAULT_OUT_DIR",
    "DEFAULT_STRICT_CONFIG",
    "EXPORT_EXTERNALS_DEPTH",
    "INDEX_EXTERNALS_DEPTH",
    # errors
    "BackendBuildError",
    "EsmBridgeError",
    "SymbolResolutionError",
    # externals
    "assemble_externals",
    "convert_imports_to_externals",
    # introspect
    "IntrospectionError",
    "NodeSymbolIntrospector",
    "StaticSymbolIntrospector",
    "SymbolIntrospector",
    # logs
    "getAppLogger",
    # meta
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "Metadata",
    # orchestrator
    "run_bundler",
    "run_webpack_as_bundler",
    # resolver
    "make_symbol_surface",
    "resolve_export",
    # scratch
    "ScratchDir",
    # types
    "ResolvedExportDescriptor",
    "SymbolSurface",
    # utils
    "flatten_pkg_name",
    # webpack_config
    "build_export_config",
    "build_export_configs",
    "build_index_config",
]
