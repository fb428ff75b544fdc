# src/esmbridge/config/__init__.py

"""Configuration handling for esmbridge.

This module provides configuration loading, parsing, validation, and resolution.
"""

from .config_loader import (
    find_config,
    load_and_validate_config,
    load_config,
    parse_config,
)
from .config_resolve import (
    normalize_export_item,
    resolve_build_mode,
    resolve_config,
)
from .config_types import (
    BuildConfig,
    BuildConfigResolved,
    ExportItem,
    ImportsConfig,
    MetaBuildConfigResolved,
    OriginType,
    RootConfig,
    SymbolsSpec,
)
from .config_validate import ValidationSummary, validate_config


__all__ = [  # noqa: RUF022
    # config_loader
    "find_config",
    "load_and_validate_config",
    "load_config",
    "parse_config",
    # config_resolve
    "normalize_export_item",
    "resolve_build_mode",
    "resolve_config",
    # config_types
    "BuildConfig",
    "BuildConfigResolved",
    "ExportItem",
    "ImportsConfig",
    "MetaBuildConfigResolved",
    "OriginType",
    "RootConfig",
    "SymbolsSpec",
    # config_validate
    "ValidationSummary",
    "validate_config",
]
