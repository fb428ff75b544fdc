# src/esmbridge/config/config_types.py


from pathlib import Path
from typing import Any, Literal, TypedDict

from typing_extensions import NotRequired

from esmbridge.constants import BuildMode


OriginType = Literal["cli", "config", "env", "default", "code", "test"]

# provider name → {imported package name → version spec}
ImportsConfig = dict[str, dict[str, str]]

# "auto" or an explicit, ordered list of identifiers
SymbolsSpec = str | list[str]


class ExportItem(TypedDict):
    name: str
    symbols: NotRequired[SymbolsSpec]
    format: NotRequired[str]


class BuildConfig(TypedDict, total=False):
    main: str  # primary entry source, relative to the project dir
    imports: ImportsConfig
    exports: list[str | ExportItem]
    output: str
    report: bool

    # optional overrides
    namespace: str  # reserved output path segment (default: __liferay__)
    babel: dict[str, Any]  # transpile options for the index bundle
    log_level: str
    strict_config: bool


class RootConfig(TypedDict, total=False):
    build: BuildConfig

    # runtime behavior
    log_level: str
    strict_config: bool


class MetaBuildConfigResolved(TypedDict):
    # sources of parameters
    cli_root: Path
    config_root: Path
    origin: OriginType


class BuildConfigResolved(TypedDict):
    project_dir: Path
    main: Path | None  # absolute
    imports: ImportsConfig
    exports: list[ExportItem]  # normalized, declaration order
    output: Path  # absolute
    report: bool
    namespace: str
    babel: dict[str, Any]
    build_mode: BuildMode
    log_level: str
    strict_config: bool

    # runtime flags (CLI only, not persisted in normal configs)
    dry_run: bool
    scratch_root: Path | None

    __meta__: MetaBuildConfigResolved
