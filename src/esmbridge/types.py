# src/esmbridge/types.py

from dataclasses import dataclass
from pathlib import Path

from .constants import InteropShape


# Names that never appear among the named re-exports of a bridge
NON_NAMED_EXPORTS = frozenset({"default", "__esModule"})


@dataclass(frozen=True)
class SymbolSurface:
    """The exported shape of a package: its keys and whether it is ESM-shaped."""

    names: tuple[str, ...]
    es_module: bool = False

    @property
    def interop_shape(self) -> InteropShape:
        return "esm" if self.es_module else "cjs"

    @property
    def named_exports(self) -> tuple[str, ...]:
        """Names re-exported as-is (``default`` is handled separately)."""
        return tuple(n for n in self.names if n not in NON_NAMED_EXPORTS)


@dataclass(frozen=True)
class ResolvedExportDescriptor:
    pkg_name: str
    flat_pkg_name: str
    # the package name itself, or the path of a generated bridge source
    import_path: str | Path
    surface: SymbolSurface | None = None

    @property
    def interop_shape(self) -> InteropShape | None:
        return self.surface.interop_shape if self.surface else None

    @property
    def is_bridged(self) -> bool:
        return self.surface is not None
