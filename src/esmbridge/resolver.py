# src/esmbridge/resolver.py
"""Turn a declared export item into the entry the backend should bundle."""

from collections.abc import Sequence

from .bridge import synthesize_bridge
from .config.config_types import ExportItem
from .constants import AUTO_SYMBOLS, ESM_FORMAT
from .errors import SymbolResolutionError
from .introspect import SymbolIntrospector
from .logs import getAppLogger
from .scratch import ScratchDir
from .types import ResolvedExportDescriptor, SymbolSurface
from .utils import flatten_pkg_name


def make_symbol_surface(
    symbols: Sequence[str],
    fmt: str | None = None,
) -> SymbolSurface:
    """Build a surface whose keys are exactly the declared symbols."""
    return SymbolSurface(
        names=tuple(dict.fromkeys(symbols)),
        es_module=fmt == ESM_FORMAT,
    )


def resolve_symbol_surface(
    item: ExportItem,
    introspector: SymbolIntrospector,
) -> SymbolSurface | None:
    """Return the item's symbol surface, or None when no bridge is needed.

    Raises:
        SymbolResolutionError: ``symbols`` is ``"auto"`` and the package
            could not be introspected. There is no safe fallback surface.
    """
    pkg_name = item["name"]

    if "symbols" not in item:
        return None

    symbols = item["symbols"]
    if symbols == AUTO_SYMBOLS:
        try:
            return introspector.introspect(pkg_name)
        except Exception as e:
            raise SymbolResolutionError(pkg_name, e) from e

    if isinstance(symbols, str):
        xmsg = (
            f"Invalid symbols for export {pkg_name!r}: expected "
            f"{AUTO_SYMBOLS!r} or a list of names, got {symbols!r}"
        )
        raise ValueError(xmsg)

    return make_symbol_surface(symbols, item.get("format"))


def resolve_export(
    item: ExportItem,
    *,
    introspector: SymbolIntrospector,
    scratch: ScratchDir,
) -> ResolvedExportDescriptor:
    """Resolve one export item, writing its bridge source when one is needed."""
    logger = getAppLogger()
    pkg_name = item["name"]
    flat_pkg_name = flatten_pkg_name(pkg_name)

    surface = resolve_symbol_surface(item, introspector)
    if surface is None:
        logger.trace("[resolve] %s exported as-is", pkg_name)
        return ResolvedExportDescriptor(
            pkg_name=pkg_name,
            flat_pkg_name=flat_pkg_name,
            import_path=pkg_name,
        )

    bridge_path = synthesize_bridge(
        pkg_name,
        flat_pkg_name,
        surface.named_exports,
        surface.interop_shape,
        scratch,
    )
    return ResolvedExportDescriptor(
        pkg_name=pkg_name,
        flat_pkg_name=flat_pkg_name,
        import_path=bridge_path,
        surface=surface,
    )
