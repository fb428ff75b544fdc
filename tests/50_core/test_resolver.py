# tests/50_core/test_resolver.py
"""Tests for esmbridge.resolver."""

from pathlib import Path

import pytest

import esmbridge.errors as mod_errors
import esmbridge.introspect as mod_introspect
import esmbridge.resolver as mod_resolver
import esmbridge.scratch as mod_scratch
import esmbridge.types as mod_types


def _introspector(
    **surfaces: mod_types.SymbolSurface,
) -> mod_introspect.StaticSymbolIntrospector:
    return mod_introspect.StaticSymbolIntrospector(surfaces)


def test_make_symbol_surface_dedupes_and_reads_format() -> None:
    # --- execute ---
    cjs = mod_resolver.make_symbol_surface(["a", "b", "a"])
    esm = mod_resolver.make_symbol_surface(["a"], "esm")

    # --- verify ---
    assert cjs.names == ("a", "b")
    assert cjs.interop_shape == "cjs"
    assert esm.interop_shape == "esm"


@pytest.mark.parametrize("name", ["react", "@scope/pkg", "lodash/fp"])
def test_resolve_export_without_symbols_imports_package(
    tmp_path: Path,
    name: str,
) -> None:
    """Without symbols the package itself is the entry and no bridge is written."""
    # --- setup ---
    scratch = mod_scratch.ScratchDir(tmp_path)

    # --- execute ---
    result = mod_resolver.resolve_export(
        {"name": name}, introspector=_introspector(), scratch=scratch
    )

    # --- verify ---
    assert result.import_path == name
    assert not result.is_bridged
    assert list(tmp_path.iterdir()) == []


def test_resolve_export_with_symbol_list_writes_bridge(tmp_path: Path) -> None:
    # --- setup ---
    scratch = mod_scratch.ScratchDir(tmp_path)

    # --- execute ---
    result = mod_resolver.resolve_export(
        {"name": "@scope/pkg", "symbols": ["a", "b"]},
        introspector=_introspector(),
        scratch=scratch,
    )

    # --- verify ---
    assert result.flat_pkg_name == "@scope$pkg"
    assert result.import_path == tmp_path / "bridges" / "@scope$pkg.js"
    assert result.interop_shape == "cjs"
    source = Path(result.import_path).read_text(encoding="utf-8")
    assert "const __esModule = true;" in source


def test_resolve_export_auto_uses_introspected_surface(tmp_path: Path) -> None:
    # --- setup ---
    scratch = mod_scratch.ScratchDir(tmp_path)
    introspector = _introspector(
        pkg=mod_types.SymbolSurface(names=("__esModule", "default", "a"), es_module=True)
    )

    # --- execute ---
    result = mod_resolver.resolve_export(
        {"name": "pkg", "symbols": "auto"},
        introspector=introspector,
        scratch=scratch,
    )

    # --- verify ---
    assert result.interop_shape == "esm"
    source = Path(result.import_path).read_text(encoding="utf-8")
    assert "\tdef as default,\n\ta\n};\n" in source


def test_resolve_export_auto_failure_raises_symbol_resolution_error(
    tmp_path: Path,
) -> None:
    # --- setup ---
    scratch = mod_scratch.ScratchDir(tmp_path)

    # --- execute and verify ---
    with pytest.raises(mod_errors.SymbolResolutionError) as exc_info:
        mod_resolver.resolve_export(
            {"name": "missing-pkg", "symbols": "auto"},
            introspector=_introspector(),
            scratch=scratch,
        )

    assert exc_info.value.pkg_name == "missing-pkg"
    assert "Unable to require('missing-pkg')" in str(exc_info.value)
    assert "Cannot find module 'missing-pkg'" in str(exc_info.value)
    assert list(tmp_path.iterdir()) == []


def test_resolve_export_rejects_unknown_symbols_keyword(tmp_path: Path) -> None:
    # --- setup ---
    scratch = mod_scratch.ScratchDir(tmp_path)

    # --- execute and verify ---
    with pytest.raises(ValueError, match="Invalid symbols"):
        mod_resolver.resolve_export(
            {"name": "pkg", "symbols": "everything"},
            introspector=_introspector(),
            scratch=scratch,
        )
