# src/esmbridge/bridge.py
"""Bridge modules: ESM sources re-exporting a CommonJS-loaded package.

Two fixed templates, chosen by the package's interop shape. ``P`` is the
package name rendered as a single-quoted string literal, ``N`` the ordered
named exports (never ``default`` or ``__esModule``), one per line, tab
indented and comma separated.

ESM-shaped (the package already separates ``default`` from named exports)::

    const x = require(P);

    const {
        default: def,
        N...
    } = x;

    export {
        def as default,
        N...
    };

CommonJS-shaped (the whole export object becomes the default export)::

    const x = require(P);

    const {
        N...
    } = x;

    const __esModule = true;

    export {
        __esModule,
        x as default,
        N...
    };

The CommonJS destructuring block is omitted when there are no named exports.

Escaping rules for a name ``n``:

- ``n`` is emitted verbatim when it is a valid identifier that strict code
  can bind (no reserved word, no ``eval`` or ``arguments``) and that
  does not clash with the template's own bindings (``x``, ``def``) or with
  generated aliases (``__bridge_<k>``),
- otherwise it is bound to the alias ``__bridge_<k>`` (``k`` counts aliased
  names in order) via ``key: __bridge_<k>`` and re-exported as
  ``__bridge_<k> as key``,
- ``key`` is ``n`` itself when it is a syntactically valid identifier name
  (reserved words included), or ``n`` as a quoted string literal.

Every source starts with an empty line and ends with a newline, so output is
reproducible and comparable as plain text.
"""

import re
from collections.abc import Sequence
from pathlib import Path

from .constants import InteropShape
from .logs import getAppLogger
from .scratch import ScratchDir
from .types import NON_NAMED_EXPORTS
from .utils import is_js_identifier, is_js_identifier_name, js_string_literal


TEMPLATE_BINDINGS = frozenset({"x", "def", "__esModule"})
ALIAS_PREFIX = "__bridge_"
_ALIAS_RE = re.compile(rf"{ALIAS_PREFIX}\d+")

INDENT = "\t"

# kept apart from the runner script and persisted configs
BRIDGES_DIR = "bridges"


def _export_key(name: str) -> str:
    return name if is_js_identifier_name(name) else js_string_literal(name)


def _needs_alias(name: str) -> bool:
    return (
        not is_js_identifier(name)
        or name in TEMPLATE_BINDINGS
        or bool(_ALIAS_RE.fullmatch(name))
    )


def _named_bindings(names: Sequence[str]) -> tuple[list[str], list[str]]:
    """Return (destructuring entries, export entries) for `names`."""
    destructure: list[str] = []
    export: list[str] = []
    alias_count = 0

    for name in names:
        if _needs_alias(name):
            alias = f"{ALIAS_PREFIX}{alias_count}"
            alias_count += 1
            key = _export_key(name)
            destructure.append(f"{key}: {alias}")
            export.append(f"{alias} as {key}")
        else:
            destructure.append(name)
            export.append(name)

    return destructure, export


def _block(entries: Sequence[str]) -> str:
    return ",\n".join(f"{INDENT}{entry}" for entry in entries)


def render_bridge_source(
    pkg_name: str,
    names: Sequence[str],
    interop_shape: InteropShape,
) -> str:
    """Render the bridge module text for `pkg_name`."""
    named = [n for n in dict.fromkeys(names) if n not in NON_NAMED_EXPORTS]
    destructure, export = _named_bindings(named)
    require = f"const x = require({js_string_literal(pkg_name)});\n"

    if interop_shape == "esm":
        return (
            f"\n{require}"
            "\n"
            "const {\n"
            f"{_block(['default: def', *destructure])}\n"
            "} = x;\n"
            "\n"
            "export {\n"
            f"{_block(['def as default', *export])}\n"
            "};\n"
        )

    destructure_stmt = f"\nconst {{\n{_block(destructure)}\n}} = x;\n" if named else ""
    return (
        f"\n{require}"
        f"{destructure_stmt}"
        "\n"
        "const __esModule = true;\n"
        "\n"
        "export {\n"
        f"{_block(['__esModule', 'x as default', *export])}\n"
        "};\n"
    )


def synthesize_bridge(
    pkg_name: str,
    flat_pkg_name: str,
    names: Sequence[str],
    interop_shape: InteropShape,
    scratch: ScratchDir,
) -> Path:
    """Write the bridge for `pkg_name` into the scratch dir and return its path."""
    source = render_bridge_source(pkg_name, names, interop_shape)
    file_path = scratch.create_temp_file(
        f"{BRIDGES_DIR}/{flat_pkg_name}.js", source
    )
    getAppLogger().debug(
        "Generated %s-shaped bridge for %s → %s", interop_shape, pkg_name, file_path
    )
    return file_path
