# src/esmbridge/utils/utils_names.py
"""Naming helpers for generated entries, files and JavaScript source text."""

import re
from collections.abc import Iterable


# ASCII subset of IdentifierName; anything else goes through the aliasing path
_JS_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

JS_RESERVED_WORDS = frozenset(
    {
        "await",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
    }
)

# Valid names that strict code (every ES module) cannot bind
JS_STRICT_BINDING_NAMES = frozenset({"eval", "arguments"})

_JS_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def flatten_pkg_name(pkg_name: str) -> str:
    """Turn a package name into a single path segment.

    ``@scope/pkg`` becomes ``@scope$pkg``. The transform is not injective
    (``a/b`` and ``a$b`` flatten to the same value); see
    find_flat_name_collisions().
    """
    return pkg_name.replace("/", "$")


def find_flat_name_collisions(pkg_names: Iterable[str]) -> dict[str, list[str]]:
    """Return flattened names shared by more than one distinct package name."""
    seen: dict[str, list[str]] = {}
    for name in pkg_names:
        owners = seen.setdefault(flatten_pkg_name(name), [])
        if name not in owners:
            owners.append(name)
    return {flat: owners for flat, owners in seen.items() if len(owners) > 1}


def is_js_identifier_name(name: str) -> bool:
    """True if `name` can appear unquoted as a property key or export name."""
    return bool(_JS_IDENTIFIER_RE.fullmatch(name))


def is_js_identifier(name: str) -> bool:
    """True if `name` can be used verbatim as a binding name."""
    return (
        bool(_JS_IDENTIFIER_RE.fullmatch(name))
        and name not in JS_RESERVED_WORDS
        and name not in JS_STRICT_BINDING_NAMES
    )


def js_string_literal(value: str) -> str:
    """Render `value` as a single-quoted JavaScript string literal."""
    escaped = "".join(_JS_STRING_ESCAPES.get(ch, ch) for ch in value)
    return f"'{escaped}'"
