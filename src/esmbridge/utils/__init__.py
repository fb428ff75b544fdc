# src/esmbridge/utils/__init__.py

from .utils_names import (
    find_flat_name_collisions,
    flatten_pkg_name,
    is_js_identifier,
    is_js_identifier_name,
    js_string_literal,
)
from .utils_paths import shorten_path_for_display


__all__ = [  # noqa: RUF022
    # utils_names
    "find_flat_name_collisions",
    "flatten_pkg_name",
    "is_js_identifier",
    "is_js_identifier_name",
    "js_string_literal",
    # utils_paths
    "shorten_path_for_display",
]
