# src/esmbridge/externals.py
"""Externals: which imports the backend leaves unbundled, and where they live.

An imports config maps a provider (the project publishing the bundles) to the
packages it exports::

    {"frontend-js-react-web": {"react": "*", "react-dom": "*"}}

Every imported package is resolved at runtime from the provider's published
export bundle instead of being bundled again.
"""

from collections.abc import Callable

from .config.config_types import ImportsConfig
from .constants import DEFAULT_NAMESPACE
from .logs import getAppLogger
from .utils import flatten_pkg_name


ExternalsMap = dict[str, str]
ExternalsConverter = Callable[[ImportsConfig, int], ExternalsMap]

WILDCARD_SEGMENT = "/*"
FLAT_WILDCARD_SEGMENT = "$*"


def export_bundle_url(
    provider: str,
    flat_pkg_name: str,
    namespace: str = DEFAULT_NAMESPACE,
) -> str:
    return f"/o/{provider}/{namespace}/exports/{flat_pkg_name}.js"


def convert_imports_to_externals(
    imports: ImportsConfig,
    depth: int,
    namespace: str = DEFAULT_NAMESPACE,
) -> ExternalsMap:
    """Map every imported package (and its sub-paths) to its export bundle URL.

    `depth` counts path levels including the package itself: depth 1 maps only
    ``pkg``, depth 2 adds ``pkg/*``, depth 3 adds ``pkg/*/*`` and so on. In
    wildcard keys each ``*`` stands for one path segment; the URL carries the
    same number of ``$*`` placeholders, so ``pkg/a/b`` resolves to the bundle
    of the flattened name ``pkg$a$b``.

    Insertion order follows the imports config (providers, then packages).
    """
    externals: ExternalsMap = {}
    for provider, packages in imports.items():
        for pkg_name in packages:
            flat_pkg_name = flatten_pkg_name(pkg_name)
            for level in range(max(depth, 1)):
                key = pkg_name + WILDCARD_SEGMENT * level
                url = export_bundle_url(
                    provider,
                    flat_pkg_name + FLAT_WILDCARD_SEGMENT * level,
                    namespace,
                )
                if key in externals and externals[key] != url:
                    getAppLogger().warning(
                        "Package %r is imported from more than one provider; "
                        "using %s",
                        key,
                        url,
                    )
                externals[key] = url
    return externals


def assemble_externals(
    imports: ImportsConfig,
    depth: int,
    *,
    exclude: str | None = None,
    converter: ExternalsConverter = convert_imports_to_externals,
) -> ExternalsMap:
    """Build the externals map for one entry.

    `exclude` is the entry's own package name: an export must never
    externalize itself, or its bundle would import itself at runtime.
    Converter failures propagate unchanged.
    """
    externals = dict(converter(imports, depth))

    if exclude is not None and externals.pop(exclude, None) is not None:
        getAppLogger().trace("[externals] dropped self-reference %r", exclude)

    return externals
