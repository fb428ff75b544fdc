# src/esmbridge/webpack_config.py
"""Generate the webpack configurations for the index bundle and each export.

Configs are plain JSON-serializable dicts so they can be persisted for
inspection as-is. Values webpack needs as live objects are written as
descriptors and revived by the backend runner:

- ``{"$regexp": "<pattern>"}`` becomes ``new RegExp(pattern)``
- ``{"$plugin": "<module>", "options": {...}}`` becomes
  ``new (require(module))(options)``
- loader module names are resolved from the project directory
"""

import functools
import json
from typing import Any

from .config.config_types import BuildConfigResolved, ExportItem
from .constants import (
    DEFAULT_EXPORT_PRESETS,
    EXPORT_EXTERNALS_DEPTH,
    INDEX_EXTERNALS_DEPTH,
    REPORT_CONFIG_ARTIFACT,
)
from .externals import (
    ExternalsConverter,
    assemble_externals,
    convert_imports_to_externals,
)
from .introspect import SymbolIntrospector
from .logs import getAppLogger
from .resolver import resolve_export
from .scratch import ScratchDir
from .utils import find_flat_name_collisions


WebpackConfig = dict[str, Any]

SCRIPT_LOADER = "babel-loader"
STYLE_LOADER = "@liferay/npm-scripts/src/utils/webpackScssLoader"
MINIMIZER_PLUGIN = "terser-webpack-plugin"

NODE_MODULES_RE = "node_modules"
INDEX_EXTENSIONS = [".js", ".jsx", ".ts", ".tsx"]


# --------------------------------------------------------------------------- #
# descriptors and shared sections
# --------------------------------------------------------------------------- #


def regexp(pattern: str) -> dict[str, str]:
    return {"$regexp": pattern}


def plugin(module: str, options: dict[str, Any]) -> dict[str, Any]:
    return {"$plugin": module, "options": options}


def loader_rule(test: str, loader: str, options: dict[str, Any]) -> dict[str, Any]:
    return {
        "exclude": regexp(NODE_MODULES_RE),
        "test": regexp(test),
        "use": {"loader": loader, "options": options},
    }


def dump_config(config: WebpackConfig) -> str:
    """Serialize a generated config for persistence."""
    return json.dumps(config, indent=2)


def _optimization() -> dict[str, Any]:
    # names are kept because consumers may rely on runtime name reflection
    return {
        "minimize": True,
        "minimizer": [
            plugin(
                MINIMIZER_PLUGIN,
                {"terserOptions": {"keep_classnames": True, "keep_fnames": True}},
            ),
        ],
    }


def _output(build_cfg: BuildConfigResolved) -> dict[str, Any]:
    return {
        "environment": {"dynamicImport": True, "module": True},
        "filename": "[name].js",
        "library": {"type": "module"},
        "path": str(build_cfg["output"]),
    }


def _build_mode_settings(build_cfg: BuildConfigResolved) -> dict[str, Any]:
    if build_cfg["build_mode"] == "development":
        return {"devtool": "cheap-source-map", "mode": "development"}
    return {"devtool": False, "mode": "production"}


def _converter(build_cfg: BuildConfigResolved) -> ExternalsConverter:
    return functools.partial(
        convert_imports_to_externals, namespace=build_cfg["namespace"]
    )


def _loader_build_config(build_cfg: BuildConfigResolved) -> dict[str, Any]:
    """The JSON view of the build config handed to the style loader."""
    main = build_cfg["main"]
    return {
        "main": str(main) if main else None,
        "imports": build_cfg["imports"],
        "exports": build_cfg["exports"],
        "output": str(build_cfg["output"]),
        "report": build_cfg["report"],
    }


# --------------------------------------------------------------------------- #
# index config
# --------------------------------------------------------------------------- #


def build_index_config(
    build_cfg: BuildConfigResolved,
    transpile_options: dict[str, Any],
) -> WebpackConfig | None:
    """Config for the package's main entry, or None when there is no main."""
    main = build_cfg["main"]
    if main is None:
        return None

    namespace = build_cfg["namespace"]
    externals = assemble_externals(
        build_cfg["imports"],
        INDEX_EXTERNALS_DEPTH,
        converter=_converter(build_cfg),
    )

    return {
        "entry": {f"{namespace}/index": {"import": str(main)}},
        "experiments": {"outputModule": True},
        "externals": externals,
        "externalsType": "module",
        "module": {
            "rules": [
                loader_rule(r"\.jsx?$", SCRIPT_LOADER, transpile_options),
                loader_rule(
                    r"\.scss$",
                    STYLE_LOADER,
                    {
                        "buildConfig": _loader_build_config(build_cfg),
                        "projectDir": str(build_cfg["project_dir"]),
                    },
                ),
                loader_rule(r"\.tsx?", SCRIPT_LOADER, transpile_options),
            ],
        },
        "optimization": _optimization(),
        "output": _output(build_cfg),
        "plugins": [],
        "resolve": {
            "extensions": list(INDEX_EXTENSIONS),
            "fallback": {"path": False},
        },
        **_build_mode_settings(build_cfg),
    }


# --------------------------------------------------------------------------- #
# export configs
# --------------------------------------------------------------------------- #


def build_export_config(
    build_cfg: BuildConfigResolved,
    item: ExportItem,
    *,
    introspector: SymbolIntrospector,
    scratch: ScratchDir,
) -> WebpackConfig:
    """Config for one declared export (bundling the package or its bridge)."""
    descriptor = resolve_export(item, introspector=introspector, scratch=scratch)
    namespace = build_cfg["namespace"]

    externals = assemble_externals(
        build_cfg["imports"],
        EXPORT_EXTERNALS_DEPTH,
        exclude=descriptor.pkg_name,
        converter=_converter(build_cfg),
    )

    config: WebpackConfig = {
        "entry": {
            f"{namespace}/exports/{descriptor.flat_pkg_name}": {
                "import": str(descriptor.import_path),
            },
        },
        "experiments": {"outputModule": True},
        "externals": externals,
        "externalsType": "module",
        "module": {
            "rules": [
                loader_rule(
                    r"\.js$",
                    SCRIPT_LOADER,
                    {"presets": list(DEFAULT_EXPORT_PRESETS)},
                ),
            ],
        },
        "optimization": _optimization(),
        "output": _output(build_cfg),
        "resolve": {"fallback": {"path": False}},
        **_build_mode_settings(build_cfg),
    }

    if build_cfg["report"]:
        scratch.create_temp_file(
            REPORT_CONFIG_ARTIFACT.format(flat_pkg_name=descriptor.flat_pkg_name),
            dump_config(config),
        )

    return config


def build_export_configs(
    build_cfg: BuildConfigResolved,
    *,
    introspector: SymbolIntrospector,
    scratch: ScratchDir,
) -> list[WebpackConfig]:
    """One config per export item, in declaration order."""
    exports = build_cfg["exports"]

    collisions = find_flat_name_collisions(item["name"] for item in exports)
    for flat_name, owners in collisions.items():
        getAppLogger().warning(
            "Exports %s all flatten to %r; their bundles and bridges will "
            "overwrite each other.",
            ", ".join(repr(o) for o in owners),
            flat_name,
        )

    return [
        build_export_config(
            build_cfg, item, introspector=introspector, scratch=scratch
        )
        for item in exports
    ]


def entry_name(config: WebpackConfig) -> str:
    """The (single) entry key of a generated config."""
    return next(iter(config["entry"]))
