# src/esmbridge/config/config_validate.py


from typing import Any

from apathetic_schema import (
    SchemaErrorAggregator,
    ValidationSummary,
    check_schema_conformance,
    collect_msg,
    flush_schema_aggregators,
    warn_keys_once,
)
from apathetic_utils import schema_from_typeddict

from esmbridge.constants import AUTO_SYMBOLS, DEFAULT_STRICT_CONFIG
from esmbridge.logs import getAppLogger

from .config_types import BuildConfig, ExportItem, RootConfig


# --- constants ------------------------------------------------------

DRYRUN_KEYS = {"dry-run", "dry_run", "dryrun", "no-op", "no_op", "noop"}
DRYRUN_MSG = (
    "Ignored config key(s) {keys} {ctx}: this tool has no config option for it. "
    "Use the CLI flag '--dry-run' instead."
)

# Validated by hand below: the schema walker has no notion of nested maps
# or of str-or-object list items
BUILD_CUSTOM_KEYS = {"imports", "exports"}

# Field-specific type examples for better error messages
FIELD_EXAMPLES: dict[str, str] = {
    "root.build.main": '"src/main/resources/META-INF/resources/index.js"',
    "root.build.output": '"build/node/packageRunBuild/resources"',
    "root.build.report": "true",
    "root.build.namespace": '"__liferay__"',
    "root.build.babel": '{"presets": ["@babel/preset-env"]}',
    "root.log_level": '"debug"',
    "root.strict_config": "true",
}


# ---------------------------------------------------------------------------
# custom field validators
# ---------------------------------------------------------------------------


def _validate_imports(
    imports: Any,
    *,
    summary: ValidationSummary,  # modified
) -> None:
    if not isinstance(imports, dict):
        collect_msg(
            f"in build: key `imports` expected dict, got {type(imports).__name__}",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return

    for provider, packages in imports.items():
        if not isinstance(packages, dict):
            collect_msg(
                f"imports[{provider!r}] must map package names to versions.",
                strict=True,
                summary=summary,
                is_error=True,
            )
            continue
        for pkg_name, version in packages.items():
            if not isinstance(version, str):
                collect_msg(
                    f"imports[{provider!r}][{pkg_name!r}] must be a version "
                    f"string, not {type(version).__name__}.",
                    strict=True,
                    summary=summary,
                    is_error=True,
                )


def _validate_export_item(
    item: Any,
    index: int,
    *,
    strict: bool,
    summary: ValidationSummary,  # modified
) -> None:
    ctx = f"in exports[{index}]"

    if isinstance(item, str):
        if not item:
            collect_msg(
                f"Empty package name {ctx}.",
                strict=True,
                summary=summary,
                is_error=True,
            )
        return

    if not isinstance(item, dict):
        collect_msg(
            f"Export {ctx} must be a package name or an object with a 'name' key.",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return

    name = item.get("name")
    if not isinstance(name, str) or not name:
        collect_msg(
            f"Missing or invalid 'name' {ctx}.",
            strict=True,
            summary=summary,
            is_error=True,
        )

    # key typos and `format` type; `symbols` is a str-or-list union
    check_schema_conformance(
        item,
        schema_from_typeddict(ExportItem),
        ctx,
        strict_config=strict,
        summary=summary,
        ignore_keys={"name", "symbols"},
        base_path=f"root.build.exports[{index}]",
    )

    symbols = item.get("symbols")
    if "symbols" in item and symbols != AUTO_SYMBOLS:
        if not isinstance(symbols, list) or not all(
            isinstance(s, str) and s for s in symbols
        ):
            collect_msg(
                f"'symbols' {ctx} must be {AUTO_SYMBOLS!r} or a list of names.",
                strict=True,
                summary=summary,
                is_error=True,
            )


def _validate_exports(
    exports: Any,
    *,
    strict: bool,
    summary: ValidationSummary,  # modified
) -> None:
    if not isinstance(exports, list):
        collect_msg(
            "in build: key `exports` expected list of package names or objects, "
            f"got {type(exports).__name__}",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return

    for i, item in enumerate(exports):
        _validate_export_item(item, i, strict=strict, summary=summary)


# ---------------------------------------------------------------------------
# main validator
# ---------------------------------------------------------------------------


def _validate_build(
    build: dict[str, Any],
    *,
    strict: bool,
    summary: ValidationSummary,  # modified
    agg: SchemaErrorAggregator,  # modified
) -> None:
    logger = getAppLogger()
    logger.trace(f"[validate_build] Validating build with {len(build)} keys")

    _ok, prewarn = warn_keys_once(
        "dry-run",
        DRYRUN_KEYS,
        build,
        "in build",
        DRYRUN_MSG,
        strict_config=strict,
        summary=summary,
        agg=agg,
    )

    check_schema_conformance(
        build,
        schema_from_typeddict(BuildConfig),
        "in build",
        strict_config=strict,
        summary=summary,
        prewarn=prewarn,
        ignore_keys=BUILD_CUSTOM_KEYS,
        base_path="root.build",
        field_examples=FIELD_EXAMPLES,
    )

    if "imports" in build:
        _validate_imports(build["imports"], summary=summary)
    if "exports" in build:
        _validate_exports(build["exports"], strict=strict, summary=summary)


def validate_config(
    parsed_cfg: dict[str, Any],
    *,
    strict: bool | None = None,
) -> ValidationSummary:
    """Validate a normalized (root-shaped) config.

    strict=True  →  warnings become fatal, but still listed separately
    strict=False →  warnings remain non-fatal
    strict=None  →  use the config's own `strict_config` (default: strict)
    """
    logger = getAppLogger()
    logger.trace(f"[validate_config] Starting validation (strict={strict})")

    summary = ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=DEFAULT_STRICT_CONFIG,
    )
    agg: SchemaErrorAggregator = {}

    strict_from_root: Any = parsed_cfg.get("strict_config")
    if strict is not None:
        summary.strict = strict
    elif isinstance(strict_from_root, bool):
        summary.strict = strict_from_root

    # --- root ---
    _ok, prewarn_root = warn_keys_once(
        "dry-run",
        DRYRUN_KEYS,
        parsed_cfg,
        "in top-level configuration",
        DRYRUN_MSG,
        strict_config=summary.strict,
        summary=summary,
        agg=agg,
    )
    check_schema_conformance(
        parsed_cfg,
        schema_from_typeddict(RootConfig),
        "in top-level configuration",
        strict_config=summary.strict,
        summary=summary,
        prewarn=prewarn_root,
        ignore_keys={"build"},
        base_path="root",
        field_examples=FIELD_EXAMPLES,
    )

    # --- build ---
    build = parsed_cfg.get("build")
    if isinstance(build, dict):
        build_strict = summary.strict
        strict_from_build: Any = build.get("strict_config")
        if strict is None and isinstance(strict_from_build, bool):
            build_strict = strict_from_build
        _validate_build(build, strict=build_strict, summary=summary, agg=agg)
    elif build is not None:
        collect_msg(
            f"`build` must be an object, got {type(build).__name__}.",
            strict=True,
            summary=summary,
            is_error=True,
        )

    flush_schema_aggregators(summary=summary, agg=agg)
    summary.valid = not summary.errors and not summary.strict_warnings
    return summary
