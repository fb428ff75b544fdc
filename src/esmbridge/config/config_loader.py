# src/esmbridge/config/config_loader.py


import argparse
import sys
import traceback
from pathlib import Path
from typing import Any, cast

from apathetic_utils import (
    cast_hint,
    load_jsonc,
    plural,
    remove_path_in_error_message,
)

from esmbridge.logs import getAppLogger
from esmbridge.meta import PROGRAM_CONFIG

from .config_types import RootConfig
from .config_validate import ValidationSummary, validate_config


# Keys that only make sense at the root; hoisted out of a flat single build
ROOT_HOIST_KEYS = ("log_level", "strict_config")


def find_config(
    args: argparse.Namespace,
    cwd: Path,
    *,
    missing_level: str = "error",
) -> Path | None:
    """Locate a configuration file.

    missing_level: log-level for failing to find a configuration file.

    Search order:
      1. Explicit path from CLI (--config)
      2. Default candidates in the current working directory and its parents:
         .{PROGRAM_CONFIG}.py, .{PROGRAM_CONFIG}.jsonc, .{PROGRAM_CONFIG}.json

    Returns the first matching path, or None if no config was found.
    """
    logger = getAppLogger()

    # --- 1. Explicit config path ---
    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        logger.trace(f"[find_config] Checking explicit path: {config}")
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    # --- 2. Default candidate files (search current dir and parents) ---
    current = cwd
    candidate_names = [
        f".{PROGRAM_CONFIG}.py",
        f".{PROGRAM_CONFIG}.jsonc",
        f".{PROGRAM_CONFIG}.json",
    ]
    found: list[Path] = []
    while True:
        found = [
            current / name for name in candidate_names if (current / name).exists()
        ]
        if found:
            break
        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    if not found:
        # Expected absence; the caller decides whether that is fatal
        getattr(logger, missing_level, logger.error)(
            "No config file found in %s or parents", cwd
        )
        return None

    # --- 3. Multiple matches at the same level (prefer .py > .jsonc > .json) ---
    if len(found) > 1:
        names = ", ".join(p.name for p in found)
        logger.warning(
            "Multiple config files detected (%s); using %s.",
            names,
            found[0].name,
        )
    return found[0]


def load_config(config_path: Path) -> dict[str, Any] | list[Any] | None:
    """Load configuration data from a file.

    Supports:
      - Python configs: .py files exporting either `config` or `build`
      - JSON/JSONC configs: .json, .jsonc files

    Returns:
        The raw object defined in the config (dict, list, or None).
        Returns None for intentionally empty configs
          (e.g. empty files or `config = None`).

    Raises:
        ValueError if a .py config defines none of the expected variables.
    """
    logger = getAppLogger()
    logger.trace(f"[load_config] Loading from {config_path} ({config_path.suffix})")

    # --- Python config ---
    if config_path.suffix == ".py":
        config_globals: dict[str, Any] = {}

        # Allow local imports in Python configs (configs are trusted user code)
        parent_dir = str(config_path.parent)
        added_to_sys_path = parent_dir not in sys.path
        if added_to_sys_path:
            sys.path.insert(0, parent_dir)

        try:
            source = config_path.read_text(encoding="utf-8")
            exec(compile(source, str(config_path), "exec"), config_globals)  # noqa: S102
            logger.trace(f"[EXEC] globals after exec: {list(config_globals.keys())}")
        except Exception as e:
            tb = traceback.format_exc()
            xmsg = (
                f"Error while executing Python config: {config_path.name}\n"
                f"{type(e).__name__}: {e}\n{tb}"
            )
            raise RuntimeError(xmsg) from e
        finally:
            if added_to_sys_path and sys.path[0] == parent_dir:
                sys.path.pop(0)

        for key in ("config", "build"):
            if key in config_globals:
                result = config_globals[key]
                if not isinstance(result, (dict, list, type(None))):
                    xmsg = (
                        f"{key} in {config_path.name} must be a dict, list, or None"
                        f", not {type(result).__name__}"
                    )
                    raise TypeError(xmsg)
                if key == "build" and isinstance(result, dict):
                    return {"build": result}
                return cast("dict[str, Any] | list[Any] | None", result)

        xmsg = f"{config_path.name} did not define `config` or `build`"
        raise ValueError(xmsg)

    # --- JSONC / JSON ---
    try:
        return load_jsonc(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = (
            f"Error while loading configuration file '{config_path.name}': {clean_msg}"
        )
        raise ValueError(xmsg) from e


def parse_config(
    raw_config: dict[str, Any] | list[Any] | None,
) -> dict[str, Any] | None:
    """Normalize user config into canonical RootConfig shape (no filesystem work).

    Accepted forms:
      - #1 None / [] / {}              → None (nothing to build)
      - #2 ["react", {...}]            → single build exporting those items
      - #3 {"build": {...}, ...}       → root config (returned shape)
      - #4 {...}                       → flat single build; root-only keys
                                         (log_level, strict_config) are hoisted

    Unknown keys are preserved for the validation phase.
    """
    logger = getAppLogger()
    logger.trace(f"[parse_config] Parsing {type(raw_config).__name__}")

    # --- Case 1: empty config ---
    if not raw_config:
        return None

    # --- Case 2: naked list → exports shorthand ---
    if isinstance(raw_config, list):
        logger.trace("[parse_config] Detected case: list of exports")
        return {"build": {"exports": list(raw_config)}}

    if not isinstance(raw_config, dict):  # pyright: ignore[reportUnnecessaryIsInstance]
        xmsg = (
            f"Invalid top-level value: {type(raw_config).__name__} "
            "(expected object or list of exports)"
        )
        raise TypeError(xmsg)

    # --- Case 3: root config with a "build" key ---
    if "build" in raw_config:
        build_val = raw_config["build"]
        if isinstance(build_val, list):
            xmsg = "Config key 'build' must be a single object, not a list"
            raise TypeError(xmsg)
        logger.trace("[parse_config] Detected case: root with build")
        return dict(raw_config)

    # --- Case 4: flat single build ---
    logger.trace("[parse_config] Detected case: flat single build")
    build = dict(raw_config)
    root: dict[str, Any] = {}
    for key in ROOT_HOIST_KEYS:
        if key in build:
            root[key] = build.pop(key)
    root["build"] = build
    return root


def _validation_summary(
    summary: ValidationSummary,
    config_path: Path,
) -> None:
    """Pretty-print a validation summary."""
    logger = getAppLogger()
    mode = "strict mode" if summary.strict else "lenient mode"

    counts: list[str] = []
    if summary.errors:
        counts.append(f"{len(summary.errors)} error{plural(summary.errors)}")
    if summary.strict_warnings:
        counts.append(
            f"{len(summary.strict_warnings)} strict warning"
            f"{plural(summary.strict_warnings)}",
        )
    if summary.warnings:
        counts.append(
            f"{len(summary.warnings)} normal warning{plural(summary.warnings)}",
        )
    counts_msg = f"\nFound {', '.join(counts)}." if counts else ""

    if not summary.valid:
        logger.error(
            "Failed to validate configuration file %s (%s).%s",
            config_path.name,
            mode,
            counts_msg,
        )
    elif counts:
        logger.warning(
            "Validated configuration file %s (%s) with warnings.%s",
            config_path.name,
            mode,
            counts_msg,
        )
    else:
        logger.debug("Validated %s (%s) successfully.", config_path.name, mode)

    if summary.errors:
        logger.error("\nErrors:\n  • %s", "\n  • ".join(summary.errors))
    if summary.strict_warnings:
        logger.error(
            "\nStrict warnings (treated as errors):\n  • %s",
            "\n  • ".join(summary.strict_warnings),
        )
    if summary.warnings:
        logger.warning(
            "\nWarnings (non-fatal):\n  • %s", "\n  • ".join(summary.warnings)
        )


def load_and_validate_config(
    args: argparse.Namespace,
    cwd: Path | None = None,
) -> tuple[Path, RootConfig, ValidationSummary] | None:
    """Find, load, parse, and validate the user's configuration.

    Returns:
        (config_path, root_cfg, validation_summary)
        if a config file was found and valid, or None if no config was found
        or the config is intentionally empty.
    """
    cwd = (cwd or Path.cwd()).resolve()

    config_path = find_config(args, cwd)
    if config_path is None:
        return None

    raw_config = load_config(config_path)
    if raw_config is None:
        return None

    try:
        parsed_cfg = parse_config(raw_config)
    except TypeError as e:
        xmsg = f"Could not parse config {config_path.name}: {e}"
        raise TypeError(xmsg) from e
    if parsed_cfg is None:
        return None

    validation_result = validate_config(parsed_cfg)
    _validation_summary(validation_result, config_path)
    if not validation_result.valid:
        xmsg = f"Configuration file {config_path.name} contains validation errors."
        exception = ValueError(xmsg)
        exception.silent = True  # type: ignore[attr-defined]
        exception.data = validation_result  # type: ignore[attr-defined]
        raise exception

    root_cfg: RootConfig = cast_hint(RootConfig, parsed_cfg)
    return config_path, root_cfg, validation_result
