# src/esmbridge/cli.py

import argparse
import platform
import sys
from dataclasses import dataclass
from difflib import get_close_matches
from pathlib import Path

from apathetic_logging import safeLog

from .actions import get_metadata
from .config import (
    BuildConfigResolved,
    RootConfig,
    load_and_validate_config,
    resolve_config,
)
from .constants import LOG_LEVEL_CHOICES
from .errors import SymbolResolutionError
from .logs import getAppLogger
from .meta import PROGRAM_CONFIG, PROGRAM_DISPLAY, PROGRAM_SCRIPT
from .orchestrator import run_bundler
from .utils import shorten_path_for_display


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # "unrecognized arguments: --reprot ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description=(
            "Bundle a package's main entry and its declared exports as "
            "ECMAScript modules with webpack."
        ),
    )

    parser.add_argument(
        "-c",
        "--config",
        help=f"Path to build config file (default: .{PROGRAM_CONFIG}.json and friends).",
    )
    parser.add_argument(
        "--project-dir",
        help="Project directory (default: the config file's directory).",
    )
    parser.add_argument("--main", help="Override the main entry source.")
    parser.add_argument("-o", "--output", help="Override the output directory.")
    parser.add_argument(
        "--scratch-dir",
        help="Parent directory for generated bridges and configs.",
    )

    report = parser.add_mutually_exclusive_group()
    report.add_argument(
        "--report",
        dest="report",
        action="store_true",
        help="Persist every generated config and print bundling stats.",
    )
    report.add_argument(
        "--no-report",
        dest="report",
        action="store_false",
        help="Do not persist per-export configs (overrides config).",
    )
    report.set_defaults(report=None)

    parser.add_argument(
        "--mode",
        choices=["development", "production"],
        default=None,
        help="Build mode (default: development if NODE_ENV=development).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate bridges and configs without running webpack.",
    )

    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


# --------------------------------------------------------------------------- #
# Main entry helpers
# --------------------------------------------------------------------------- #


@dataclass
class _LoadedConfig:
    """Container for loaded and resolved configuration data."""

    config_path: Path
    root_cfg: RootConfig
    resolved: BuildConfigResolved
    config_dir: Path
    cwd: Path


def _initialize_logger(args: argparse.Namespace) -> None:
    """Apply the CLI log level (env vars and defaults are already registered)."""
    logger = getAppLogger()
    if getattr(args, "log_level", None):
        logger.setLevel(args.log_level)
    logger.trace("[BOOT] log-level initialized")

    logger.debug(
        "Runtime: Python %s (%s)\n    %s",
        platform.python_version(),
        platform.python_implementation(),
        sys.version.replace("\n", " "),
    )


def _load_and_resolve_config(args: argparse.Namespace) -> _LoadedConfig | None:
    """Load the config file and resolve the final build configuration."""
    logger = getAppLogger()
    cwd = Path.cwd().resolve()

    config_result = load_and_validate_config(args, cwd)
    if config_result is None:
        return None
    config_path, root_cfg, _validation_summary = config_result

    # config log level applies unless the CLI set one
    config_level = root_cfg.get("log_level") or root_cfg.get("build", {}).get(
        "log_level"
    )
    if config_level and not getattr(args, "log_level", None):
        logger.setLevel(config_level)
        logger.trace("[CONFIG] log-level re-resolved from config: %s", config_level)

    config_dir = config_path.parent
    resolved = resolve_config(root_cfg, args, config_dir, cwd)

    return _LoadedConfig(
        config_path=config_path,
        root_cfg=root_cfg,
        resolved=resolved,
        config_dir=config_dir,
        cwd=cwd,
    )


def _has_work(resolved: BuildConfigResolved) -> bool:
    logger = getAppLogger()
    if resolved["main"] is None and not resolved["exports"]:
        msg = "Nothing to bundle: the config declares neither 'main' nor 'exports'."
        if resolved["strict_config"]:
            logger.error(msg)
            return False
        logger.warning(msg)
    return True


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = getAppLogger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        _initialize_logger(args)

        if getattr(args, "version", None):
            meta = get_metadata()
            logger.info("%s %s (%s)", PROGRAM_DISPLAY, meta.version, meta.commit)
            return 0

        config = _load_and_resolve_config(args)
        if config is None:
            logger.error(
                "No build configuration found. Create .%s.json or pass --config.",
                PROGRAM_CONFIG,
            )
            return 1

        if not _has_work(config.resolved):
            return 1

        if config.resolved["dry_run"]:
            logger.info("🧪 Dry-run mode: configs are generated but not bundled.\n")

        logger.info("🔧 Using config: %s", config.config_path.name)
        logger.info(
            "📁 Project dir: %s",
            shorten_path_for_display(config.resolved["project_dir"], cwd=config.cwd),
        )
        logger.info(
            "📂 Output: %s",
            shorten_path_for_display(config.resolved["output"], cwd=config.cwd),
        )

        run_bundler(config.resolved)

    except SymbolResolutionError as e:
        try:
            logger.error("\n%s\n", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return e.code

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        silent = getattr(e, "silent", False)
        if not silent:
            try:
                logger.error("%s", e)
            except Exception:  # noqa: BLE001
                safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", 1)

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.critical("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")

        return getattr(e, "code", 1)

    else:
        return 0
