# src/esmbridge/actions.py
import re
import subprocess
from contextlib import suppress
from importlib import metadata
from pathlib import Path

from .logs import getAppLogger
from .meta import PROGRAM_PACKAGE, Metadata


def get_metadata() -> Metadata:
    """Return (version, commit) for the running package.

    Version comes from the installed distribution, falling back to the
    source tree's pyproject.toml; the commit comes from git when available.
    """
    logger = getAppLogger()
    version = "unknown"
    commit = "unknown"
    root = Path(__file__).resolve().parents[2]

    with suppress(metadata.PackageNotFoundError):
        version = metadata.version(PROGRAM_PACKAGE)

    pyproject = root / "pyproject.toml"
    if version == "unknown" and pyproject.exists():
        logger.trace(f"trying to read metadata from {pyproject}")
        text = pyproject.read_text()
        match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
        if match:
            version = match.group(1)

    # Try git for commit
    with suppress(Exception):
        logger.trace("trying to get commit from git")
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip()

    logger.trace(f"got package version {version} with commit {commit}")
    return Metadata(version, commit)
