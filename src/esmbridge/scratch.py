# src/esmbridge/scratch.py
"""Scratch artifacts: bridge sources and persisted configs for inspection.

Every run gets a fresh directory so generated files are never shared between
runs. Files are kept after the run unless created with ``auto_delete=True``.
"""

import atexit
import os
import tempfile
from pathlib import Path

from .constants import DEFAULT_ENV_SCRATCH_DIR
from .logs import getAppLogger
from .meta import PROGRAM_ENV, PROGRAM_PACKAGE


def default_scratch_root() -> Path:
    """Parent directory for per-run scratch dirs (env override or system tmp)."""
    env_value = os.getenv(f"{PROGRAM_ENV}_{DEFAULT_ENV_SCRATCH_DIR}")
    if env_value:
        return Path(env_value).expanduser().resolve()
    return Path(tempfile.gettempdir()) / PROGRAM_PACKAGE


class ScratchDir:
    """A per-run directory holding generated, inspectable text files."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._auto_delete: list[Path] = []

    @classmethod
    def create(cls, root: Path | None = None) -> "ScratchDir":
        """Create a fresh, uniquely named scratch dir under `root`."""
        parent = root if root is not None else default_scratch_root()
        parent.mkdir(parents=True, exist_ok=True)
        path = Path(tempfile.mkdtemp(prefix="run-", dir=parent))
        getAppLogger().trace("[scratch] created %s", path)
        return cls(path)

    def create_temp_file(
        self,
        name: str,
        content: str,
        *,
        auto_delete: bool = False,
    ) -> Path:
        """Write `content` to `name` inside the scratch dir and return its path."""
        file_path = self.path / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        getAppLogger().trace("[scratch] wrote %s (%d chars)", file_path, len(content))

        if auto_delete:
            if not self._auto_delete:
                atexit.register(self.cleanup)
            self._auto_delete.append(file_path)

        return file_path

    def cleanup(self) -> None:
        """Remove files created with ``auto_delete=True``."""
        for file_path in self._auto_delete:
            file_path.unlink(missing_ok=True)
        self._auto_delete.clear()
