# src/esmbridge/meta.py
"""Program identity: names used for the script, env vars and config files."""

from typing import NamedTuple


PROGRAM_PACKAGE = "esmbridge"
PROGRAM_SCRIPT = "esmbridge"
PROGRAM_DISPLAY = "esmbridge"
PROGRAM_ENV = "ESMBRIDGE"
PROGRAM_CONFIG = "esmbridge"


class Metadata(NamedTuple):
    version: str
    commit: str
