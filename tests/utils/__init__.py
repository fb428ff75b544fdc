# tests/utils/__init__.py

from .backends import RecordingBackend
from .buildconfig import make_build_cfg, make_meta, write_config_file
from .constants import DEFAULT_TEST_LOG_LEVEL, PROJ_ROOT


__all__ = [  # noqa: RUF022
    # backends
    "RecordingBackend",
    # buildconfig
    "make_build_cfg",
    "make_meta",
    "write_config_file",
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    "PROJ_ROOT",
]
