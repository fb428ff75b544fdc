# src/esmbridge/constants.py
"""Central constants used across the project."""

from typing import Literal


BuildMode = Literal["development", "production"]
InteropShape = Literal["esm", "cjs"]

LOG_LEVEL_CHOICES: list[str] = [
    "trace",
    "debug",
    "info",
    "warning",
    "error",
    "critical",
    "silent",
]

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_BUILD_MODE: str = "NODE_ENV"
DEFAULT_ENV_SCRATCH_DIR: str = "SCRATCH_DIR"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_BUILD_MODE: BuildMode = "production"
DEFAULT_NODE_EXECUTABLE: str = "node"

# --- config defaults ---
DEFAULT_STRICT_CONFIG: bool = True
DEFAULT_OUT_DIR: str = "build/node/packageRunBuild/resources"
DEFAULT_REPORT: bool = False
DEFAULT_DRY_RUN: bool = False
DEFAULT_NAMESPACE: str = "__liferay__"

# --- externals ---
INDEX_EXTERNALS_DEPTH: int = 2
EXPORT_EXTERNALS_DEPTH: int = 3

# --- symbols ---
AUTO_SYMBOLS: str = "auto"
ESM_FORMAT: str = "esm"

# --- generated artifact names ---
INDEX_CONFIG_ARTIFACT: str = "webpackAsBundler.index.config.json"
EXPORT_CONFIG_ARTIFACT: str = "webpackAsBundler.import[{index}].config.json"
REPORT_CONFIG_ARTIFACT: str = "{flat_pkg_name}.webpack.config.json"

# --- transpile defaults ---
DEFAULT_EXPORT_PRESETS: list[str] = ["@babel/preset-env", "@babel/preset-react"]
DEFAULT_TRANSPILE_OPTIONS: dict[str, list[str]] = {
    "presets": [
        "@babel/preset-env",
        "@babel/preset-react",
        "@babel/preset-typescript",
    ],
}
