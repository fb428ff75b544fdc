# tests/50_core/test_webpack_config.py
"""Tests for esmbridge.webpack_config."""

import json
from pathlib import Path

import pytest

import esmbridge.introspect as mod_introspect
import esmbridge.scratch as mod_scratch
import esmbridge.webpack_config as mod_webpack_config
from tests.utils import make_build_cfg


IMPORTS = {"frontend-js-react-web": {"react": "*", "react-dom": "*"}}
NO_SURFACES = mod_introspect.StaticSymbolIntrospector({})


def test_build_index_config_none_without_main(tmp_path: Path) -> None:
    # --- setup ---
    build_cfg = make_build_cfg(tmp_path)

    # --- execute and verify ---
    assert mod_webpack_config.build_index_config(build_cfg, {}) is None


def test_build_index_config_structure(tmp_path: Path) -> None:
    # --- setup ---
    build_cfg = make_build_cfg(tmp_path, main="src/index.js", imports=IMPORTS)
    transpile = {"presets": ["@babel/preset-env"]}

    # --- execute ---
    config = mod_webpack_config.build_index_config(build_cfg, transpile)

    # --- verify ---
    assert config is not None
    assert config["entry"] == {
        "__liferay__/index": {"import": str(tmp_path / "src/index.js")},
    }
    assert config["externalsType"] == "module"
    assert set(config["externals"]) == {"react", "react/*", "react-dom", "react-dom/*"}
    assert config["output"]["path"] == str(tmp_path / "build")
    assert config["output"]["filename"] == "[name].js"
    assert config["output"]["library"] == {"type": "module"}
    assert config["experiments"] == {"outputModule": True}
    tests = [rule["test"]["$regexp"] for rule in config["module"]["rules"]]
    assert tests == [r"\.jsx?$", r"\.scss$", r"\.tsx?"]
    assert config["module"]["rules"][0]["use"]["options"] == transpile
    assert config["resolve"]["fallback"] == {"path": False}


@pytest.mark.parametrize(
    ("build_mode", "devtool"),
    [("development", "cheap-source-map"), ("production", False)],
)
def test_build_mode_selects_devtool(
    tmp_path: Path,
    build_mode: str,
    devtool: object,
) -> None:
    # --- setup ---
    build_cfg = make_build_cfg(tmp_path, main="index.js", build_mode=build_mode)  # type: ignore[arg-type]

    # --- execute ---
    config = mod_webpack_config.build_index_config(build_cfg, {})

    # --- verify ---
    assert config is not None
    assert config["mode"] == build_mode
    assert config["devtool"] == devtool


def test_build_export_config_plain_package(tmp_path: Path) -> None:
    # --- setup ---
    build_cfg = make_build_cfg(tmp_path, imports=IMPORTS)
    scratch = mod_scratch.ScratchDir(tmp_path / "scratch")

    # --- execute ---
    config = mod_webpack_config.build_export_config(
        build_cfg, {"name": "react"}, introspector=NO_SURFACES, scratch=scratch
    )

    # --- verify ---
    assert config["entry"] == {"__liferay__/exports/react": {"import": "react"}}
    assert "react" not in config["externals"]
    assert "react/*" in config["externals"]
    assert "react-dom/*/*" in config["externals"]
    tests = [rule["test"]["$regexp"] for rule in config["module"]["rules"]]
    assert tests == [r"\.js$"]


def test_build_export_config_bridged_package(tmp_path: Path) -> None:
    # --- setup ---
    build_cfg = make_build_cfg(tmp_path)
    scratch = mod_scratch.ScratchDir(tmp_path / "scratch")

    # --- execute ---
    config = mod_webpack_config.build_export_config(
        build_cfg,
        {"name": "@scope/pkg", "symbols": ["a"]},
        introspector=NO_SURFACES,
        scratch=scratch,
    )

    # --- verify ---
    entry = config["entry"]["__liferay__/exports/@scope$pkg"]
    assert entry["import"] == str(tmp_path / "scratch" / "bridges" / "@scope$pkg.js")


def test_build_export_config_report_persists_config(tmp_path: Path) -> None:
    # --- setup ---
    build_cfg = make_build_cfg(tmp_path, report=True)
    scratch = mod_scratch.ScratchDir(tmp_path / "scratch")

    # --- execute ---
    config = mod_webpack_config.build_export_config(
        build_cfg, {"name": "react"}, introspector=NO_SURFACES, scratch=scratch
    )

    # --- verify ---
    persisted = tmp_path / "scratch" / "react.webpack.config.json"
    assert json.loads(persisted.read_text(encoding="utf-8")) == config


def test_build_export_configs_is_idempotent(tmp_path: Path) -> None:
    """Two runs differ only in bridge paths; bridge contents are identical."""
    # --- setup ---
    build_cfg = make_build_cfg(
        tmp_path,
        imports=IMPORTS,
        exports=[{"name": "react"}, {"name": "react-dom", "symbols": ["render"]}],
    )
    first_scratch = mod_scratch.ScratchDir.create(tmp_path / "runs")
    second_scratch = mod_scratch.ScratchDir.create(tmp_path / "runs")

    # --- execute ---
    first = mod_webpack_config.build_export_configs(
        build_cfg, introspector=NO_SURFACES, scratch=first_scratch
    )
    second = mod_webpack_config.build_export_configs(
        build_cfg, introspector=NO_SURFACES, scratch=second_scratch
    )

    # --- verify ---
    assert first_scratch.path != second_scratch.path
    assert first[0] == second[0]
    first_import = first[1]["entry"]["__liferay__/exports/react-dom"]["import"]
    second_import = second[1]["entry"]["__liferay__/exports/react-dom"]["import"]
    assert first_import != second_import
    assert Path(first_import).read_bytes() == Path(second_import).read_bytes()
    first[1].pop("entry")
    second[1].pop("entry")
    assert first[1] == second[1]


def test_build_export_configs_keeps_declaration_order(tmp_path: Path) -> None:
    # --- setup ---
    build_cfg = make_build_cfg(
        tmp_path, exports=[{"name": "b"}, {"name": "a"}, {"name": "c"}]
    )
    scratch = mod_scratch.ScratchDir(tmp_path / "scratch")

    # --- execute ---
    configs = mod_webpack_config.build_export_configs(
        build_cfg, introspector=NO_SURFACES, scratch=scratch
    )

    # --- verify ---
    assert [mod_webpack_config.entry_name(c) for c in configs] == [
        "__liferay__/exports/b",
        "__liferay__/exports/a",
        "__liferay__/exports/c",
    ]


def test_dump_config_is_json(tmp_path: Path) -> None:
    # --- setup ---
    build_cfg = make_build_cfg(tmp_path, main="index.js")
    config = mod_webpack_config.build_index_config(build_cfg, {})

    # --- execute and verify ---
    assert config is not None
    assert json.loads(mod_webpack_config.dump_config(config)) == config
