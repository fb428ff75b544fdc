# tests/50_core/test_validate_config.py
"""Tests for config_validate.validate_config."""

import esmbridge.config.config_validate as mod_validate


def test_validate_config_accepts_full_build() -> None:
    # --- setup ---
    cfg = {
        "build": {
            "main": "src/index.js",
            "imports": {"frontend-js-react-web": {"react": "*"}},
            "exports": [
                "lodash",
                {"name": "react"},
                {"name": "pkg", "symbols": ["a", "b"], "format": "esm"},
                {"name": "other", "symbols": "auto"},
            ],
            "report": True,
        },
    }

    # --- execute ---
    summary = mod_validate.validate_config(cfg)

    # --- verify ---
    assert summary.valid
    assert summary.errors == []
    assert summary.warnings == []


def test_validate_config_unknown_key_is_fatal_when_strict() -> None:
    # --- execute ---
    summary = mod_validate.validate_config({"build": {"mystery": 1}})

    # --- verify ---
    assert not summary.valid
    assert any("mystery" in m for m in summary.strict_warnings)


def test_validate_config_unknown_key_is_warning_when_lenient() -> None:
    # --- execute ---
    summary = mod_validate.validate_config(
        {"strict_config": False, "build": {"mystery": 1}}
    )

    # --- verify ---
    assert summary.valid
    assert any("mystery" in m for m in summary.warnings)


def test_validate_config_rejects_bad_types() -> None:
    # --- execute ---
    summary = mod_validate.validate_config(
        {"build": {"report": "yes", "exports": [{"symbols": ["a"]}, 3]}}
    )

    # --- verify ---
    assert not summary.valid
    assert len(summary.errors) == 3


def test_validate_config_rejects_bad_symbols() -> None:
    # --- execute ---
    summary = mod_validate.validate_config(
        {"build": {"exports": [{"name": "pkg", "symbols": "everything"}]}}
    )

    # --- verify ---
    assert not summary.valid
    assert "'symbols'" in summary.errors[0]


def test_validate_config_dry_run_key_points_to_cli_flag() -> None:
    # --- execute ---
    summary = mod_validate.validate_config(
        {"strict_config": False, "build": {"dry_run": True}}
    )

    # --- verify ---
    assert any("--dry-run" in m for m in summary.warnings)


def test_validate_config_hints_close_key_names() -> None:
    # --- execute ---
    summary = mod_validate.validate_config({"build": {"reprot": True}})

    # --- verify ---
    assert not summary.valid
    msg = "\n".join(summary.strict_warnings)
    assert "reprot" in msg
    assert "did you mean" in msg
    assert "'report'" in msg


def test_validate_config_rejects_bad_export_format_type() -> None:
    # --- execute ---
    summary = mod_validate.validate_config(
        {"build": {"exports": [{"name": "pkg", "format": 1}]}}
    )

    # --- verify ---
    assert not summary.valid
    assert any("format" in m for m in summary.errors)


def test_validate_config_rejects_non_map_imports() -> None:
    # --- execute ---
    summary = mod_validate.validate_config(
        {"build": {"imports": {"frontend-js-web": ["react"]}}}
    )

    # --- verify ---
    assert not summary.valid
    assert "frontend-js-web" in summary.errors[0]
