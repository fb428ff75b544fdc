# tests/90_integration/test_exceptions.py
"""Tests for error handling in esmbridge.cli.main."""

import pytest

import esmbridge.cli as mod_cli
import esmbridge.errors as mod_errors


def test_main_handles_controlled_exception(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Simulate a controlled exception (e.g. ValueError) and verify clean handling."""

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "mocked config failure"
        raise ValueError(xmsg)

    # --- patch and execute ---
    monkeypatch.setattr(mod_cli, "_setup_parser", fake_parser)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    out = capsys.readouterr()
    assert "mocked config failure" in (out.out + out.err).lower()


def test_main_handles_backend_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Bundling failures are controlled terminations."""

    # --- stubs ---
    def fake_parser() -> object:
        raise mod_errors.BackendBuildError("__liferay__/index", 2, "boom")

    # --- patch and execute ---
    monkeypatch.setattr(mod_cli, "_setup_parser", fake_parser)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1


def test_main_handles_unexpected_exception(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Simulate an unexpected internal error and ensure it logs as critical."""

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "boom!"
        raise OSError(xmsg)  # not one of the controlled types

    # --- patch and execute ---
    monkeypatch.setattr(mod_cli, "_setup_parser", fake_parser)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    out = capsys.readouterr()
    assert "unexpected internal error" in (out.out + out.err).lower()


def test_main_fallbacks_to_safe_log(monkeypatch: pytest.MonkeyPatch) -> None:
    """If logging itself fails, safeLog() is called instead of recursing."""
    # --- setup ---
    called: dict[str, str] = {}

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "simulated failure"
        raise OSError(xmsg)

    def failing_critical(*_a: object, **_k: object) -> None:
        xmsg = "logger broke"
        raise RuntimeError(xmsg)

    def fake_safe_log(msg: str) -> None:
        called["msg"] = msg

    # --- patch and execute ---
    monkeypatch.setattr(mod_cli, "_setup_parser", fake_parser)
    monkeypatch.setattr(mod_cli.getAppLogger(), "critical", failing_critical)
    monkeypatch.setattr(mod_cli, "safeLog", fake_safe_log)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    assert "simulated failure" in called["msg"]
