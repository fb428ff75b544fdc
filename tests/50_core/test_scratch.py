# tests/50_core/test_scratch.py
"""Tests for esmbridge.scratch."""

from pathlib import Path

import pytest

import esmbridge.scratch as mod_scratch


def test_create_makes_unique_dirs(tmp_path: Path) -> None:
    # --- execute ---
    first = mod_scratch.ScratchDir.create(tmp_path)
    second = mod_scratch.ScratchDir.create(tmp_path)

    # --- verify ---
    assert first.path != second.path
    assert first.path.parent == tmp_path
    assert first.path.is_dir()


def test_create_temp_file_writes_nested_content(tmp_path: Path) -> None:
    # --- setup ---
    scratch = mod_scratch.ScratchDir(tmp_path)

    # --- execute ---
    path = scratch.create_temp_file("backend/a.json", "{}")

    # --- verify ---
    assert path == tmp_path / "backend" / "a.json"
    assert path.read_text(encoding="utf-8") == "{}"


def test_cleanup_removes_only_auto_delete_files(tmp_path: Path) -> None:
    # --- setup ---
    scratch = mod_scratch.ScratchDir(tmp_path)
    kept = scratch.create_temp_file("kept.js", "")
    dropped = scratch.create_temp_file("dropped.js", "", auto_delete=True)

    # --- execute ---
    scratch.cleanup()

    # --- verify ---
    assert kept.exists()
    assert not dropped.exists()


def test_default_scratch_root_reads_env(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    # --- setup ---
    monkeypatch.setenv("ESMBRIDGE_SCRATCH_DIR", str(tmp_path))

    # --- execute and verify ---
    assert mod_scratch.default_scratch_root() == tmp_path.resolve()
