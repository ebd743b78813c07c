"""Tests for tapship.platform.files module."""

from __future__ import annotations

from pathlib import Path

import pytest

from tapship.core.result import Err, Ok
from tapship.platform.files import (
    FileOpError,
    atomic_write_text,
    move_file,
    prepare_dir,
    remove_path,
)


class TestPrepareDir:
    def test_creates_missing_dir_with_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "__macos"
        assert prepare_dir(target) == Ok(target)
        assert target.is_dir()

    def test_empties_existing_dir(self, tmp_path: Path) -> None:
        target = tmp_path / "__linux"
        (target / "nested").mkdir(parents=True)
        (target / "nested" / "old").write_text("stale")
        (target / "hygen").write_text("stale")

        assert prepare_dir(target) == Ok(target)
        assert target.is_dir()
        assert list(target.iterdir()) == []

    def test_idempotent(self, tmp_path: Path) -> None:
        target = tmp_path / "__win.exe"
        assert prepare_dir(target) == Ok(target)
        assert prepare_dir(target) == Ok(target)
        assert target.is_dir()

    def test_replaces_file(self, tmp_path: Path) -> None:
        target = tmp_path / "__macos"
        target.write_text("not a dir")
        assert prepare_dir(target) == Ok(target)
        assert target.is_dir()

    def test_error_is_reported(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        target = tmp_path / "__macos"

        def deny(self: Path, *args: object, **kwargs: object) -> None:
            raise PermissionError("denied")

        monkeypatch.setattr(Path, "mkdir", deny)
        result = prepare_dir(target)
        assert isinstance(result, Err)
        assert result.error == FileOpError(operation="prepare", path=target, message="denied")
        assert str(result.error) == f"prepare {target}: denied"


class TestRemovePath:
    def test_missing_is_ok(self, tmp_path: Path) -> None:
        assert remove_path(tmp_path / "missing") == Ok(None)

    def test_removes_tree(self, tmp_path: Path) -> None:
        target = tmp_path / "tree"
        (target / "x").mkdir(parents=True)
        (target / "x" / "f").write_text("f")
        assert remove_path(target) == Ok(None)
        assert not target.exists()

    def test_removes_file(self, tmp_path: Path) -> None:
        target = tmp_path / "f.zip"
        target.write_bytes(b"zip")
        assert remove_path(target) == Ok(None)
        assert not target.exists()


class TestMoveFile:
    def test_moves(self, tmp_path: Path) -> None:
        src = tmp_path / "hygen-macos"
        src.write_text("bin")
        dest = tmp_path / "__macos" / "hygen"
        dest.parent.mkdir()
        assert move_file(src, dest) == Ok(dest)
        assert not src.exists()
        assert dest.read_text() == "bin"

    def test_missing_source(self, tmp_path: Path) -> None:
        result = move_file(tmp_path / "missing", tmp_path / "dest")
        assert isinstance(result, Err)
        assert result.error.operation == "move"


class TestAtomicWriteText:
    def test_writes_and_replaces(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "hygen.rb"
        atomic_write_text(target, "one")
        atomic_write_text(target, "two")
        assert target.read_text(encoding="utf-8") == "two"
        assert [p.name for p in target.parent.iterdir()] == ["hygen.rb"]
