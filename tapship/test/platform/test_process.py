"""Tests for tapship.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tapship.core.result import Err, Ok
from tapship.output.console import MockConsole
from tapship.platform.process import ProcessError, run, run_streaming

PY = sys.executable


class TestProcessError:
    """Test ProcessError dataclass."""

    def test_str_short_command(self) -> None:
        error = ProcessError(command=("tar", "-czf"), returncode=2, stdout="", stderr="")
        assert str(error) == "tar -czf failed (exit 2)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("zip", "-j", "out.zip", "hygen.exe"), returncode=12, stdout="", stderr=""
        )
        assert str(error) == "zip -j out.zip ... failed (exit 12)"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    """Test run (captured output)."""

    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "print('hello')"], cwd=tmp_path)
        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run(
            [PY, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"], cwd=tmp_path
        )
        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert "bad" in result.error.stderr
        assert result.error.command[0] == PY

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)
        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert result.error.stderr

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").write_text("x")
        result = run([PY, "-c", "import os; print(os.listdir('.'))"], cwd=tmp_path)
        assert isinstance(result, Ok)
        assert "marker.txt" in result.value

    def test_timeout(self, tmp_path: Path) -> None:
        result = run([PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.2)
        assert isinstance(result, Err)
        assert "timed out" in result.error.stderr


class TestRunStreaming:
    """Test run_streaming (inherited output)."""

    def test_success(self, tmp_path: Path) -> None:
        console = MockConsole()
        result = run_streaming([PY, "-c", "pass"], cwd=tmp_path, console=console)
        assert result == Ok(None)
        assert console.commands == [f"{PY} -c pass"]
        assert not console.has_error()

    def test_failure_reports_command(self, tmp_path: Path) -> None:
        console = MockConsole()
        result = run_streaming(
            [PY, "-c", "import sys; sys.exit(4)"], cwd=tmp_path, console=console
        )
        assert isinstance(result, Err)
        assert result.error.returncode == 4
        assert console.has_error()
        assert console.find("command failed")
        assert console.find("(exit 4)")

    def test_failure_without_console(self, tmp_path: Path) -> None:
        result = run_streaming([PY, "-c", "import sys; sys.exit(1)"], cwd=tmp_path)
        assert isinstance(result, Err)
        assert result.error.returncode == 1

    def test_command_not_found(self, tmp_path: Path) -> None:
        console = MockConsole()
        result = run_streaming(["nonexistent_command_12345"], cwd=tmp_path, console=console)
        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert console.has_error()

    def test_timeout(self, tmp_path: Path) -> None:
        result = run_streaming(
            [PY, "-c", "import time; time.sleep(10)"], cwd=tmp_path, timeout=0.2
        )
        assert isinstance(result, Err)
        assert "timed out" in result.error.stderr
