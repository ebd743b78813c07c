"""Tests for tapship.output.console module."""

from __future__ import annotations

import threading

import pytest

from tapship.output.console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
    format_command,
)


class TestFormatCommand:
    def test_plain(self) -> None:
        assert format_command(["tar", "-czf", "a.tar.gz", "hygen"]) == "$ tar -czf a.tar.gz hygen"

    def test_quotes_spaces_and_empty(self) -> None:
        assert format_command(["git", "commit", "-m", "hygen: auto-release", ""]) == (
            '$ git commit -m "hygen: auto-release" ""'
        )


class TestMockConsole:
    def test_records_styles(self) -> None:
        console = MockConsole()
        console.print("plain")
        console.success("done")
        console.error("bad")
        console.warning("careful")
        console.info("fyi")
        console.header("Section")

        assert console.messages == [
            "plain",
            "OK done",
            "error: bad",
            "warning: careful",
            "info: fyi",
            "Section",
        ]
        assert [o.style for o in console.outputs] == [
            Style.DEFAULT,
            Style.SUCCESS,
            Style.ERROR,
            Style.WARNING,
            Style.INFO,
            Style.HEADER,
        ]
        assert console.has_error()

    def test_commands(self) -> None:
        console = MockConsole()
        console.command(["zip", "-j", "a.zip", "hygen.exe"])
        assert console.commands[0] == "zip -j a.zip hygen.exe"
        assert console.outputs[0].style == Style.DIM

    def test_thread_safe_recording(self) -> None:
        console = MockConsole()

        def spam(n: int) -> None:
            for i in range(200):
                console.print(f"{n}-{i}")

        threads = [threading.Thread(target=spam, args=(n,)) for n in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(console.outputs) == 600

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.success("ok")


class TestRichConsole:
    def test_error_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("boom [not markup]")
        console.success("fine")
        captured = capsys.readouterr()
        assert "boom [not markup]" in captured.err
        assert "fine" in captured.out
