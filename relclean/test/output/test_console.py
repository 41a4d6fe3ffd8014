"""Tests for relclean.output.console."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from relclean.output.console import (
    FAIL_MARK,
    PASS_MARK,
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)


class TestMockConsole:
    def test_success_and_error_marks(self) -> None:
        console = MockConsole()
        console.success("deleted")
        console.error("failed")

        assert console.messages == [f"{PASS_MARK} deleted", f"{FAIL_MARK} failed"]
        assert console.has_success()
        assert console.has_error()

    def test_find_and_count(self) -> None:
        console = MockConsole()
        console.print("release 1 | v1 | draft", Style.DIM)
        console.print("release 2 | v2 | draft", Style.DIM)

        assert len(console.find("release")) == 2
        assert console.count(Style.DIM) == 2

    def test_text(self) -> None:
        console = MockConsole()
        console.header("Cleaning up")
        console.print("removing tag v1")

        assert console.text == "Cleaning up\nremoving tag v1"

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("x")


class TestRichConsole:
    def test_marks_and_plain_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("successfully deleted tag [v1] from electron")
        console.error("could not push")

        out = capsys.readouterr().out
        # Square brackets in messages are printed, not parsed as markup.
        assert f"{PASS_MARK} successfully deleted tag [v1] from electron" in out
        assert f"{FAIL_MARK} could not push" in out

    def test_marked_message_is_a_single_print(self) -> None:
        console = RichConsole()
        printed: list[tuple[object, ...]] = []
        console._console.print = lambda *args, **kwargs: printed.append(args)  # type: ignore[method-assign]

        console.success("successfully deleted tag v1 from electron")
        console.error("couldn't delete tag v1 from nightlies")

        # Tag deletions report from worker threads; a split mark and message could interleave.
        assert len(printed) == 2
        assert [str(args[0]) for args in printed] == [
            f"{PASS_MARK} successfully deleted tag v1 from electron",
            f"{FAIL_MARK} couldn't delete tag v1 from nightlies",
        ]

    def test_concurrent_marked_messages_stay_whole(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        console = RichConsole()
        with ThreadPoolExecutor(max_workers=8) as pool:
            for i in range(40):
                pool.submit(console.success, f"successfully deleted tag v{i} from electron")

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 40
        assert all(line.startswith(f"{PASS_MARK} successfully deleted tag v") for line in lines)

    def test_styles(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        for style in Style:
            console.print(f"styled {style}", style)

        out = capsys.readouterr().out
        assert "styled dim" in out
        assert "styled header" in out
