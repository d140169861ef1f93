"""Tests for command parsing and the approach codes."""

import pytest

from control.commands import (Compact, CommandError, Quit, Release, Request, Status,
                              parse_command)
from memory.allocator import Block
from policy.fit import Approach, best_fit


class TestParseCommand:

    @pytest.mark.unit
    def test_request(self) -> None:
        assert parse_command("RQ P1 200600 B\n") == Request("P1", 200600, Approach.BEST)

    @pytest.mark.unit
    @pytest.mark.parametrize("code,approach", [("F", Approach.FIRST), ("W", Approach.WORST)])
    def test_request_other_approaches_parse(self, code, approach) -> None:
        assert parse_command(f"RQ P2 10 {code}").approach is approach

    @pytest.mark.unit
    def test_release(self) -> None:
        assert parse_command("RL P0") == Release("P0")

    @pytest.mark.unit
    @pytest.mark.parametrize("line,cmd", [("C", Compact()), ("STAT\n", Status()), ("QUIT", Quit())])
    def test_single_word_commands(self, line, cmd) -> None:
        assert parse_command(line) == cmd

    @pytest.mark.unit
    @pytest.mark.parametrize("line", ["", "\n", "   "])
    def test_blank_line(self, line) -> None:
        assert parse_command(line) is None

    @pytest.mark.unit
    @pytest.mark.parametrize("line,message", [
        ("rq P1 10 B", "Invalid command or case."),
        ("stat", "Invalid command or case."),
        ("C now", "Invalid command or case."),
        ("HELP", "Invalid command or case."),
        ("RQ X1 10 B", "Invalid process name: X1"),
        ("RQ P 10 B", "Invalid process name: P"),
        ("RQ p1 10 B", "Invalid process name: p1"),
        ("RQ P1 10", "No approach specified. (B/F/W)"),
        ("RQ P1 ten B", "Invalid memory size: ten"),
        ("RQ P1 0 B", "Zero memory requested."),
        ("RQ P1 -5 B", "Zero memory requested."),
        ("RQ P1 10 Q", "Invalid approach specified."),
        ("RQ P1 10 b", "Invalid approach specified."),
        ("RQ", "Usage: RQ <process> <size> <approach>"),
        ("RQ P1", "Usage: RQ <process> <size> <approach>"),
        ("RQ P1 10 B extra", "Usage: RQ <process> <size> <approach>"),
        ("RL", "Usage: RL <process>"),
        ("RL P1 P2", "Usage: RL <process>"),
        ("RL Q1", "Invalid process name: Q1"),
    ])
    def test_diagnostics(self, line, message) -> None:
        with pytest.raises(CommandError) as exc:
            parse_command(line)
        assert str(exc.value) == message


class TestApproach:

    @pytest.mark.unit
    def test_from_code(self) -> None:
        assert Approach.from_code("B") is Approach.BEST
        assert Approach.from_code("F") is Approach.FIRST
        assert Approach.from_code("W") is Approach.WORST
        assert Approach.from_code("X") is None

    @pytest.mark.unit
    def test_only_best_fit_supported(self) -> None:
        assert [a for a in Approach if a.supported] == [Approach.BEST]
        assert Approach.WORST.label == "Worst fit"


class TestBestFit:

    @pytest.mark.unit
    def test_picks_smallest_adequate(self) -> None:
        blocks = [Block(None, 0, 300), Block("P1", 300, 100), Block(None, 400, 120), Block("P2", 520, 480)]
        assert best_fit(blocks, 100) == 2
        assert best_fit(blocks, 200) == 0

    @pytest.mark.unit
    def test_no_candidate(self) -> None:
        blocks = [Block("P1", 0, 50), Block(None, 50, 50)]
        assert best_fit(blocks, 51) is None

    @pytest.mark.unit
    def test_ties_go_to_lowest_address(self) -> None:
        blocks = [Block(None, 0, 10), Block("P1", 10, 10), Block(None, 20, 10)]
        assert best_fit(blocks, 10) == 0
