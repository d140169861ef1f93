"""Tests for the occupancy heatmap replay (no image is written)."""

import numpy as np
import pytest

from memory.allocator import BlockList
from tools.visualize_fragmentation import render_state, replay


@pytest.mark.unit
def test_render_state_marks_owned_bins(two_process_region) -> None:
    two_process_region.release("P1")
    bins = render_state(two_process_region, 10)
    assert bins.dtype == np.float32
    assert bins.tolist() == [0, 0, 0, 0, 0, 0, 1, 1, 1, 0]


@pytest.mark.unit
def test_replay_records_frames_and_compactions() -> None:
    region = BlockList(100)
    lines = ["RQ P1 50 B\n", "RQ P2 25 B\n", "bogus\n", "RL P1\n", "C\n", "STAT\n", "QUIT\n", "RQ P3 10 B\n"]
    frames, compactions = replay(lines, region, width=4)
    assert len(frames) == 6
    assert compactions == [4]
    assert frames[3].tolist() == [0, 0, 1, 0]
    assert frames[4].tolist() == [1, 0, 0, 0]
    assert region.find("P3") is None


@pytest.mark.unit
def test_replay_every_n() -> None:
    lines = ["RQ P1 10 B\n"] + ["STAT\n"] * 5
    frames, _ = replay(lines, BlockList(100), width=5, every=2)
    assert len(frames) == 3
