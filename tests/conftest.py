"""
Shared fixtures for the allocator tests.

Regions are small (1000 bytes) so that layouts can be written out by hand.
"""

import pytest

from memory.allocator import BlockList


def layout(region):
    """Value snapshot of a region: [(owner, start, end), ...]."""
    return [(b.owner, b.start, b.end) for b in region]


@pytest.fixture
def region() -> BlockList:
    """Fresh 1000-byte region with a single free block."""
    return BlockList(1000)


@pytest.fixture
def two_process_region(region: BlockList) -> BlockList:
    """P1 [0,599], P2 [600,899], free [900,999]."""
    region.allocate("P1", 600)
    region.allocate("P2", 300)
    return region
