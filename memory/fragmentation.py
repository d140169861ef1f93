from __future__ import annotations
from dataclasses import dataclass
from typing import List
import math

from memory.allocator import BlockList

@dataclass
class FragMetrics:
    total_free: int
    largest_hole: int
    hole_count: int
    external_frag: float
    entropy: float

def _hole_entropy(sizes: List[int]) -> float:
    total = sum(sizes)
    if total <= 0:
        return 0.0
    return -sum((s/total) * math.log2(s/total) for s in sizes)

def compute_metrics(region: BlockList) -> FragMetrics:
    """Summarize how scattered the free space of `region` is.

    external_frag is the share of free bytes outside the largest hole:
    0.0 when all free space is one block (or nothing is free).
    """
    sizes = [s for _, s in region.extents_free()]
    total = sum(sizes)
    largest = max(sizes, default=0)
    external = 0.0 if total == 0 else 1.0 - largest/total
    return FragMetrics(total, largest, len(sizes), external, _hole_entropy(sizes))
