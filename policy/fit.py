from __future__ import annotations
from enum import Enum
from typing import Optional, Sequence

class Approach(Enum):
    BEST = 'B'
    FIRST = 'F'
    WORST = 'W'

    @classmethod
    def from_code(cls, code: str) -> Optional['Approach']:
        for a in cls:
            if a.value == code:
                return a
        return None

    @property
    def supported(self) -> bool:
        return self is Approach.BEST

    @property
    def label(self) -> str:
        return {'B': 'Best fit', 'F': 'First fit', 'W': 'Worst fit'}[self.value]

def best_fit(blocks: Sequence, size: int) -> Optional[int]:
    """Index of the smallest free block holding `size`, lowest address on ties."""
    best = None
    for i, b in enumerate(blocks):
        if not b.is_free or b.size < size:
            continue
        if best is None or b.size < blocks[best].size:
            best = i
    return best
