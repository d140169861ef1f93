from __future__ import annotations
from memory.allocator import BlockList

def render_map(region: BlockList, width: int=80) -> str:
    if width <= 0:
        raise ValueError(f'width must be positive, got {width}')
    buf = ['.'] * width
    for b in region:
        if b.is_free:
            continue
        s = b.start * width // region.limit
        e = (b.start + b.size) * width // region.limit
        mark = b.owner[-1]
        # blocks narrower than one bin still get a column
        for i in range(s, min(width, max(s + 1, e))):
            buf[i] = mark
    return ''.join(buf)
