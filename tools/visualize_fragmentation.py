"""
Contiguous Allocator: Fragmentation Visualizer

Replays a file of allocator commands (RQ/RL/C/STAT, one per line) and draws a
Matplotlib heatmap of region occupancy over time. Compactions are marked as
horizontal lines.

How to run (recommended, from repo root):
    python -m tools.visualize_fragmentation --script session.txt --limit 1000 --out out_fragmentation.png

Notes:
- Rejected commands are replayed like the interactive loop would: they leave
  the region unchanged and still produce a frame.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script:
# (python -m tools.visualize_fragmentation already works without this,
#  but this makes `python tools/visualize_fragmentation.py ...` work too.)
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import numpy as np
import matplotlib.pyplot as plt

from control.commands import Compact, CommandError, Quit, parse_command
from control.dispatcher import Dispatcher
from memory.allocator import BlockList
from memory.fragmentation import compute_metrics


def render_state(region: BlockList, width: int) -> np.ndarray:
    """
    Return a 1D occupancy array over the address space, binned to 'width'.
    A bin is 1.0 when any owned byte falls into it.
    """
    bins = np.zeros(width, dtype=np.float32)
    scale = region.limit / width
    for blk in region:
        if blk.is_free:
            continue
        a = int(blk.start / scale)
        b = int(blk.end / scale)
        a = max(0, min(width - 1, a))
        b = max(0, min(width - 1, b))
        bins[a : b + 1] = 1.0
    return bins


def replay(lines, region: BlockList, width: int, every: int = 1):
    """Run commands against region; return (frames, compaction frame indices)."""
    dispatcher = Dispatcher(region)
    frames: list[np.ndarray] = []
    compactions: list[int] = []
    for i, line in enumerate(lines, start=1):
        try:
            cmd = parse_command(line)
        except CommandError:
            cmd = None
        if isinstance(cmd, Quit):
            break
        if isinstance(cmd, Compact):
            compactions.append(len(frames))
        if cmd is not None:
            dispatcher.execute(cmd)
        if every <= 1 or (i % every == 0):
            frames.append(render_state(region, width))
    return frames, compactions


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--script", required=True, help="Path to a command script")
    ap.add_argument("--limit", type=int, default=1000, help="Region size (bytes)")
    ap.add_argument("--out", default="out_fragmentation.png", help="Output image file")
    ap.add_argument("--width", type=int, default=140, help="Heatmap width (bins)")
    ap.add_argument("--every", type=int, default=1, help="Record every N commands")
    args = ap.parse_args()

    script_path = Path(args.script)
    if not script_path.exists():
        raise SystemExit(f"Script not found: {script_path}")

    region = BlockList(args.limit)
    with open(script_path, "r", encoding="utf-8") as f:
        frames, compactions = replay(f, region, args.width, args.every)

    if not frames:
        raise SystemExit("No frames captured. Check script path and --every.")

    H = np.stack(frames, axis=0)  # (time, width)

    fig = plt.figure(figsize=(10.5, 4.6))
    ax = fig.add_subplot(111)
    ax.imshow(H, aspect="auto", interpolation="nearest")
    ax.set_title("Region Occupancy Heatmap (Command replay)")
    ax.set_xlabel("address (binned)")
    ax.set_ylabel("time (frames)")

    for t in compactions:
        ax.axhline(t, linewidth=1)

    m = compute_metrics(region)
    caption = (
        f"Final fragmentation: largest_hole={m.largest_hole}, holes={m.hole_count}, "
        f"external_frag={m.external_frag:.3f}, entropy={m.entropy:.3f}"
    )
    fig.text(0.01, 0.01, caption, fontsize=9)

    fig.tight_layout()
    out_path = Path(args.out)
    fig.savefig(str(out_path), dpi=220)
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
