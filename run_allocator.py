from __future__ import annotations
import argparse, logging, sys
from control.commands import CommandError, parse_size
from control.dispatcher import Dispatcher, run_loop
from memory.allocator import BlockList, InvalidArgument, initialize
from memory.fragmentation import compute_metrics
from viz.ascii_map import render_map

def print_summary(region: BlockList, show_map: bool, width: int, out=sys.stdout):
    m = compute_metrics(region)
    print("="*72, file=out)
    print("Contiguous Allocator: Session Summary", file=out)
    print("="*72, file=out)
    print(f"Capacity: {region.limit}  Used: {region.used()}  Free: {region.free_bytes()}  Blocks: {len(region)}", file=out)
    print(f"Fragmentation: largest_hole={m.largest_hole} holes={m.hole_count} "
          f"external_frag={m.external_frag:.3f} entropy={m.entropy:.3f}", file=out)
    if show_map:
        print("-"*72, file=out)
        print("Memory map (ASCII):", file=out)
        print(render_map(region, width), file=out)
    print("="*72, file=out)

def main(argv=None, stdin=None, stdout=None) -> int:
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout
    ap = argparse.ArgumentParser(description="Best-fit contiguous memory allocator.")
    ap.add_argument('limit', help="size of the managed region in bytes")
    ap.add_argument('--script', help="read commands from this file instead of stdin (each is echoed)")
    ap.add_argument('--prompt', default='allocator>')
    ap.add_argument('--summary', action='store_true', help="print used/free bytes and fragmentation on exit")
    ap.add_argument('--show-map', action='store_true', help="include an ASCII memory map in the summary")
    ap.add_argument('--map-width', type=int, default=80)
    ap.add_argument('--log-level', default='WARNING', choices=['DEBUG','INFO','WARNING','ERROR'])
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        region = initialize(parse_size(args.limit))
    except (CommandError, InvalidArgument):
        print(f"Invalid memory size: {args.limit}", file=stdout)
        return 1

    dispatcher = Dispatcher(region)
    try:
        if args.script:
            with open(args.script, 'r', encoding='utf-8') as f:
                run_loop(dispatcher, f, stdout, prompt=args.prompt, echo=True)
        else:
            run_loop(dispatcher, stdin, stdout, prompt=args.prompt)
        if args.summary or args.show_map:
            print_summary(region, args.show_map, args.map_width, out=stdout)
    finally:
        region.close()
    return 0

if __name__=='__main__':
    sys.exit(main())
