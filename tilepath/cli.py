# tilepath/cli.py
from __future__ import annotations
import argparse, json, logging, os
from typing import List, Optional

from .grid import Grid
from .pathfinding import find_walkable, search_path
from .types import Coord, Topology
from .viz import draw_grid_png

def format_coords(coords: List[Coord], as_json: bool = False) -> str:
    if as_json:
        return json.dumps([c._asdict() for c in coords])
    return " ".join(f"({x},{y})" for x, y in coords)

def _load(ap: argparse.ArgumentParser, path: str) -> Grid:
    try:
        return Grid.load(path)
    except (OSError, ValueError) as e:
        ap.error(str(e))

# -------- subcommands --------

def cmd_gen(args: argparse.Namespace) -> int:
    os.makedirs(args.out, exist_ok=True)
    for i in range(args.count):
        grid = Grid.random(width=args.width, height=args.height, p_blocked=args.p,
                           seed=(args.seed + i) if args.seed is not None else None,
                           topology=Topology(args.topology))
        path = os.path.join(args.out, f"grid_{i:03d}.txt")
        grid.save(path)
        print("wrote", path)
    return 0

def cmd_path(args: argparse.Namespace) -> int:
    grid = _load(args.parser, args.grid)
    (sx, sy), (ex, ey) = args.start, args.end
    res = search_path(grid, sx, sy, ex, ey, args.threshold)
    if args.png:
        draw_grid_png(grid, res.path, res.expanded, args.png)

    if res.path is None:
        print("null" if args.json else "no path")
        return 1
    if not res.path and not args.json:
        print("already at destination")
    else:
        print(format_coords(res.path, args.json))
    if not args.json:
        print(f"cost={res.costs.get(Coord(ex, ey), 0)} expanded={len(res.expanded)}")
    return 0

def cmd_walkable(args: argparse.Namespace) -> int:
    grid = _load(args.parser, args.grid)
    starts = [Coord(x, y) for x, y in args.sources]
    coords = find_walkable(grid, starts, args.threshold)
    if args.png:
        draw_grid_png(grid, None, coords, args.png)
    print(format_coords(coords, args.json))
    return 0

def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tilepath", description="Tile-grid A* pathfinding")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gen", help="generate random grids")
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--width", type=int, default=51)
    g.add_argument("--height", type=int, default=51)
    g.add_argument("--p", type=float, default=0.30)
    g.add_argument("--topology", choices=[t.value for t in Topology], default=Topology.CARDINAL.value)
    g.add_argument("--out", type=str, default="grids")
    g.add_argument("--seed", type=int, default=None)
    g.set_defaults(func=cmd_gen)

    d = sub.add_parser("path", help="shortest path between two coordinates")
    d.add_argument("--grid", type=str, required=True)
    d.add_argument("--start", type=int, nargs=2, metavar=("X", "Y"), required=True)
    d.add_argument("--end", type=int, nargs=2, metavar=("X", "Y"), required=True)
    d.add_argument("--threshold", type=float, default=None)
    d.add_argument("--png", type=str, default="")
    d.add_argument("--json", action="store_true")
    d.set_defaults(func=cmd_path, parser=d)

    w = sub.add_parser("walkable", help="coordinates reachable from one or more starts")
    w.add_argument("--grid", type=str, required=True)
    w.add_argument("--from", dest="sources", type=int, nargs=2, metavar=("X", "Y"),
                   action="append", required=True)
    w.add_argument("--threshold", type=float, default=None)
    w.add_argument("--png", type=str, default="")
    w.add_argument("--json", action="store_true")
    w.set_defaults(func=cmd_walkable, parser=w)

    return p

def main(argv: Optional[List[str]] = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)
