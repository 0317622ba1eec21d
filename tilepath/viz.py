# tilepath/viz.py
from __future__ import annotations
import os
from typing import Iterable, List, Optional
try:
    from PIL import Image, ImageDraw
    PIL_AVAILABLE = True
except ImportError:
    PIL_AVAILABLE = False

from .grid import Grid
from .types import Coord

WALL = (0, 0, 0)
FLOOR = (240, 240, 240)
UNSTOPPABLE = (200, 200, 120)
EXPANDED = (255, 200, 200)
PATH = (160, 190, 255)
START = (100, 220, 120)
GOAL = (255, 170, 80)

def draw_grid_png(grid: Grid,
                  path: Optional[List[Coord]],
                  expanded: Optional[Iterable[Coord]],
                  out_png: str,
                  cell: int = 10) -> bool:
    """Render the grid with a search result on top. Returns False when Pillow is missing."""
    if not PIL_AVAILABLE:
        print("Pillow not installed; skipping PNG:", out_png)
        return False

    # the grid is open below its last row, so make room for anything drawn there
    marks = list(path or []) + list(expanded or [])
    rows = max([len(grid.tiles)] + [y + 1 for _, y in marks])
    cols = max([len(r) for r in grid.tiles] + [x + 1 for x, _ in marks] + [1])
    img = Image.new("RGB", (cols * cell, max(rows, 1) * cell), WALL)
    drw = ImageDraw.Draw(img)

    def fill(x: int, y: int, color) -> None:
        x0, y0 = x * cell, y * cell
        drw.rectangle((x0, y0, x0 + cell - 1, y0 + cell - 1), fill=color)

    # base grid
    for y in range(rows):
        for x in range(cols):
            if not grid.is_walkable(x, y):
                continue
            fill(x, y, FLOOR if grid.is_stoppable(x, y) else UNSTOPPABLE)

    # expanded cells
    for x, y in expanded or ():
        fill(x, y, EXPANDED)

    # path, start, goal
    if path:
        for x, y in path:
            fill(x, y, PATH)
        fill(*path[0], START)
        fill(*path[-1], GOAL)

    dirname = os.path.dirname(out_png)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    img.save(out_png)
    return True
