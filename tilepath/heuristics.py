# tilepath/heuristics.py
from __future__ import annotations
from typing import Optional
from .types import Coord

def manhattan(a: Coord, b: Coord) -> int:
    ax, ay = a
    bx, by = b
    return abs(ax - bx) + abs(ay - by)

def estimate(x: int, y: int, goal: Optional[Coord]) -> int:
    """
    Distance guess for a node at (x, y).
    Manhattan for every topology; a flood fill (no goal) uses a constant 1.
    """
    if goal is None:
        return 1
    return manhattan((x, y), goal)
