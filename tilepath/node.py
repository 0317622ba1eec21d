# tilepath/node.py
from __future__ import annotations
from typing import List, Optional, Union

from .types import Coord

Number = Union[int, float]


class Node:
    """A cell discovered by one search.

    ``parent`` points at the node it was first discovered from, inside the
    same search. Only ``visited`` changes after construction.
    """

    __slots__ = ("parent", "x", "y", "cost", "distance", "visited")

    def __init__(self, x: int, y: int, cost: Number, distance: Number, parent: Optional["Node"] = None):
        self.parent = parent
        self.x = x
        self.y = y
        self.cost = cost
        self.distance = distance
        self.visited = False

    @property
    def total_cost(self) -> Number:
        return self.cost + self.distance

    @property
    def coord(self) -> Coord:
        return Coord(self.x, self.y)

    def format_path(self) -> List[Coord]:
        path = [self.coord]
        node = self.parent
        while node is not None:
            path.append(node.coord)
            node = node.parent
        path.reverse()
        return path

    def __repr__(self) -> str:
        return (f"Node(x={self.x}, y={self.y}, cost={self.cost}, distance={self.distance}, "
                f"visited={self.visited})")
