# tilepath/search.py
from __future__ import annotations
from typing import Dict, List, Optional, Tuple, Union
import heapq

from .node import Node
from .types import Coord

Number = Union[int, float]


class Search:
    """
    State for one search:
    - a min-heap frontier keyed by (total_cost, insertion counter), so equal
      estimates come out first-in first-out
    - a row -> column -> Node cache of every node discovered so far
    """

    def __init__(self, start_x: int, start_y: int,
                 end_x: Optional[int] = None, end_y: Optional[int] = None,
                 cost_threshold: Optional[Number] = None):
        self.start_x = start_x
        self.start_y = start_y
        self.end_x = end_x
        self.end_y = end_y
        self.cost_threshold = cost_threshold
        self.heap: List[Tuple[Number, int, Node]] = []
        self.cache: Dict[int, Dict[int, Node]] = {}
        self.skipped_relaxations = 0
        self._counter = 0

    @property
    def destination(self) -> Optional[Coord]:
        if self.end_x is None or self.end_y is None:
            return None
        return Coord(self.end_x, self.end_y)

    def __len__(self) -> int:
        return len(self.heap)

    def push(self, node: Node) -> None:
        self.store(node)
        heapq.heappush(self.heap, (node.total_cost, self._counter, node))
        self._counter += 1

    def peek(self) -> Optional[Node]:
        return self.heap[0][2] if self.heap else None

    def pop(self) -> Optional[Node]:
        if not self.heap:
            return None
        return heapq.heappop(self.heap)[2]

    def store(self, node: Node) -> None:
        self.cache.setdefault(node.y, {})[node.x] = node

    def get_node(self, x: int, y: int) -> Optional[Node]:
        return self.cache.get(y, {}).get(x)

    def traversed_nodes(self) -> List[Node]:
        """Every cached node, descending by row then by column."""
        nodes = [self.cache[y][x] for y in sorted(self.cache) for x in sorted(self.cache[y])]
        nodes.reverse()
        return nodes
