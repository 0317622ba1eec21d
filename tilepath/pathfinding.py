# tilepath/pathfinding.py
"""
A* over a Grid.

With a destination the loop stops as soon as the destination sits on top of
the frontier. Without one every node estimates 1 and the same loop becomes a
cost-bounded flood fill, which is what find_walkable uses.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Set, Tuple, Union
import logging

from .grid import Grid
from .heuristics import estimate
from .node import Node
from .search import Search
from .types import Coord, Topology, as_coord, is_single_coord

logger = logging.getLogger(__name__)

Number = Union[int, float]
Offset = Tuple[int, int]

NORTH, NORTH_EAST, EAST, SOUTH_EAST = (0, -1), (1, -1), (1, 0), (1, 1)
SOUTH, SOUTH_WEST, WEST, NORTH_WEST = (0, 1), (-1, 1), (-1, 0), (-1, -1)

# clockwise from north; this order is the tie-break between equal routes
NEIGHBOR_OFFSETS: Dict[Topology, Tuple[Offset, ...]] = {
    Topology.CARDINAL: (NORTH, EAST, SOUTH, WEST),
    Topology.HEX: (NORTH, NORTH_EAST, EAST, SOUTH, SOUTH_WEST, WEST),
    Topology.INTERCARDINAL: (NORTH, NORTH_EAST, EAST, SOUTH_EAST, SOUTH, SOUTH_WEST, WEST, NORTH_WEST),
}


class SearchResult:
    def __init__(self, path: Optional[List[Coord]], expanded: Set[Coord], costs: Dict[Coord, Number]):
        self.path = path
        self.expanded = expanded
        self.costs = costs

    @classmethod
    def from_search(cls, path: Optional[List[Coord]], search: Optional[Search]) -> "SearchResult":
        if search is None:
            return cls(path, set(), {})
        nodes = search.traversed_nodes()
        return cls(path, {n.coord for n in nodes if n.visited}, {n.coord: n.cost for n in nodes})


def search_path(
    grid: Grid,
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    cost_threshold: Optional[Number] = None,
) -> SearchResult:
    """
    A* from (start_x, start_y) to (end_x, end_y).
    path is [] when start == end and None when the destination cannot be
    stopped on or reached within cost_threshold.
    """
    if start_x == end_x and start_y == end_y:
        return SearchResult.from_search([], None)

    if not grid.is_stoppable(end_x, end_y):
        logger.debug("destination (%d, %d) is not stoppable", end_x, end_y)
        return SearchResult.from_search(None, None)

    search = Search(start_x, start_y, end_x, end_y, cost_threshold)
    search.push(coordinate_to_node(search, None, start_x, start_y, 0))
    calculate(search, grid)

    node = search.pop()
    if node is None:
        logger.debug("no path from (%d, %d) to (%d, %d) within threshold %s",
                     start_x, start_y, end_x, end_y, cost_threshold)
        return SearchResult.from_search(None, search)
    return SearchResult.from_search(node.format_path(), search)


def find_path(
    grid: Grid,
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    cost_threshold: Optional[Number] = None,
) -> Optional[List[Coord]]:
    return search_path(grid, start_x, start_y, end_x, end_y, cost_threshold).path


def find_walkable(grid: Grid, coords: Any, cost_threshold: Optional[Number] = None) -> List[Coord]:
    """
    Every walkable coordinate reachable from one start or several.
    Starts that are not walkable themselves still spread but are left out of
    the result. Ordered by descending row, then descending column.
    """
    starts = [as_coord(coords)] if is_single_coord(coords) else [as_coord(c) for c in coords]
    if not starts:
        return []

    search = Search(starts[0].x, starts[0].y, cost_threshold=cost_threshold)
    for x, y in starts:
        if search.get_node(x, y) is None:
            search.push(coordinate_to_node(search, None, x, y, 0))
    calculate(search, grid)

    return [n.coord for n in search.traversed_nodes() if grid.is_walkable(n.x, n.y)]


def calculate(search: Search, grid: Grid) -> Search:
    offsets = NEIGHBOR_OFFSETS[grid.topology]
    while len(search):
        if reached_destination(search, search.peek()):
            break
        node = search.pop()
        node.visited = True
        search.store(node)
        for dx, dy in offsets:
            if grid.in_grid(node.x + dx, node.y + dy):
                check_adjacent(search, grid, node, dx, dy)
    return search


def reached_destination(search: Search, node: Node) -> bool:
    return node.x == search.end_x and node.y == search.end_y


def check_adjacent(search: Search, grid: Grid, source: Node, dx: int, dy: int) -> None:
    x, y = source.x + dx, source.y + dy
    cost = grid.edge_cost(x, y)
    if not grid.is_walkable(x, y) or not can_afford(source, cost, search.cost_threshold):
        return

    node = search.get_node(x, y)
    if node is None:
        search.push(coordinate_to_node(search, source, x, y, cost))
        return

    # first discovery wins: closed nodes are never reopened with a cheaper route
    if node.visited and source.cost + cost < node.cost:
        search.skipped_relaxations += 1
        logger.debug("kept cost %s at (%d, %d) over cheaper %s via (%d, %d)",
                     node.cost, x, y, source.cost + cost, source.x, source.y)


def can_afford(source: Node, cost: Number, cost_threshold: Optional[Number]) -> bool:
    if cost_threshold is None:
        return True
    return source.cost + cost <= cost_threshold


def coordinate_to_node(search: Search, parent: Optional[Node], x: int, y: int, cost: Number) -> Node:
    node = search.get_node(x, y)
    if node is not None:
        return node
    return Node(
        x,
        y,
        cost if parent is None else parent.cost + cost,
        estimate(x, y, search.destination),
        parent,
    )
