# tilepath/__init__.py
from .types import Coord, Topology
from .grid import Grid, to_coord_map
from .heuristics import manhattan
from .node import Node
from .search import Search
from .pathfinding import find_path, find_walkable, search_path, SearchResult
from .viz import draw_grid_png

__version__ = "0.1.0"

__all__ = [
    "Coord", "Topology", "Grid", "to_coord_map", "manhattan",
    "Node", "Search",
    "find_path", "find_walkable", "search_path", "SearchResult",
    "draw_grid_png",
]
