# tilepath/grid.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Collection, Dict, Iterable, List, Optional, Union
import random, os

from .types import CoordMap, Tile, Topology, as_coord

Number = Union[int, float]


def to_coord_map(coords: Iterable[Any], base: Optional[CoordMap] = None, value: Any = True) -> CoordMap:
    """Fold (x, y) coordinates into a sparse row -> column -> value map.

    ``base`` is copied, never modified; coordinates already present in it
    are overwritten with ``value``.
    """
    coord_map: CoordMap = {y: dict(row) for y, row in (base or {}).items()}
    for c in coords:
        x, y = as_coord(c)
        coord_map.setdefault(y, {})[x] = value
    return coord_map


def _lookup(coord_map: CoordMap, x: int, y: int) -> Any:
    return coord_map.get(y, {}).get(x)


@dataclass(frozen=True)
class Grid:
    """Tile layout plus the cost and walkability tables searches read from.

    Mutators never touch the instance they are called on; they return a new
    Grid with fresh copies of the nested coordinate maps.
    """

    tiles: List[List[Tile]] = field(default_factory=list)  # [row][col]
    walkable_tiles: Collection[Tile] = field(default_factory=set)
    costs: Dict[Tile, Number] = field(default_factory=dict)
    extra_costs: CoordMap = field(default_factory=dict)
    blocked_coords: CoordMap = field(default_factory=dict)
    unstoppable_coords: CoordMap = field(default_factory=dict)
    topology: Topology = Topology.CARDINAL

    def __post_init__(self) -> None:
        # accept "hex" as well as Topology.HEX
        object.__setattr__(self, "topology", Topology(self.topology))

    # -------- topology --------

    def is_cardinal(self) -> bool:
        return self.topology is Topology.CARDINAL

    def is_hex(self) -> bool:
        return self.topology is Topology.HEX

    def is_intercardinal(self) -> bool:
        return self.topology is Topology.INTERCARDINAL

    # -------- queries --------

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        if x < 0 or y < 0 or y >= len(self.tiles):
            return None
        row = self.tiles[y]
        return row[x] if x < len(row) else None

    def in_grid(self, x: int, y: int) -> bool:
        if x < 0 or y < 0:
            return False
        # open-ended below the last row; walkability still decides
        if y >= len(self.tiles):
            return True
        return x < len(self.tiles[y])

    def is_walkable(self, x: int, y: int) -> bool:
        if _lookup(self.blocked_coords, x, y) is not None:
            return False
        return self.tile_at(x, y) in self.walkable_tiles

    def is_stoppable(self, x: int, y: int) -> bool:
        if _lookup(self.unstoppable_coords, x, y) is not None:
            return False
        return self.is_walkable(x, y)

    def extra_cost(self, x: int, y: int) -> Optional[Number]:
        return _lookup(self.extra_costs, x, y)

    def edge_cost(self, x: int, y: int) -> Number:
        """Cost of stepping onto (x, y); an extra cost replaces the tile cost."""
        extra = self.extra_cost(x, y)
        if extra is not None:
            return extra
        return self.costs.get(self.tile_at(x, y), 1)

    # -------- functional updates --------

    def set_tile_cost(self, tile: Tile, cost: Number) -> "Grid":
        return replace(self, costs={**self.costs, tile: cost})

    def add_extra_cost(self, x: int, y: int, cost: Number) -> "Grid":
        return self._add_coord("extra_costs", x, y, cost)

    def remove_extra_cost(self, x: int, y: int) -> "Grid":
        return self._remove_coord("extra_costs", x, y)

    def clear_extra_costs(self) -> "Grid":
        return replace(self, extra_costs={})

    def add_blocked_coord(self, x: int, y: int) -> "Grid":
        return self._add_coord("blocked_coords", x, y)

    def remove_blocked_coord(self, x: int, y: int) -> "Grid":
        return self._remove_coord("blocked_coords", x, y)

    def clear_blocked_coords(self) -> "Grid":
        return replace(self, blocked_coords={})

    def add_unstoppable_coord(self, x: int, y: int) -> "Grid":
        return self._add_coord("unstoppable_coords", x, y)

    def remove_unstoppable_coord(self, x: int, y: int) -> "Grid":
        return self._remove_coord("unstoppable_coords", x, y)

    def clear_unstoppable_coords(self) -> "Grid":
        return replace(self, unstoppable_coords={})

    def _add_coord(self, name: str, x: int, y: int, value: Any = True) -> "Grid":
        return replace(self, **{name: to_coord_map([(x, y)], getattr(self, name), value)})

    def _remove_coord(self, name: str, x: int, y: int) -> "Grid":
        coords = to_coord_map([], getattr(self, name))
        row = coords.get(y)
        if row is None or x not in row:
            return self
        del row[x]
        if not row:
            del coords[y]
        return replace(self, **{name: coords})

    # -------- files --------

    @staticmethod
    def random(width: int = 51, height: int = 51, p_blocked: float = 0.30,
               seed: Optional[int] = None, topology: Topology = Topology.CARDINAL) -> "Grid":
        rng = random.Random(seed)
        tiles = [[1 if rng.random() < p_blocked else 0 for _ in range(width)] for _ in range(height)]
        return Grid(tiles=tiles, walkable_tiles={0}, topology=topology)

    @staticmethod
    def load(path: str) -> "Grid":
        with open(path, "r") as f:
            lines = [(i, line.strip()) for i, line in enumerate(f, start=1) if line.strip()]
        if not lines:
            raise ValueError(f"{path}: empty grid file")

        header = lines[0][1].split()
        if header[0] != "GRID":
            # legacy maze format: rows of 0/1, 0=open 1=wall
            return Grid(tiles=[[int(c) for c in line] for _, line in lines], walkable_tiles={0})

        if len(header) != 2:
            raise ValueError(f"{path}:{lines[0][0]}: expected 'GRID <topology>'")
        try:
            topology = Topology(header[1].lower())
        except ValueError:
            raise ValueError(f"{path}:{lines[0][0]}: unknown topology {header[1]!r}") from None

        tiles: List[List[Tile]] = []
        walkable: set = set()
        costs: Dict[Tile, Number] = {}
        extra: CoordMap = {}
        blocked: CoordMap = {}
        unstoppable: CoordMap = {}
        for lineno, line in lines[1:]:
            word, *rest = line.split()
            try:
                if word == "WALKABLE":
                    walkable.update(_tile(v) for v in rest)
                elif word == "COST":
                    tile, cost = rest
                    costs[_tile(tile)] = _number(cost)
                elif word == "EXTRA":
                    x, y, cost = rest
                    extra = to_coord_map([(int(x), int(y))], extra, _number(cost))
                elif word == "BLOCK":
                    x, y = rest
                    blocked = to_coord_map([(int(x), int(y))], blocked)
                elif word == "UNSTOPPABLE":
                    x, y = rest
                    unstoppable = to_coord_map([(int(x), int(y))], unstoppable)
                elif word[0].isalpha():
                    raise ValueError(f"unknown directive {word!r}")
                else:
                    tiles.append([_number(v) for v in line.split()])
            except ValueError as e:
                raise ValueError(f"{path}:{lineno}: {e}") from None

        return Grid(tiles=tiles, walkable_tiles=walkable, costs=costs, extra_costs=extra,
                    blocked_coords=blocked, unstoppable_coords=unstoppable, topology=topology)

    def save(self, path: str) -> None:
        # tokens are built before anything is written; a grid that can't be saved leaves no file
        walkable = " ".join(_tile_token(t) for t in sorted(self.walkable_tiles, key=str))
        costs = [(_tile_token(t), c) for t, c in self.costs.items()]
        rows = [" ".join(_tile_token(t, floor=False) for t in row) for row in self.tiles]

        dirname = os.path.dirname(path)
        if dirname:
            os.makedirs(dirname, exist_ok=True)

        with open(path, "w") as f:
            f.write(f"GRID {self.topology.value}\n")
            if walkable:
                f.write(f"WALKABLE {walkable}\n")
            for token, cost in costs:
                f.write(f"COST {token} {cost}\n")
            for y, row in self.extra_costs.items():
                for x, cost in row.items():
                    f.write(f"EXTRA {x} {y} {cost}\n")
            for keyword, coord_map in (("BLOCK", self.blocked_coords), ("UNSTOPPABLE", self.unstoppable_coords)):
                for y, row in coord_map.items():
                    for x in row:
                        f.write(f"{keyword} {x} {y}\n")
            for row in rows:
                f.write(row + "\n")


FLOOR_TOKEN = "FLOOR"  # the missing tile below the last row (None)


def _number(text: str) -> Number:
    value = float(text)
    return int(value) if value.is_integer() else value


def _tile(text: str) -> Optional[Tile]:
    return None if text == FLOOR_TOKEN else _number(text)


def _tile_token(tile: Optional[Tile], floor: bool = True) -> str:
    if tile is None and floor:
        return FLOOR_TOKEN
    if isinstance(tile, bool) or not isinstance(tile, (int, float)):
        raise ValueError(f"cannot save tile {tile!r}: grid files only hold numeric tiles")
    return str(tile)
