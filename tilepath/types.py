# tilepath/types.py
from __future__ import annotations
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Hashable, NamedTuple, TypeVar

V = TypeVar("V")

Tile = Hashable
CoordMap = Dict[int, Dict[int, V]]  # row (y) -> column (x) -> value


class Coord(NamedTuple):
    x: int  # column
    y: int  # row


class Topology(str, Enum):
    CARDINAL = "cardinal"
    HEX = "hex"
    INTERCARDINAL = "intercardinal"


def as_coord(value: Any) -> Coord:
    """Accept a Coord, an (x, y) pair or a mapping with ``x``/``y`` keys."""
    if isinstance(value, Coord):
        return value
    if isinstance(value, Mapping):
        return Coord(value["x"], value["y"])
    x, y = value
    return Coord(x, y)


def is_single_coord(value: Any) -> bool:
    if isinstance(value, Mapping):
        return "x" in value and "y" in value
    # [1, 0] can only mean one coordinate: ints are never coordinates themselves
    return (
        isinstance(value, (tuple, list))
        and len(value) == 2
        and all(isinstance(v, int) for v in value)
    )
