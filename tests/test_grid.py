"""Tests for the Grid model, coordinate maps and the grid text format."""

import pytest

from tilepath import Coord, Grid, Topology, to_coord_map


def test_to_coord_map_converts_coords():
    coords = [
        {"x": 0, "y": 0},
        {"x": 0, "y": 1},
        {"x": 0, "y": 2},
        {"x": 1, "y": 0},
        {"x": 2, "y": 0},
        {"x": 2, "y": 2},
    ]

    assert to_coord_map(coords) == {
        0: {0: True, 1: True, 2: True},
        1: {0: True},
        2: {0: True, 2: True},
    }


def test_to_coord_map_accepts_base_map_without_modifying_it():
    base = {1: {0: False}}

    coord_map = to_coord_map([Coord(0, 0)], base)

    assert coord_map == {0: {0: True}, 1: {0: False}}
    assert base == {1: {0: False}}


def test_to_coord_map_accepts_value_and_tuples():
    assert to_coord_map([(0, 0)], {}, False) == {0: {0: False}}


def test_in_grid_has_hard_top_left_and_open_floor():
    grid = Grid(tiles=[[1, 1, 1], [1]])

    assert grid.in_grid(2, 0)
    assert not grid.in_grid(3, 0)
    assert not grid.in_grid(1, 1)  # short row
    assert not grid.in_grid(-1, 0)
    assert not grid.in_grid(0, -1)
    # past the last row everything is "in grid"
    assert grid.in_grid(100, 2)


def test_walkability_and_stoppability():
    grid = Grid(tiles=[[1, 0], [1, 1]], walkable_tiles={1})

    assert grid.is_walkable(0, 0)
    assert not grid.is_walkable(1, 0)
    assert not grid.is_walkable(0, 5)  # below the last row: no tile
    assert not grid.is_walkable(-1, 0)

    blocked = grid.add_blocked_coord(0, 1)
    assert not blocked.is_walkable(0, 1)

    unstoppable = grid.add_unstoppable_coord(1, 1)
    assert unstoppable.is_walkable(1, 1)
    assert not unstoppable.is_stoppable(1, 1)
    assert unstoppable.is_stoppable(0, 1)


def test_missing_tiles_walkable_only_when_none_is_listed():
    grid = Grid(tiles=[[1]], walkable_tiles={1, None})

    assert grid.is_walkable(0, 3)
    assert grid.is_walkable(4, 0)


def test_edge_cost_prefers_extra_cost_over_tile_cost():
    grid = Grid(tiles=[[0, 2, 2]], walkable_tiles={0, 2}).set_tile_cost(2, 4)

    assert grid.edge_cost(0, 0) == 1
    assert grid.edge_cost(1, 0) == 4

    grid = grid.add_extra_cost(1, 0, 2)
    assert grid.extra_cost(1, 0) == 2
    assert grid.edge_cost(1, 0) == 2
    assert grid.edge_cost(2, 0) == 4

    assert grid.remove_extra_cost(1, 0).edge_cost(1, 0) == 4
    assert grid.clear_extra_costs().extra_costs == {}


def test_mutators_return_new_grids():
    original = Grid(tiles=[[1, 1]], walkable_tiles={1})

    blocked = original.add_blocked_coord(1, 0)
    costed = original.set_tile_cost(1, 3)
    unstoppable = original.add_unstoppable_coord(0, 0)

    assert original.blocked_coords == {}
    assert original.costs == {}
    assert original.unstoppable_coords == {}
    assert blocked.blocked_coords == {0: {1: True}}
    assert costed.costs == {1: 3}
    assert unstoppable.unstoppable_coords == {0: {0: True}}

    # later changes do not leak back into earlier values
    both = blocked.add_blocked_coord(0, 0)
    assert blocked.blocked_coords == {0: {1: True}}
    assert both.blocked_coords == {0: {0: True, 1: True}}


def test_remove_and_clear_coords():
    grid = Grid().add_blocked_coord(1, 2).add_blocked_coord(3, 2).add_unstoppable_coord(0, 0)

    assert grid.remove_blocked_coord(1, 2).blocked_coords == {2: {3: True}}
    assert grid.remove_blocked_coord(1, 2).remove_blocked_coord(3, 2).blocked_coords == {}
    assert grid.remove_blocked_coord(9, 9) == grid
    assert grid.clear_blocked_coords().blocked_coords == {}
    assert grid.remove_unstoppable_coord(0, 0).unstoppable_coords == {}
    assert grid.clear_unstoppable_coords().unstoppable_coords == {}


def test_topology_predicates():
    assert Grid().is_cardinal()
    assert Grid(topology=Topology.HEX).is_hex()
    assert Grid(topology=Topology.INTERCARDINAL).is_intercardinal()
    assert not Grid(topology=Topology.HEX).is_cardinal()
    assert Grid(topology="intercardinal").topology is Topology.INTERCARDINAL


def test_save_and_load_keep_configuration(tmp_path):
    grid = (
        Grid(tiles=[[0, 2, 0], [0, 1]], walkable_tiles={0, 1, 2}, topology=Topology.HEX)
        .set_tile_cost(2, 4)
        .set_tile_cost(1, 0.5)
        .add_extra_cost(0, 1, 3)
        .add_blocked_coord(2, 0)
        .add_unstoppable_coord(1, 1)
    )
    path = tmp_path / "nested" / "grid.txt"

    grid.save(str(path))
    loaded = Grid.load(str(path))

    assert loaded == grid


def test_save_and_load_keep_walkable_floor(tmp_path):
    grid = Grid(tiles=[[1, 0, 1]], walkable_tiles={1, None}).set_tile_cost(None, 2)
    path = tmp_path / "floor.txt"

    grid.save(str(path))
    loaded = Grid.load(str(path))

    assert "WALKABLE 1 FLOOR" in path.read_text()
    assert loaded == grid
    assert loaded.is_walkable(0, 4)
    assert loaded.edge_cost(0, 4) == 2


def test_save_rejects_non_numeric_tiles(tmp_path):
    path = tmp_path / "chars.txt"
    grid = Grid(tiles=[["a", "b"]], walkable_tiles={"a"})

    with pytest.raises(ValueError, match="cannot save tile 'a'"):
        grid.save(str(path))

    assert not path.exists()


def test_load_legacy_maze_format(tmp_path):
    path = tmp_path / "maze.txt"
    path.write_text("010\n000\n")

    grid = Grid.load(str(path))

    assert grid.tiles == [[0, 1, 0], [0, 0, 0]]
    assert grid.is_walkable(0, 0)
    assert not grid.is_walkable(1, 0)
    assert grid.is_cardinal()


def test_load_rejects_unknown_directive(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("GRID cardinal\nWALKABLE 1\nTELEPORT 1 2\n1 1\n")

    with pytest.raises(ValueError, match=r"bad.txt:3: unknown directive 'TELEPORT'"):
        Grid.load(str(path))


def test_load_rejects_unknown_topology(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("GRID triangle\n1 1\n")

    with pytest.raises(ValueError, match="unknown topology"):
        Grid.load(str(path))


def test_random_grid_is_reproducible():
    a = Grid.random(width=8, height=6, p_blocked=0.4, seed=7)
    b = Grid.random(width=8, height=6, p_blocked=0.4, seed=7)

    assert a == b
    assert len(a.tiles) == 6
    assert all(len(row) == 8 for row in a.tiles)
    assert a.walkable_tiles == {0}
