import random
from itertools import combinations

import pytest

from delve.config import DungeonConfig
from delve.dungeon.generator import DungeonGenerator, generate
from delve.dungeon.rect import Rect
from delve.map.grid import TileGrid

SEEDS = [1, 7, 42, 1234, 98765]


def _tunnel_cells(a, b):
    """Cells either L-shaped tunnel between two centres may carve."""
    (ax, ay), (bx, by) = a, b
    xs = range(min(ax, bx), max(ax, bx) + 1)
    ys = range(min(ay, by), max(ay, by) + 1)
    cells = set()
    cells.update((x, ay) for x in xs)
    cells.update((bx, y) for y in ys)
    cells.update((ax, y) for y in ys)
    cells.update((x, by) for x in xs)
    return cells


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_are_carved_and_everything_else_is_wall(seed):
    result = generate(80, 45, 30, 6, 10, seed=seed)
    grid = result.grid

    allowed = set()
    for room in result.rooms:
        for x in range(room.x1 + 1, room.x2):
            for y in range(room.y1 + 1, room.y2):
                assert grid.tile_at(x, y).is_floor
                allowed.add((x, y))
    for prev, new in zip(result.rooms, result.rooms[1:]):
        allowed |= _tunnel_cells(prev.center(), new.center())

    for y in range(grid.height):
        for x in range(grid.width):
            tile = grid.tile_at(x, y)
            if (x, y) not in allowed:
                assert tile.is_wall, f"stray floor at {(x, y)}"
            else:
                assert tile.is_wall or tile.is_floor


@pytest.mark.parametrize("seed", SEEDS)
def test_accepted_rooms_never_intersect(seed):
    result = generate(80, 45, 30, 6, 10, seed=seed)
    for a, b in combinations(result.rooms, 2):
        assert not a.intersects(b)


@pytest.mark.parametrize("seed", SEEDS)
def test_every_room_reachable_from_spawn(seed):
    result = generate(60, 40, 25, 4, 9, seed=seed)
    reachable = result.grid.reachable_from(result.spawn)
    for room in result.rooms:
        assert room.center() in reachable


@pytest.mark.parametrize("seed", SEEDS)
def test_border_stays_wall(seed):
    result = generate(50, 30, 40, 3, 8, seed=seed)
    grid = result.grid
    for x in range(grid.width):
        assert grid.tile_at(x, 0).is_wall
        assert grid.tile_at(x, grid.height - 1).is_wall
    for y in range(grid.height):
        assert grid.tile_at(0, y).is_wall
        assert grid.tile_at(grid.width - 1, y).is_wall


def test_spawn_is_first_room_centre():
    result = generate(80, 45, 30, 6, 10, seed=3)
    assert result.spawn == result.rooms[0].center()
    assert not result.grid.is_blocked(*result.spawn)


def test_room_count_bounded_by_attempts():
    result = generate(40, 30, 50, 6, 10, seed=11)
    assert 1 <= len(result.rooms) <= 50
    # 50 rooms of at least 6x6 cannot fit on a 40x30 map without touching
    assert len(result.rooms) < 50


def test_single_attempt_always_places_a_room():
    for seed in range(20):
        result = generate(12, 12, 1, 2, 11, seed=seed)
        assert len(result.rooms) == 1


def test_room_sizes_respect_bounds():
    result = generate(80, 45, 30, 5, 7, seed=5)
    for room in result.rooms:
        assert 5 <= room.width <= 7
        assert 5 <= room.height <= 7
        assert room.x1 >= 0 and room.y1 >= 0
        assert room.x2 <= 79 and room.y2 <= 44


def test_same_seed_same_layout():
    a = generate(64, 40, 20, 4, 10, seed=2024)
    b = generate(64, 40, 20, 4, 10, seed=2024)
    assert a.grid.to_ascii() == b.grid.to_ascii()
    assert a.spawn == b.spawn
    assert a.rooms == b.rooms


def test_different_seeds_change_layout():
    a = generate(64, 40, 20, 4, 10, seed=1)
    b = generate(64, 40, 20, 4, 10, seed=2)
    assert a.grid.signature() != b.grid.signature()


def test_generator_uses_injected_rng():
    config = DungeonConfig(map_width=30, map_height=20, max_rooms=8, room_min_size=3, room_max_size=6)
    a = DungeonGenerator(config, random.Random(99)).generate()
    b = DungeonGenerator(config, random.Random(99)).generate()
    assert a.grid.signature() == b.grid.signature()


def test_result_grid_is_frozen():
    result = generate(30, 20, 5, 3, 6, seed=8)
    assert result.grid.frozen


@pytest.mark.parametrize(
    "args",
    [
        (30, 20, 5, 7, 6),   # min > max
        (10, 20, 5, 3, 10),  # room as wide as the map
        (30, 8, 5, 3, 8),    # room as tall as the map
        (30, 20, 0, 3, 6),   # no attempts
        (30, 20, 5, 1, 6),   # no interior
    ],
)
def test_inconsistent_bounds_are_rejected(args):
    with pytest.raises(ValueError):
        generate(*args, seed=1)


def test_two_rooms_joined_by_tunnel_reach_each_other():
    grid = TileGrid(10, 10)
    first = Rect.create(1, 1, 4, 4)
    second = Rect.create(5, 5, 4, 4)
    grid.carve_room(first)
    grid.carve_room(second)
    (ax, ay), (bx, by) = first.center(), second.center()
    grid.carve_h_tunnel(ax, bx, ay)
    grid.carve_v_tunnel(ay, by, bx)

    assert second.center() in grid.reachable_from(first.center())
    assert first.center() in grid.reachable_from(second.center())
