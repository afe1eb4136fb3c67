import pytest

from delve.dungeon.generator import generate
from delve.dungeon.rect import Rect
from delve.fov.fov import bresenham_line, compute_visible, has_line_of_sight, within_radius
from delve.map.grid import TileGrid


def _open_grid(width, height):
    return TileGrid.from_ascii(["." * width for _ in range(height)])


def test_bresenham_includes_both_endpoints():
    line = bresenham_line(0, 0, 4, 2)
    assert line[0] == (0, 0)
    assert line[-1] == (4, 2)
    assert len(line) == 5
    assert bresenham_line(3, 3, 3, 3) == [(3, 3)]


def test_open_room_sees_full_disc():
    grid = _open_grid(11, 11)
    visible = compute_visible(grid, 5, 5, 3)

    for y in range(grid.height):
        for x in range(grid.width):
            assert ((x, y) in visible) == within_radius(5, 5, x, y, 3)
    # corners of the bounding square are outside the disc
    assert (8, 8) not in visible
    assert (8, 5) in visible


def test_observer_always_visible():
    grid = _open_grid(5, 5)
    assert (2, 2) in compute_visible(grid, 2, 2, 4)


@pytest.mark.parametrize("radius", [0, -1, -5])
def test_non_positive_radius_sees_only_observer(radius):
    grid = _open_grid(5, 5)
    assert compute_visible(grid, 2, 2, radius) == {(2, 2)}


def test_wall_hides_tiles_behind_it():
    rows = ["." * 11 for _ in range(11)]
    rows[7] = "....." + "#" + "....."
    grid = TileGrid.from_ascii(rows)

    visible = compute_visible(grid, 5, 5, 3)
    assert (5, 6) in visible
    assert (5, 7) in visible  # the wall itself is lit
    assert (5, 8) not in visible
    assert (5, 9) not in visible


def test_walls_not_reported_without_light_walls():
    rows = ["." * 11 for _ in range(11)]
    rows[7] = "....." + "#" + "....."
    grid = TileGrid.from_ascii(rows)

    visible = compute_visible(grid, 5, 5, 3, light_walls=False)
    assert (5, 6) in visible
    assert (5, 7) not in visible


def test_vertical_wall_blocks_row():
    rows = [
        "..#....",
        "..#....",
        "..#....",
        "..#....",
        "..#....",
    ]
    grid = TileGrid.from_ascii(rows)
    visible = compute_visible(grid, 1, 2, 10)
    assert (2, 2) in visible
    assert (4, 2) not in visible
    assert (6, 2) not in visible


@pytest.mark.parametrize("seed", [3, 17, 256])
def test_results_respect_radius_and_occlusion(seed):
    result = generate(60, 40, 20, 4, 9, seed=seed)
    grid = result.grid
    ox, oy = result.spawn
    radius = 8

    visible = compute_visible(grid, ox, oy, radius)
    assert (ox, oy) in visible
    for x, y in visible:
        assert within_radius(ox, oy, x, y, radius)
        between = bresenham_line(ox, oy, x, y)[1:-1]
        assert not any(grid.blocks_sight(bx, by) for bx, by in between)
        assert has_line_of_sight(grid, ox, oy, x, y)


def test_repeated_calls_agree():
    result = generate(60, 40, 20, 4, 9, seed=77)
    ox, oy = result.spawn
    first = compute_visible(result.grid, ox, oy, 10)
    second = compute_visible(result.grid, ox, oy, 10)
    assert first == second


def test_corner_wall_never_visible_in_two_room_map():
    grid = TileGrid(10, 10)
    first = Rect.create(1, 1, 4, 4)
    second = Rect.create(5, 5, 4, 4)
    grid.carve_room(first)
    grid.carve_room(second)
    (ax, ay), (bx, by) = first.center(), second.center()
    grid.carve_h_tunnel(ax, bx, ay)
    grid.carve_v_tunnel(ay, by, bx)
    grid.freeze()

    floors = [(x, y) for y in range(10) for x in range(10) if not grid.is_blocked(x, y)]
    assert floors
    for ox, oy in floors:
        assert (0, 0) not in compute_visible(grid, ox, oy, 10)
