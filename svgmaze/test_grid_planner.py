import pytest

from svgmaze.grid_planner import (
    SearchNode,
    cell_to_point,
    find_path,
    heuristic_fn,
    manhattan,
    path_length,
    plan_scene,
    save_waypoints,
    signed_distance,
)
from svgmaze.rasterize import Grid
from svgmaze.scene import RectObstacle, Scene


def make_grid(width=5, height=5, blocked=(), start=(0, 0), end=(4, 4)):
    return Grid(
        width=width,
        height=height,
        blocked=frozenset(blocked),
        start_cell=start,
        end_cell=end,
    )


def assert_valid_path(grid, path):
    assert path[0] == grid.start_cell
    assert path[-1] == grid.end_cell
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1
        assert grid.is_free(b)


def test_heuristics():
    assert manhattan((0, 0), (2, 3)) == 5
    assert manhattan((5, 5), (2, 1)) == 7
    assert signed_distance((0, 0), (2, 3)) == -5
    assert signed_distance((5, 5), (2, 1)) == 7


def test_unknown_heuristic_is_rejected():
    with pytest.raises(ValueError):
        heuristic_fn("euclidean")
    with pytest.raises(ValueError):
        find_path(make_grid(), heuristic="euclidean")


def test_search_node_ordering_prefers_more_progress():
    low_g = SearchNode(coord=(0, 0), g_score=1, f_score=5)
    high_g = SearchNode(coord=(9, 9), g_score=3, f_score=5)
    lower_f = SearchNode(coord=(9, 9), g_score=0, f_score=4)
    assert sorted([low_g, high_g, lower_f]) == [lower_f, high_g, low_g]


def test_empty_grid_path_is_optimal():
    grid = make_grid(width=10, height=10, start=(0, 0), end=(3, 4))
    path = find_path(grid)
    assert path_length(path) == 7
    assert_valid_path(grid, path)


def test_path_routes_around_obstacle():
    # Wall in column 2 with a gap at the bottom row.
    wall = {(2, y) for y in range(4)}
    grid = make_grid(blocked=wall, start=(0, 0), end=(4, 0))
    path = find_path(grid)
    assert_valid_path(grid, path)
    assert not wall.intersection(path)
    assert path_length(path) == 12


def test_enclosed_start_has_no_path():
    ring = {
        (x, y)
        for x in range(1, 4)
        for y in range(1, 4)
        if (x, y) != (2, 2)
    }
    grid = make_grid(blocked=ring, start=(2, 2), end=(4, 4))
    assert find_path(grid) == []


def test_trivial_path():
    grid = make_grid(start=(2, 3), end=(2, 3))
    assert find_path(grid) == [(2, 3)]


def test_trivial_path_outside_bounds():
    grid = make_grid(start=(-3, 7), end=(-3, 7))
    assert find_path(grid) == [(-3, 7)]


@pytest.mark.parametrize(
    "start, end",
    [((-1, 0), (3, 3)), ((5, 2), (0, 0)), ((0, 0), (5, 0)), ((0, 0), (0, -1))],
)
def test_out_of_bounds_endpoint_has_no_path(start, end):
    assert find_path(make_grid(start=start, end=end)) == []


def test_blocked_end_has_no_path():
    grid = make_grid(blocked={(4, 4)}, start=(0, 0), end=(4, 4))
    assert find_path(grid) == []


def test_search_is_deterministic():
    blocked = {(1, 1), (2, 1), (3, 1), (1, 3), (2, 3), (3, 3)}
    grid = make_grid(width=6, height=6, blocked=blocked, start=(0, 0), end=(5, 5))
    first = find_path(grid)
    assert first == find_path(grid)
    assert_valid_path(grid, first)


def test_signed_heuristic_gives_valid_deterministic_path():
    wall = {(3, y) for y in range(6)}
    grid = make_grid(width=8, height=8, blocked=wall, start=(0, 0), end=(7, 0))
    path = find_path(grid, heuristic="signed")
    assert_valid_path(grid, path)
    assert path == find_path(grid, heuristic="signed")
    assert path_length(path) >= path_length(find_path(grid))


# Cell (2, 1) is first queued from (2, 2) with g=5 after a detour down
# column 0, then relaxed from (2, 0) with g=3.
RELAXED_WALLS = {(1, 1), (3, 2), (2, 3)}


def test_relaxed_cell_keeps_shorter_predecessor():
    grid = make_grid(width=5, height=4, blocked=RELAXED_WALLS, start=(0, 0), end=(4, 3))
    path = find_path(grid)
    assert path == [(0, 0), (1, 0), (2, 0), (2, 1), (3, 1), (4, 1), (4, 2), (4, 3)]


def test_superseded_entries_are_drained_without_path():
    blocked = RELAXED_WALLS | {(4, 2)}
    grid = make_grid(width=5, height=4, blocked=blocked, start=(0, 0), end=(4, 3))
    assert find_path(grid) == []


def test_plan_scene_rasterizes_then_searches():
    scene = Scene(
        origin=(100.0, 50.0),
        size=(6.0, 3.0),
        start=(100.2, 50.1),
        end=(105.4, 50.3),
        obstacles=(RectObstacle(102.5, 50.0, 1.0, 2.0),),
    )
    grid, path = plan_scene(scene)
    assert grid.blocked == {(2, 0), (3, 0), (2, 1), (3, 1)}
    assert_valid_path(grid, path)
    assert path_length(path) == 9


def test_path_length_of_empty_path():
    assert path_length([]) == 0
    assert path_length([(1, 1)]) == 0


def test_cell_to_point():
    assert cell_to_point((2, 3), (10.0, 20.0)) == (12.0, 23.0)


def test_save_waypoints(tmp_path):
    fname = tmp_path / "route.txt"
    save_waypoints([(0, 0), (1, 0), (1, 1)], (10.0, 2.5), str(fname))
    assert fname.read_text().splitlines() == ["10.00,2.50", "11.00,2.50", "11.00,3.50"]
