# tests/test_pathfinding.py
import pytest

from errors import InvalidConfiguration, InvalidSelection
from grid import Grid, NodeKind
from maze import find_route
from pathfinding import PATHFINDING_ALGOS, SearchStatus, create_algorithm

ALL_ALGOS = ["dijkstra", "astar", "bfs", "dfs", "greedy-bfs"]
OPTIMAL_ALGOS = ["dijkstra", "astar", "bfs"]


def _solve(grid, name, diagonal):
    algo = create_algorithm(name)
    algo.begin(grid, diagonal)
    status = algo.run()
    return algo, status, algo.path()


def _cost(path):
    total = 0.0
    for a, b in zip(path, path[1:]):
        dr, dc = abs(a.row - b.row), abs(a.col - b.col)
        total += 2 ** 0.5 if dr and dc else 1.0
    return total


def _wall_column_grid(make_grid):
    # column 3 walled except the bottom row: forces a detour
    walls = [(r, 3) for r in range(6)]
    return make_grid(7, 7, (0, 0), (0, 6), walls=walls)


def test_registry_holds_the_five_algorithms():
    assert sorted(PATHFINDING_ALGOS) == sorted(ALL_ALGOS)


def test_create_algorithm_returns_fresh_instances():
    a, b = create_algorithm("astar"), create_algorithm("astar")
    assert a is not b
    assert a.name == "astar"


def test_unknown_algorithm_is_rejected():
    with pytest.raises(InvalidSelection):
        create_algorithm("bellman-ford")


def test_bfs_on_open_5x5_four_connected(make_grid):
    grid = make_grid(5, 5, (0, 0), (4, 4))
    algo, status, path = _solve(grid, "bfs", diagonal=False)

    assert status is SearchStatus.FOUND
    assert len(path) == 9
    assert algo.visited_count <= 25


def test_bfs_on_open_5x5_with_diagonals(make_grid):
    grid = make_grid(5, 5, (0, 0), (4, 4))
    _, status, path = _solve(grid, "bfs", diagonal=True)

    assert status is SearchStatus.FOUND
    assert [n.pos for n in path] == [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)]


def test_dfs_finds_some_path_on_open_5x5(make_grid):
    grid = make_grid(5, 5, (0, 0), (4, 4))
    _, status, path = _solve(grid, "dfs", diagonal=False)

    assert status is SearchStatus.FOUND
    assert len(path) >= 9


@pytest.mark.parametrize("diagonal", [False, True])
@pytest.mark.parametrize("name", ALL_ALGOS)
def test_paths_are_contiguous_chains_from_start_to_end(make_grid, name, diagonal):
    grid = _wall_column_grid(make_grid)
    _, status, path = _solve(grid, name, diagonal)

    assert status is SearchStatus.FOUND
    assert path[0].pos == grid.start
    assert path[-1].pos == grid.end
    for a, b in zip(path, path[1:]):
        dr, dc = abs(a.row - b.row), abs(a.col - b.col)
        assert max(dr, dc) == 1
        if not diagonal:
            assert dr + dc == 1
        assert not b.is_wall
    assert len({n.pos for n in path}) == len(path)


@pytest.mark.parametrize("name", OPTIMAL_ALGOS)
def test_four_connected_optimal_algorithms_match_bfs_oracle(make_grid, name):
    grid = _wall_column_grid(make_grid)
    shortest = len(find_route(grid))
    assert shortest == 19

    _, _, path = _solve(grid, name, diagonal=False)
    assert len(path) == shortest


def test_dijkstra_cost_is_minimal_with_diagonals(make_grid):
    costs = {}
    for name in ALL_ALGOS:
        grid = _wall_column_grid(make_grid)
        _, _, path = _solve(grid, name, diagonal=True)
        costs[name] = _cost(path)

    assert all(costs["dijkstra"] <= c + 1e-9 for c in costs.values())


@pytest.mark.parametrize("name", ALL_ALGOS)
def test_enclosed_end_exhausts_without_a_path(make_grid, name):
    grid = make_grid(5, 5, (0, 0), (4, 4), walls=[(3, 3), (3, 4), (4, 3)])
    algo, status, path = _solve(grid, name, diagonal=True)

    assert status is SearchStatus.EXHAUSTED
    assert path == []
    assert algo.visited_count < 25


@pytest.mark.parametrize("name", ["dijkstra", "astar", "bfs", "dfs"])
def test_visited_painting_matches_visited_count(make_grid, name):
    grid = make_grid(6, 6, (0, 0), (5, 5), walls=[(2, 2), (3, 3)])
    algo, status, _ = _solve(grid, name, diagonal=False)

    assert status is SearchStatus.FOUND
    painted = sum(1 for n in grid if n.kind is NodeKind.VISITED)
    # both endpoints are finalized but never repainted
    assert painted == algo.visited_count - 2
    assert grid[(0, 0)].kind is NodeKind.START
    assert grid[(5, 5)].kind is NodeKind.END


def test_every_step_finalizes_at_most_one_node(make_grid):
    grid = make_grid(6, 6, (0, 0), (5, 5))
    algo = create_algorithm("dijkstra")
    algo.begin(grid, True)

    before = 0
    while True:
        res = algo.step()
        assert algo.visited_count - before <= 1
        before = algo.visited_count
        if res.status.terminal:
            break


def test_greedy_reports_frontier_cells(make_grid):
    grid = make_grid(5, 5, (0, 0), (4, 4))
    algo = create_algorithm("greedy-bfs")
    algo.begin(grid, False)

    first = algo.step()
    kinds = {n.kind for n in first.changed}
    assert kinds == {NodeKind.FRONTIER}
    assert {n.pos for n in first.changed} == {(1, 0), (0, 1)}

    algo.run()
    assert algo.status is SearchStatus.FOUND


def test_dijkstra_breaks_ties_in_row_major_order(make_grid):
    grid = make_grid(3, 3, (1, 1), (2, 2))
    algo = create_algorithm("dijkstra")
    algo.begin(grid, False)

    assert algo.step().current.pos == (1, 1)
    # four neighbours at distance 1; (0, 1) comes first row-major
    assert algo.step().current.pos == (0, 1)


def test_terminal_status_is_latched(make_grid):
    grid = make_grid(3, 3, (0, 0), (2, 2))
    algo = create_algorithm("bfs")
    algo.begin(grid, True)
    algo.run()

    again = algo.step()
    assert again.status is SearchStatus.FOUND
    assert again.changed == []


def test_step_before_begin_raises():
    with pytest.raises(RuntimeError):
        create_algorithm("astar").step()


def test_begin_requires_both_endpoints():
    grid = Grid(3, 3)
    grid.set_start(0, 0)
    with pytest.raises(InvalidConfiguration):
        create_algorithm("bfs").begin(grid, True)


def test_timing_stats_accumulate_and_reset(make_grid):
    algo = create_algorithm("astar")
    for _ in range(2):
        grid = make_grid(5, 5, (0, 0), (4, 4))
        algo.begin(grid, True)
        algo.run()

    assert algo.call_count == 2
    assert algo.total_runtime >= algo.last_runtime >= 0.0
    algo.reset_stats()
    assert algo.call_count == 0 and algo.total_runtime == 0.0


def test_every_algorithm_has_its_own_display_label():
    labels = [algo.label for algo in PATHFINDING_ALGOS.values()]
    assert all(labels)
    assert len(set(labels)) == len(labels)
    assert create_algorithm("astar").label == "A*"
