import threading

import pytest

from conftest import replay
from slider.domains.grid import Grid
from slider.domains.scramble import scramble
from slider.heuristics.linear_conflict import linear_conflict
from slider.heuristics.manhattan import manhattan
from slider.search.ida_star import ida_star

UNSOLVABLE_3 = [[2, 1, 3], [4, 5, 6], [7, 8, 0]]


def test_solved_start(solved4):
    r = ida_star(solved4, manhattan)
    assert r["termination"] == "ok"
    assert r["path"] == []
    assert r["g"] == 0
    assert r["iterations"] == 1
    assert r["algorithm"] == "IDA*"


def test_one_move(solved4):
    solved4.apply_move((2, 3))
    r = ida_star(solved4, manhattan)
    assert r["path"] == [(3, 3)]


def test_five_move_board():
    g = Grid.from_rows([[1, 3, 6], [4, 2, 0], [7, 5, 8]])
    r = ida_star(g, manhattan)
    assert r["g"] == 5
    assert r["bound_final"] == 5
    assert replay(g, r["path"]).is_solved()


@pytest.mark.parametrize("seed", range(10))
def test_paths_are_optimal_and_legal(seed):
    g = scramble(4, 24, seed=seed)
    r = ida_star(g, linear_conflict)
    assert r["termination"] == "ok"
    assert r["g"] == len(r["path"])
    assert r["g"] <= 24
    assert r["peak_recursion"] >= r["g"]
    assert r["bound_final"] == r["g"]
    assert replay(g, r["path"]).is_solved()


def test_start_is_not_mutated():
    g = scramble(4, 20, seed=5)
    before = g.cells
    ida_star(g, manhattan)
    assert g.cells == before


def test_unsolvable_runs_into_budget():
    r = ida_star(Grid.from_rows(UNSOLVABLE_3), manhattan, max_iterations=5000)
    assert r["termination"] == "budget"
    assert r["path"] is None and r["g"] is None
    assert r["nodes"] == 5001


def test_cancel_flag():
    flag = threading.Event()
    flag.set()
    r = ida_star(Grid.from_rows(UNSOLVABLE_3), manhattan, cancel=flag)
    assert r["termination"] == "cancelled"
    assert r["nodes"] == 1000


def test_timeout():
    r = ida_star(Grid.from_rows(UNSOLVABLE_3), manhattan, timeout_sec=0.0)
    assert r["termination"] == "timeout"
    assert r["nodes"] == 1000


def test_without_path():
    g = scramble(3, 16, seed=4)
    r = ida_star(g, manhattan, return_path=False)
    assert r["path"] is None
    assert r["g"] == ida_star(g, manhattan)["g"]


def test_deep_descent_does_not_hit_recursion_limit():
    start = Grid.from_rows(UNSOLVABLE_3)

    def jumpy(g):
        # a single huge estimate at the root opens a bound far past the interpreter stack
        return 3000 if g.cells == start.cells else 0

    r = ida_star(start, jumpy, max_iterations=20_000)
    assert r["termination"] == "budget"
    assert r["peak_recursion"] >= 3000
    assert r["path"] is None
