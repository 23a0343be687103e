import pytest

from slider.domains.grid import Grid
from slider.heuristics.walking_distance import (
    SENTINEL, WalkingDistance, walking_distance, walking_distance_table,
)


@pytest.fixture(scope="module")
def wd3():
    return walking_distance_table(3)


def test_table_is_cached_per_size(wd3):
    assert walking_distance_table(3) is wd3
    assert walking_distance_table(4) is not wd3


def test_solved_signatures_score_zero(wd3):
    for r in range(3):
        assert wd3.lookup((r, r, r)) == 0


def test_seeded_signatures(wd3):
    assert wd3.lookup((0, 0, 1)) == 1
    assert wd3.lookup((0, 1, 0)) == 2
    assert wd3.lookup((1, 0, 0)) == 3
    assert len(wd3) > 10


def test_unknown_signature_is_sentinel(wd3):
    assert (0, 1, 2) not in wd3
    assert wd3.lookup((0, 1, 2)) == SENTINEL


def test_signatures_of_solved_grid(wd3):
    cells = Grid(3).cells
    assert [wd3.row_signature(cells, r) for r in range(3)] == [(0, 0, 0), (1, 1, 1), (2, 2, 2)]
    assert [wd3.col_signature(cells, c) for c in range(3)] == [(0, 0, 0), (1, 1, 1), (2, 2, 2)]


def test_one_move(wd3):
    g = Grid(3)
    g.apply_move((2, 1))
    assert wd3.col_signature(g.cells, 1) == (1, 1, 2)
    assert wd3.col_signature(g.cells, 2) == (2, 2, 1)
    assert walking_distance(g) == 2


def test_size_mismatch_is_rejected(wd3):
    with pytest.raises(ValueError):
        wd3.estimate(Grid(4))


@pytest.mark.parametrize("size", [3, 4, 5])
def test_fresh_tables_agree_with_cache(size):
    fresh = WalkingDistance(size)
    assert len(fresh) == len(walking_distance_table(size))
    assert fresh.estimate(Grid(size)) == 0
