import pytest

from conftest import replay
from slider.domains.errors import SizeTooSmall
from slider.domains.grid import Grid
from slider.domains.scramble import scramble
from slider.patterns.catalog import PatternCatalog, PatternMatch, legal_sequence
from slider.patterns.hash_table import PatternHashTable, local_mask, required_mask
from slider.patterns.relative import (
    DOWN, LEFT, RIGHT, RelativeMove, RelativePatternCatalog, RelativePatternMatcher, Transform,
)


# ---------- absolute catalog ----------

def test_absolute_catalog_contents():
    assert len(PatternCatalog(3).patterns()) == 4
    assert len(PatternCatalog(4).patterns()) == 6
    assert len(PatternCatalog(5).patterns()) == 4
    for p in PatternCatalog(4).patterns():
        assert p.cost == len(p.moves)
    with pytest.raises(SizeTooSmall):
        PatternCatalog(2)


def test_absolute_match_requires_anchor():
    g = Grid(4)
    matches = PatternCatalog(4).match_at(g)
    assert matches == [PatternMatch("bottom_right_corner_cw", ((3, 2), (2, 2), (2, 3)), 3)]
    g.apply_move((3, 2))
    assert PatternCatalog(4).match_at(g) == []


def test_absolute_top_left_matches():
    g = Grid.from_rows([[0, 1, 2, 3], [4, 5, 6, 7], [8, 9, 10, 11], [12, 13, 14, 15]])
    names = {m.name for m in PatternCatalog(4).match_at(g)}
    assert names == {"top_left_corner_cw", "top_row_shift_right", "left_col_shift_down"}


def test_legal_sequence():
    g = Grid(3)
    assert legal_sequence(g, [(2, 1), (1, 1)]) == ((2, 1), (1, 1))
    assert legal_sequence(g, [(2, 1), (2, 2)]) == ((2, 1), (2, 2))
    assert legal_sequence(g, [(1, 1)]) is None
    assert legal_sequence(g, [(2, 3)]) is None


# ---------- relative patterns ----------

def test_relative_move_apply():
    assert RelativeMove(1, 0).apply((0, 0), 4) == (1, 0)
    assert RelativeMove(1, 0).apply((3, 0), 4) is None
    assert RelativeMove(0, -1).apply((0, 0), 4) is None


def test_rotations():
    assert RIGHT.rotate_cw() == DOWN
    assert DOWN.rotate_cw() == LEFT
    m = RelativeMove(1, 2)
    assert m.rotate_cw().rotate_cw().rotate_cw().rotate_cw() == m
    assert Transform.ROTATE_90.apply(RIGHT) == DOWN
    assert Transform.ROTATE_180.apply(RIGHT) == LEFT
    assert Transform.IDENTITY.apply(m) == m


def test_all_transforms_are_distinct():
    m = RelativeMove(1, 2)
    assert len(Transform.all()) == 8
    assert len({t.apply(m) for t in Transform.all()}) == 8


def test_mirrors():
    m = RelativeMove(1, 2)
    assert Transform.MIRROR_H.apply(m) == RelativeMove(1, -2)
    assert Transform.MIRROR_V.apply(m) == RelativeMove(-1, 2)
    assert Transform.MIRROR_D1.apply(m) == RelativeMove(2, 1)
    assert Transform.MIRROR_D2.apply(m) == RelativeMove(-2, -1)


def test_relative_catalog():
    names = [p.name for p in RelativePatternCatalog().patterns()]
    assert names == ["corner_rotation_cw", "linear_shift"]


def test_corner_rotation_matches_bottom_right():
    corner, _ = RelativePatternCatalog().patterns()
    g = Grid(4)
    assert corner.match_at(g) == ((3, 2), (2, 2), (2, 3))
    assert corner.match_at(g, (3, 3)) == ((3, 2), (2, 2), (2, 3))


def test_linear_shift_needs_room():
    _, linear = RelativePatternCatalog().patterns()
    assert linear.match_at(Grid(3)) is None
    assert linear.match_at(Grid(4)) == ((3, 2), (3, 1), (3, 0), (2, 0))


def test_relative_matcher_at_solved_corner():
    matches = RelativePatternMatcher().match_at(Grid(4))
    assert len(matches) == 4
    assert {m.moves for m in matches} == {
        ((3, 2), (2, 2), (2, 3)),
        ((2, 3), (2, 2), (3, 2)),
        ((3, 2), (3, 1), (3, 0), (2, 0)),
        ((2, 3), (1, 3), (0, 3), (0, 2)),
    }


def test_interior_empty_matches_every_corner_rotation():
    g = Grid(5)
    for pos in [(4, 3), (3, 3), (2, 3), (2, 2)]:
        g.apply_move(pos)
    corner, _ = RelativePatternCatalog().patterns()
    assert len(corner.matches_at(g)) == 8


# ---------- hash table ----------

def test_local_mask():
    # empty at (2, 2): tiles up, left, up-left
    assert local_mask(Grid(3), (2, 2)) == 0b00010101


def test_required_mask():
    assert required_mask((RIGHT, DOWN)) == 1 << 3
    assert required_mask((RelativeMove(2, 0),)) is None
    assert required_mask(()) is None


def test_hash_table_buckets():
    table = PatternHashTable.from_patterns()
    assert sum(len(v) for v in table.lookup.values()) == 16
    assert set(table.lookup) <= {1 << b for b in range(4)}


def test_hash_table_matches_at_solved_corner():
    matches = PatternHashTable.from_patterns().match_at(Grid(4))
    assert {m.moves for m in matches} == {m.moves for m in RelativePatternMatcher().match_at(Grid(4))}


@pytest.mark.parametrize("size", [3, 4, 5])
def test_hash_table_agrees_with_relative_matcher(size):
    table = PatternHashTable.from_patterns()
    matcher = RelativePatternMatcher()
    for seed in range(15):
        g = scramble(size, 25, seed=seed)
        fast = {(m.name, m.moves) for m in table.match_at(g)}
        slow = {(m.name, m.moves) for m in matcher.match_at(g)}
        assert fast == slow


@pytest.mark.parametrize("matcher", [
    PatternCatalog(4), RelativePatternMatcher(), PatternHashTable.from_patterns(),
])
def test_every_match_is_legal(matcher):
    for seed in range(20):
        g = scramble(4, 30, seed=seed)
        for m in matcher.match_at(g):
            assert m.cost == len(m.moves)
            replay(g, m.moves)
