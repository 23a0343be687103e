"""
Tile-agnostic patterns written as empty-cell displacements.

A pattern is stored once and generalised across the board by the 8 symmetries of the
square, so it applies anywhere it fits, in any orientation.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from slider.domains.grid import Grid
from slider.domains.moves import Position
from slider.patterns.catalog import PatternMatch


class RelativeMove(NamedTuple):
    dr: int
    dc: int

    def apply(self, pos: Position, size: int) -> Optional[Position]:
        r, c = pos[0] + self.dr, pos[1] + self.dc
        if 0 <= r < size and 0 <= c < size:
            return (r, c)
        return None

    def rotate_cw(self) -> "RelativeMove":
        # (row, col) -> (col, -row): right becomes down
        return RelativeMove(self.dc, -self.dr)

    def mirror_h(self) -> "RelativeMove":
        return RelativeMove(self.dr, -self.dc)

    def mirror_v(self) -> "RelativeMove":
        return RelativeMove(-self.dr, self.dc)


class Transform(Enum):
    IDENTITY = "identity"
    ROTATE_90 = "rotate_90"
    ROTATE_180 = "rotate_180"
    ROTATE_270 = "rotate_270"
    MIRROR_H = "mirror_h"
    MIRROR_V = "mirror_v"
    MIRROR_D1 = "mirror_d1"  # main diagonal
    MIRROR_D2 = "mirror_d2"  # anti-diagonal

    @classmethod
    def all(cls) -> Tuple["Transform", ...]:
        return tuple(cls)

    def apply(self, mov: RelativeMove) -> RelativeMove:
        if self is Transform.IDENTITY:
            return mov
        if self is Transform.ROTATE_90:
            return mov.rotate_cw()
        if self is Transform.ROTATE_180:
            return mov.rotate_cw().rotate_cw()
        if self is Transform.ROTATE_270:
            return mov.rotate_cw().rotate_cw().rotate_cw()
        if self is Transform.MIRROR_H:
            return mov.mirror_h()
        if self is Transform.MIRROR_V:
            return mov.mirror_v()
        if self is Transform.MIRROR_D1:
            return RelativeMove(mov.dc, mov.dr)
        return RelativeMove(-mov.dc, -mov.dr)

    def apply_all(self, moves: Tuple[RelativeMove, ...]) -> Tuple[RelativeMove, ...]:
        return tuple(self.apply(m) for m in moves)


def resolve_relative(grid: Grid, moves: Tuple[RelativeMove, ...],
                     empty: Optional[Position] = None) -> Optional[Tuple[Position, ...]]:
    """
    Absolute positions for already-transformed relative moves, or None.
    Every step must be a unit step landing in bounds on a tile, i.e. anywhere but the
    simulated empty cell, which then follows the step.
    """
    empty = grid.empty_position() if empty is None else empty
    out = []
    for mov in moves:
        if abs(mov.dr) + abs(mov.dc) != 1:
            return None
        pos = mov.apply(empty, grid.N)
        if pos is None or pos == empty:
            return None
        out.append(pos)
        empty = pos
    return tuple(out)


@dataclass(frozen=True)
class RelativePattern:
    name: str
    moves: Tuple[RelativeMove, ...]
    kind: str

    @property
    def cost(self) -> int:
        return len(self.moves)

    def try_transform(self, grid: Grid, empty: Position,
                      transform: Transform) -> Optional[Tuple[Position, ...]]:
        return resolve_relative(grid, transform.apply_all(self.moves), empty)

    def match_at(self, grid: Grid, empty: Optional[Position] = None) -> Optional[Tuple[Position, ...]]:
        """Absolute moves for the first transform that fits, or None."""
        empty = grid.empty_position() if empty is None else empty
        for transform in Transform.all():
            moves = self.try_transform(grid, empty, transform)
            if moves is not None:
                return moves
        return None

    def matches_at(self, grid: Grid) -> List[Tuple[Transform, Tuple[Position, ...]]]:
        empty = grid.empty_position()
        out = []
        for transform in Transform.all():
            moves = self.try_transform(grid, empty, transform)
            if moves is not None:
                out.append((transform, moves))
        return out


RIGHT = RelativeMove(0, 1)
DOWN = RelativeMove(1, 0)
LEFT = RelativeMove(0, -1)


class RelativePatternCatalog:
    def __init__(self):
        self._patterns = [
            # E A      A C
            # B C  ->  E B
            RelativePattern("corner_rotation_cw", (RIGHT, DOWN, LEFT), "corner_rotation"),
            # E A B C      A B C D
            #       D  ->        E
            RelativePattern("linear_shift", (RIGHT, RIGHT, RIGHT, DOWN), "linear_shift"),
        ]

    def patterns(self) -> List[RelativePattern]:
        return list(self._patterns)


class RelativePatternMatcher:
    """Tries every pattern under every transform at each call: O(patterns × 8)."""
    def __init__(self, patterns: Optional[List[RelativePattern]] = None):
        self.patterns = patterns if patterns is not None else RelativePatternCatalog().patterns()

    def match_at(self, grid: Grid) -> List[PatternMatch]:
        seen = set()
        out: List[PatternMatch] = []
        for p in self.patterns:
            for _, moves in p.matches_at(grid):
                if moves in seen:
                    continue
                seen.add(moves)
                out.append(PatternMatch(p.name, moves, p.cost))
        return out
