"""
Absolute move patterns: hand-written sequences anchored at literal board cells.

A pattern only applies when the empty cell starts exactly at its anchor. Cheap to match,
narrow in reach; kept as the correctness reference for the relative and hashed matchers.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from slider.domains.grid import Grid
from slider.domains.moves import MoveTopology, Position


@dataclass(frozen=True)
class PatternMatch:
    name: str
    moves: Tuple[Position, ...]
    cost: int


def legal_sequence(grid: Grid, moves: Iterable[Position]) -> Optional[Tuple[Position, ...]]:
    """The moves as a tuple if each one is in bounds and adjacent to the (simulated) empty cell."""
    n = grid.N
    empty = grid.empty_position()
    out = []
    for pos in moves:
        r, c = pos
        if not (0 <= r < n and 0 <= c < n) or not MoveTopology.is_adjacent(pos, empty):
            return None
        out.append(pos)
        empty = pos
    return tuple(out)


@dataclass(frozen=True)
class MovePattern:
    name: str
    start: Position
    moves: Tuple[Position, ...]
    kind: str

    @property
    def cost(self) -> int:
        return len(self.moves)

    def match(self, grid: Grid) -> Optional[PatternMatch]:
        if grid.empty_position() != self.start:
            return None
        moves = legal_sequence(grid, self.moves)
        if moves is None:
            return None
        return PatternMatch(self.name, moves, self.cost)


class PatternCatalog:
    """Corner rotations for every size, plus the 4×4 edge shifts."""
    def __init__(self, size: int):
        MoveTopology(size)  # validates size
        self.N = size
        self._patterns: List[MovePattern] = self._corner_rotations(size)
        if size == 4:
            self._patterns.extend(self._edge_shifts_4x4())

    def patterns(self) -> List[MovePattern]:
        return list(self._patterns)

    def match_at(self, grid: Grid) -> List[PatternMatch]:
        out: List[PatternMatch] = []
        for p in self._patterns:
            m = p.match(grid)
            if m is not None:
                out.append(m)
        return out

    @staticmethod
    def _corner_rotations(n: int) -> List[MovePattern]:
        last = n - 1
        return [
            # E 1     1 4
            # 3 4  -> E 3   (right, down, left)
            MovePattern("top_left_corner_cw", (0, 0),
                        ((0, 1), (1, 1), (1, 0)), "corner_rotation"),
            MovePattern("top_right_corner_cw", (0, last),
                        ((1, last), (1, last - 1), (0, last - 1)), "corner_rotation"),
            MovePattern("bottom_right_corner_cw", (last, last),
                        ((last, last - 1), (last - 1, last - 1), (last - 1, last)), "corner_rotation"),
            MovePattern("bottom_left_corner_cw", (last, 0),
                        ((last - 1, 0), (last - 1, 1), (last, 1)), "corner_rotation"),
        ]

    @staticmethod
    def _edge_shifts_4x4() -> List[MovePattern]:
        return [
            MovePattern("top_row_shift_right", (0, 0), ((0, 1), (0, 2)), "edge_shift"),
            MovePattern("left_col_shift_down", (0, 0), ((1, 0), (2, 0)), "edge_shift"),
        ]
