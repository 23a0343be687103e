from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from slider.domains.errors import check_size

Position = Tuple[int, int]

MIN_SIZE = 3
MAX_SIZE = 15


class MoveTopology:
    """
    Legal moves around the empty cell of an N×N board.
    Knows the grid size only; never looks at tile content.
    """
    def __init__(self, size: int):
        check_size(size, MIN_SIZE, MAX_SIZE)
        self.N = size
        # Precompute neighbours of every cell (up, down, left, right)
        self._nei: Dict[Position, Tuple[Position, ...]] = {}
        for r in range(size):
            for c in range(size):
                moves = []
                if r > 0:          moves.append((r - 1, c))
                if r < size - 1:   moves.append((r + 1, c))
                if c > 0:          moves.append((r, c - 1))
                if c < size - 1:   moves.append((r, c + 1))
                self._nei[(r, c)] = tuple(moves)

    def in_bounds(self, pos: Position) -> bool:
        r, c = pos
        return 0 <= r < self.N and 0 <= c < self.N

    def immediate_moves(self, empty_pos: Position) -> List[Position]:
        """Cells that can slide into the empty cell: 2 at a corner, 3 on an edge, 4 inside."""
        return list(self._nei.get(empty_pos, ()))

    def all_legal_moves(self, empty_pos: Position) -> List[Position]:
        """Immediate moves plus every chain destination in the empty cell's row and column."""
        er, ec = empty_pos
        legal = set(self.immediate_moves(empty_pos))
        legal.update((er, c) for c in range(self.N) if c != ec)
        legal.update((r, ec) for r in range(self.N) if r != er)
        return sorted(legal)

    @staticmethod
    def is_adjacent(pos: Position, empty_pos: Position) -> bool:
        r, c = pos
        er, ec = empty_pos
        return (r == er and abs(c - ec) == 1) or (c == ec and abs(r - er) == 1)

    def is_legal_move(self, pos: Position, empty_pos: Position) -> bool:
        if not self.in_bounds(pos) or pos == empty_pos:
            return False
        return pos[0] == empty_pos[0] or pos[1] == empty_pos[1]

    def resolve_chain(self, target: Position, empty_pos: Position) -> Optional[List[Position]]:
        """
        Decompose a line slide into single steps, the cell closest to the empty one first.
        Returns None when target is diagonal to (or equal to, or off) the board.
        """
        if not self.is_legal_move(target, empty_pos):
            return None
        tr, tc = target
        er, ec = empty_pos
        if tr == er:
            step = 1 if tc > ec else -1
            return [(tr, c) for c in range(ec + step, tc + step, step)]
        step = 1 if tr > er else -1
        return [(r, tc) for r in range(er + step, tr + step, step)]
