"""
Walking Distance: per-line lookup tables instead of per-tile distances.

A row signature lists, for every cell of a physical row, the goal row of the tile
sitting there (the empty cell is marked ``N - 1``). The table maps signatures to a move
count; by transposition the same table scores columns, where the signature lists goal
columns down a physical column.

The table is seeded rather than exhaustive. Signatures it never reached score the
sentinel 255, which means "no information", not "unreachable". Because of that sentinel
and the seeded estimates this heuristic is not admissible.
"""
from __future__ import annotations
import logging
from collections import deque
from functools import lru_cache
from typing import Deque, Dict, Sequence, Tuple

from slider.domains.grid import Grid
from slider.domains.moves import MAX_SIZE, MIN_SIZE
from slider.domains.errors import check_size

logger = logging.getLogger(__name__)

Signature = Tuple[int, ...]

SENTINEL = 255
BFS_DEPTH_LIMIT = 30
SEED_DEPTH_LIMIT = 20
SEED_ENQUEUE_LIMIT = 15
SEED_MAX_ITERATIONS = 10_000


class WalkingDistance:
    def __init__(self, size: int):
        check_size(size, MIN_SIZE, MAX_SIZE)
        self.N = size
        self._table: Dict[Signature, int] = {}
        self._build_solved()
        self._build_seeded()
        logger.info("walking distance %dx%d: %d line signatures", size, size, len(self._table))

    # ---------- table construction ----------
    def _swaps(self, sig: Signature):
        for i in range(self.N - 1):
            lst = list(sig)
            lst[i], lst[i + 1] = lst[i + 1], lst[i]
            yield tuple(lst)

    def _build_solved(self) -> None:
        """BFS under adjacent swaps from every solved signature (r, r, ..., r)."""
        for target in range(self.N):
            solved = (target,) * self.N
            if solved in self._table:
                continue
            self._table[solved] = 0
            queue: Deque[Tuple[Signature, int]] = deque([(solved, 0)])
            while queue:
                sig, dist = queue.popleft()
                if dist >= BFS_DEPTH_LIMIT:
                    continue
                for nxt in self._swaps(sig):
                    if nxt not in self._table:
                        self._table[nxt] = dist + 1
                        queue.append((nxt, dist + 1))

    def _build_seeded(self) -> None:
        """Expand from mixed seeds (i, ..., i, j) that pure BFS cannot reach."""
        n = self.N
        queue: Deque[Tuple[Signature, int]] = deque()
        for i in range(n):
            for j in range(n):
                sig = (i,) * (n - 1) + (j,)
                if sig in self._table:
                    continue
                est = sum(1 for v in sig if v != i)
                self._table[sig] = est
                queue.append((sig, est))

        iterations = 0
        while queue:
            sig, dist = queue.popleft()
            iterations += 1
            if iterations > SEED_MAX_ITERATIONS or dist >= SEED_DEPTH_LIMIT:
                continue
            for nxt in self._swaps(sig):
                if nxt not in self._table:
                    self._table[nxt] = dist + 1
                    if dist < SEED_ENQUEUE_LIMIT:
                        queue.append((nxt, dist + 1))
        logger.debug("walking distance seeded expansion: %d iterations", iterations)

    # ---------- lookups ----------
    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, sig: Signature) -> bool:
        return tuple(sig) in self._table

    def lookup(self, sig: Sequence[int]) -> int:
        return self._table.get(tuple(sig), SENTINEL)

    def row_signature(self, cells: Sequence[int], row: int) -> Signature:
        n = self.N
        return tuple(
            (t - 1) // n if t != 0 else n - 1
            for t in cells[row * n:(row + 1) * n]
        )

    def col_signature(self, cells: Sequence[int], col: int) -> Signature:
        n = self.N
        return tuple(
            (cells[r * n + col] - 1) % n if cells[r * n + col] != 0 else n - 1
            for r in range(n)
        )

    def estimate(self, grid: Grid) -> int:
        if grid.N != self.N:
            raise ValueError(f"table built for size {self.N}, got grid of size {grid.N}")
        cells = grid.cells
        total = 0
        for i in range(self.N):
            total += self.lookup(self.row_signature(cells, i))
            total += self.lookup(self.col_signature(cells, i))
        return total

    __call__ = estimate


@lru_cache(maxsize=None)
def walking_distance_table(size: int) -> WalkingDistance:
    """Built once per grid size for the life of the process; read-only afterwards."""
    return WalkingDistance(size)


def walking_distance(grid: Grid) -> int:
    return walking_distance_table(grid.N).estimate(grid)
