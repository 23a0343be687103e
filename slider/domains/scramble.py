from __future__ import annotations
import random
from typing import Optional

from slider.domains.grid import Grid
from slider.domains.moves import MoveTopology


def scramble(size: int, depth: int, seed: Optional[int] = None) -> Grid:
    """Random walk of `depth` legal moves from the solved grid, never undoing the previous move.

    Only reversible single steps are applied, so the result is always solvable.
    """
    rng = random.Random(seed)
    grid = Grid(size)
    topo = MoveTopology(size)
    last_empty = None
    for _ in range(depth):
        z = grid.empty_position()
        cand = topo.immediate_moves(z)
        if last_empty in cand and len(cand) > 1:
            cand.remove(last_empty)
        grid.apply_move(rng.choice(cand))
        last_empty = z
    return grid


def is_solvable(grid: Grid) -> bool:
    """Solvability rules:
       - N odd: inversions must be even
       - N even: (inversions + blank_row_from_bottom) must be ODD
         (row count is 1-based from the bottom)
    """
    arr = [x for x in grid.cells if x != 0]
    inv = 0
    for i in range(len(arr)):
        for j in range(i + 1, len(arr)):
            if arr[i] > arr[j]:
                inv += 1
    if grid.N % 2 == 1:
        return (inv % 2) == 0
    blank_row_from_bottom = grid.N - grid.empty_position()[0]
    return ((inv + blank_row_from_bottom) % 2) == 1
