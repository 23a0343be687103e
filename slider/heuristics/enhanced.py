"""
Enhanced heuristic: linear conflict plus flat penalties for displaced corner tiles and
crowded last row / last column.

NOT admissible. The penalties are empirical and can exceed the true remaining cost, so
a search driven by this estimate returns a valid solution that is not guaranteed to be
the shortest one. It is only selectable with ``allow_inadmissible=True``.
"""
from __future__ import annotations
from typing import Sequence

from slider.domains.grid import Grid
from slider.heuristics.linear_conflict import linear_conflict_cells

CORNER_PENALTY = 3
EDGE_PENALTY = 2


def corner_penalty(cells: Sequence[int], n: int) -> int:
    penalty = 0
    for idx in (0, n - 1, n * (n - 1), n * n - 1):
        t = cells[idx]
        if t != 0 and t - 1 != idx:
            penalty += CORNER_PENALTY
    return penalty


def edge_penalty(cells: Sequence[int], n: int) -> int:
    last_row_wrong = sum(
        1 for c in range(n)
        if cells[(n - 1) * n + c] != 0 and (cells[(n - 1) * n + c] - 1) // n != n - 1
    )
    last_col_wrong = sum(
        1 for r in range(n)
        if cells[r * n + n - 1] != 0 and (cells[r * n + n - 1] - 1) % n != n - 1
    )
    # only charged when more than one tile is wrong
    penalty = 0
    if last_row_wrong > 1:
        penalty += last_row_wrong * EDGE_PENALTY
    if last_col_wrong > 1:
        penalty += last_col_wrong * EDGE_PENALTY
    return penalty


def enhanced(grid: Grid) -> int:
    cells, n = grid.cells, grid.N
    return linear_conflict_cells(cells, n) + corner_penalty(cells, n) + edge_penalty(cells, n)
