from __future__ import annotations
from typing import Sequence

from slider.domains.grid import Grid
from slider.heuristics.manhattan import manhattan_cells


def count_linear_conflicts(cells: Sequence[int], n: int) -> int:
    """
    Pairs of tiles that sit in their goal row (or column) in reversed goal order.
    Each pair counts once; the caller charges 2 moves per pair.
    """
    conflicts = 0
    # Row conflicts
    for r in range(n):
        row = cells[r * n:(r + 1) * n]
        goals = [(t - 1) % n for t in row if t != 0 and (t - 1) // n == r]
        for i in range(len(goals)):
            for j in range(i + 1, len(goals)):
                if goals[i] > goals[j]:
                    conflicts += 1
    # Column conflicts
    for c in range(n):
        col = [cells[c + r * n] for r in range(n)]
        goals = [(t - 1) // n for t in col if t != 0 and (t - 1) % n == c]
        for i in range(len(goals)):
            for j in range(i + 1, len(goals)):
                if goals[i] > goals[j]:
                    conflicts += 1
    return conflicts


def linear_conflict_cells(cells: Sequence[int], n: int) -> int:
    return manhattan_cells(cells, n) + 2 * count_linear_conflicts(cells, n)


def linear_conflict(grid: Grid) -> int:
    """Manhattan + 2 per pair of linearly-conflicting tiles (rows & cols)."""
    return linear_conflict_cells(grid.cells, grid.N)
