from __future__ import annotations
from typing import Sequence

from slider.domains.grid import Grid


def manhattan_cells(cells: Sequence[int], n: int) -> int:
    """Sum of Manhattan distances to goal positions (blank ignored)."""
    dist = 0
    for idx, tile in enumerate(cells):
        if tile == 0:
            continue
        r, c = divmod(idx, n)
        gr, gc = divmod(tile - 1, n)
        dist += abs(r - gr) + abs(c - gc)
    return dist


def manhattan(grid: Grid) -> int:
    return manhattan_cells(grid.cells, grid.N)
