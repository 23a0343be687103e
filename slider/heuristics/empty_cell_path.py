from __future__ import annotations
from typing import List, Tuple

from slider.domains.grid import Grid
from slider.domains.moves import Position

WORST_TILES = 5


def _dist(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def empty_cell_cost(grid: Grid) -> int:
    """
    Moves the empty cell needs to reach the WORST_TILES most displaced tiles (either at
    their current cell or their home, whichever is closer), plus half its distance from
    the board centre. Zero when no tile is displaced.
    """
    empty = grid.empty_position()
    displaced: List[Tuple[int, Position, Position]] = []
    for pos, tile in grid.tiles():
        d = _dist(pos, tile.home)
        if d:
            displaced.append((d, pos, tile.home))
    if not displaced:
        return 0

    displaced.sort(key=lambda item: item[0], reverse=True)
    cost = sum(min(_dist(empty, cur), _dist(empty, home))
               for _, cur, home in displaced[:WORST_TILES])
    centre = (grid.N // 2, grid.N // 2)
    return cost + _dist(empty, centre) // 2


def empty_cell_path(grid: Grid) -> int:
    """Manhattan distance plus empty_cell_cost. Not admissible; a secondary signal."""
    total = 0
    for pos, tile in grid.tiles():
        total += _dist(pos, tile.home)
    return total + empty_cell_cost(grid)
