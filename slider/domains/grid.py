from __future__ import annotations
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from slider.domains.errors import InvalidLayout, check_size
from slider.domains.moves import MAX_SIZE, MIN_SIZE, MoveTopology, Position

State = Tuple[int, ...]  # row-major cell contents, 0 is the empty cell

_MASK64 = (1 << 64) - 1


class Tile(NamedTuple):
    value: int
    home: Position


class Grid:
    """
    N×N sliding-tile board (0 marks the empty cell).

    Tile ``t`` lives at ``divmod(t - 1, N)`` when solved; the empty cell starts in the
    bottom-right corner. Cells are a flat row-major list; ``copy()`` is a single list copy.
    """
    def __init__(self, size: int):
        check_size(size, MIN_SIZE, MAX_SIZE)
        self.N = size
        self._cells: List[int] = list(range(1, size * size)) + [0]
        self._empty: Position = (size - 1, size - 1)

    @classmethod
    def new(cls, size: int) -> "Grid":
        return cls(size)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build an arbitrary layout. It may be unsolvable; see slider.domains.scramble.is_solvable."""
        n = len(rows)
        if any(len(row) != n for row in rows):
            raise InvalidLayout("rows do not form a square")
        grid = cls(n)
        flat = [int(v) for row in rows for v in row]
        if sorted(flat) != list(range(n * n)):
            raise InvalidLayout(f"cells must be a permutation of 0..{n * n - 1}")
        grid._cells = flat
        grid._empty = divmod(flat.index(0), n)
        return grid

    # ---------- read-only views ----------
    @property
    def size(self) -> int:
        return self.N

    @property
    def cells(self) -> State:
        return tuple(self._cells)

    def empty_position(self) -> Position:
        return self._empty

    def tile_at(self, pos: Position) -> Optional[Tile]:
        r, c = pos
        if not (0 <= r < self.N and 0 <= c < self.N):
            return None
        t = self._cells[r * self.N + c]
        if t == 0:
            return None
        return Tile(t, divmod(t - 1, self.N))

    def tiles(self) -> Iterator[Tuple[Position, Tile]]:
        """Row-major (position, tile) pairs; the empty cell is skipped."""
        n = self.N
        for idx, t in enumerate(self._cells):
            if t == 0:
                continue
            yield divmod(idx, n), Tile(t, divmod(t - 1, n))

    def find_tile_position(self, home: Position) -> Optional[Position]:
        r, c = home
        if not (0 <= r < self.N and 0 <= c < self.N):
            return None
        value = r * self.N + c + 1
        if value >= self.N * self.N:
            return None
        return divmod(self._cells.index(value), self.N)

    def is_solved(self) -> bool:
        for idx, t in enumerate(self._cells):
            if t != 0 and t != idx + 1:
                return False
        return True

    def fingerprint(self) -> int:
        """
        64-bit hash of the cell sequence, used for dedup only.
        Distinct boards can collide; this is probabilistic, not proof-backed, uniqueness.
        """
        return hash(tuple(self._cells)) & _MASK64

    # ---------- mutation ----------
    def apply_move(self, pos: Position) -> bool:
        """Slide the tile at pos into the empty cell. False (state untouched) unless adjacent."""
        if not MoveTopology.is_adjacent(pos, self._empty):
            return False
        r, c = pos
        if not (0 <= r < self.N and 0 <= c < self.N):
            return False
        er, ec = self._empty
        i, z = r * self.N + c, er * self.N + ec
        self._cells[z], self._cells[i] = self._cells[i], 0
        self._empty = pos
        return True

    def apply_chain_move(self, target: Position) -> bool:
        moves = MoveTopology(self.N).resolve_chain(target, self._empty)
        if moves is None:
            return False
        for pos in moves:
            if not self.apply_move(pos):
                return False
        return True

    def copy(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone.N = self.N
        clone._cells = self._cells[:]
        clone._empty = self._empty
        return clone

    # ---------- dunder ----------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.N == other.N and self._cells == other._cells

    # mutable: dedup goes through fingerprint(), not hash()
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self.N}, {self.cells})"

    def __str__(self) -> str:
        width = len(str(self.N * self.N - 1))
        lines = []
        for r in range(self.N):
            row = self._cells[r * self.N:(r + 1) * self.N]
            lines.append(" ".join(str(t).rjust(width) if t else ".".rjust(width) for t in row))
        return "\n".join(lines)
