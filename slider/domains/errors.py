from __future__ import annotations


class PuzzleError(Exception):
    """Base class for grid construction and layout errors."""


class SizeTooSmall(PuzzleError):
    def __init__(self, size: int, min: int):
        self.size = size
        self.min = min
        super().__init__(f"Puzzle size {size} is too small (minimum: {min})")


class SizeTooLarge(PuzzleError):
    def __init__(self, size: int, max: int):
        self.size = size
        self.max = max
        super().__init__(f"Puzzle size {size} is too large (maximum: {max})")


class InvalidLayout(PuzzleError):
    """Raised by Grid.from_rows when the rows are not a square permutation of 0..N²-1."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid puzzle state: {reason}")


def check_size(size: int, min_size: int, max_size: int) -> None:
    if size < min_size:
        raise SizeTooSmall(size, min_size)
    if size > max_size:
        raise SizeTooLarge(size, max_size)
