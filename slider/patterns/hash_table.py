"""
Pattern matching through a precomputed occupancy-mask table.

Every (pattern, transform) pair is filed under the single neighbour bit its first move
needs. At search time the 8-neighbour occupancy of the empty cell selects the candidate
buckets; each candidate is then validated over its whole sequence, since the mask only
covers the first step.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple

from slider.domains.grid import Grid
from slider.domains.moves import Position
from slider.patterns.catalog import PatternMatch
from slider.patterns.relative import (
    RelativeMove, RelativePattern, RelativePatternCatalog, Transform, resolve_relative,
)

logger = logging.getLogger(__name__)

# (dr, dc) -> bit
NEIGHBOUR_BITS: Dict[Tuple[int, int], int] = {
    (-1, 0): 0,   # up
    (1, 0): 1,    # down
    (0, -1): 2,   # left
    (0, 1): 3,    # right
    (-1, -1): 4,  # up-left
    (-1, 1): 5,   # up-right
    (1, -1): 6,   # down-left
    (1, 1): 7,    # down-right
}

Candidate = Tuple[int, Transform, Tuple[RelativeMove, ...]]


def local_mask(grid: Grid, empty: Position) -> int:
    """Bit set for every one of the 8 neighbours of `empty` that holds a tile."""
    er, ec = empty
    mask = 0
    for (dr, dc), bit in NEIGHBOUR_BITS.items():
        if grid.tile_at((er + dr, ec + dc)) is not None:
            mask |= 1 << bit
    return mask


def required_mask(moves: Tuple[RelativeMove, ...]) -> Optional[int]:
    if not moves:
        return None
    bit = NEIGHBOUR_BITS.get((moves[0].dr, moves[0].dc))
    if bit is None:
        return None
    return 1 << bit


class PatternHashTable:
    def __init__(self, lookup: Dict[int, List[Candidate]], patterns: List[RelativePattern]):
        self.lookup = lookup
        self.patterns = patterns

    @classmethod
    def from_patterns(cls, patterns: Optional[List[RelativePattern]] = None) -> "PatternHashTable":
        patterns = patterns if patterns is not None else RelativePatternCatalog().patterns()
        lookup: Dict[int, List[Candidate]] = {}
        for idx, pattern in enumerate(patterns):
            for transform in Transform.all():
                moves = transform.apply_all(pattern.moves)
                mask = required_mask(moves)
                if mask is None:
                    continue
                lookup.setdefault(mask, []).append((idx, transform, moves))
        logger.debug("pattern hash table: %d patterns, %d candidates in %d buckets",
                     len(patterns), sum(len(v) for v in lookup.values()), len(lookup))
        return cls(lookup, patterns)

    def candidates(self, mask: int) -> List[Candidate]:
        out: List[Candidate] = []
        for required, bucket in self.lookup.items():
            if mask & required == required:
                out.extend(bucket)
        return out

    def match_at(self, grid: Grid) -> List[PatternMatch]:
        empty = grid.empty_position()
        seen = set()
        matches: List[PatternMatch] = []
        for idx, _, rel_moves in self.candidates(local_mask(grid, empty)):
            moves = resolve_relative(grid, rel_moves, empty)
            if moves is None or moves in seen:
                continue
            seen.add(moves)
            pattern = self.patterns[idx]
            matches.append(PatternMatch(pattern.name, moves, pattern.cost))
        return matches
