from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from slider.heuristics.registry import canonical_name, is_admissible

DEFAULT_MAX_ITERATIONS = 1_000_000
CANCEL_CHECK_INTERVAL = 1_000

ALGORITHMS = ("a", "ida")
PATTERN_VARIANTS = ("none", "absolute", "relative", "hash")
TIE_BREAKS = ("g", "h", "fifo", "lifo")


@dataclass
class SolverConfig:
    """
    Caller-facing knobs for one solve.

    ``allow_inadmissible`` must be set to pick ``enhanced``, ``walking_distance`` or
    ``empty_cell_path``: those are faster on large boards but may return a longer than
    optimal solution.
    """
    algorithm: str = "a"
    heuristic: str = "linear_conflict"
    patterns: str = "none"
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tie_break: str = "g"
    timeout_sec: Optional[float] = None
    allow_inadmissible: bool = False

    def validate(self) -> "SolverConfig":
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {self.algorithm!r}; choose one of {ALGORITHMS}")
        self.heuristic = canonical_name(self.heuristic)
        if not is_admissible(self.heuristic) and not self.allow_inadmissible:
            raise ValueError(
                f"heuristic {self.heuristic!r} is not admissible and may return non-optimal "
                "solutions; pass allow_inadmissible=True to use it"
            )
        if self.patterns not in PATTERN_VARIANTS:
            raise ValueError(f"unknown pattern variant {self.patterns!r}; choose one of {PATTERN_VARIANTS}")
        if self.patterns != "none" and self.algorithm != "a":
            raise ValueError("pattern acceleration is only available for A*")
        if self.tie_break not in TIE_BREAKS:
            raise ValueError(f"unknown tie_break {self.tie_break!r}; choose one of {TIE_BREAKS}")
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")
        return self

    @property
    def optimal(self) -> bool:
        return is_admissible(self.heuristic)
