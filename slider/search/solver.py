"""
Config-driven entry into the two engines.

`solve` returns the engine's result dict plus the configuration used and whether the
answer is guaranteed optimal. `solve_path` collapses that to a path or None; None then
covers "exhausted" (no solution) as well as the inconclusive outcomes ("budget",
"timeout", "cancelled"). Use `solve` when the difference matters.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from slider.domains.grid import Grid
from slider.domains.moves import Position
from slider.heuristics.registry import choose_hfun
from slider.patterns.catalog import PatternCatalog
from slider.patterns.hash_table import PatternHashTable
from slider.patterns.relative import RelativePatternMatcher
from slider.search.a_star import CancelFlag, PatternMatcher, a_star
from slider.search.config import SolverConfig
from slider.search.ida_star import ida_star


def make_matcher(kind: str, size: int) -> Optional[PatternMatcher]:
    if kind == "none":
        return None
    if kind == "absolute":
        return PatternCatalog(size)
    if kind == "relative":
        return RelativePatternMatcher()
    if kind == "hash":
        return PatternHashTable.from_patterns()
    raise ValueError(f"unknown pattern variant {kind!r}")


def solve(grid: Grid, config: Optional[SolverConfig] = None,
          cancel: Optional[CancelFlag] = None) -> Dict[str, Any]:
    cfg = (config or SolverConfig()).validate()
    hfun = choose_hfun(cfg.heuristic, grid.N)
    if cfg.algorithm == "a":
        res = a_star(grid, hfun,
                     patterns=make_matcher(cfg.patterns, grid.N),
                     tie_break=cfg.tie_break,
                     max_iterations=cfg.max_iterations,
                     timeout_sec=cfg.timeout_sec,
                     cancel=cancel)
    else:
        res = ida_star(grid, hfun,
                       max_iterations=cfg.max_iterations,
                       timeout_sec=cfg.timeout_sec,
                       cancel=cancel)
    res["heuristic"] = cfg.heuristic
    res["patterns"] = cfg.patterns
    res["optimal"] = cfg.optimal
    return res


def solve_path(grid: Grid, config: Optional[SolverConfig] = None,
               cancel: Optional[CancelFlag] = None) -> Optional[List[Position]]:
    res = solve(grid, config, cancel)
    return res["path"] if res["termination"] == "ok" else None
