"""
The closed set of heuristics and their admissibility.

Only admissible estimates keep A* and IDA* optimal. `enhanced`, `walking_distance` and
`empty_cell_path` may overestimate; solvers using them still return valid solutions,
just not provably shortest ones.
"""
from __future__ import annotations
from typing import Callable, Dict

from slider.domains.grid import Grid
from slider.heuristics.empty_cell_path import empty_cell_path
from slider.heuristics.enhanced import enhanced
from slider.heuristics.linear_conflict import linear_conflict
from slider.heuristics.manhattan import manhattan
from slider.heuristics.walking_distance import walking_distance_table

HFun = Callable[[Grid], int]

HEURISTICS = ("manhattan", "linear_conflict", "enhanced", "walking_distance", "empty_cell_path")

ADMISSIBLE: Dict[str, bool] = {
    "manhattan": True,
    "linear_conflict": True,
    "enhanced": False,
    "walking_distance": False,
    "empty_cell_path": False,
}

_ALIASES = {
    "m": "manhattan",
    "linear": "linear_conflict",
    "lc": "linear_conflict",
    "enh": "enhanced",
    "wd": "walking_distance",
    "ecp": "empty_cell_path",
}


def canonical_name(name: str) -> str:
    n = name.lower()
    n = _ALIASES.get(n, n)
    if n not in HEURISTICS:
        raise ValueError(f"unknown heuristic {name!r}; choose one of {', '.join(HEURISTICS)}")
    return n


def is_admissible(name: str) -> bool:
    return ADMISSIBLE[canonical_name(name)]


def choose_hfun(name: str, size: int) -> HFun:
    n = canonical_name(name)
    if n == "manhattan":
        return manhattan
    if n == "linear_conflict":
        return linear_conflict
    if n == "enhanced":
        return enhanced
    if n == "walking_distance":
        # build the table now rather than inside the first search step
        return walking_distance_table(size).estimate
    return empty_cell_path
