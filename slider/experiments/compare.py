"""Side-by-side diagnostics for plain A*, pattern A* and IDA* on one board."""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from slider.domains.grid import Grid
from slider.heuristics.manhattan import manhattan
from slider.search.config import DEFAULT_MAX_ITERATIONS, SolverConfig
from slider.search.solver import solve

SOLVERS = (
    ("A* (plain)", dict(algorithm="a", patterns="none")),
    ("A* (patterns)", dict(algorithm="a", patterns="hash")),
    ("IDA*", dict(algorithm="ida", patterns="none")),
)


def compare_solvers(grid: Grid, heuristic: str = "manhattan",
                    max_iterations: int = DEFAULT_MAX_ITERATIONS,
                    allow_inadmissible: bool = False) -> List[Dict[str, Any]]:
    rows = []
    m = manhattan(grid)
    for name, opts in SOLVERS:
        cfg = SolverConfig(heuristic=heuristic, max_iterations=max_iterations,
                           allow_inadmissible=allow_inadmissible, **opts)
        r = solve(grid, cfg)
        rows.append({
            "solver": name,
            "heuristic": r["heuristic"],
            "size": grid.N,
            "manhattan": m,
            "solution_length": r["g"],
            "time_sec": r["time"],
            "expanded": r["expanded"],
            "generated": r["generated"],
            "termination": r["termination"],
        })
    return rows


def summarize(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Mean/median/min/max of time and expansions per solver, plus solved counts."""
    df = pd.DataFrame(rows)
    df["solved"] = (df["termination"] == "ok").astype(int)
    df["solution_length"] = pd.to_numeric(df["solution_length"])
    out = df.groupby("solver", sort=False).agg(
        runs=("solver", "size"),
        solved=("solved", "sum"),
        mean_length=("solution_length", "mean"),
        mean_time=("time_sec", "mean"),
        median_time=("time_sec", "median"),
        min_time=("time_sec", "min"),
        max_time=("time_sec", "max"),
        mean_expanded=("expanded", "mean"),
        median_expanded=("expanded", "median"),
    )
    return out


def write_csv(rows: List[Dict[str, Any]], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows).to_csv(path, index=False)
    return path
