from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Set, Tuple
import heapq
import itertools
import logging
from time import perf_counter

from slider.domains.grid import Grid
from slider.domains.moves import MoveTopology, Position
from slider.patterns.catalog import PatternMatch
from slider.search.config import CANCEL_CHECK_INTERVAL, DEFAULT_MAX_ITERATIONS

logger = logging.getLogger(__name__)


class PatternMatcher(Protocol):
    def match_at(self, grid: Grid) -> List[PatternMatch]: ...


class CancelFlag(Protocol):
    def is_set(self) -> bool: ...


@dataclass
class SearchNode:
    grid: Grid
    g: int
    h: int
    parent: Optional[int]          # index into the node list
    moves: Tuple[Position, ...]    # one step, or a whole macro-move
    fp: int

    @property
    def f(self) -> int:
        return self.g + self.h


def reconstruct_path(nodes: List[SearchNode], idx: int) -> List[Position]:
    segments: List[Tuple[Position, ...]] = []
    while nodes[idx].parent is not None:
        segments.append(nodes[idx].moves)
        idx = nodes[idx].parent  # type: ignore[assignment]
    segments.reverse()
    return [pos for seg in segments for pos in seg]


def a_star(
    start: Grid,
    hfun: Callable[[Grid], int],
    patterns: Optional[PatternMatcher] = None,
    tie_break: str = "g",
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    timeout_sec: float | None = None,
    cancel: Optional[CancelFlag] = None,
    return_path: bool = True,
) -> Dict[str, Any]:
    """
    A* over board fingerprints, nodes kept in a flat list and linked by parent index.

    patterns: optional matcher whose macro-moves are added as extra edges (cost = length).
    cancel: anything with is_set() (e.g. threading.Event), polled every 1000 iterations.

    termination is one of:
      "ok"         path found (path == [] for an already solved start)
      "exhausted"  open set emptied: no solution under this move set
      "budget"     more than max_iterations pops: inconclusive
      "timeout"    wall clock exceeded timeout_sec: inconclusive
      "cancelled"  cancel flag was set
    """
    t0 = perf_counter()
    topo = MoveTopology(start.N)

    open_heap: List[Tuple[Tuple[int, int, int], int]] = []
    counter = itertools.count()

    def priority_tuple(f: int, g: int, h: int, ctr: int) -> Tuple[int, int, int]:
        if tie_break == "h":   return (f, h, ctr)
        if tie_break == "g":   return (f, -g, ctr)
        if tie_break == "fifo":return (f, 0,  ctr)
        if tie_break == "lifo":return (f, 0, -ctr)
        return (f, -g, ctr)

    root = start.copy()
    h0 = hfun(root)
    nodes: List[SearchNode] = [SearchNode(root, 0, h0, None, (), root.fingerprint())]
    heapq.heappush(open_heap, (priority_tuple(h0, 0, h0, next(counter)), 0))

    best_g: Dict[int, int] = {nodes[0].fp: 0}
    closed: Set[int] = set()

    expanded = 0
    generated = 0
    duplicates = 0
    iterations = 0
    peak_open = 1
    peak_closed = 0

    def result(termination: str, goal_idx: Optional[int] = None) -> Dict[str, Any]:
        found = goal_idx is not None
        out = {
            "path": reconstruct_path(nodes, goal_idx) if found and return_path else None,
            "g": nodes[goal_idx].g if found else None,
            "expanded": expanded,
            "generated": generated,
            "duplicates": duplicates,
            "peak_open": peak_open,
            "peak_closed": peak_closed,
            "nodes_stored": len(nodes),
            "iterations": iterations,
            "time": perf_counter() - t0,
            "algorithm": "A* (patterns)" if patterns is not None else "A*",
            "tie_break": tie_break,
            "termination": termination,
        }
        logger.info("%s %s: g=%s expanded=%d time=%.3fs", out["algorithm"], termination,
                    out["g"], expanded, out["time"])
        return out

    def push(parent_idx: int, moves: Tuple[Position, ...]) -> None:
        nonlocal generated, duplicates
        parent = nodes[parent_idx]
        child = parent.grid.copy()
        for pos in moves:
            if not child.apply_move(pos):
                return
        generated += 1
        g2 = parent.g + len(moves)
        fp = child.fingerprint()
        if fp in closed:
            duplicates += 1
            return
        prev = best_g.get(fp)
        if prev is not None:
            duplicates += 1
            if g2 >= prev:
                return
        best_g[fp] = g2
        h2 = hfun(child)
        nodes.append(SearchNode(child, g2, h2, parent_idx, moves, fp))
        heapq.heappush(open_heap, (priority_tuple(g2 + h2, g2, h2, next(counter)), len(nodes) - 1))

    while open_heap:
        iterations += 1
        if cancel is not None and iterations % CANCEL_CHECK_INTERVAL == 0 and cancel.is_set():
            return result("cancelled")
        if iterations > max_iterations:
            return result("budget")
        if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
            return result("timeout")

        peak_open = max(peak_open, len(open_heap))
        _, idx = heapq.heappop(open_heap)
        node = nodes[idx]

        if node.grid.is_solved():
            return result("ok", idx)

        if node.fp in closed:
            continue
        closed.add(node.fp)
        expanded += 1
        peak_closed = max(peak_closed, len(closed))
        if expanded % 100_000 == 0:
            logger.debug("A* expanded=%d open=%d f=%d", expanded, len(open_heap), node.f)

        for pos in topo.immediate_moves(node.grid.empty_position()):
            push(idx, (pos,))
        if patterns is not None:
            for m in patterns.match_at(node.grid):
                push(idx, m.moves)

    # Open exhausted without finding goal
    return result("exhausted")
