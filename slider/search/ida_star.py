from __future__ import annotations
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple
from time import perf_counter
import logging
import math

from slider.domains.grid import Grid
from slider.domains.moves import MoveTopology, Position
from slider.search.a_star import CancelFlag
from slider.search.config import CANCEL_CHECK_INTERVAL, DEFAULT_MAX_ITERATIONS

logger = logging.getLogger(__name__)


def ida_star(
    start: Grid,
    hfun: Callable[[Grid], int],
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    timeout_sec: float | None = None,
    cancel: Optional[CancelFlag] = None,
    return_path: bool = True,
) -> Dict[str, Any]:
    """
    IDA*: depth-first passes under a growing f threshold, O(depth) memory.

    Each pass returns either the goal or the smallest f that exceeded the threshold,
    which becomes the next threshold. Moving the tile that just moved straight back is
    never generated. termination values match a_star(); "exhausted" here means a pass
    found nothing beyond the threshold, so the start state cannot reach the goal.
    """
    t0 = perf_counter()
    topo = MoveTopology(start.N)
    FOUND = object()
    ABORT = object()

    expanded = 0
    generated = 0
    nodes = 0
    max_depth = 0
    passes = 0
    stop_reason = ""
    path: List[Position] = []

    def run_pass(root: Grid, bound: int):
        """
        One bounded depth-first pass over an explicit stack (no Python recursion limit).
        - returns FOUND (path holds the moves), ABORT (budget/timeout/cancel, see stop_reason)
          or the minimal f that exceeded 'bound' (math.inf if none)
        - stack frames: (grid, g, empty cell, iterator over the remaining child moves);
          path[i] is the move that led into stack[i + 1]
        """
        nonlocal expanded, generated, nodes, max_depth, stop_reason
        min_next = math.inf
        stack: List[Tuple[Grid, int, Position, Iterator[Position]]] = []
        pending: Optional[Tuple[Grid, int, Optional[Position]]] = (root, 0, None)

        while True:
            if pending is not None:
                grid, g, prev_empty = pending
                pending = None
                nodes += 1
                if nodes % CANCEL_CHECK_INTERVAL == 0:
                    if cancel is not None and cancel.is_set():
                        stop_reason = "cancelled"
                        return ABORT
                    if timeout_sec is not None and (perf_counter() - t0) > timeout_sec:
                        stop_reason = "timeout"
                        return ABORT
                if nodes > max_iterations:
                    stop_reason = "budget"
                    return ABORT

                max_depth = max(max_depth, len(stack))
                f_here = g + hfun(grid)
                if f_here > bound:
                    min_next = min(min_next, f_here)
                    if stack:
                        path.pop()
                elif grid.is_solved():
                    return FOUND
                else:
                    expanded += 1
                    empty = grid.empty_position()
                    # never slide back the tile that just moved
                    children = [p for p in topo.immediate_moves(empty) if p != prev_empty]
                    stack.append((grid, g, empty, iter(children)))

            if not stack:
                return min_next

            grid, g, empty, it = stack[-1]
            pos = next(it, None)
            if pos is None:
                stack.pop()
                if stack:
                    path.pop()
                continue

            child = grid.copy()
            child.apply_move(pos)
            generated += 1
            path.append(pos)
            pending = (child, g + 1, empty)

    def result(termination: str, found: bool, bound: float) -> Dict[str, Any]:
        out = {
            "path": list(path) if found and return_path else None,
            "g": len(path) if found else None,
            "expanded": expanded,
            "generated": generated,
            "nodes": nodes,
            "peak_recursion": max_depth,
            "bound_final": bound,
            "iterations": passes,
            "time": perf_counter() - t0,
            "algorithm": "IDA*",
            "termination": termination,
        }
        logger.info("IDA* %s: g=%s nodes=%d time=%.3fs", termination, out["g"], nodes, out["time"])
        return out

    root = start.copy()
    bound = hfun(root)

    while True:
        passes += 1
        t = run_pass(root, bound)
        if t is ABORT:
            return result(stop_reason, False, bound)
        if t is FOUND:
            return result("ok", True, bound)
        if t == math.inf:
            return result("exhausted", False, bound)
        logger.debug("IDA* threshold %d -> %d after %d nodes", bound, t, nodes)
        bound = int(t)
