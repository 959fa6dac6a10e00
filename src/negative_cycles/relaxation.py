from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Deque, Dict, List, Optional

from .errors import GraphError, VertexIndexError
from .graph import INF, NEG_INF, Graph


NO_PREDECESSOR = -1  # unreached, or the source itself
CYCLE = -2  # reached through a negative cycle

Matrix = List[List[float]]


class Strategy(str, Enum):
    FULL = "full"
    GATED = "gated"
    TWO_PHASE = "two-phase"
    FRONTIER = "frontier"


@dataclass
class SolveState:
    """Distance and predecessor arrays of a single solve.

    A fresh state is built for every (graph, source, strategy) run and is
    never shared between runs.
    """

    source: int
    strategy: Strategy
    dist: List[float] = field(default_factory=list)
    pred: List[int] = field(default_factory=list)
    solved: bool = False
    finished: bool = False
    negative_cycle: bool = False
    diverged: bool = False
    passes: int = 0

    @classmethod
    def fresh(cls, n: int, source: int, strategy: Strategy) -> "SolveState":
        dist = [INF] * n
        dist[source] = 0.0
        return cls(source=source, strategy=strategy, dist=dist, pred=[NO_PREDECESSOR] * n)

    def __len__(self) -> int:
        return len(self.dist)

    def is_cycle_affected(self, v: int) -> bool:
        return self.dist[v] == NEG_INF or self.pred[v] == CYCLE


def _improves(W: Matrix, dist: List[float], frm: int, to: int, tolerance: float) -> bool:
    w = W[frm][to]
    d = dist[frm]
    # INF on either side means there is nothing to relax through
    if w == INF or d == INF:
        return False
    return d + w < dist[to] - tolerance


def _relax(W: Matrix, state: SolveState, frm: int, to: int, tolerance: float) -> bool:
    if not _improves(W, state.dist, frm, to, tolerance):
        return False
    state.dist[to] = state.dist[frm] + W[frm][to]
    state.pred[to] = frm
    return True


def _full_pass(W: Matrix, state: SolveState, tolerance: float,
               gate: Optional[Callable[[int], bool]] = None) -> bool:
    updated = False
    n = len(W)
    for frm in range(n):
        if gate is not None and not gate(frm):
            continue
        for to in range(n):
            if _relax(W, state, frm, to, tolerance):
                updated = True
    return updated


def _any_improves(W: Matrix, dist: List[float], tolerance: float) -> bool:
    n = len(W)
    return any(_improves(W, dist, frm, to, tolerance) for frm in range(n) for to in range(n))


def solve_full(W: Matrix, state: SolveState, tolerance: float = 0.0) -> bool:
    """Up to n-1 passes over every ordered pair, stopping at a fixed point.

    If the last pass still changed something, one extra pass decides whether
    a negative cycle exists. Affected vertices are not marked; a detected
    cycle leaves the state unsolved.

    With a single vertex no pass runs at all, so a negative self-loop on it
    goes unreported.
    """
    n = len(W)
    updated = False
    for _ in range(n - 1):
        state.passes += 1
        updated = _full_pass(W, state, tolerance)
        if not updated:
            break

    if updated:
        state.passes += 1
        if _any_improves(W, state.dist, tolerance):
            return True

    state.solved = True
    return False


def solve_gated(W: Matrix, state: SolveState, tolerance: float = 0.0) -> bool:
    """Relax only out of vertices already reached from the source.

    Runs up to n passes and reports a cycle only when the n-th pass made an
    update. This single-shot check is weaker than :func:`solve_full` and is
    kept as is.
    """
    n = len(W)
    source = state.source

    def reached(v: int) -> bool:
        return v == source or state.pred[v] != NO_PREDECESSOR

    for i in range(n):
        state.passes += 1
        updated = _full_pass(W, state, tolerance, gate=reached)
        if not updated:
            break
        if i == n - 1:
            return True

    state.solved = True
    return False


def solve_two_phase(W: Matrix, state: SolveState, tolerance: float = 0.0) -> bool:
    """Relax n-1 times, then n-1 more times marking whatever still improves.

    Marked vertices get ``dist = NEG_INF`` and ``pred = CYCLE``; the -inf
    distance keeps propagating so everything downstream of a negative cycle
    is marked too. The only strategy with per-vertex cycle membership.

    Like :func:`solve_full`, a one-vertex graph gets zero passes in either
    phase, so a negative self-loop there is not reported.
    """
    n = len(W)
    for _ in range(n - 1):
        state.passes += 1
        if not _full_pass(W, state, tolerance):
            break

    marked = False
    for _ in range(n - 1):
        state.passes += 1
        marked_this_pass = False
        for frm in range(n):
            for to in range(n):
                if _improves(W, state.dist, frm, to, tolerance):
                    state.dist[to] = NEG_INF
                    state.pred[to] = CYCLE
                    marked_this_pass = True
        if not marked_this_pass:
            break
        marked = True

    state.solved = True
    return marked


def solve_frontier(W: Matrix, state: SolveState, tolerance: float = 0.0) -> bool:
    """Queue-driven relaxation over the vertices whose distance changed.

    Rounds are kept as two queues (current, next), processed FIFO. A vertex
    sits in the next round at most once, so a round holds at most n entries.
    More than n rounds with work left marks the run as diverged and unsolved;
    the return value is always False because this guard is a heuristic, not
    a cycle proof.
    """
    n = len(W)
    current: Deque[int] = deque([state.source])
    rounds = 0
    while current:
        upcoming: Deque[int] = deque()
        queued = set()
        while current:
            frm = current.popleft()
            for to in range(n):
                if _relax(W, state, frm, to, tolerance) and to not in queued:
                    queued.add(to)
                    upcoming.append(to)
        rounds += 1
        state.passes = rounds
        if upcoming and rounds > n:
            state.diverged = True
            return False
        current = upcoming

    state.solved = True
    return False


_STRATEGIES: Dict[Strategy, Callable[[Matrix, SolveState, float], bool]] = {
    Strategy.FULL: solve_full,
    Strategy.GATED: solve_gated,
    Strategy.TWO_PHASE: solve_two_phase,
    Strategy.FRONTIER: solve_frontier,
}


def solve(graph: Graph, source: int, strategy: Strategy | str = Strategy.TWO_PHASE,
          tolerance: float = 0.0) -> SolveState:
    """Run one strategy from ``source`` and return its fresh :class:`SolveState`.

    ``state.negative_cycle`` holds the strategy's verdict.
    """
    strategy = Strategy(strategy)
    n = graph.vertex_count
    if not isinstance(source, int) or isinstance(source, bool) or not (0 <= source < n):
        raise VertexIndexError(f"source {source!r} out of range [0, {n})")
    tolerance = float(tolerance)
    if math.isnan(tolerance) or tolerance < 0:
        raise GraphError(f"tolerance must be >= 0, got {tolerance!r}")

    W = graph.matrix()
    state = SolveState.fresh(n, source, strategy)
    state.negative_cycle = _STRATEGIES[strategy](W, state, tolerance)
    state.finished = True
    return state
