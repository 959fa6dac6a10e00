from __future__ import annotations

from typing import Dict, Optional

from .graph import Graph
from .paths import NotSolved, PathResult, reconstruct_path
from .relaxation import SolveState, Strategy, solve


class BellmanFordSolver:
    """Single-source shortest paths with a selectable relaxation strategy.

    - ``solve(graph, source)`` returns whether a negative cycle was found
    - ``reconstruct_path(source, destination)`` answers per destination
    - every ``solve`` call starts from a fresh :class:`SolveState`

    Only the ``two-phase`` strategy localizes cycles per vertex; the others
    leave the state unsolved when they report one.
    """

    def __init__(self, strategy: Strategy | str = Strategy.TWO_PHASE, tolerance: float = 0.0):
        self.strategy = Strategy(strategy)
        self.tolerance = float(tolerance)
        self.state: Optional[SolveState] = None

    def solve(self, graph: Graph, source: int) -> bool:
        self.state = solve(graph, source, self.strategy, self.tolerance)
        return self.state.negative_cycle

    def reconstruct_path(self, source: int, destination: int) -> PathResult:
        if self.state is None:
            return NotSolved()
        return reconstruct_path(self.state, source, destination)

    def paths(self) -> Dict[int, PathResult]:
        """Result for every destination, keyed by vertex index."""
        if self.state is None:
            return {}
        return {to: self.reconstruct_path(self.state.source, to) for to in range(len(self.state))}
