from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from .graph import Graph
from .paths import CycleAffected, NotSolved, Path, PathResult, Unreachable
from .solver import BellmanFordSolver


def format_path_result(graph: Graph, source: int, destination: int, result: PathResult) -> str:
    if isinstance(result, NotSolved):
        return "Not solved."
    prefix = f"Path from {source} to {destination} is : "
    if isinstance(result, CycleAffected):
        return prefix + "Infinite number of shortest paths (negative cycle)."
    if isinstance(result, Unreachable):
        return prefix + "Unreachable."
    return prefix + " ".join(f"{v}({graph.label(v)})" for v in result.vertices)


def format_report(graph: Graph, solver: BellmanFordSolver, title: Optional[str] = None) -> List[str]:
    lines: List[str] = []
    if title:
        lines.append(f"/////// {title} [{solver.strategy.value}]")
    state = solver.state
    if state is None:
        return lines + ["Not solved."]
    if state.negative_cycle:
        lines.append("Graph contains negative cycle.")
    if state.diverged:
        lines.append("Relaxation did not settle; results withheld.")
    for to, result in solver.paths().items():
        lines.append(format_path_result(graph, state.source, to, result))
    return lines


def _finite_or_none(x: float) -> Optional[float]:
    return x if math.isfinite(x) else None


def result_to_dict(graph: Graph, destination: int, result: PathResult) -> Dict[str, Any]:
    """JSON-safe description of one destination's result."""
    out: Dict[str, Any] = {"destination": destination, "label": graph.label(destination), "kind": result.kind}
    if isinstance(result, Path):
        out["path"] = list(result.vertices)
        out["labels"] = [graph.label(v) for v in result.vertices]
        out["cost"] = _finite_or_none(result.cost)
    return out


def solve_summary(graph: Graph, solver: BellmanFordSolver) -> Dict[str, Any]:
    state = solver.state
    if state is None:
        return {"solved": False}
    return {
        "strategy": solver.strategy.value,
        "source": state.source,
        "negative_cycle": state.negative_cycle,
        "solved": state.solved,
        "diverged": state.diverged,
        "passes": state.passes,
        "distances": [_finite_or_none(d) for d in state.dist],
        "results": [result_to_dict(graph, to, r) for to, r in solver.paths().items()],
    }
