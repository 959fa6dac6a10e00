from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import GraphError, SpecError
from .graph import INF, Graph
from .relaxation import Strategy


@dataclass
class SolvePolicy:
    strategy: Strategy = Strategy.TWO_PHASE
    tolerance: float = 0.0


def rate_to_weight(rate: Optional[float]) -> float:
    """Exchange rate -> additive cost; a profitable loop becomes a negative cycle."""
    if rate is None:
        return INF
    r = float(rate)
    if not (r > 0) or math.isinf(r):
        return INF
    return -math.log(r)


def _parse_policy(data: Dict[str, Any]) -> SolvePolicy:
    if not isinstance(data, dict):
        raise SpecError("policy must be an object")
    try:
        strategy = Strategy(data.get("strategy", Strategy.TWO_PHASE.value))
    except ValueError:
        known = ", ".join(s.value for s in Strategy)
        raise SpecError(f"unknown strategy {data.get('strategy')!r}; expected one of {known}") from None
    try:
        tolerance = float(data.get("tolerance", 0.0))
    except (TypeError, ValueError):
        raise SpecError("policy.tolerance must be a number") from None
    if math.isnan(tolerance) or tolerance < 0:
        raise SpecError("policy.tolerance must be >= 0")
    return SolvePolicy(strategy=strategy, tolerance=tolerance)


def _resolve_vertex(graph: Graph, ref: Any, what: str) -> int:
    if isinstance(ref, bool):
        raise SpecError(f"{what} must be a vertex label or index")
    if isinstance(ref, int):
        if not (0 <= ref < graph.vertex_count):
            raise SpecError(f"{what} index {ref} out of range [0, {graph.vertex_count})")
        return ref
    if isinstance(ref, str):
        try:
            return graph.index_of(ref)
        except GraphError as exc:
            raise SpecError(f"{what}: {exc}") from None
    raise SpecError(f"{what} must be a vertex label or index")


def _square_rows(rows: Any, n: int, key: str) -> List[List[Any]]:
    if not isinstance(rows, list) or len(rows) != n or any(not isinstance(r, list) or len(r) != n for r in rows):
        raise SpecError(f"{key} must be a {n}x{n} list of lists")
    return rows


def _weight(value: Any, where: str) -> float:
    if value is None:
        return INF
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SpecError(f"{where}: weight must be a number or null")
    return float(value)


def parse_graph_spec(data: Dict[str, Any]) -> Tuple[Graph, int, SolvePolicy]:
    """Build ``(graph, source, policy)`` from a decoded JSON spec.

    Exactly one of ``matrix``, ``edges`` or ``rates`` describes the weights.
    """
    if not isinstance(data, dict):
        raise SpecError("spec must be a JSON object")
    vertices = data.get("vertices")
    if not isinstance(vertices, list) or not vertices or not all(isinstance(v, str) for v in vertices):
        raise SpecError("vertices must be a non-empty list of labels")

    given = [k for k in ("matrix", "edges", "rates") if data.get(k) is not None]
    if len(given) != 1:
        raise SpecError("exactly one of 'matrix', 'edges' or 'rates' is required")

    graph = Graph()
    for label in vertices:
        graph.add_vertex(label)
    n = graph.vertex_count

    try:
        if "matrix" in given:
            for i, row in enumerate(_square_rows(data["matrix"], n, "matrix")):
                for j, value in enumerate(row):
                    graph.set_edge(i, j, _weight(value, f"matrix[{i}][{j}]"))
        elif "rates" in given:
            for i, row in enumerate(_square_rows(data["rates"], n, "rates")):
                for j, value in enumerate(row):
                    if i == j:
                        continue
                    graph.set_edge(i, j, rate_to_weight(_weight(value, f"rates[{i}][{j}]")))
        else:
            edges = data["edges"]
            if not isinstance(edges, list):
                raise SpecError("edges must be a list")
            for k, e in enumerate(edges):
                if not isinstance(e, dict):
                    raise SpecError(f"edges[{k}] must be an object with src, dst, weight")
                src = _resolve_vertex(graph, e.get("src"), f"edges[{k}].src")
                dst = _resolve_vertex(graph, e.get("dst"), f"edges[{k}].dst")
                graph.set_edge(src, dst, _weight(e.get("weight"), f"edges[{k}]"))
    except GraphError as exc:
        raise SpecError(str(exc)) from exc

    source = _resolve_vertex(graph, data.get("source", 0), "source")
    policy = _parse_policy(data.get("policy", {}))
    return graph, source, policy


def load_graph_spec(path: str) -> Tuple[Graph, int, SolvePolicy]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise SpecError(f"{path}: invalid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SpecError(f"{path}: not UTF-8 text: {exc}") from exc
    return parse_graph_spec(data)
