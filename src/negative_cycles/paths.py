from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List, Optional, Sequence, Tuple, Union

from .errors import GraphError, InvariantViolation, VertexIndexError
from .graph import INF, Graph
from .relaxation import CYCLE, NO_PREDECESSOR, SolveState


@dataclass(frozen=True)
class Path:
    vertices: Tuple[int, ...]
    cost: float
    kind: ClassVar[str] = "path"


@dataclass(frozen=True)
class CycleAffected:
    destination: int
    kind: ClassVar[str] = "cycle_affected"


@dataclass(frozen=True)
class Unreachable:
    destination: int
    kind: ClassVar[str] = "unreachable"


@dataclass(frozen=True)
class NotSolved:
    kind: ClassVar[str] = "not_solved"


PathResult = Union[Path, CycleAffected, Unreachable, NotSolved]


def _check_vertex(state: SolveState, v: int, what: str) -> None:
    if not isinstance(v, int) or isinstance(v, bool) or not (0 <= v < len(state)):
        raise VertexIndexError(f"{what} {v!r} out of range [0, {len(state)})")


def reconstruct_path(state: Optional[SolveState], source: int, destination: int) -> PathResult:
    """Walk predecessor links back from ``destination`` to ``source``.

    Returns :class:`NotSolved` until the state is solved, :class:`CycleAffected`
    for vertices behind a negative cycle and :class:`Unreachable` when the
    source never reached the destination. A predecessor chain longer than n,
    or one that does not end at the source, raises :class:`InvariantViolation`.
    """
    if state is None:
        return NotSolved()
    _check_vertex(state, source, "source")
    _check_vertex(state, destination, "destination")
    if source != state.source:
        raise GraphError(f"state was solved from {state.source}, not {source}")
    if not state.solved:
        return NotSolved()
    if state.is_cycle_affected(destination):
        return CycleAffected(destination)
    if state.dist[destination] == INF:
        return Unreachable(destination)

    n = len(state)
    walk: List[int] = []
    at = destination
    while at != NO_PREDECESSOR:
        if at == CYCLE:
            return CycleAffected(destination)
        if len(walk) >= n:
            raise InvariantViolation(f"predecessor chain from {destination} does not terminate within {n} steps")
        walk.append(at)
        at = state.pred[at]

    if walk[-1] != source:
        raise InvariantViolation(f"predecessor chain from {destination} ends at {walk[-1]}, not at source {source}")
    walk.reverse()
    return Path(tuple(walk), state.dist[destination])


def path_cost(graph: Graph, vertices: Sequence[int]) -> float:
    total = 0.0
    for u, v in zip(vertices, vertices[1:]):
        w = graph.weight(u, v)
        if w == INF:
            raise GraphError(f"no edge {u}->{v} on path")
        total += w
    return total
