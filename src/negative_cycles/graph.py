from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import GraphError, VertexIndexError


INF = float("inf")
NEG_INF = float("-inf")


@dataclass(frozen=True)
class Vertex:
    index: int
    label: str


class Graph:
    """Dense directed graph stored as an adjacency matrix.

    - Vertices: dense indices 0..n-1 with a display label (labels may repeat)
    - ``W[i][j]``: weight of edge i->j, or ``INF`` when there is no edge
    - ``W[i][i]`` is 0 unless set explicitly

    Pure storage; relaxation lives in :mod:`negative_cycles.relaxation`.
    """

    def __init__(self) -> None:
        self._labels: List[str] = []
        self._matrix: List[List[float]] = []

    @classmethod
    def from_matrix(cls, labels: Iterable[str], matrix: Sequence[Sequence[Optional[float]]]) -> "Graph":
        labels = list(labels)
        if len(matrix) != len(labels) or any(len(row) != len(labels) for row in matrix):
            raise GraphError(f"matrix must be {len(labels)}x{len(labels)} to match the labels")
        g = cls()
        for label in labels:
            g.add_vertex(label)
        for i, row in enumerate(matrix):
            for j, w in enumerate(row):
                g.set_edge(i, j, INF if w is None else w)
        return g

    def clear(self) -> None:
        self._labels.clear()
        self._matrix.clear()

    def add_vertex(self, label: str) -> int:
        for row in self._matrix:
            row.append(INF)
        self._labels.append(str(label))
        index = len(self._labels) - 1
        row = [INF] * len(self._labels)
        row[index] = 0.0
        self._matrix.append(row)
        return index

    def set_edge(self, i: int, j: int, weight: float) -> None:
        self._check_index(i)
        self._check_index(j)
        w = float(weight)
        if math.isnan(w) or w == NEG_INF:
            raise GraphError(f"edge {i}->{j}: weight must be finite or INF, got {weight!r}")
        self._matrix[i][j] = w

    def remove_edge(self, i: int, j: int) -> None:
        self.set_edge(i, j, INF)

    # accessors

    @property
    def vertex_count(self) -> int:
        return len(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    def label(self, i: int) -> str:
        self._check_index(i)
        return self._labels[i]

    def vertex(self, i: int) -> Vertex:
        return Vertex(i, self.label(i))

    def vertices(self) -> Iterator[Vertex]:
        for i, label in enumerate(self._labels):
            yield Vertex(i, label)

    def index_of(self, label: str) -> int:
        """Index of the first vertex carrying ``label``."""
        try:
            return self._labels.index(label)
        except ValueError:
            raise GraphError(f"no vertex labelled {label!r}") from None

    def weight(self, i: int, j: int) -> float:
        self._check_index(i)
        self._check_index(j)
        return self._matrix[i][j]

    def has_edge(self, i: int, j: int) -> bool:
        return self.weight(i, j) != INF

    def edges(self) -> Iterator[Tuple[int, int, float]]:
        """Yield ``(i, j, w)`` for every edge except the implicit zero self-loops."""
        for i, row in enumerate(self._matrix):
            for j, w in enumerate(row):
                if w == INF or (i == j and w == 0.0):
                    continue
                yield i, j, w

    def matrix(self) -> List[List[float]]:
        return [list(row) for row in self._matrix]

    def _check_index(self, i: int) -> None:
        if not isinstance(i, int) or isinstance(i, bool) or not (0 <= i < len(self._labels)):
            raise VertexIndexError(f"vertex index {i!r} out of range [0, {len(self._labels)})")
