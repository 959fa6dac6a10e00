from __future__ import annotations


class NegativeCyclesError(Exception):
    """Base class for package errors."""


class GraphError(NegativeCyclesError, ValueError):
    """Caller passed something the graph model cannot accept."""


class VertexIndexError(GraphError, IndexError):
    """Vertex index outside ``[0, n)``."""


class SpecError(NegativeCyclesError, ValueError):
    """Malformed JSON graph spec."""


class InvariantViolation(NegativeCyclesError, RuntimeError):
    """Solve state is internally inconsistent (engine bug, not bad input)."""


__all__ = [
    "NegativeCyclesError",
    "GraphError",
    "VertexIndexError",
    "SpecError",
    "InvariantViolation",
]
