"""Built-in currency-exchange fixtures.

Weights are log-scaled exchange costs; ``None`` means no edge. Each scenario
names the source it is meant to be solved from and the tolerance its float
sums need.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .graph import Graph


@dataclass(frozen=True)
class Scenario:
    name: str
    title: str
    labels: Tuple[str, ...]
    matrix: Tuple[Tuple[Optional[float], ...], ...]
    source: int = 0
    tolerance: float = 0.0

    def build(self, graph: Optional[Graph] = None) -> Graph:
        """Fill ``graph`` (cleared first) or a new graph with this fixture."""
        g = graph if graph is not None else Graph()
        g.clear()
        for label in self.labels:
            g.add_vertex(label)
        for i, row in enumerate(self.matrix):
            for j, w in enumerate(row):
                if w is not None:
                    g.set_edge(i, j, w)
        return g


def _scenario(name: str, title: str, labels: Sequence[str], rows: Sequence[Sequence[Optional[float]]],
              source: int = 0, tolerance: float = 0.0) -> Scenario:
    return Scenario(name, title, tuple(labels), tuple(tuple(r) for r in rows), source, tolerance)


_ = None

SCENARIOS: List[Scenario] = [
    _scenario(
        "simple",
        "Simple graph without negative cycles",
        ["USD", "CHF", "YEN", "GBP", "CNY"],
        [
            [0.0, 6.0, 7.0, _, _],
            [_, 0.0, 8.0, -4.0, 5.0],
            [_, _, 0.0, 9.0, -3.0],
            [_, _, _, 0.0, 7.0],
            [_, -2.0, _, _, 0.0],
        ],
    ),
    _scenario(
        "sedgewick",
        "Sedgewick graph without negative cycles",
        ["USD", "CHF", "YEN", "GBP", "CNY", "EUR"],
        [
            [0.0, 0.41, _, _, _, 0.29],
            [_, 0.0, 0.51, _, 0.32, _],
            [_, _, 0.0, 0.50, _, _],
            [0.45, _, _, 0.0, _, -0.38],
            [_, _, 0.32, 0.36, 0.0, _],
            [_, -0.29, _, _, 0.21, 0.0],
        ],
        source=4,
    ),
    _scenario(
        "negative-cycle",
        "Graph with negative cycle YEN -> CNY -> GBP -> YEN",
        ["USD", "CHF", "YEN", "GBP", "CNY", "EUR", "XXX", "YYY"],
        [
            [0.0, 1.0, _, _, _, _, _, _],
            [_, 0.0, 1.0, _, _, 4.0, 4.0, _],
            [_, _, 0.0, _, 1.0, _, _, _],
            [_, _, 1.0, 0.0, _, _, _, _],
            [_, _, _, -3.0, 0.0, _, _, _],
            [_, _, _, _, _, 0.0, 5.0, 3.0],
            [_, _, _, _, _, _, 0.0, 4.0],
            [_, _, _, _, _, _, _, 0.0],
        ],
    ),
    _scenario(
        "arbitrage",
        "Arbitrage on a full five-currency table",
        ["USD", "CHF", "YEN", "GBP", "CNY"],
        [
            [0.0, 0.489, -0.402, -4.791, -0.378],
            [-0.489, 0.0, -0.891, -5.278, -0.865],
            [0.402, 0.89, 0.0, -4.391, 0.027],
            [4.791, 5.285, 4.392, 0.0, 4.418],
            [0.378, 0.865, -0.027, -4.415, 0.0],
        ],
    ),
    _scenario(
        "arbitrage-small",
        "Arbitrage on three currencies",
        ["USD", "CHF", "YEN"],
        [
            [0.0, 0.489, -0.402],
            [-0.489, 0.0, -0.891],
            [0.402, 0.89, 0.0],
        ],
    ),
    _scenario(
        "no-arbitrage-small",
        "Three currencies, every round trip loses",
        ["USD", "CHF", "YEN"],
        [
            [0.0, 0.490, -0.402],
            [-0.489, 0.0, -0.891],
            [0.403, 0.891, 0.0],
        ],
        tolerance=1e-9,
    ),
    _scenario(
        "no-arbitrage-large",
        "Five currencies without arbitrage",
        ["USD", "CHF", "YEN", "GBP", "CNY"],
        [
            [0.0, 0.490, -0.402, 0.7, 0.413],
            [-0.489, 0.0, -0.891, 0.89, 0.360],
            [0.403, 0.891, 0.0, 0.91, 0.581],
            [0.340, 0.405, 0.607, 0.0, 0.72],
            [0.403, 0.350, 0.571, 0.71, 0.0],
        ],
        tolerance=1e-9,
    ),
    _scenario(
        "market-arbitrage",
        "Market quotes with a USD/YEN round trip gain",
        ["USD", "CHF", "YEN"],
        [
            [0.0, 0.1, -5.01],
            [-0.09, 0.0, -5.1],
            [5.0, 5.09, 0.0],
        ],
    ),
    _scenario(
        "market-no-arbitrage",
        "Market quotes without arbitrage",
        ["USD", "CHF", "YEN"],
        [
            [0.0, 0.12, -5.01],
            [-0.09, 0.0, -5.1],
            [5.02, 5.11, 0.0],
        ],
    ),
]

_BY_NAME: Dict[str, Scenario] = {s.name: s for s in SCENARIOS}


def get_scenario(name: str) -> Scenario:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"unknown scenario {name!r}; known: {', '.join(_BY_NAME)}") from None


def scenario_names() -> List[str]:
    return [s.name for s in SCENARIOS]
