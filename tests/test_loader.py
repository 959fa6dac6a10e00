import json
import math
from pathlib import Path

import pytest

from negative_cycles.errors import SpecError
from negative_cycles.graph import INF
from negative_cycles.loader import SolvePolicy, load_graph_spec, parse_graph_spec, rate_to_weight
from negative_cycles.relaxation import Strategy


def test_matrix_spec_with_label_source_and_policy():
    graph, source, policy = parse_graph_spec({
        "vertices": ["USD", "CHF", "YEN"],
        "matrix": [[0, 6.0, 7.0], [None, 0, 8.0], [None, None, 0]],
        "source": "CHF",
        "policy": {"strategy": "frontier", "tolerance": 1e-9},
    })
    assert graph.labels == ["USD", "CHF", "YEN"]
    assert graph.weight(0, 2) == 7.0
    assert graph.weight(1, 0) == INF
    assert source == 1
    assert policy == SolvePolicy(Strategy.FRONTIER, 1e-9)


def test_edge_list_spec_defaults():
    graph, source, policy = parse_graph_spec({
        "vertices": ["A", "B", "C"],
        "edges": [{"src": "A", "dst": "B", "weight": -1}, {"src": 1, "dst": "C", "weight": 2.5}],
    })
    assert sorted(graph.edges()) == [(0, 1, -1.0), (1, 2, 2.5)]
    assert source == 0
    assert policy == SolvePolicy()


def test_rates_become_negative_logs():
    graph, _, _ = parse_graph_spec({
        "vertices": ["USD", "CHF"],
        "rates": [[1.0, 2.0], [None, 1.0]],
    })
    assert graph.weight(0, 1) == pytest.approx(-math.log(2.0))
    assert graph.weight(1, 0) == INF
    assert graph.weight(0, 0) == 0.0


@pytest.mark.parametrize("rate, expected", [(1.0, 0.0), (None, INF), (0.0, INF), (-3.0, INF)])
def test_rate_to_weight(rate, expected):
    assert rate_to_weight(rate) == expected


@pytest.mark.parametrize("spec", [
    [],
    {"vertices": [], "matrix": []},
    {"vertices": ["A"]},
    {"vertices": ["A"], "matrix": [[0]], "edges": []},
    {"vertices": ["A", "B"], "matrix": [[0, 1]]},
    {"vertices": ["A", "B"], "matrix": [[0, "x"], [None, 0]]},
    {"vertices": ["A", "B"], "edges": [{"src": "A", "dst": "Z", "weight": 1}]},
    {"vertices": ["A", "B"], "edges": [{"src": "A", "dst": 5, "weight": 1}]},
    {"vertices": ["A"], "matrix": [[0]], "source": "Z"},
    {"vertices": ["A"], "matrix": [[0]], "policy": {"strategy": "dijkstra"}},
    {"vertices": ["A"], "matrix": [[0]], "policy": {"tolerance": -1}},
])
def test_invalid_specs(spec):
    with pytest.raises(SpecError):
        parse_graph_spec(spec)


def test_load_graph_spec_from_file(tmp_path: Path):
    p = tmp_path / "g.json"
    p.write_text(json.dumps({"vertices": ["A", "B"], "edges": [{"src": "A", "dst": "B", "weight": 3}]}))
    graph, source, policy = load_graph_spec(str(p))
    assert graph.weight(0, 1) == 3.0

    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(SpecError):
        load_graph_spec(str(bad))


def test_non_utf8_spec_file_is_a_spec_error(tmp_path: Path):
    p = tmp_path / "latin1.json"
    p.write_bytes(b'{"vertices": ["\xff"]}')
    with pytest.raises(SpecError):
        load_graph_spec(str(p))
