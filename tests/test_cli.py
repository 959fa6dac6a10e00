import json
from pathlib import Path

from negative_cycles.cli import main


def _spec(tmp_path: Path, **extra) -> str:
    spec = {
        "vertices": ["USD", "CHF", "YEN", "GBP", "CNY"],
        "matrix": [
            [0.0, 6.0, 7.0, None, None],
            [None, 0.0, 8.0, -4.0, 5.0],
            [None, None, 0.0, 9.0, -3.0],
            [None, None, None, 0.0, 7.0],
            [None, -2.0, None, None, 0.0],
        ],
        **extra,
    }
    p = tmp_path / "spec.json"
    p.write_text(json.dumps(spec))
    return str(p)


def _events(out: str):
    return [json.loads(line) for line in out.splitlines() if line.startswith("{")]


def test_solve_prints_report_and_logs_event(tmp_path: Path, capsys):
    rc = main(["solve", _spec(tmp_path), "--strategy", "full"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Path from 0 to 1 is : 0(USD) 2(YEN) 4(CNY) 1(CHF)" in out
    (event,) = _events(out)
    assert event["event"] == "solve"
    assert event["strategy"] == "full"
    assert event["negative_cycle"] is False


def test_solve_source_override_by_label(tmp_path: Path, capsys):
    rc = main(["solve", _spec(tmp_path, policy={"strategy": "gated"}), "--source", "CNY"])
    out = capsys.readouterr().out
    assert rc == 0
    assert _events(out)[0]["source"] == 4
    assert _events(out)[0]["strategy"] == "gated"
    assert "Path from 4 to 1 is : 4(CNY) 1(CHF)" in out


def test_solve_bad_spec_exits_2(tmp_path: Path, capsys):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps({"vertices": ["A"]}))
    assert main(["solve", str(p)]) == 2
    (event,) = _events(capsys.readouterr().out)
    assert event["event"] == "error"


def test_solve_missing_file_exits_2(tmp_path: Path, capsys):
    assert main(["solve", str(tmp_path / "nope.json")]) == 2


def test_demo_single_scenario(capsys):
    assert main(["demo", "--scenario", "negative-cycle"]) == 0
    out = capsys.readouterr().out
    assert "Graph contains negative cycle." in out
    assert "Path from 0 to 2 is : Infinite number of shortest paths (negative cycle)." in out


def test_demo_all_scenarios_with_frontier(capsys):
    assert main(["demo", "--strategy", "frontier"]) == 0
    out = capsys.readouterr().out
    assert "Relaxation did not settle; results withheld." in out
    assert len([e for e in _events(out) if e["event"] == "demo"]) == 9


def test_scenarios_lists_names(capsys):
    assert main(["scenarios"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].startswith("simple: ")
    assert "sedgewick:" in out


def test_solve_non_utf8_spec_exits_2(tmp_path: Path, capsys):
    p = tmp_path / "latin1.json"
    p.write_bytes(b'{"vertices": ["\xff"]}')
    assert main(["solve", str(p)]) == 2
    (event,) = _events(capsys.readouterr().out)
    assert event["event"] == "error"


def test_solve_non_ascii_digit_source_exits_2(tmp_path: Path, capsys):
    assert main(["solve", _spec(tmp_path), "--source", "²"]) == 2
