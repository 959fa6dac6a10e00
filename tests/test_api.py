from fastapi.testclient import TestClient

from negative_cycles.api import app


client = TestClient(app)

CYCLE_SPEC = {
    "vertices": ["USD", "CHF", "YEN", "GBP", "CNY"],
    "edges": [
        {"src": "USD", "dst": "CHF", "weight": 1.0},
        {"src": "CHF", "dst": "YEN", "weight": 1.0},
        {"src": "YEN", "dst": "CNY", "weight": 1.0},
        {"src": "CNY", "dst": "GBP", "weight": -3.0},
        {"src": "GBP", "dst": "YEN", "weight": 1.0},
    ],
}


def test_health_and_status_headers():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert "X-Request-Id" in r.headers
    assert client.get("/api/status").json()["version"] == "0.1.0"


def test_solve_spec_with_cycle():
    r = client.post("/api/solve", json=CYCLE_SPEC)
    assert r.status_code == 200
    body = r.json()
    assert body["negative_cycle"] is True
    assert body["strategy"] == "two-phase"
    kinds = [res["kind"] for res in body["results"]]
    assert kinds == ["path", "path", "cycle_affected", "cycle_affected", "cycle_affected"]
    assert body["results"][1]["path"] == [0, 1]
    assert body["distances"][2] is None
    assert client.get("/api/status").json()["last_solve"]["origin"] == "spec"


def test_solve_strategy_query_overrides_policy():
    r = client.post("/api/solve", params={"strategy": "full"}, json=CYCLE_SPEC)
    body = r.json()
    assert body["strategy"] == "full"
    assert body["solved"] is False
    assert {res["kind"] for res in body["results"]} == {"not_solved"}


def test_bad_spec_is_400():
    r = client.post("/api/solve", json={"vertices": ["A"], "matrix": [[0, 1]]})
    assert r.status_code == 400


def test_scenarios_listing_and_solve():
    names = [s["name"] for s in client.get("/api/scenarios").json()]
    assert names[:3] == ["simple", "sedgewick", "negative-cycle"]

    r = client.post("/api/scenarios/simple/solve", params={"strategy": "frontier"})
    assert r.status_code == 200
    body = r.json()
    assert body["negative_cycle"] is False
    assert body["results"][1]["labels"] == ["USD", "YEN", "CNY", "CHF"]
    assert body["results"][1]["cost"] == 2.0


def test_unknown_scenario_is_404():
    assert client.post("/api/scenarios/nope/solve").status_code == 404
