from __future__ import annotations

import os
import platform
import uuid
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from .errors import NegativeCyclesError
from .graph import Graph
from .loader import parse_graph_spec
from .logger import log_event
from .relaxation import Strategy
from .report import solve_summary
from .scenarios import SCENARIOS, get_scenario
from .solver import BellmanFordSolver


APP_VERSION = "0.1.0"
RUN_ID = os.environ.get("NC_RUN_ID", str(uuid.uuid4()))
app = FastAPI(title="Negative Cycles API", version=APP_VERSION)

LAST_SOLVE: Dict[str, Any] | None = None


class PathResultModel(BaseModel):
    destination: int
    label: str
    kind: str
    path: Optional[List[int]] = None
    labels: Optional[List[str]] = None
    cost: Optional[float] = None


class SolveResponse(BaseModel):
    strategy: str
    source: int
    negative_cycle: bool
    solved: bool
    diverged: bool
    passes: int
    distances: List[Optional[float]]
    results: List[PathResultModel]


class ScenarioInfo(BaseModel):
    name: str
    title: str
    vertices: List[str]
    source: int


def _run(graph: Graph, source: int, strategy: Strategy | str, tolerance: float, origin: str) -> SolveResponse:
    global LAST_SOLVE
    solver = BellmanFordSolver(strategy, tolerance)
    solver.solve(graph, source)
    summary = solve_summary(graph, solver)
    log_event("api_solve", origin=origin, strategy=summary["strategy"], source=source,
              negative_cycle=summary["negative_cycle"], solved=summary["solved"], diverged=summary["diverged"])
    LAST_SOLVE = {k: summary[k] for k in ("strategy", "source", "negative_cycle", "solved", "diverged")}
    LAST_SOLVE["origin"] = origin
    return SolveResponse(**summary)


@app.post("/api/solve", response_model=SolveResponse)
def api_solve(payload: Dict[str, Any], strategy: Optional[Strategy] = None):
    try:
        graph, source, policy = parse_graph_spec(payload)
    except NegativeCyclesError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _run(graph, source, strategy or policy.strategy, policy.tolerance, origin="spec")


@app.get("/api/scenarios", response_model=List[ScenarioInfo])
def api_scenarios():
    return [ScenarioInfo(name=s.name, title=s.title, vertices=list(s.labels), source=s.source) for s in SCENARIOS]


@app.post("/api/scenarios/{name}/solve", response_model=SolveResponse)
def api_scenario_solve(name: str, strategy: Strategy = Strategy.TWO_PHASE):
    try:
        scenario = get_scenario(name)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0]))
    return _run(scenario.build(), scenario.source, strategy, scenario.tolerance, origin=f"scenario:{name}")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    req_id = str(uuid.uuid4())
    log_event("http_request", method=request.method, path=request.url.path, request_id=req_id, run_id=RUN_ID)
    response = await call_next(request)
    response.headers["X-Request-Id"] = req_id
    response.headers["X-Run-Id"] = RUN_ID
    log_event("http_response", path=request.url.path, status=response.status_code, request_id=req_id, run_id=RUN_ID)
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/status")
def status():
    info: Dict[str, Any] = {
        "status": "ok",
        "version": APP_VERSION,
        "run_id": RUN_ID,
        "python": platform.python_version(),
    }
    if LAST_SOLVE is not None:
        info["last_solve"] = LAST_SOLVE
    return info
