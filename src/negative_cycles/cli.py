from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .errors import NegativeCyclesError
from .graph import Graph
from .loader import load_graph_spec
from .logger import log_event
from .relaxation import Strategy
from .report import format_report, solve_summary
from .scenarios import SCENARIOS, get_scenario, scenario_names
from .solver import BellmanFordSolver


STRATEGIES = [s.value for s in Strategy]


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="negative-cycles", description="Shortest paths with negative cycle detection")
    sub = p.add_subparsers(dest="cmd", required=True)

    solve = sub.add_parser("solve", help="Solve a JSON graph spec")
    solve.add_argument("path", help="Path to JSON spec")
    solve.add_argument("--source", help="Source label or index (overrides the spec)")
    solve.add_argument("--strategy", choices=STRATEGIES, help="Relaxation strategy (overrides the spec policy)")
    solve.add_argument("--tolerance", type=float, help="Relaxation tolerance (overrides the spec policy)")

    demo = sub.add_parser("demo", help="Run the built-in currency scenarios")
    demo.add_argument("--strategy", choices=STRATEGIES, default=Strategy.TWO_PHASE.value)
    demo.add_argument("--scenario", choices=scenario_names(), help="Run only this scenario")

    sub.add_parser("scenarios", help="List built-in scenarios")
    return p


def _write_lines(lines: List[str]) -> None:
    for line in lines:
        sys.stdout.write(line + "\n")
    sys.stdout.flush()


def _source_index(graph: Graph, ref: str) -> int:
    if ref.isdecimal():
        return int(ref)
    return graph.index_of(ref)


def cmd_solve(args: argparse.Namespace) -> int:
    try:
        graph, source, policy = load_graph_spec(args.path)
        if args.source is not None:
            source = _source_index(graph, args.source)
        strategy = args.strategy or policy.strategy
        tolerance = policy.tolerance if args.tolerance is None else args.tolerance
        solver = BellmanFordSolver(strategy, tolerance)
        solver.solve(graph, source)
    except (OSError, NegativeCyclesError) as exc:
        log_event("error", action="solve", path=args.path, error=str(exc))
        return 2
    log_event("solve", path=args.path, **solve_summary(graph, solver))
    _write_lines(format_report(graph, solver))
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    scenarios = [get_scenario(args.scenario)] if args.scenario else SCENARIOS
    graph = Graph()
    for scenario in scenarios:
        scenario.build(graph)
        solver = BellmanFordSolver(args.strategy, scenario.tolerance)
        has_cycle = solver.solve(graph, scenario.source)
        log_event("demo", scenario=scenario.name, strategy=solver.strategy.value, negative_cycle=has_cycle,
                  solved=solver.state.solved, diverged=solver.state.diverged)
        _write_lines(format_report(graph, solver, title=scenario.title))
    return 0


def cmd_scenarios(args: argparse.Namespace) -> int:
    _write_lines([f"{s.name}: {s.title} ({len(s.labels)} vertices, source {s.labels[s.source]})" for s in SCENARIOS])
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    p = build_arg_parser()
    args = p.parse_args(argv)
    if args.cmd == "solve":
        return cmd_solve(args)
    if args.cmd == "demo":
        return cmd_demo(args)
    if args.cmd == "scenarios":
        return cmd_scenarios(args)
    return 0

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
