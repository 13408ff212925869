"""JSON solve reports for a puzzle and its solver outcome."""

from __future__ import annotations

from typing import Any, Dict, Optional

from contracts.jsoncanon import digest_without

from .grid import Grid
from .solver import SolveStats, Solver

REPORT_TYPE = "SolveReport"
SCHEMA_VERSION = "1.0"


def build_report(puzzle: Grid, result: Grid, solver: Optional[Solver] = None) -> Dict[str, Any]:
    """Describe ``result`` as the outcome of solving ``puzzle``.

    ``solver`` supplies the search statistics; without it they are zero.
    The ``canonical_hash`` is computed over every other field.
    """

    stats = solver.stats if solver is not None else SolveStats()
    solved = result.solved()
    report: Dict[str, Any] = {
        "type": REPORT_TYPE,
        "schema_version": SCHEMA_VERSION,
        "puzzle": puzzle.to_string81(),
        "solution": result.to_string81() if solved else None,
        "solved": solved,
        "title": puzzle.title,
        "stats": stats.to_payload(),
    }
    report["canonical_hash"] = digest_without(report, "canonical_hash")
    return report


def event_from_report(report: Dict[str, Any]) -> Dict[str, Any]:
    """Compact JSONL event for the solve event log."""

    return {
        "event": "solve.completed",
        "puzzle": report["puzzle"],
        "solved": report["solved"],
        "stats": dict(report["stats"]),
        "report_hash": report["canonical_hash"],
    }


__all__ = ["REPORT_TYPE", "SCHEMA_VERSION", "build_report", "event_from_report"]
