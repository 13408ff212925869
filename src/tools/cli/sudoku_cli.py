"""Command line helpers for solving, inspecting and printing puzzles."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from contracts import validate_report
from sudoku import event_log
from sudoku.errors import FormatError
from sudoku.grid import Grid
from sudoku.report import build_report, event_from_report
from sudoku.solver import Solver

EXIT_OK = 0
EXIT_UNSOLVED = 1
EXIT_BAD_INPUT = 2

_LOGGER = logging.getLogger(__name__)


def _load_grid(path: str) -> Grid:
    if path == "-":
        return Grid.from_text(sys.stdin.read())
    return Grid.from_text(Path(path).read_text(encoding="utf-8"))


def _log_event(args: argparse.Namespace, report: dict) -> None:
    if args.no_log:
        return
    if args.log_dir:
        event_log.configure(args.log_dir)
    path = event_log.append_event(event_from_report(report))
    _LOGGER.debug("Appended solve event to %s", path)


def cmd_solve(args: argparse.Namespace) -> int:
    puzzle = _load_grid(args.file)
    solver = Solver(puzzle, trace_level=args.trace_level)
    result = solver.solve()
    report = build_report(puzzle, result, solver)
    _log_event(args, report)

    if args.json:
        validate_report(report)
        print(json.dumps(report, indent=2, sort_keys=True))
    elif report["solved"]:
        print(result.to_text())
    else:
        print("No solution", file=sys.stderr)
    if args.trace_level and args.trace_level != "none":
        print(solver.trace.to_json(indent=2), file=sys.stderr)
    return EXIT_OK if report["solved"] else EXIT_UNSOLVED


def cmd_check(args: argparse.Namespace) -> int:
    puzzle = _load_grid(args.file)
    result = Solver(puzzle, trace_level="none").solve()
    summary = {
        "clues": puzzle.clues(),
        "valid": puzzle.valid(),
        "solved": puzzle.solved(),
        "can_be_solved": result.solved(),
    }
    print(json.dumps(summary, indent=2, sort_keys=True))
    return EXIT_OK


def cmd_step(args: argparse.Namespace) -> int:
    solver = Solver(_load_grid(args.file), trace_level="none")
    state = solver.state
    print(f"# initial: degree_of_freedom={state.degree_of_freedom}")
    print(state.describe())
    for index in range(1, args.rounds + 1):
        progress = solver.step()
        print(f"# round {index}: degree_of_freedom={state.degree_of_freedom} progress={progress}")
        print(state.describe())
        if not progress or not state.correct:
            break
    return EXIT_OK


def cmd_render(args: argparse.Namespace) -> int:
    from sudoku.printer import render_pdf

    grids: List[Grid] = []
    titles: List[str] = []
    for name in args.files:
        puzzle = _load_grid(name)
        grids.append(puzzle)
        titles.append(puzzle.title or Path(name).stem)
        if args.with_solution:
            solution = Solver(puzzle, trace_level="none").solve()
            grids.append(solution)
            label = "solution" if solution.solved() else "no solution"
            titles.append(f"{titles[-1]} ({label})")
    out = render_pdf(grids, args.out, titles=titles)
    print(f"PDF with {len(grids)} grids saved to: {out.resolve()}")
    return EXIT_OK


def cmd_report_log(args: argparse.Namespace) -> int:
    base_dir = Path(args.path)
    files = sorted(base_dir.glob("**/*.jsonl"))
    if not files:
        raise SystemExit(f"No JSONL logs found under {base_dir}")
    print(json.dumps(event_log.summarise(files), indent=2, sort_keys=True))
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sudoku constraint solver")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Solve a puzzle file ('-' for stdin)")
    solve.add_argument("file")
    solve.add_argument("--json", action="store_true", help="Print the JSON solve report")
    solve.add_argument(
        "--trace-level",
        choices=("none", "summary", "steps"),
        default=None,
        help="Trace detail written to stderr (default from config)",
    )
    solve.add_argument("--no-log", action="store_true", help="Do not append to the event log")
    solve.add_argument("--log-dir", default=None, help="Override the event log directory")
    solve.set_defaults(func=cmd_solve)

    check = sub.add_parser("check", help="Report validity and solvability of a puzzle")
    check.add_argument("file")
    check.set_defaults(func=cmd_check)

    step = sub.add_parser("step", help="Show candidate domains round by round")
    step.add_argument("file")
    step.add_argument("--rounds", type=int, default=5)
    step.set_defaults(func=cmd_step)

    render = sub.add_parser("render", help="Render puzzles to a PDF")
    render.add_argument("files", nargs="+")
    render.add_argument("--out", required=True)
    render.add_argument("--with-solution", action="store_true")
    render.set_defaults(func=cmd_render)

    report = sub.add_parser("report-log", help="Aggregate solve events from JSONL logs")
    report.add_argument("path", help="Directory containing JSONL logs")
    report.set_defaults(func=cmd_report_log)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s")
    try:
        return args.func(args)
    except FormatError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
