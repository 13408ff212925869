"""Sudoku grid model and constraint-propagation solver."""

from __future__ import annotations

from .errors import FormatError, OutOfRange, SudokuError
from .grid import BLANK_CHARS, Grid
from .solver import CandidateState, SolveStats, Solver, can_be_solved, solve, try_solve
from .trace import SolveTrace, TraceEntry, TraceValidationError

__all__ = [
    "BLANK_CHARS",
    "CandidateState",
    "FormatError",
    "Grid",
    "OutOfRange",
    "SolveStats",
    "SolveTrace",
    "Solver",
    "SudokuError",
    "TraceEntry",
    "TraceValidationError",
    "can_be_solved",
    "solve",
    "try_solve",
]
