"""Shared error types for the Sudoku grid and solver."""

from __future__ import annotations


class SudokuError(Exception):
    """Base class for all errors raised by the :mod:`sudoku` package."""


class OutOfRange(SudokuError, IndexError):
    """Raised when a cell index or digit is outside of its legal bounds."""

    def __init__(self, argument: str, value: object) -> None:
        self.argument = argument
        self.value = value
        super().__init__(f"{argument} out of range: {value!r}")


class FormatError(SudokuError, ValueError):
    """Raised when a textual puzzle representation cannot be parsed."""

    def __init__(self, detail: str, *, line: int | None = None) -> None:
        self.detail = detail
        self.line = line
        message = "Wrong format of a Sudoku puzzle: " + detail
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


__all__ = ["FormatError", "OutOfRange", "SudokuError"]
