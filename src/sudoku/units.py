"""Cell coordinates of the 27 Sudoku units (rows, columns and boxes)."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

SIZE = 9
BOX = 3
DIGITS = tuple(range(1, SIZE + 1))

Cell = Tuple[int, int]
Unit = Tuple[Cell, ...]


def row_cells(row: int) -> Unit:
    return tuple((row, col) for col in range(SIZE))


def column_cells(col: int) -> Unit:
    return tuple((row, col) for row in range(SIZE))


def box_cells(box: int) -> Unit:
    """Cells of box ``box`` (0..8, row-major over the 3x3 box layout)."""

    top = (box // BOX) * BOX
    left = (box % BOX) * BOX
    return tuple((top + i, left + j) for i in range(BOX) for j in range(BOX))


def box_index(row: int, col: int) -> int:
    return (row // BOX) * BOX + col // BOX


ROWS: Tuple[Unit, ...] = tuple(row_cells(i) for i in range(SIZE))
COLUMNS: Tuple[Unit, ...] = tuple(column_cells(i) for i in range(SIZE))
BOXES: Tuple[Unit, ...] = tuple(box_cells(i) for i in range(SIZE))

# Rows, columns and boxes interleaved by index: row 0, column 0, box 0, row 1, ...
UNITS: Tuple[Unit, ...] = tuple(
    unit for i in range(SIZE) for unit in (ROWS[i], COLUMNS[i], BOXES[i])
)

ALL_CELLS: Tuple[Cell, ...] = tuple((r, c) for r in range(SIZE) for c in range(SIZE))


def first_duplicate(values: Iterable[int]) -> Optional[int]:
    """Return the first non-zero value seen twice in ``values``, if any."""

    seen: set[int] = set()
    for value in values:
        if value == 0:
            continue
        if value in seen:
            return value
        seen.add(value)
    return None


__all__ = [
    "ALL_CELLS",
    "BOX",
    "BOXES",
    "COLUMNS",
    "Cell",
    "DIGITS",
    "ROWS",
    "SIZE",
    "UNITS",
    "Unit",
    "box_cells",
    "box_index",
    "column_cells",
    "first_duplicate",
    "row_cells",
]
