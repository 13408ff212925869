"""9x9 Sudoku grid with validity checks and a plain-text representation."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from project_config import get_section

from .errors import FormatError, OutOfRange
from .units import ALL_CELLS, BOXES, COLUMNS, ROWS, SIZE, first_duplicate

BLANK_CHARS = frozenset(".*x?_0")
DEFAULT_BLANK = "."


def _check_index(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value < SIZE:
        raise OutOfRange(name, value)


def _check_digit(value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= SIZE:
        raise OutOfRange("value", value)


class Grid:
    """Mutable 9x9 matrix of digits where ``0`` marks a blank cell.

    Grids compare equal when their cells are equal; the informational
    ``title`` does not take part in comparison.
    """

    __slots__ = ("_cells", "_title")

    def __init__(self, title: Optional[str] = None) -> None:
        self._cells: List[List[int]] = [[0] * SIZE for _ in range(SIZE)]
        self._title = ""
        self.title = title

    # Construction -----------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], *, title: Optional[str] = None) -> "Grid":
        if len(rows) != SIZE:
            raise OutOfRange("row", len(rows))
        grid = cls(title)
        for r, row in enumerate(rows):
            if len(row) != SIZE:
                raise OutOfRange("column", len(row))
            for c, value in enumerate(row):
                grid.set(r, c, value)
        return grid

    @classmethod
    def from_string81(cls, value: str, *, title: Optional[str] = None) -> "Grid":
        """Parse the compact row-major form (81 characters, no separators)."""

        text = value.strip()
        if len(text) != SIZE * SIZE:
            raise FormatError(f"expected {SIZE * SIZE} characters, got {len(text)}")
        grid = cls(title)
        for index, ch in enumerate(text):
            grid._cells[index // SIZE][index % SIZE] = _parse_char(ch, line=index // SIZE + 1)
        return grid

    @classmethod
    def from_text(cls, value: str) -> "Grid":
        """Parse a puzzle written as 9 lines of 9 characters.

        The grid is read from the last nine non-empty lines; blank lines
        among them are skipped. Everything above is kept verbatim as the
        title unless it is only whitespace.
        Spaces inside grid lines are ignored, so ``"5 3 . . 7 . . . ."`` is
        accepted as well as ``"53..7...."``.
        """

        if not value:
            raise FormatError("empty input")

        lines = value.splitlines()
        grid_lines: List[Tuple[int, str]] = []
        cut = len(lines)
        while cut > 0 and len(grid_lines) < SIZE:
            cut -= 1
            stripped = lines[cut].strip()
            if stripped:
                grid_lines.append((cut + 1, stripped))
        if len(grid_lines) < SIZE:
            raise FormatError(f"expected at least {SIZE} lines, got {len(grid_lines)}")
        grid_lines.reverse()

        title_lines = lines[:cut]
        title = "\n".join(title_lines) if any(line.strip() for line in title_lines) else ""
        grid = cls(title)
        for r, (number, raw) in enumerate(grid_lines):
            line = raw.replace(" ", "")
            if len(line) != SIZE:
                raise FormatError(f"expected {SIZE} cells, got {len(line)}", line=number)
            for c, ch in enumerate(line):
                grid._cells[r][c] = _parse_char(ch, line=number)
        return grid

    # Cell access ------------------------------------------------------

    def get(self, row: int, col: int) -> int:
        _check_index("row", row)
        _check_index("column", col)
        return self._cells[row][col]

    def set(self, row: int, col: int, value: int) -> None:
        _check_index("row", row)
        _check_index("column", col)
        _check_digit(value)
        self._cells[row][col] = value

    def __getitem__(self, key: Tuple[int, int]) -> int:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: Tuple[int, int], value: int) -> None:
        row, col = key
        self.set(row, col, value)

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: Optional[str]) -> None:
        self._title = value or ""

    def rows(self) -> List[List[int]]:
        return [row[:] for row in self._cells]

    def clues(self) -> int:
        return sum(1 for r, c in ALL_CELLS if self._cells[r][c] != 0)

    # Checks -----------------------------------------------------------

    def valid(self) -> bool:
        """Return ``True`` when no row, column or box repeats a non-zero digit."""

        for units in (ROWS, COLUMNS, BOXES):
            for unit in units:
                if first_duplicate(self._cells[r][c] for r, c in unit) is not None:
                    return False
        return True

    def solved(self) -> bool:
        if any(self._cells[r][c] == 0 for r, c in ALL_CELLS):
            return False
        return self.valid()

    # Copy and text ----------------------------------------------------

    def clone(self) -> "Grid":
        other = Grid(self._title)
        other._cells = self.rows()
        return other

    def to_text(self, *, blank: Optional[str] = None) -> str:
        if blank is None:
            blank = str(get_section("grid.blank_char", DEFAULT_BLANK))
        if blank not in BLANK_CHARS:
            raise FormatError(f"unsupported blank placeholder {blank!r}")
        lines: List[str] = [self._title] if self._title else []
        for row in self._cells:
            lines.append("".join(str(v) if v else blank for v in row))
        return "\n".join(lines)

    def to_string81(self) -> str:
        return "".join(str(v) for row in self._cells for v in row)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Grid({self.to_string81()!r}, title={self._title!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]


def _parse_char(ch: str, *, line: int) -> int:
    if "1" <= ch <= "9":
        return ord(ch) - ord("0")
    if ch in BLANK_CHARS:
        return 0
    raise FormatError(f"unexpected character {ch!r}", line=line)


__all__ = ["BLANK_CHARS", "DEFAULT_BLANK", "Grid"]
