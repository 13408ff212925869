from __future__ import annotations

import pytest

from sudoku.errors import FormatError, OutOfRange
from sudoku.grid import Grid

from conftest import SOLVED


def test_new_grid_is_blank_and_valid():
    grid = Grid()
    assert grid.clues() == 0
    assert grid.valid() is True
    assert grid.solved() is False
    assert grid.title == ""


@pytest.mark.parametrize(
    ("row", "col", "argument"),
    [(-1, 0, "row"), (9, 0, "row"), (0, -1, "column"), (0, 9, "column")],
)
def test_get_rejects_bad_indices(row, col, argument):
    with pytest.raises(OutOfRange) as excinfo:
        Grid().get(row, col)
    assert excinfo.value.argument == argument


@pytest.mark.parametrize("value", [-1, 10, True])
def test_set_rejects_bad_values(value):
    grid = Grid()
    with pytest.raises(OutOfRange) as excinfo:
        grid.set(0, 0, value)
    assert excinfo.value.argument == "value"
    assert grid.get(0, 0) == 0


def test_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        Grid()[0, 9]


def test_item_access_delegates_to_get_and_set():
    grid = Grid()
    grid[4, 5] = 7
    assert grid[4, 5] == 7
    assert grid.get(4, 5) == 7


@pytest.mark.parametrize(
    "cells",
    [
        [(0, 0), (0, 8)],  # row
        [(0, 3), (8, 3)],  # column
        [(3, 3), (5, 5)],  # box
    ],
)
def test_duplicate_digit_makes_grid_invalid(cells):
    grid = Grid()
    for r, c in cells:
        grid.set(r, c, 5)
    assert grid.valid() is False
    assert grid.valid() is False
    assert [grid.get(r, c) for r, c in cells] == [5, 5]


def test_solved_requires_full_and_valid(solved_grid):
    assert solved_grid.solved() is True
    solved_grid.set(8, 8, 0)
    assert solved_grid.valid() is True
    assert solved_grid.solved() is False
    solved_grid.set(8, 8, 1)
    assert solved_grid.solved() is False


def test_clone_is_independent(solved_grid):
    solved_grid.title = "original"
    copy = solved_grid.clone()
    copy.set(0, 0, 0)
    assert solved_grid.get(0, 0) == 1
    assert copy.title == "original"
    assert copy != solved_grid


def test_equality_ignores_title(solved_grid):
    other = Grid.from_string81(SOLVED, title="something else")
    assert other == solved_grid
    assert (solved_grid == "not a grid") is False


def test_title_none_is_normalised():
    grid = Grid("x")
    grid.title = None
    assert grid.title == ""


def test_to_text_uses_dot_for_blanks():
    grid = Grid()
    grid.set(0, 0, 3)
    lines = grid.to_text().splitlines()
    assert len(lines) == 9
    assert lines[0] == "3........"
    assert all(line == "." * 9 for line in lines[1:])


def test_to_text_with_alternative_placeholder():
    assert Grid().to_text(blank="_").splitlines()[0] == "_" * 9
    with pytest.raises(FormatError):
        Grid().to_text(blank="#")


@pytest.mark.parametrize(
    "title",
    ["", "Puzzle #1", "line one\nline two", "  Puzzle 7  \n\tfrom book", "heading\n\nbody"],
)
def test_text_round_trip(solved_grid, title):
    solved_grid.set(4, 4, 0)
    solved_grid.title = title
    parsed = Grid.from_text(solved_grid.to_text())
    assert parsed == solved_grid
    assert parsed.title == title


def test_blank_grid_round_trip():
    assert Grid.from_text(Grid().to_text()) == Grid()


def test_from_text_accepts_all_placeholders_and_spaces():
    text = "\n".join(
        [
            "1 2 3 * x ? _ 0 .",
            *["........." for _ in range(8)],
        ]
    )
    grid = Grid.from_text(text + "\n\n")
    assert grid.rows()[0] == [1, 2, 3, 0, 0, 0, 0, 0, 0]
    assert grid.title == ""


def test_from_text_skips_blank_lines_inside_grid():
    lines = ["........."] * 9
    text = "\n".join(lines[:4] + [""] + lines[4:])
    assert Grid.from_text(text) == Grid()


@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n".join(["........."] * 8),
        "\n".join(["........."] * 8 + [".........."]),
        "\n".join(["........."] * 8 + ["........"]),
        "\n".join(["........."] * 8 + ["....a...."]),
    ],
)
def test_from_text_rejects_malformed_input(text):
    with pytest.raises(FormatError):
        Grid.from_text(text)


def test_format_error_is_value_error_with_line_number():
    text = "\n".join(["........."] * 8 + ["....a...."])
    with pytest.raises(ValueError) as excinfo:
        Grid.from_text(text)
    assert excinfo.value.line == 9


def test_string81_round_trip(solved_grid):
    assert Grid.from_string81(solved_grid.to_string81()) == solved_grid
    with pytest.raises(FormatError):
        Grid.from_string81("123")


def test_from_rows_validates_cells():
    rows = [[0] * 9 for _ in range(9)]
    rows[2][3] = 4
    assert Grid.from_rows(rows).get(2, 3) == 4
    rows[0][0] = 12
    with pytest.raises(OutOfRange):
        Grid.from_rows(rows)


def test_grids_are_unhashable():
    with pytest.raises(TypeError):
        hash(Grid())


def test_whitespace_only_title_is_dropped():
    text = "   \n\n" + "\n".join(["........."] * 9)
    assert Grid.from_text(text).title == ""
