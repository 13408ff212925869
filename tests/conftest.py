from __future__ import annotations

import pytest

import project_config
from sudoku.grid import Grid

SOLVED = (
    "123456789"
    "456789123"
    "789123456"
    "214365897"
    "365897214"
    "897214365"
    "531642978"
    "642978531"
    "978531642"
)

EASY = (
    "003020600"
    "900305001"
    "001806400"
    "008102900"
    "700000008"
    "006708200"
    "002609500"
    "800203009"
    "005010300"
)


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    monkeypatch.delenv("SUDOKU_TRACE_LEVEL", raising=False)
    monkeypatch.delenv("SUDOKU_LOG_DIR", raising=False)
    monkeypatch.delenv("SUDOKU_CONFIG", raising=False)
    project_config.reload()
    yield
    project_config.reload()


@pytest.fixture
def solved_grid() -> Grid:
    return Grid.from_string81(SOLVED)


@pytest.fixture
def easy_puzzle() -> Grid:
    return Grid.from_string81(EASY, title="Grid 01")


@pytest.fixture
def sparse_puzzle() -> Grid:
    """Every third clue of a known solution, so at least one solution exists."""

    grid = Grid.from_string81(SOLVED)
    for index in range(81):
        if index % 3:
            grid.set(index // 9, index % 9, 0)
    return grid
