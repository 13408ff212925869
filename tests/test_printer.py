from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from sudoku.grid import Grid
from sudoku.printer import render_pdf


def test_render_writes_pdf(tmp_path, easy_puzzle, solved_grid):
    out = render_pdf([easy_puzzle, solved_grid, Grid()], tmp_path / "out" / "grids.pdf")
    assert out.exists()
    assert out.read_bytes().startswith(b"%PDF")


def test_render_spans_pages(tmp_path, easy_puzzle):
    out = render_pdf([easy_puzzle] * 5, tmp_path / "many.pdf", titles=[f"#{i}" for i in range(5)])
    assert out.stat().st_size > 0


def test_render_requires_grids(tmp_path):
    with pytest.raises(ValueError):
        render_pdf([], tmp_path / "none.pdf")


def test_render_checks_titles(tmp_path, easy_puzzle):
    with pytest.raises(ValueError):
        render_pdf([easy_puzzle], tmp_path / "bad.pdf", titles=["a", "b"])


def test_cli_render(tmp_path, easy_puzzle, capsys):
    from tools.cli import sudoku_cli

    source = tmp_path / "easy.txt"
    source.write_text(easy_puzzle.to_text(), encoding="utf-8")
    out = tmp_path / "book.pdf"
    assert sudoku_cli.main(["render", str(source), "--out", str(out), "--with-solution"]) == 0
    assert out.read_bytes().startswith(b"%PDF")
    assert "2 grids" in capsys.readouterr().out
