from __future__ import annotations

import pytest

import project_config
from sudoku.grid import Grid
from sudoku.solver import Solver


def _use_config(monkeypatch, tmp_path, body: str) -> None:
    path = tmp_path / "config.toml"
    path.write_text(body, encoding="utf-8")
    monkeypatch.setenv("SUDOKU_CONFIG", str(path))
    project_config.reload()


def test_repository_config_is_loaded():
    assert project_config.get_section("solver.propagation_rounds") == 2
    assert project_config.get_section("grid.blank_char") == "."


def test_missing_path_uses_default_or_raises():
    assert project_config.get_section("solver.missing", 7) == 7
    with pytest.raises(KeyError):
        project_config.get_section("solver.missing")


def test_environment_overrides_toml():
    env = {"SUDOKU_TRACE_LEVEL": " steps "}
    assert project_config.get_setting("solver.trace_level", env=env) == "steps"
    assert project_config.get_setting("solver.trace_level", env={}) == "summary"
    assert project_config.get_setting("solver.trace_level", env={"SUDOKU_TRACE_LEVEL": "  "}) == "summary"


def test_process_environment_is_consulted(monkeypatch, tmp_path):
    monkeypatch.setenv("SUDOKU_LOG_DIR", str(tmp_path))
    assert project_config.get_setting("log.dir") == str(tmp_path)


def test_alternative_config_file(monkeypatch, tmp_path):
    _use_config(
        monkeypatch,
        tmp_path,
        '[grid]\nblank_char = "_"\n\n[solver]\ntrace_level = "steps"\npropagation_rounds = 1\n',
    )
    assert Grid().to_text().splitlines()[0] == "_" * 9
    solver = Solver(Grid())
    assert solver.rounds == 1
    assert solver.trace.trace_level == "steps"
    assert solver.trace.entries[0].kind == "init"


def test_solver_arguments_beat_config(monkeypatch, tmp_path):
    _use_config(monkeypatch, tmp_path, '[solver]\ntrace_level = "steps"\npropagation_rounds = 3\n')
    solver = Solver(Grid(), trace_level="none", propagation_rounds=2)
    assert solver.rounds == 2
    assert solver.trace.entries == []


def test_missing_config_file_falls_back_to_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("SUDOKU_CONFIG", str(tmp_path / "absent.toml"))
    project_config.reload()
    assert project_config.get_config() == {}
    assert Grid().to_text().splitlines()[0] == "." * 9
    solver = Solver(Grid.from_string81("0" * 81))
    assert solver.rounds == 2
    assert solver.trace.trace_level == "none"
    assert solver.solve().solved()
