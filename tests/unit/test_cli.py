"""Test the command-line entry point."""

import io

import pytest
from walkcost.cli import main


FIVE_TEXT = "5\n30 20 10 40 50\n1 2\n1 3\n1 4\n3 5\n"


@pytest.fixture
def five_file(tmp_path):
    path = tmp_path / "five.txt"
    path.write_text(FIVE_TEXT)
    return str(path)


@pytest.mark.parametrize("method", ["propagation", "dfs", "dfs-pruned"])
def test_solve_prints_winner(five_file, capsys, method):
    assert main(["solve", "--input", five_file, "--method", method]) == 0
    assert capsys.readouterr().out.strip() == "3"


def test_solve_show_cost(five_file, capsys):
    assert main(["solve", "--input", five_file, "--show_cost"]) == 0
    vertex_id, cost = capsys.readouterr().out.split()
    assert vertex_id == "3"
    assert float(cost) == pytest.approx(65.0)


def test_solve_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("3\n30 20 10\n1 2\n1 3\n"))
    assert main(["solve"]) == 0
    assert capsys.readouterr().out.strip() == "1"


def test_solve_empty_graph_fails(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("0\n"))
    assert main(["solve"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Graph is empty" in captured.err


def test_solve_with_config(five_file, tmp_path, capsys):
    config = tmp_path / "solver.yaml"
    config.write_text("solver:\n  method: dfs\n  log_level: WARNING\n")
    assert main(["--config", str(config), "solve", "--input", five_file]) == 0
    assert capsys.readouterr().out.strip() == "3"


def test_bad_config_exits(tmp_path):
    config = tmp_path / "bad.yaml"
    config.write_text("solver:\n  method: nope\n")
    with pytest.raises(SystemExit):
        main(["--config", str(config), "solve"])


def test_compare_fixture(capsys):
    assert main(["compare", "--fixture", "chain", "--copies", "3"]) == 0
    out = capsys.readouterr().out
    assert "propagation" in out
    assert "dfs-pruned" in out
    assert "agree: True" in out


def test_compare_without_pruned(five_file, capsys):
    assert main(["compare", "--input", five_file, "--no_pruned"]) == 0
    assert "dfs-pruned" not in capsys.readouterr().out


def test_fixture_command(capsys):
    assert main(["fixture", "star3"]) == 0
    assert capsys.readouterr().out == "3\n30 20 10\n1 2\n1 3\n"
