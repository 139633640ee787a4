"""
Tests for the command line.
"""

from monopoly_sim.cli import main


def test_cli_writes_report(tmp_path, capsys):
    output = tmp_path / "results.txt"

    code = main(["--turns", "100,200", "--trials", "2", "--seed", "1", "-o", str(output)])

    assert code == 0
    text = output.read_text(encoding="utf-8")
    assert "Strategy A Simulation #1 of 2" in text
    assert "Strategy B Simulation #2 of 2" in text
    assert "n = 200" in text
    assert str(output) in capsys.readouterr().out


def test_cli_single_strategy(tmp_path):
    output = tmp_path / "results.txt"

    code = main(["-t", "100", "-n", "1", "-s", "B", "-o", str(output)])

    assert code == 0
    text = output.read_text(encoding="utf-8")
    assert "Strategy B Simulation #1 of 1" in text
    assert "Strategy A" not in text


def test_cli_rejects_bad_strategy(tmp_path, capsys):
    code = main(["-s", "C", "-o", str(tmp_path / "r.txt")])

    assert code == 2
    assert "Invalid configuration" in capsys.readouterr().err
    assert not (tmp_path / "r.txt").exists()


def test_cli_reports_failed_runs(tmp_path):
    output = tmp_path / "results.txt"

    code = main(["-t", "100", "-n", "1", "--data-dir", str(tmp_path / "nowhere"), "-o", str(output)])

    assert code == 1
    assert "Failed runs:" in output.read_text(encoding="utf-8")
