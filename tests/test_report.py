"""
Tests for the text report.
"""

import pytest

from monopoly_sim.config import JailStrategy, SimulationConfig
from monopoly_sim.engine import run_simulation
from monopoly_sim.report import (
    format_block,
    format_report,
    mean_percentages,
    visit_table,
    write_report,
)


@pytest.fixture
def trial_results():
    return [
        run_simulation(SimulationConfig("A", turns, seed=f"report:{turns}"))
        for turns in (100, 1_000)
    ]


def test_visit_table_layout(trial_results):
    table = visit_table(trial_results)

    assert table.shape == (40, 4)
    assert list(table.columns) == [
        ("n = 100", "Count"),
        ("n = 100", "%"),
        ("n = 1,000", "Count"),
        ("n = 1,000", "%"),
    ]
    assert table.index[10] == "Jail"
    assert table[("n = 1,000", "Count")].sum() == trial_results[1].total_visits


def test_visit_table_needs_results():
    with pytest.raises(ValueError):
        visit_table([])


def test_format_block(trial_results):
    text = format_block("Strategy A Simulation #1 of 1", trial_results)
    lines = text.splitlines()

    assert lines[0].strip() == "Strategy A Simulation #1 of 1"
    assert set(lines[1]) == {"-"}
    assert "Boardwalk" in text
    assert "%" in text
    assert "Turns spent rolling in jail" not in text


def test_format_block_shows_jail_turns():
    results = [run_simulation(SimulationConfig("B", 2_000, seed=8))]

    assert "Turns spent rolling in jail" in format_block("Strategy B", results)


def test_mean_percentages(trial_results):
    means = mean_percentages(trial_results)

    assert means.shape == (40, 2)
    assert ("A", "n = 100") in means.columns


def test_format_report(trial_results):
    blocks = {(JailStrategy.IMMEDIATE, 0): trial_results}

    text = format_report(blocks, trials=1, failures=["strategy B trial #1 n=10: boom"])

    assert "Strategy A Simulation #1 of 1" in text
    assert "Mean % across trials" in text
    assert "Failed runs:" in text
    assert "boom" in text


def test_write_report(tmp_path):
    path = write_report(tmp_path / "out" / "results.txt", "hello\n")

    assert path.read_text(encoding="utf-8") == "hello\n"
