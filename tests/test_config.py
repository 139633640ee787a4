"""
Tests for run configuration and environment settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from monopoly_sim.config import JailStrategy, SimulationConfig
from monopoly_sim.exceptions import InvalidStrategyError
from monopoly_sim.settings import DEFAULT_TURN_COUNTS, SimulationSettings


@pytest.mark.parametrize(
    "value, expected",
    [
        ("immediate", JailStrategy.IMMEDIATE),
        ("A", JailStrategy.IMMEDIATE),
        ("b", JailStrategy.DOUBLES_OR_THREE),
        (" Doubles_Or_Three ", JailStrategy.DOUBLES_OR_THREE),
        (JailStrategy.DOUBLES_OR_THREE, JailStrategy.DOUBLES_OR_THREE),
    ],
)
def test_parse_strategy(value, expected):
    assert JailStrategy.parse(value) == expected


@pytest.mark.parametrize("value", ["C", "", None, 1])
def test_parse_unknown_strategy(value):
    with pytest.raises(InvalidStrategyError):
        JailStrategy.parse(value)


def test_strategy_labels():
    assert JailStrategy.IMMEDIATE.label == "A"
    assert JailStrategy.DOUBLES_OR_THREE.label == "B"


def test_config_normalises_strategy():
    config = SimulationConfig("B", 100, seed=1)

    assert config.strategy == JailStrategy.DOUBLES_OR_THREE
    assert config.max_jail_attempts == 3


@pytest.mark.parametrize("turns", [0, -5, 1.5, True])
def test_config_rejects_bad_turn_count(turns):
    with pytest.raises(ValueError):
        SimulationConfig("A", turns)


def test_settings_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    settings = SimulationSettings()

    assert settings.seed is None
    assert settings.trials == 10
    assert settings.turn_counts == DEFAULT_TURN_COUNTS
    assert settings.strategies == [JailStrategy.IMMEDIATE, JailStrategy.DOUBLES_OR_THREE]
    assert settings.output_path == Path("results.txt")
    assert settings.log_level == "INFO"


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MONOPOLY_SIM_TRIALS", "3")
    monkeypatch.setenv("MONOPOLY_SIM_SEED", "77")
    monkeypatch.setenv("MONOPOLY_SIM_TURN_COUNTS", "[100, 200]")
    monkeypatch.setenv("MONOPOLY_SIM_LOG_LEVEL", "debug")

    settings = SimulationSettings()

    assert settings.trials == 3
    assert settings.seed == 77
    assert settings.turn_counts == [100, 200]
    assert settings.log_level == "DEBUG"


def test_settings_accept_comma_separated_values(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    settings = SimulationSettings(turn_counts="10,20", strategies=["B"])

    assert settings.turn_counts == [10, 20]
    assert settings.strategies == [JailStrategy.DOUBLES_OR_THREE]


@pytest.mark.parametrize(
    "overrides",
    [
        {"trials": 0},
        {"turn_counts": [100, -1]},
        {"turn_counts": []},
        {"strategies": ["C"]},
        {"log_level": "LOUD"},
        {"workers": 0},
    ],
)
def test_settings_validation(monkeypatch, tmp_path, overrides):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ValidationError):
        SimulationSettings(**overrides)
