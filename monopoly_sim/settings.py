"""
Harness configuration using pydantic-settings.

Environment variables (prefix: MONOPOLY_SIM_):
    MONOPOLY_SIM_SEED               - Base seed; unset means a fresh random run
    MONOPOLY_SIM_TRIALS             - Repetitions per strategy (default: 10)
    MONOPOLY_SIM_TURN_COUNTS        - JSON list of turn counts (default: [1000, 10000, 100000, 1000000])
    MONOPOLY_SIM_STRATEGIES         - JSON list of strategies (default: both)
    MONOPOLY_SIM_MAX_JAIL_ATTEMPTS  - Doubles attempts under strategy B (default: 3)
    MONOPOLY_SIM_WORKERS            - Parallel worker processes (default: 1)
    MONOPOLY_SIM_OUTPUT_PATH        - Report file (default: results.txt)
    MONOPOLY_SIM_DATA_DIR           - Directory with replacement CSV files
    MONOPOLY_SIM_LOG_LEVEL          - Logging level (default: INFO)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monopoly_sim.config import JailStrategy

DEFAULT_TURN_COUNTS = [1_000, 10_000, 100_000, 1_000_000]


class SimulationSettings(BaseSettings):
    """Settings for a batch of simulation runs."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="MONOPOLY_SIM_",
    )

    seed: Optional[int] = Field(
        default=None,
        description="Base seed for reproducible batches.",
    )
    trials: int = Field(default=10, ge=1, description="Repetitions per strategy.")
    turn_counts: List[int] = Field(
        default_factory=lambda: list(DEFAULT_TURN_COUNTS),
        description="Turn counts simulated in each trial.",
    )
    strategies: List[JailStrategy] = Field(
        default_factory=lambda: list(JailStrategy),
        description="Jail strategies to simulate.",
    )
    max_jail_attempts: int = Field(default=3, ge=1)
    workers: int = Field(default=1, ge=1, le=64)
    output_path: Path = Field(default=Path("results.txt"))
    data_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding properties.csv and the two card CSVs.",
    )
    log_level: str = Field(default="INFO")

    @field_validator("turn_counts", mode="before")
    @classmethod
    def split_turn_counts(cls, value):
        """Accept '1000,10000' as well as a list."""
        if isinstance(value, str):
            value = [v for v in value.split(",") if v.strip()]
        return value

    @field_validator("turn_counts")
    @classmethod
    def positive_turn_counts(cls, value: List[int]) -> List[int]:
        if not value:
            raise ValueError("at least one turn count is required")
        if any(v <= 0 for v in value):
            raise ValueError("turn counts must be positive")
        return value

    @field_validator("strategies", mode="before")
    @classmethod
    def parse_strategies(cls, value):
        if isinstance(value, str):
            value = [v for v in value.split(",") if v.strip()]
        return [JailStrategy.parse(v) for v in value]

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value!r}")
        return value


@lru_cache
def get_settings() -> SimulationSettings:
    """Return cached settings instance."""
    return SimulationSettings()
