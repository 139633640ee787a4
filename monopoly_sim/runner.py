"""
Batch runner: every strategy x trial x turn count, optionally in parallel.

Usage:
    specs = plan_runs(settings)
    outcomes = execute_runs(specs, workers=4)
"""

import logging
from collections import OrderedDict
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from monopoly_sim.config import JailStrategy, SimulationConfig
from monopoly_sim.dice import derive_seed
from monopoly_sim.engine import SimulationResult, run_simulation
from monopoly_sim.exceptions import SimulationError
from monopoly_sim.settings import SimulationSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSpec:
    """Coordinates of one run in a batch."""

    strategy: JailStrategy
    trial: int
    turn_count: int
    seed: Optional[str] = None
    max_jail_attempts: int = 3
    data_dir: Optional[Path] = None

    def config(self) -> SimulationConfig:
        return SimulationConfig(
            strategy=self.strategy,
            turn_count=self.turn_count,
            seed=self.seed,
            max_jail_attempts=self.max_jail_attempts,
        )

    def __str__(self) -> str:
        return f"strategy {self.strategy.label} trial #{self.trial + 1} n={self.turn_count:,}"


@dataclass
class RunOutcome:
    """A finished run: either a result or the error that stopped it."""

    spec: RunSpec
    result: Optional[SimulationResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


def plan_runs(settings: SimulationSettings) -> List[RunSpec]:
    """All runs of a batch, in report order."""
    specs = []
    for strategy in settings.strategies:
        for trial in range(settings.trials):
            for turn_count in settings.turn_counts:
                specs.append(
                    RunSpec(
                        strategy=strategy,
                        trial=trial,
                        turn_count=turn_count,
                        seed=derive_seed(settings.seed, strategy.value, trial, turn_count),
                        max_jail_attempts=settings.max_jail_attempts,
                        data_dir=settings.data_dir,
                    )
                )
    return specs


def execute_run(spec: RunSpec) -> RunOutcome:
    """Run one simulation, turning simulation errors into a failed outcome."""
    try:
        result = run_simulation(spec.config(), data_dir=spec.data_dir)
    except SimulationError as e:
        logger.exception(f"Run failed: {spec}")
        return RunOutcome(spec, error=f"{spec}: {e}")
    logger.info(f"Finished {spec} in {result.elapsed_seconds:.2f}s")
    return RunOutcome(spec, result=result)


def execute_runs(specs: Sequence[RunSpec], workers: int = 1) -> List[RunOutcome]:
    """
    Execute runs and return outcomes in the order of specs.

    Runs share no state, so with workers > 1 they go to a process pool.
    """
    if workers <= 1 or len(specs) <= 1:
        return [execute_run(spec) for spec in specs]

    outcomes: Dict[int, RunOutcome] = {}
    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(execute_run, spec): i for i, spec in enumerate(specs)}
        for future in as_completed(futures):
            outcomes[futures[future]] = future.result()
    return [outcomes[i] for i in range(len(specs))]


def group_results(
    outcomes: Sequence[RunOutcome],
) -> "OrderedDict[Tuple[JailStrategy, int], List[SimulationResult]]":
    """Successful results grouped by (strategy, trial), keeping batch order."""
    blocks: "OrderedDict[Tuple[JailStrategy, int], List[SimulationResult]]" = OrderedDict()
    for outcome in outcomes:
        if outcome.ok:
            key = (outcome.spec.strategy, outcome.spec.trial)
            blocks.setdefault(key, []).append(outcome.result)
    return blocks
