"""
CLI for running occupancy simulations and writing the report.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from pydantic import ValidationError

from monopoly_sim.report import format_report, write_report
from monopoly_sim.runner import execute_runs, group_results, plan_runs
from monopoly_sim.settings import SimulationSettings, get_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate how often each Monopoly square is landed on"
    )
    parser.add_argument(
        "-t",
        "--turns",
        type=str,
        help="Comma-separated turn counts (default: 1000,10000,100000,1000000)",
    )
    parser.add_argument(
        "-n",
        "--trials",
        type=int,
        help="Repetitions per strategy (default: 10)",
    )
    parser.add_argument(
        "-s",
        "--strategy",
        action="append",
        help="Jail strategy: immediate/A or doubles_or_three/B (repeatable; default: both)",
    )
    parser.add_argument("--seed", type=int, help="Base seed for reproducible results")
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        help="Number of parallel worker processes (default: 1)",
    )
    parser.add_argument("-o", "--output", type=str, help="Report file (default: results.txt)")
    parser.add_argument("--data-dir", type=str, help="Directory with replacement CSV files")
    parser.add_argument("--log-level", type=str, help="Logging level (default: INFO)")
    return parser


def settings_from_args(args: argparse.Namespace) -> SimulationSettings:
    """Environment settings with command-line values taking precedence."""
    overrides = {
        "turn_counts": args.turns,
        "trials": args.trials,
        "strategies": args.strategy,
        "seed": args.seed,
        "workers": args.workers,
        "output_path": args.output,
        "data_dir": args.data_dir,
        "log_level": args.log_level,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return get_settings()
    return SimulationSettings(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        print(f"❌ Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    specs = plan_runs(settings)
    print(f"🎲 Running {len(specs)} simulations with {settings.workers} worker(s)...")
    started = time.perf_counter()
    outcomes = execute_runs(specs, workers=settings.workers)
    logger.info(f"All runs finished in {time.perf_counter() - started:.1f}s")

    failures = [o.error for o in outcomes if not o.ok]
    report = format_report(group_results(outcomes), settings.trials, failures)
    path = write_report(settings.output_path, report)

    print(f"✅ See {path} for output")
    if failures:
        print(f"❌ {len(failures)} run(s) failed", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
