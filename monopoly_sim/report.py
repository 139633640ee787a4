"""
Text report of visit counts and percentages.
"""

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from monopoly_sim.config import JailStrategy
from monopoly_sim.engine import SimulationResult

RULE_WIDTH = 89


def column_label(turn_count: int) -> str:
    return f"n = {turn_count:,}"


def visit_table(results: Sequence[SimulationResult]) -> pd.DataFrame:
    """
    One row per square, a Count and % column pair per result.

    Results are laid out left to right in the order given; all of them must
    come from the same board.
    """
    if not results:
        raise ValueError("visit_table needs at least one result")

    names = [s.name for s in results[0].squares]
    index = pd.MultiIndex.from_tuples(
        [(s.position, s.name) for s in results[0].squares], names=["position", "Square"]
    )
    frames = []
    for result in results:
        if [s.name for s in result.squares] != names:
            raise ValueError("results come from different boards")
        frame = result.to_frame()
        frames.append(
            pd.DataFrame(
                {"Count": frame["visits"].to_numpy(), "%": frame["percent"].to_numpy()},
                index=index,
            )
        )

    table = pd.concat(frames, axis=1, keys=[column_label(r.turn_count) for r in results])
    return table.droplevel("position")


def format_block(title: str, results: Sequence[SimulationResult]) -> str:
    """Titled table for one trial."""
    table = visit_table(results)
    body = table.to_string(float_format=lambda v: f"{v:.2f}%")
    lines = [title.center(RULE_WIDTH).rstrip(), "-" * RULE_WIDTH, body]

    jail_turns = [r.jail_turns for r in results]
    if any(jail_turns):
        lines.append("")
        lines.append(
            "Turns spent rolling in jail: "
            + " | ".join(f"{column_label(r.turn_count)}: {r.jail_turns:,}" for r in results)
        )
    return "\n".join(lines)


def mean_percentages(results: Sequence[SimulationResult]) -> pd.DataFrame:
    """Mean visit percentage per square across trials, by strategy and turn count."""
    rows = []
    for result in results:
        for square, percent in zip(result.squares, result.percentages()):
            rows.append(
                {
                    "Square": square.name,
                    "position": square.position,
                    "strategy": result.strategy.label,
                    "turns": column_label(result.turn_count),
                    "%": percent,
                }
            )
    df = pd.DataFrame(rows)
    table = df.pivot_table(
        index=["position", "Square"],
        columns=["strategy", "turns"],
        values="%",
        aggfunc="mean",
        sort=False,
    )
    return table.droplevel("position")


def format_report(
    blocks: Dict[Tuple[JailStrategy, int], List[SimulationResult]],
    trials: int,
    failures: Sequence[str] = (),
) -> str:
    """Render every trial block, then the cross-trial means."""
    sections = []
    for (strategy, trial), results in blocks.items():
        title = f"Strategy {strategy.label} Simulation #{trial + 1} of {trials}"
        sections.append(format_block(title, results))

    all_results = [r for results in blocks.values() for r in results]
    if all_results:
        means = mean_percentages(all_results)
        sections.append(
            "\n".join(
                [
                    "Mean % across trials".center(RULE_WIDTH).rstrip(),
                    "-" * RULE_WIDTH,
                    means.to_string(float_format=lambda v: f"{v:.2f}%"),
                ]
            )
        )

    if failures:
        sections.append("Failed runs:\n" + "\n".join(f"  - {f}" for f in failures))

    return "\n\n\n".join(sections) + "\n"


def write_report(path: Path, text: str) -> Path:
    """Write the report, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
