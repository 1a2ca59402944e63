"""Textual range reports.

    summarize_range(table)           — combo counts per action for one scenario
    print_range_summary(scenario, s) — one scenario block
    print_strategy_overview(strategy)— every scenario in a loaded table
    range_summary_frame(strategy)    — the same overview as a pandas DataFrame

Percentages are of all 1326 starting-hand combos. Hands missing from a table
count as "missing" here even though the engine resolves them to FOLD.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from preflop.engine.hand_keys import TOTAL_COMBOS, all_range_keys, range_key_combos
from preflop.engine.positions import Scenario
from preflop.engine.ranges import Action, RangeTable, StrategyTable


@dataclass(frozen=True)
class RangeSummary:
    raise_combos: int
    call_combos: int
    fold_combos: int
    missing_combos: int
    unknown_combos: int
    mixed_hands: int

    @property
    def defend_combos(self) -> int:
        return self.raise_combos + self.call_combos

    def pct(self, combos: int) -> float:
        return 100.0 * combos / TOTAL_COMBOS


def summarize_range(table: RangeTable) -> RangeSummary:
    counts = {action: 0 for action in Action}
    missing = unknown = mixed = 0
    for key in all_range_keys():
        combos = range_key_combos(key)
        entry = table.get(key)
        if entry is None:
            missing += combos
            continue
        if entry.frequency is not None and entry.frequency < 1.0:
            mixed += 1
        action = Action.from_code(entry.code)
        if action is None:
            unknown += combos
        else:
            counts[action] += combos
    return RangeSummary(
        raise_combos=counts[Action.RAISE],
        call_combos=counts[Action.CALL],
        fold_combos=counts[Action.FOLD],
        missing_combos=missing,
        unknown_combos=unknown,
        mixed_hands=mixed,
    )


def print_range_summary(scenario: Scenario, summary: RangeSummary) -> None:
    print(f"  {scenario.label}")
    print(
        f"    Raise {summary.pct(summary.raise_combos):5.1f}%   "
        f"Call {summary.pct(summary.call_combos):5.1f}%   "
        f"Fold {summary.pct(summary.fold_combos):5.1f}%   "
        f"Defend {summary.pct(summary.defend_combos):5.1f}%"
    )
    if summary.missing_combos or summary.unknown_combos:
        print(
            f"    Missing {summary.missing_combos} combos, "
            f"unknown codes {summary.unknown_combos} combos"
        )
    if summary.mixed_hands:
        print(f"    Mixed-frequency hands: {summary.mixed_hands}")


def print_strategy_overview(strategy: StrategyTable) -> None:
    """Print a summary block for every scenario in *strategy*."""
    print("=" * 64)
    print("Preflop Strategy Overview")
    print("=" * 64)
    for scenario in strategy.scenarios():
        table = strategy.get_range_table(scenario.stack, scenario.opener, scenario.defender)
        if table is None:
            continue
        print_range_summary(scenario, summarize_range(table))


def range_summary_frame(strategy: StrategyTable) -> pd.DataFrame:
    """One row per scenario with action percentages, for tables in the dashboard."""
    rows = []
    for scenario in strategy.scenarios():
        table = strategy.get_range_table(scenario.stack, scenario.opener, scenario.defender)
        if table is None:
            continue
        s = summarize_range(table)
        rows.append(
            {
                "Stack": scenario.stack,
                "Opener": scenario.opener,
                "Defender": scenario.defender,
                "Raise %": round(s.pct(s.raise_combos), 1),
                "Call %": round(s.pct(s.call_combos), 1),
                "Fold %": round(s.pct(s.fold_combos), 1),
                "Missing combos": s.missing_combos,
            }
        )
    return pd.DataFrame(
        rows,
        columns=["Stack", "Opener", "Defender", "Raise %", "Call %", "Fold %", "Missing combos"],
    )


# ─── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import sys

    from preflop.engine.ranges import default_strategy, load_strategy, validate_strategy

    strategy = load_strategy(sys.argv[1]) if len(sys.argv) > 1 else default_strategy()
    problems = validate_strategy(strategy)
    print_strategy_overview(strategy)
    print()
    if problems:
        print(f"{len(problems)} data problem(s):")
        for p in problems:
            print(f"  - {p}")
        sys.exit(1)
    print("Strategy data validated: no problems.")
