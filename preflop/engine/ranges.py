"""
Strategy table model and the range resolution engine.

The strategy asset is a nested JSON document:

    stack -> opener -> "vs_" + defender -> range key -> {"action": "F"|"C"|"R",
                                                       "frequency": 0.0–1.0 (optional)}

It is parsed once into a StrategyTable whose nested mappings are read-only
(MappingProxyType), so a loaded table can be shared freely.

Two queries make up the engine:

    get_range_table(stack, opener, defender)
        — the per-scenario hand table, or None when the scenario is unknown.
    resolve_action(stack, opener, defender, range_key)
        — a Resolution tagged FOUND / HAND_NOT_IN_RANGE / SCENARIO_NOT_FOUND.

A hand missing from a known table resolves to FOLD (tagged as a fallback).
A missing scenario never resolves to an action. An unknown action code in a
present entry raises DataIntegrityError.
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from types import MappingProxyType

from preflop import config

from .errors import DataIntegrityError, InvalidInputError, StrategyFormatError
from .hand_keys import is_range_key
from .positions import (
    BIG_BLIND,
    Scenario,
    defender_key,
    is_position,
    parse_defender_key,
)

logger = logging.getLogger(__name__)


# ─── Enumerations ─────────────────────────────────────────────────────────────

class Action(Enum):
    """Defender actions; the value is the code used in the strategy asset."""
    FOLD = 'F'
    CALL = 'C'
    RAISE = 'R'

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: object) -> Action | None:
        """Return the Action for a data code, or None if the code is unknown."""
        for action in cls:
            if action.value == code:
                return action
        return None


class ResolutionStatus(Enum):
    FOUND = auto()               # Entry present with a known action code
    HAND_NOT_IN_RANGE = auto()   # Table present, hand absent -> FOLD
    SCENARIO_NOT_FOUND = auto()  # No table for stack/opener/defender


# ─── Value types ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ActionEntry:
    """One hand's entry in a scenario table, exactly as stored in the asset."""
    code: str
    frequency: float | None = None


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolve_action()."""
    status: ResolutionStatus
    action: Action | None
    frequency: float | None = None

    @property
    def is_determined(self) -> bool:
        return self.status is not ResolutionStatus.SCENARIO_NOT_FOUND

    @property
    def is_fallback(self) -> bool:
        return self.status is ResolutionStatus.HAND_NOT_IN_RANGE


SCENARIO_NOT_FOUND = Resolution(ResolutionStatus.SCENARIO_NOT_FOUND, None)
FALLBACK_FOLD = Resolution(ResolutionStatus.HAND_NOT_IN_RANGE, Action.FOLD)

RangeTable = Mapping[str, ActionEntry]


# ─── Parsing ──────────────────────────────────────────────────────────────────

def _require_mapping(node: object, where: str) -> Mapping:
    if not isinstance(node, Mapping):
        raise StrategyFormatError(f"Expected an object at {where}, got {type(node).__name__}")
    return node


def _parse_stack(key: object) -> int:
    try:
        return int(key)
    except (TypeError, ValueError):
        raise StrategyFormatError(f"Stack key is not a number: {key!r}") from None


def _parse_entry(node: object, where: str) -> ActionEntry:
    entry = _require_mapping(node, where)
    code = entry.get('action')
    if not isinstance(code, str):
        raise StrategyFormatError(f"Missing action code at {where}")
    frequency = entry.get('frequency')
    if frequency is not None:
        if isinstance(frequency, bool) or not isinstance(frequency, (int, float)):
            raise StrategyFormatError(f"Frequency is not a number at {where}: {frequency!r}")
        frequency = float(frequency)
    return ActionEntry(code=code, frequency=frequency)


# ─── Strategy table ───────────────────────────────────────────────────────────

class StrategyTable:
    """Read-only stack -> opener -> vs_defender -> hand -> ActionEntry lookup."""

    def __init__(
        self,
        tables: Mapping[int, Mapping[str, Mapping[str, RangeTable]]],
        supported_stacks: tuple[int, ...] = config.SUPPORTED_STACK_SIZES,
    ) -> None:
        self._tables = MappingProxyType({
            stack: MappingProxyType({
                opener: MappingProxyType({
                    vs_key: MappingProxyType(dict(hands))
                    for vs_key, hands in by_defender.items()
                })
                for opener, by_defender in by_opener.items()
            })
            for stack, by_opener in tables.items()
        })
        self.supported_stacks = tuple(supported_stacks)

    @classmethod
    def from_dict(
        cls,
        data: Mapping,
        supported_stacks: tuple[int, ...] = config.SUPPORTED_STACK_SIZES,
    ) -> StrategyTable:
        """Build a table from the decoded JSON document.

        Structure is checked strictly; action codes are kept verbatim so a
        corrupt code surfaces when that hand is resolved.

        Raises:
            StrategyFormatError: If a level is not an object, a stack key is
                not numeric, or an entry lacks its action code.
        """
        tables: dict[int, dict[str, dict[str, dict[str, ActionEntry]]]] = {}
        for stack_key, by_opener in _require_mapping(data, 'root').items():
            stack = _parse_stack(stack_key)
            stack_tables = tables.setdefault(stack, {})
            for opener, by_defender in _require_mapping(by_opener, f'{stack}').items():
                opener_tables = stack_tables.setdefault(opener, {})
                for vs_key, hands in _require_mapping(by_defender, f'{stack}/{opener}').items():
                    where = f'{stack}/{opener}/{vs_key}'
                    opener_tables[vs_key] = {
                        hand: _parse_entry(node, f'{where}/{hand}')
                        for hand, node in _require_mapping(hands, where).items()
                    }
        return cls(tables, supported_stacks)

    @property
    def stacks(self) -> tuple[int, ...]:
        return tuple(sorted(self._tables))

    def raw(self) -> Mapping[int, Mapping[str, Mapping[str, RangeTable]]]:
        """The full nested read-only mapping."""
        return self._tables

    def scenarios(self) -> Iterator[Scenario]:
        """Yield every well-formed scenario present in the data."""
        for stack, by_opener in sorted(self._tables.items()):
            for opener, by_defender in by_opener.items():
                for vs_key in by_defender:
                    try:
                        yield Scenario(opener, parse_defender_key(vs_key), stack)
                    except InvalidInputError:
                        logger.debug("Skipping malformed scenario %s/%s/%s", stack, opener, vs_key)

    def get_range_table(self, stack: int, opener: str, defender: str) -> RangeTable | None:
        """Fetch the complete hand table for one scenario.

        Returns None (never raises) when the stack is unsupported, either
        position is missing or unknown, opener == defender, or the data has
        no table for this exact opener/defender pair.
        """
        if stack not in self.supported_stacks:
            logger.warning("Stack size %sbb not currently supported.", stack)
            return None
        if not is_position(opener) or not is_position(defender) or opener == defender:
            logger.warning("Invalid positions for vs open scenario: %s vs %s", opener, defender)
            return None

        table = self._tables.get(stack, {}).get(opener, {}).get(defender_key(defender))
        if table is None:
            logger.warning("Range not found for %s vs %s @ %sbb", defender, opener, stack)
        return table

    def resolve_action(self, stack: int, opener: str, defender: str, range_key: str) -> Resolution:
        """Resolve one hand to its primary action in a scenario.

        Mixing frequencies are reported but not simulated.

        Raises:
            InvalidInputError: If *range_key* is not one of the 169 keys.
            DataIntegrityError: If the entry's action code is not F, C or R.
        """
        if not is_range_key(range_key):
            raise InvalidInputError(f"Not a range key: {range_key!r}")

        table = self.get_range_table(stack, opener, defender)
        if table is None:
            return SCENARIO_NOT_FOUND

        entry = table.get(range_key)
        if entry is None:
            logger.info(
                "Hand %s not found in range for %s vs %s @ %sbb. Defaulting to FOLD.",
                range_key, defender, opener, stack,
            )
            return FALLBACK_FOLD

        action = Action.from_code(entry.code)
        if action is None:
            logger.error(
                "Unknown action code %r in range data for hand %s (%s vs %s @ %sbb).",
                entry.code, range_key, defender, opener, stack,
            )
            raise DataIntegrityError(
                f"Unknown action code {entry.code!r} for {range_key} "
                f"({defender} vs {opener} @ {stack}bb)"
            )
        return Resolution(ResolutionStatus.FOUND, action, entry.frequency)


# ─── Loading and validation ───────────────────────────────────────────────────

def load_strategy(
    path: str | Path,
    supported_stacks: tuple[int, ...] = config.SUPPORTED_STACK_SIZES,
) -> StrategyTable:
    """Read a strategy JSON asset from disk."""
    path = Path(path)
    with path.open(encoding='utf-8') as f:
        data = json.load(f)
    table = StrategyTable.from_dict(data, supported_stacks)
    logger.info("Loaded strategy %s (stacks: %s)", path.name, list(table.stacks))
    return table


@functools.cache
def default_strategy() -> StrategyTable:
    """The process-wide strategy table, loaded on first use."""
    return load_strategy(config.STRATEGY_PATH)


def validate_strategy(table: StrategyTable) -> list[str]:
    """Return a human-readable list of problems in *table* (empty if clean)."""
    problems: list[str] = []
    for stack, by_opener in table.raw().items():
        if stack not in table.supported_stacks:
            problems.append(f"{stack}: stack not in supported sizes {table.supported_stacks}")
        for opener, by_defender in by_opener.items():
            if not is_position(opener):
                problems.append(f"{stack}/{opener}: unknown opener position")
            elif opener == BIG_BLIND:
                problems.append(f"{stack}/{opener}: the big blind cannot open")
            for vs_key, hands in by_defender.items():
                where = f"{stack}/{opener}/{vs_key}"
                try:
                    defender = parse_defender_key(vs_key)
                except InvalidInputError as exc:
                    problems.append(f"{where}: {exc}")
                else:
                    if defender == opener:
                        problems.append(f"{where}: opener and defender are the same")
                for hand, entry in hands.items():
                    if not is_range_key(hand):
                        problems.append(f"{where}/{hand}: not a range key")
                    if Action.from_code(entry.code) is None:
                        problems.append(f"{where}/{hand}: unknown action code {entry.code!r}")
                    if entry.frequency is not None and not 0.0 <= entry.frequency <= 1.0:
                        problems.append(f"{where}/{hand}: frequency {entry.frequency} outside [0, 1]")
    return problems


# ─── Engine boundary (default table) ──────────────────────────────────────────

def get_range_table(
    stack: int,
    opener: str,
    defender: str,
    strategy: StrategyTable | None = None,
) -> RangeTable | None:
    """Module-level get_range_table() against *strategy* or the default table."""
    if strategy is None:
        strategy = default_strategy()
    return strategy.get_range_table(stack, opener, defender)


def resolve_action(
    stack: int,
    opener: str,
    defender: str,
    range_key: str,
    strategy: StrategyTable | None = None,
) -> Resolution:
    """Module-level resolve_action() against *strategy* or the default table."""
    if strategy is None:
        strategy = default_strategy()
    return strategy.resolve_action(stack, opener, defender, range_key)
