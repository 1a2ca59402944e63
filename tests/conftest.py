"""
Shared pytest fixtures for the preflop trainer tests.

Provides a card-string hand builder and small in-memory strategy tables with
known gaps (CO has no table vs BU) and one corrupt action code (UTG vs BB, KK).
"""

from __future__ import annotations

import pytest

from preflop.engine.cards import str_to_card
from preflop.engine.ranges import StrategyTable, default_strategy

SAMPLE_DATA: dict = {
    "40": {
        "CO": {
            "vs_BB": {
                "AA": {"action": "R"},
                "AKs": {"action": "R", "frequency": 0.7},
                "KQo": {"action": "C"},
                "72o": {"action": "F"},
            },
        },
        "UTG": {
            "vs_BB": {
                "AA": {"action": "R"},
                "KK": {"action": "X"},
            },
        },
    },
}


def hand(*card_strs: str) -> tuple[int, ...]:
    """Build a hand tuple from human-readable card strings.

    Examples:
        >>> hand('As', 'Ah')
        (51, 50)
    """
    return tuple(str_to_card(s) for s in card_strs)


@pytest.fixture
def sample_strategy() -> StrategyTable:
    """Tiny table: CO vs BB (4 hands) and UTG vs BB (with a corrupt entry)."""
    return StrategyTable.from_dict(SAMPLE_DATA)


@pytest.fixture(scope="session")
def shipped_strategy() -> StrategyTable:
    """The 40bb 8-max asset under data/."""
    return default_strategy()


@pytest.fixture
def h():
    """Expose the hand() helper as a fixture for convenience."""
    return hand
