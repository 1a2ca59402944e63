"""
Training round flow.

    DEALT → AWAITING_ACTION → CORRECT | INCORRECT | UNDETERMINED

A round is dealt and resolved up front by new_round(); submit_action()
grades the user's choice once. UNDETERMINED means the scenario has no
strategy data: no action is graded and no range grid is offered. A reset is
simply a new round.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from .cards import hand_to_str
from .deck import deal_two_cards
from .errors import RoundStateError
from .hand_keys import to_range_key
from .positions import BIG_BLIND, POSITIONS_8MAX, Scenario, position_index
from .ranges import Action, RangeTable, Resolution, StrategyTable, default_strategy

logger = logging.getLogger(__name__)


class Phase(Enum):
    DEALT = auto()
    AWAITING_ACTION = auto()
    CORRECT = auto()
    INCORRECT = auto()
    UNDETERMINED = auto()


FINISHED_PHASES: frozenset[Phase] = frozenset({Phase.CORRECT, Phase.INCORRECT, Phase.UNDETERMINED})


@dataclass(frozen=True)
class Feedback:
    """What the presentation layer shows after an answer."""
    phase: Phase
    message: str
    correct_action: Action | None
    chosen_action: Action
    fallback_fold: bool = False
    show_range: bool = False
    range_table: RangeTable | None = None


@dataclass
class TrainingRound:
    scenario: Scenario
    cards: tuple[int, int]
    range_key: str
    resolution: Resolution
    # Table the resolution came from; None when the scenario has no data.
    range_table: RangeTable | None = None
    phase: Phase = Phase.DEALT
    feedback: Feedback | None = None

    @property
    def cards_str(self) -> str:
        return hand_to_str(self.cards)

    @property
    def is_finished(self) -> bool:
        return self.phase in FINISHED_PHASES


@dataclass
class SessionStats:
    correct: int = 0
    incorrect: int = 0
    undetermined: int = 0
    history: list[tuple[str, Phase]] = field(default_factory=list)

    @property
    def graded(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> float | None:
        """Share of graded rounds answered correctly, None before any."""
        if self.graded == 0:
            return None
        return self.correct / self.graded

    def record(self, rnd: TrainingRound) -> None:
        if rnd.phase is Phase.CORRECT:
            self.correct += 1
        elif rnd.phase is Phase.INCORRECT:
            self.incorrect += 1
        elif rnd.phase is Phase.UNDETERMINED:
            self.undetermined += 1
        else:
            raise RoundStateError(f"Cannot record an unfinished round ({rnd.phase.name})")
        self.history.append((rnd.range_key, rnd.phase))


# ─── Position filtering (UI policy) ───────────────────────────────────────────

def available_openers() -> list[str]:
    """Every position except the big blind may open."""
    return [p for p in POSITIONS_8MAX if p != BIG_BLIND]


def available_defenders(opener: str) -> list[str]:
    """Positions left to act after *opener* (blinds always included)."""
    opener_idx = position_index(opener)
    return [
        p for i, p in enumerate(POSITIONS_8MAX)
        if p != opener and (i > opener_idx or p in ('SB', BIG_BLIND))
    ]


# ─── Round flow ───────────────────────────────────────────────────────────────

def new_round(
    scenario: Scenario,
    strategy: StrategyTable | None = None,
    rng: np.random.Generator | None = None,
) -> TrainingRound:
    """Deal a hand for *scenario* and pre-resolve the correct action."""
    if strategy is None:
        strategy = default_strategy()
    cards = deal_two_cards(rng)
    range_key = to_range_key(*cards)
    resolution = strategy.resolve_action(
        scenario.stack, scenario.opener, scenario.defender, range_key
    )
    table = None
    if resolution.is_determined:
        table = strategy.get_range_table(scenario.stack, scenario.opener, scenario.defender)
    rnd = TrainingRound(scenario, cards, range_key, resolution, range_table=table)
    logger.debug("New round %s: %s (%s)", scenario.label, rnd.cards_str, range_key)
    rnd.phase = Phase.AWAITING_ACTION
    return rnd


def submit_action(rnd: TrainingRound, chosen: Action) -> Feedback:
    """Grade *chosen* against the round's resolution and finish the round.

    A wrong answer reveals the table the round was resolved against.

    Raises:
        RoundStateError: If the round is not awaiting an action.
    """
    if rnd.phase is not Phase.AWAITING_ACTION:
        raise RoundStateError(f"Round is {rnd.phase.name}, not awaiting an action")

    scenario = rnd.scenario
    correct = rnd.resolution.action

    if not rnd.resolution.is_determined:
        phase = Phase.UNDETERMINED
        message = (
            f"No strategy data for {scenario.defender} vs {scenario.opener} "
            f"open at {scenario.stack}bb."
        )
        feedback = Feedback(phase, message, None, chosen)
    elif chosen is correct:
        phase = Phase.CORRECT
        message = f"Correct! GTO play with {rnd.range_key} is {correct.name}."
        feedback = Feedback(phase, message, correct, chosen, fallback_fold=rnd.resolution.is_fallback)
    else:
        phase = Phase.INCORRECT
        message = (
            f"Incorrect. You chose {chosen.name}. "
            f"GTO play with {rnd.range_key} is {correct.name}."
        )
        feedback = Feedback(
            phase,
            message,
            correct,
            chosen,
            fallback_fold=rnd.resolution.is_fallback,
            show_range=True,
            range_table=rnd.range_table,
        )

    rnd.phase = phase
    rnd.feedback = feedback
    return feedback
