"""
Deck creation and card dealing operations.

The deck is a numpy int8 array of length 52.
    1 = card is available in the deck
    0 = card has been dealt

Integer encoding: card // 4 = rank index, card % 4 = suit index.
No deck outlives a single deal: deal_two_cards() builds its own.
"""

from __future__ import annotations

import numpy as np

from .cards import DECK_SIZE


def create_deck() -> np.ndarray:
    """Create a fresh, full 52-card deck.

    Returns:
        np.ndarray: int8 array of shape (52,), all 1s (all cards available).

    Examples:
        >>> deck = create_deck()
        >>> deck.sum()
        52
    """
    return np.ones(DECK_SIZE, dtype=np.int8)


def available_cards(deck: np.ndarray) -> np.ndarray:
    """Return the indices of cards still available in the deck."""
    return np.where(deck == 1)[0]


def cards_remaining(deck: np.ndarray) -> int:
    """Return the count of cards still available in the deck."""
    return int(deck.sum())


def deal_card(deck: np.ndarray, rng: np.random.Generator | None = None) -> int:
    """Draw one random available card from the deck and mark it as dealt.

    Args:
        deck: Mutable deck array — modified in place.
        rng:  Optional generator; the global numpy random state is used
              when omitted.

    Returns:
        The integer index of the dealt card.

    Raises:
        ValueError: If the deck is empty.

    Examples:
        >>> deck = create_deck()
        >>> card = deal_card(deck)
        >>> cards_remaining(deck)
        51
    """
    avail = available_cards(deck)
    if len(avail) == 0:
        raise ValueError("Cannot deal from an empty deck.")
    choose = rng.choice if rng is not None else np.random.choice
    card = int(choose(avail))
    deck[card] = 0
    return card


def deal_two_cards(rng: np.random.Generator | None = None) -> tuple[int, int]:
    """Deal a two-card hand from a fresh deck without replacement.

    Both cards are drawn uniformly from the cards still in the deck, so the
    pair is always distinct.

    Examples:
        >>> a, b = deal_two_cards(np.random.default_rng(7))
        >>> a != b
        True
    """
    deck = create_deck()
    first = deal_card(deck, rng)
    second = deal_card(deck, rng)
    return first, second
