"""
Range keys: the canonical 169-way classification of a two-card hand.

    Pair     : "TT"   (rank repeated, no suffix)
    Suited   : "AKs"  (higher rank first, both cards same suit)
    Offsuit  : "72o"  (higher rank first, different suits)

Grid layout (13×13, rows/cols ordered A, K, Q, ..., 2):
    diagonal        = pairs
    upper triangle  = suited hands   (row = higher rank)
    lower triangle  = offsuit hands  (row = lower rank)
"""

from __future__ import annotations

import functools

from .cards import RANK_NAMES, RANKS_BY_STRENGTH, card_rank, card_suit, to_card
from .errors import InvalidCardError

GRID_SIZE: int = 13

PAIR_COMBOS: int = 6
SUITED_COMBOS: int = 4
OFFSUIT_COMBOS: int = 12
TOTAL_COMBOS: int = 1326


def to_range_key(card_a: int | str, card_b: int | str) -> str:
    """Map two concrete cards to their range key.

    Order independent: to_range_key(a, b) == to_range_key(b, a).
    Suitedness is read from the two cards as given.

    Raises:
        InvalidCardError: If either card is malformed, or both are the same card.

    Examples:
        >>> to_range_key('As', 'Kd')
        'AKo'
        >>> to_range_key('2h', '7h')
        '72s'
        >>> to_range_key('Tc', 'Td')
        'TT'
    """
    a = to_card(card_a)
    b = to_card(card_b)
    if a == b:
        raise InvalidCardError(f"Same card twice: {card_a!r}, {card_b!r}")

    rank_a, rank_b = card_rank(a), card_rank(b)
    if rank_a == rank_b:
        return RANK_NAMES[rank_a] * 2

    high, low = max(rank_a, rank_b), min(rank_a, rank_b)
    suffix = 's' if card_suit(a) == card_suit(b) else 'o'
    return RANK_NAMES[high] + RANK_NAMES[low] + suffix


def grid_index_to_range_key(row: int, col: int) -> str:
    """Return the range key shown at (row, col) of the 13×13 grid."""
    if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
        raise ValueError(f"Grid index out of range: {(row, col)}")
    if row == col:
        return RANKS_BY_STRENGTH[row] * 2
    high, low = min(row, col), max(row, col)
    suffix = 's' if row < col else 'o'
    return RANKS_BY_STRENGTH[high] + RANKS_BY_STRENGTH[low] + suffix


def range_key_to_grid_index(key: str) -> tuple[int, int]:
    """Return the (row, col) grid cell of a range key.

    Raises:
        ValueError: If *key* is not one of the 169 range keys.
    """
    if not is_range_key(key):
        raise ValueError(f"Not a range key: {key!r}")
    high = RANKS_BY_STRENGTH.index(key[0])
    low = RANKS_BY_STRENGTH.index(key[1])
    if len(key) == 2:
        return high, high
    if key[2] == 's':
        return high, low
    return low, high


@functools.cache
def all_range_keys() -> tuple[str, ...]:
    """All 169 range keys in grid order (row by row)."""
    return tuple(
        grid_index_to_range_key(r, c)
        for r in range(GRID_SIZE)
        for c in range(GRID_SIZE)
    )


def is_range_key(key: object) -> bool:
    """True if *key* is exactly one of the 169 canonical range keys."""
    return isinstance(key, str) and key in _RANGE_KEY_SET


def range_key_combos(key: str) -> int:
    """Number of concrete two-card combos behind a range key (6, 4 or 12)."""
    if not is_range_key(key):
        raise ValueError(f"Not a range key: {key!r}")
    if len(key) == 2:
        return PAIR_COMBOS
    return SUITED_COMBOS if key[2] == 's' else OFFSUIT_COMBOS


_RANGE_KEY_SET: frozenset[str] = frozenset(all_range_keys())
