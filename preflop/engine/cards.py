"""
Card constants, encoding, and human-readable I/O helpers.

Card encoding (integer 0–51):
    rank_index = card // 4  ->  0=2, 1=3, ..., 7=9, 8=T, 9=J, 10=Q, 11=K, 12=A
    suit_index = card % 4   ->  0=c, 1=d, 2=h, 3=s

A higher rank_index is a stronger rank, so comparing indices orders hands.
String representations ("As", "Td") are used only at I/O boundaries.
"""

from __future__ import annotations

import operator

from .errors import InvalidCardError

RANK_NAMES: list[str] = ['2', '3', '4', '5', '6', '7', '8', '9', 'T', 'J', 'Q', 'K', 'A']
SUIT_NAMES: list[str] = ['c', 'd', 'h', 's']

# Strongest first, the order used by range grids and charts.
RANKS_BY_STRENGTH: list[str] = RANK_NAMES[::-1]

DECK_SIZE: int = 52


def validate_card(card: int) -> int:
    """Return *card* as a plain int if it is a valid card index.

    Any integer type is accepted, so values taken straight from a numpy deck
    work too.

    Raises:
        InvalidCardError: If *card* is not an integer in 0–51.
    """
    if isinstance(card, bool):
        raise InvalidCardError(f"Not a card index: {card!r}")
    try:
        index = operator.index(card)
    except TypeError:
        raise InvalidCardError(f"Not a card index: {card!r}") from None
    if not 0 <= index < DECK_SIZE:
        raise InvalidCardError(f"Not a card index: {card!r}")
    return index


def card_rank(card: int) -> int:
    """Return the rank index (0–12) of a card.

    Examples:
        >>> card_rank(0)   # 2 of clubs
        0
        >>> card_rank(51)  # Ace of spades
        12
    """
    return card // 4


def card_suit(card: int) -> int:
    """Return the suit index (0–3) of a card.

    Examples:
        >>> card_suit(0)   # 2 of clubs
        0
        >>> card_suit(51)  # Ace of spades
        3
    """
    return card % 4


def card_to_str(card: int) -> str:
    """Convert a card integer to its human-readable string representation.

    Examples:
        >>> card_to_str(0)
        '2c'
        >>> card_to_str(51)
        'As'
        >>> card_to_str(34)
        'Th'
    """
    validate_card(card)
    return RANK_NAMES[card // 4] + SUIT_NAMES[card % 4]


def str_to_card(s: str) -> int:
    """Parse a human-readable card string to its integer encoding.

    The format is <rank><suit>: rank one of '2'-'9', 'T', 'J', 'Q', 'K', 'A'
    and suit one of 'c', 'd', 'h', 's'. Case is ignored.

    Raises:
        InvalidCardError: If the string is not a recognisable card.

    Examples:
        >>> str_to_card('2c')
        0
        >>> str_to_card('As')
        51
        >>> str_to_card('TD')
        33
    """
    if not isinstance(s, str) or len(s) != 2:
        raise InvalidCardError(f"Bad card string: {s!r}")
    rank_char = s[0].upper()
    suit_char = s[1].lower()
    if rank_char not in RANK_NAMES:
        raise InvalidCardError(f"Unrecognised rank in card {s!r}")
    if suit_char not in SUIT_NAMES:
        raise InvalidCardError(f"Unrecognised suit in card {s!r}")
    return RANK_NAMES.index(rank_char) * 4 + SUIT_NAMES.index(suit_char)


def to_card(card: int | str) -> int:
    """Accept either encoding and return the card integer."""
    if isinstance(card, str):
        return str_to_card(card)
    return validate_card(card)


def hand_to_str(cards: tuple[int, ...]) -> str:
    """Convert a hand (tuple of card ints) to a human-readable string.

    Examples:
        >>> hand_to_str((51, 46))
        'As Kh'
    """
    return ' '.join(card_to_str(c) for c in cards)
