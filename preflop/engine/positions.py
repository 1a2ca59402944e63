"""
8-max table positions and the (opener, defender, stack) scenario.

Positions are listed in preflop acting order. The big blind never opens.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidPositionError

POSITIONS_8MAX: tuple[str, ...] = ('UTG', 'UTG+1', 'LJ', 'HJ', 'CO', 'BU', 'SB', 'BB')
BIG_BLIND: str = 'BB'

VS_PREFIX: str = 'vs_'


def is_position(pos: object) -> bool:
    return isinstance(pos, str) and pos in POSITIONS_8MAX


def position_index(pos: str) -> int:
    """Acting-order index of a position (UTG = 0, BB = 7).

    Raises:
        InvalidPositionError: If *pos* is not an 8-max position.
    """
    if not is_position(pos):
        raise InvalidPositionError(f"Unknown position: {pos!r}")
    return POSITIONS_8MAX.index(pos)


def defender_key(defender: str) -> str:
    """Key under which a defender's table is stored, e.g. 'BU' -> 'vs_BU'."""
    return VS_PREFIX + defender


def parse_defender_key(key: str) -> str:
    """Inverse of defender_key().

    Raises:
        InvalidPositionError: If the key lacks the prefix or names no position.
    """
    if not key.startswith(VS_PREFIX):
        raise InvalidPositionError(f"Defender key must start with {VS_PREFIX!r}: {key!r}")
    pos = key[len(VS_PREFIX):]
    position_index(pos)
    return pos


@dataclass(frozen=True)
class Scenario:
    """One training spot: *opener* raises, *defender* must respond.

    Frozen so it can key caches and compare by value.
    """
    opener: str
    defender: str
    stack: int

    def __post_init__(self) -> None:
        position_index(self.opener)
        position_index(self.defender)
        if self.opener == self.defender:
            raise InvalidPositionError(f"Opener and defender are both {self.opener}")
        if self.opener == BIG_BLIND:
            raise InvalidPositionError("The big blind cannot open")

    @property
    def label(self) -> str:
        return f"{self.defender} vs {self.opener} open ({self.stack}bb)"
