"""Exception types raised by the engine.

Expected conditions (scenario not found, hand missing from a range) are
return values, not exceptions. Everything here signals a bug upstream.
"""

from __future__ import annotations


class PreflopError(Exception):
    """Base class for all trainer errors."""


class InvalidInputError(PreflopError, ValueError):
    """A malformed card, rank or position was passed to a pure function."""


class InvalidCardError(InvalidInputError):
    pass


class InvalidPositionError(InvalidInputError):
    pass


class DataIntegrityError(PreflopError):
    """A strategy entry exists but its action code is not F, C or R."""


class StrategyFormatError(DataIntegrityError):
    """The strategy asset does not have the stack/opener/vs_defender/hand shape."""


class RoundStateError(PreflopError):
    """An action was submitted for a round that is not awaiting one."""
