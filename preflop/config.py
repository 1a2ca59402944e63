"""
Trainer-wide settings: supported stacks, data asset location, defaults.

Environment overrides:
    PREFLOP_STRATEGY_PATH  — path to an alternative strategy JSON asset.
    PREFLOP_LOG_LEVEL      — logging level name for the dashboard.
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

# Effective stacks (in big blinds) that have a strategy table.
SUPPORTED_STACK_SIZES: tuple[int, ...] = (40,)
DEFAULT_STACK: int = 40

STRATEGY_PATH: Path = Path(
    os.environ.get(
        "PREFLOP_STRATEGY_PATH",
        PROJECT_ROOT / "data" / "gtoRanges_40bb_8max.json",
    )
)

# Static open size shown on the table; not stack dependent.
OPEN_SIZE_BB: float = 2.3

DEFAULT_OPENER: str = "CO"
DEFAULT_DEFENDER: str = "BU"

LOG_LEVEL: str = os.environ.get("PREFLOP_LOG_LEVEL", "INFO").upper()
