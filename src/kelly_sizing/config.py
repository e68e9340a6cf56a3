from __future__ import annotations

import os
from pathlib import Path
from typing import Final

DEFAULT_FRACTION_MULTIPLIER: Final[float] = 1.0
DEFAULT_MAX_POSITION_FRACTION: Final[float] = 1.0

# Raw Kelly above this is flagged as aggressive.
HIGH_KELLY_THRESHOLD: Final[float] = 0.25
MIN_RELIABLE_TRADES: Final[int] = 30

# (raw Kelly floor, estimated risk of ruin), checked top-down.
RISK_OF_RUIN_BUCKETS: Final[tuple[tuple[float, float], ...]] = (
    (0.25, 0.10),
    (0.10, 0.05),
)
RISK_OF_RUIN_FLOOR: Final[float] = 0.01

RISK_TOLERANCE_FACTORS: Final[dict[str, float]] = {
    "conservative": 0.5,
    "moderate": 0.75,
    "aggressive": 1.0,
}

# Calculator form defaults.
UI_DEFAULT_WIN_RATE: Final[float] = 60.0
UI_DEFAULT_AVG_WIN: Final[float] = 100.0
UI_DEFAULT_AVG_LOSS: Final[float] = 50.0
UI_DEFAULT_TRADE_OUTCOMES: Final[tuple[float, ...]] = (100.0, -50.0, 150.0, -30.0)
UI_DEFAULT_FRACTION_MULTIPLIER: Final[float] = 0.5
UI_DEFAULT_MAX_POSITION_FRACTION: Final[float] = 0.25
UI_DEFAULT_RISK_TOLERANCE: Final[str] = "moderate"

GROWTH_CURVE_POINTS: Final[int] = 101

TRADES_CSV_PATH: Final[Path] = Path(os.getenv("KELLY_TRADES_PATH", "data/trades/trades.csv"))
EXPORT_DIR: Final[Path] = Path(os.getenv("KELLY_EXPORT_DIR", "exports"))
