from __future__ import annotations

from enum import Enum


class CalculationMode(str, Enum):
    MANUAL = "manual"
    FROM_TRADES = "from_trades"

    @classmethod
    def _missing_(cls, value: object) -> "CalculationMode | None":
        if value == "fromTrades":
            return cls.FROM_TRADES
        return None


class RiskTolerance(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class ErrorCategory(str, Enum):
    INVALID_RANGE = "invalid_range"
    INSUFFICIENT_DATA = "insufficient_data"
    DIVISION_BY_ZERO = "division_by_zero"
