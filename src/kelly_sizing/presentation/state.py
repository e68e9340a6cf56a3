from __future__ import annotations

from dataclasses import dataclass, field

from kelly_sizing.application.use_cases.kelly_calculator import KellyCalculator
from kelly_sizing.application.use_cases.trade_log import trades_from_outcomes
from kelly_sizing.config import (
    UI_DEFAULT_AVG_LOSS,
    UI_DEFAULT_AVG_WIN,
    UI_DEFAULT_FRACTION_MULTIPLIER,
    UI_DEFAULT_MAX_POSITION_FRACTION,
    UI_DEFAULT_RISK_TOLERANCE,
    UI_DEFAULT_TRADE_OUTCOMES,
    UI_DEFAULT_WIN_RATE,
)
from kelly_sizing.domain.entities.trade_record import TradeRecord
from kelly_sizing.domain.value_objects.kelly import KellyOutcome, KellyResult
from kelly_sizing.domain.value_objects.modes import CalculationMode, RiskTolerance
from kelly_sizing.domain.value_objects.risk_adjustment import RiskAdjustment


def default_risk_adjustment() -> RiskAdjustment:
    return RiskAdjustment(
        fraction_multiplier=UI_DEFAULT_FRACTION_MULTIPLIER,
        max_position_fraction=UI_DEFAULT_MAX_POSITION_FRACTION,
        risk_tolerance=RiskTolerance(UI_DEFAULT_RISK_TOLERANCE),
    )


def default_trades() -> tuple[TradeRecord, ...]:
    return trades_from_outcomes(UI_DEFAULT_TRADE_OUTCOMES)


@dataclass
class KellyState:
    """Mutable calculator state owned by the UI; the engine only sees snapshots of it."""

    mode: CalculationMode = CalculationMode.MANUAL
    win_rate: float = UI_DEFAULT_WIN_RATE
    avg_win: float = UI_DEFAULT_AVG_WIN
    avg_loss: float = UI_DEFAULT_AVG_LOSS
    trades: tuple[TradeRecord, ...] = field(default_factory=default_trades)
    risk_adjustment: RiskAdjustment = field(default_factory=default_risk_adjustment)
    result: KellyResult | None = None
    errors: list[str] = field(default_factory=list)

    def payload(self) -> dict[str, float] | tuple[TradeRecord, ...]:
        if self.mode is CalculationMode.FROM_TRADES:
            return self.trades
        return {"win_rate": self.win_rate, "avg_win": self.avg_win, "avg_loss": self.avg_loss}

    def recalculate(self, calculator: KellyCalculator | None = None) -> KellyOutcome:
        outcome = (calculator or KellyCalculator()).compute(self.mode, self.payload(), self.risk_adjustment)
        self.result = outcome.result
        self.errors = outcome.error_messages()
        return outcome

    def reset(self) -> None:
        fresh = KellyState(mode=self.mode)
        self.win_rate = fresh.win_rate
        self.avg_win = fresh.avg_win
        self.avg_loss = fresh.avg_loss
        self.trades = fresh.trades
        self.risk_adjustment = fresh.risk_adjustment
        self.result = None
        self.errors = []
