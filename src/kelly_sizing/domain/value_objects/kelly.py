from __future__ import annotations

from pydantic import Field, model_validator

from kelly_sizing.domain.base import FrozenDomainModel
from kelly_sizing.domain.value_objects.modes import CalculationMode, ErrorCategory


class KellyFormData(FrozenDomainModel):
    """Manually entered statistics. ``win_rate`` is a percentage."""

    win_rate: float = Field(..., ge=0.0, le=100.0, allow_inf_nan=False)
    avg_win: float = Field(..., ge=0.0, allow_inf_nan=False)
    avg_loss: float = Field(..., ge=0.0, allow_inf_nan=False)

    def win_probability(self) -> float:
        return self.win_rate / 100.0


class TradeStatistics(FrozenDomainModel):
    win_rate: float = Field(default=0.0, ge=0.0, le=100.0)
    avg_win: float = Field(default=0.0, ge=0.0)
    avg_loss: float = Field(default=0.0, ge=0.0)
    total_trades: int = Field(default=0, ge=0)
    win_count: int = Field(default=0, ge=0)
    loss_count: int = Field(default=0, ge=0)
    breakeven_count: int = Field(default=0, ge=0)
    gross_profit: float = Field(default=0.0, ge=0.0)
    gross_loss: float = Field(default=0.0, ge=0.0)

    def to_form_data(self) -> KellyFormData:
        return KellyFormData(win_rate=self.win_rate, avg_win=self.avg_win, avg_loss=self.avg_loss)


class KellyResult(FrozenDomainModel):
    mode: CalculationMode
    raw_kelly_fraction: float = Field(..., allow_inf_nan=False)
    adjusted_fraction: float = Field(..., ge=0.0, le=1.0)
    recommended_position_percentage: float = Field(..., ge=0.0, le=100.0)
    warnings: tuple[str, ...] = ()
    win_rate: float
    avg_win: float
    avg_loss: float
    payoff_ratio: float | None = Field(default=None, allow_inf_nan=False)
    profit_factor: float | None = Field(default=None, allow_inf_nan=False)
    expected_value: float = Field(..., allow_inf_nan=False)
    risk_of_ruin: float = Field(..., ge=0.0, le=1.0)
    recommendation: str
    total_trades: int | None = None

    @property
    def has_edge(self) -> bool:
        return self.raw_kelly_fraction > 0


class KellyError(FrozenDomainModel):
    category: ErrorCategory
    message: str
    field: str | None = None


class KellyOutcome(FrozenDomainModel):
    """Either a result or a non-empty error list, never both."""

    result: KellyResult | None = None
    errors: tuple[KellyError, ...] = ()

    @model_validator(mode="after")
    def _result_xor_errors(self) -> "KellyOutcome":
        if (self.result is None) == (not self.errors):
            raise ValueError("outcome must carry exactly one of result or errors")
        return self

    @property
    def ok(self) -> bool:
        return self.result is not None

    def error_categories(self) -> list[ErrorCategory]:
        return [error.category for error in self.errors]

    def error_messages(self) -> list[str]:
        return [error.message for error in self.errors]
