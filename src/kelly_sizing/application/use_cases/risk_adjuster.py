from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from kelly_sizing.application.use_cases.kelly_estimator import payoff_ratio
from kelly_sizing.application.use_cases.trade_aggregator import active_trades
from kelly_sizing.config import (
    HIGH_KELLY_THRESHOLD,
    MIN_RELIABLE_TRADES,
    RISK_OF_RUIN_BUCKETS,
    RISK_OF_RUIN_FLOOR,
)
from kelly_sizing.domain.entities.trade_record import TradeRecord
from kelly_sizing.domain.value_objects.kelly import (
    KellyError,
    KellyFormData,
    KellyResult,
    TradeStatistics,
)
from kelly_sizing.domain.value_objects.modes import CalculationMode, ErrorCategory
from kelly_sizing.domain.value_objects.risk_adjustment import RiskAdjustment

NON_POSITIVE_EDGE_WARNING = "negative or zero edge - no position recommended"
NO_USABLE_TRADES_MESSAGE = "no usable trade records - log at least one winning or losing trade"
OVERSIZED_TRADES_MESSAGE = "trade outcomes are too large to aggregate"

FIELD_MESSAGES: dict[str, str] = {
    "win_rate": "win rate must be between 0 and 100",
    "avg_win": "average win must be zero or greater",
    "avg_loss": "average loss must be zero or greater",
    "fraction_multiplier": "Kelly fraction multiplier must be greater than 0 and at most 1",
    "max_position_fraction": "maximum position fraction must be greater than 0 and at most 1",
    "risk_tolerance": "risk tolerance must be conservative, moderate or aggressive",
    "outcome": "trade outcome must be a finite number",
}


@dataclass(frozen=True)
class ValidatedRequest:
    mode: CalculationMode
    adjustment: RiskAdjustment
    form: KellyFormData | None = None
    trades: tuple[TradeRecord, ...] = ()


def _errors_from_validation(exc: ValidationError, prefix: str = "") -> list[KellyError]:
    errors: list[KellyError] = []
    for detail in exc.errors():
        loc = [str(part) for part in detail.get("loc", ())]
        field_name = loc[-1] if loc else ""
        path = ".".join(loc)
        if prefix:
            path = f"{prefix}.{path}" if path else prefix
        message = FIELD_MESSAGES.get(field_name)
        if message is None:
            message = f"{path or 'input'}: {detail.get('msg', 'invalid value')}"
        errors.append(KellyError(category=ErrorCategory.INVALID_RANGE, message=message, field=path or None))
    return errors


def _validate_mode(mode: CalculationMode | str) -> tuple[CalculationMode | None, list[KellyError]]:
    try:
        return CalculationMode(mode), []
    except ValueError:
        return None, [
            KellyError(
                category=ErrorCategory.INVALID_RANGE,
                message=f"unknown calculation mode: {mode!r}",
                field="mode",
            )
        ]


def _validate_adjustment(
    adjustment: RiskAdjustment | Mapping[str, Any] | None,
) -> tuple[RiskAdjustment | None, list[KellyError]]:
    if adjustment is None:
        return RiskAdjustment(), []
    if isinstance(adjustment, RiskAdjustment):
        return adjustment, []
    try:
        return RiskAdjustment.model_validate(adjustment), []
    except ValidationError as exc:
        return None, _errors_from_validation(exc)


def _validate_form(payload: Any) -> tuple[KellyFormData | None, list[KellyError]]:
    if isinstance(payload, KellyFormData):
        return payload, []
    try:
        return KellyFormData.model_validate(payload), []
    except ValidationError as exc:
        return None, _errors_from_validation(exc)


def _validate_trades(payload: Any) -> tuple[tuple[TradeRecord, ...], list[KellyError]]:
    if isinstance(payload, (str, bytes, Mapping)) or not isinstance(payload, Sequence):
        return (), [
            KellyError(
                category=ErrorCategory.INVALID_RANGE,
                message="trade records must be supplied as a sequence",
                field="trades",
            )
        ]

    records: list[TradeRecord] = []
    errors: list[KellyError] = []
    for index, item in enumerate(payload):
        if isinstance(item, TradeRecord):
            records.append(item)
            continue
        try:
            records.append(TradeRecord.model_validate(item))
        except ValidationError as exc:
            errors.extend(_errors_from_validation(exc, prefix=f"trades[{index}]"))
    if errors:
        return (), errors

    usable = [record for record in active_trades(records) if not record.is_breakeven()]
    if not usable:
        errors.append(
            KellyError(
                category=ErrorCategory.INSUFFICIENT_DATA,
                message=NO_USABLE_TRADES_MESSAGE,
                field="trades",
            )
        )
    elif not math.isfinite(sum(abs(record.outcome) for record in usable)):
        errors.append(
            KellyError(
                category=ErrorCategory.INVALID_RANGE,
                message=OVERSIZED_TRADES_MESSAGE,
                field="trades",
            )
        )
    return tuple(records), errors


def validate_request(
    mode: CalculationMode | str,
    payload: Any,
    adjustment: RiskAdjustment | Mapping[str, Any] | None = None,
) -> tuple[ValidatedRequest | None, list[KellyError]]:
    """
    Check every input and collect all violations before anything is computed.

    Returns the validated request, or ``None`` together with the full error list.
    """
    resolved_mode, errors = _validate_mode(mode)
    resolved_adjustment, adjustment_errors = _validate_adjustment(adjustment)

    form: KellyFormData | None = None
    trades: tuple[TradeRecord, ...] = ()
    if resolved_mode is CalculationMode.MANUAL:
        form, payload_errors = _validate_form(payload)
    elif resolved_mode is CalculationMode.FROM_TRADES:
        trades, payload_errors = _validate_trades(payload)
    else:
        payload_errors = []

    errors = errors + payload_errors + adjustment_errors
    if errors or resolved_mode is None or resolved_adjustment is None:
        return None, errors

    return (
        ValidatedRequest(mode=resolved_mode, adjustment=resolved_adjustment, form=form, trades=trades),
        [],
    )


def apply_risk_adjustment(raw_fraction: float, adjustment: RiskAdjustment) -> tuple[float, list[str]]:
    """
    Dampen and cap a raw Kelly fraction.

    Negative or zero edges floor to 0 with a warning; the cap is reported
    whenever it actually lowers the scaled fraction.
    """
    warnings: list[str] = []
    cap = adjustment.max_position_fraction
    scaled = max(0.0, raw_fraction) * adjustment.effective_multiplier()
    adjusted = min(scaled, cap)

    if raw_fraction <= 0:
        warnings.append(NON_POSITIVE_EDGE_WARNING)
    elif scaled > cap:
        warnings.append(
            f"position capped at {cap:.2%} of capital (scaled Kelly suggested {scaled:.2%})"
        )
    return adjusted, warnings


def estimate_risk_of_ruin(raw_fraction: float) -> float:
    for floor, risk in RISK_OF_RUIN_BUCKETS:
        if raw_fraction > floor:
            return risk
    return RISK_OF_RUIN_FLOOR


def recommend(raw_fraction: float) -> str:
    if raw_fraction > 0.25:
        return "use a quarter-Kelly fraction (25%)"
    if raw_fraction > 0.10:
        return "use a half-Kelly fraction (50%)"
    if raw_fraction > 0.05:
        return "use a 75% Kelly fraction"
    if raw_fraction > 0:
        return "full Kelly fraction is acceptable"
    return "strategy shows no edge - do not size with Kelly"


def _profit_factor(form: KellyFormData, stats: TradeStatistics | None) -> float | None:
    if stats is not None:
        gross_profit, gross_loss = stats.gross_profit, stats.gross_loss
    else:
        win_probability = form.win_probability()
        gross_profit = win_probability * form.avg_win
        gross_loss = (1.0 - win_probability) * form.avg_loss
    if gross_loss <= 0:
        return None
    factor = gross_profit / gross_loss
    return factor if math.isfinite(factor) else None


def build_result(
    mode: CalculationMode,
    form: KellyFormData,
    raw_fraction: float,
    adjustment: RiskAdjustment,
    stats: TradeStatistics | None = None,
    high_kelly_threshold: float = HIGH_KELLY_THRESHOLD,
    min_reliable_trades: int = MIN_RELIABLE_TRADES,
) -> KellyResult:
    adjusted, warnings = apply_risk_adjustment(raw_fraction, adjustment)

    if raw_fraction > high_kelly_threshold:
        warnings.append(
            f"raw Kelly fraction {raw_fraction:.2%} is high - consider a fractional Kelly multiplier"
        )
    if stats is not None and stats.total_trades < min_reliable_trades:
        warnings.append(
            f"only {stats.total_trades} trades logged - at least {min_reliable_trades} "
            "are recommended for a reliable estimate"
        )

    win_probability = form.win_probability()
    return KellyResult(
        mode=mode,
        raw_kelly_fraction=raw_fraction,
        adjusted_fraction=adjusted,
        recommended_position_percentage=adjusted * 100.0,
        warnings=tuple(warnings),
        win_rate=form.win_rate,
        avg_win=form.avg_win,
        avg_loss=form.avg_loss,
        payoff_ratio=payoff_ratio(form.avg_win, form.avg_loss),
        profit_factor=_profit_factor(form, stats),
        expected_value=win_probability * form.avg_win - (1.0 - win_probability) * form.avg_loss,
        risk_of_ruin=estimate_risk_of_ruin(raw_fraction),
        recommendation=recommend(raw_fraction),
        total_trades=stats.total_trades if stats is not None else None,
    )
