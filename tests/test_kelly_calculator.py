from __future__ import annotations

import math
from datetime import datetime

import pytest
from pydantic import ValidationError

from kelly_sizing.application.use_cases.kelly_calculator import KellyCalculator, compute_kelly
from kelly_sizing.application.use_cases.risk_adjuster import NON_POSITIVE_EDGE_WARNING
from kelly_sizing.domain.value_objects.kelly import KellyFormData, KellyOutcome
from kelly_sizing.domain.value_objects.modes import CalculationMode, ErrorCategory
from kelly_sizing.domain.value_objects.risk_adjustment import RiskAdjustment

from conftest import make_trades


def _manual(win_rate: float, avg_win: float, avg_loss: float) -> KellyFormData:
    return KellyFormData(win_rate=win_rate, avg_win=avg_win, avg_loss=avg_loss)


def test_full_kelly_positive_edge(full_kelly: RiskAdjustment) -> None:
    outcome = compute_kelly(CalculationMode.MANUAL, _manual(60.0, 150.0, 100.0), full_kelly)

    assert outcome.ok
    assert outcome.errors == ()
    result = outcome.result
    assert result is not None
    assert result.raw_kelly_fraction == pytest.approx(1.0 / 3.0)
    assert result.adjusted_fraction == pytest.approx(0.3333, abs=1e-4)
    assert result.recommended_position_percentage == pytest.approx(33.33, abs=1e-2)
    assert result.payoff_ratio == pytest.approx(1.5)
    assert result.total_trades is None


def test_half_kelly_multiplier() -> None:
    outcome = compute_kelly("manual", _manual(60.0, 150.0, 100.0), RiskAdjustment(fraction_multiplier=0.5))
    assert outcome.result is not None
    assert outcome.result.adjusted_fraction == pytest.approx(0.1667, abs=1e-4)


def test_negative_edge_floors_to_zero_with_warning(full_kelly: RiskAdjustment) -> None:
    outcome = compute_kelly("manual", _manual(40.0, 100.0, 100.0), full_kelly)
    result = outcome.result
    assert result is not None
    assert result.raw_kelly_fraction == pytest.approx(-0.2)
    assert result.adjusted_fraction == 0.0
    assert result.recommended_position_percentage == 0.0
    assert NON_POSITIVE_EDGE_WARNING in result.warnings
    assert not result.has_edge


def test_trade_log_statistics_flow_into_result(base_time: datetime, full_kelly: RiskAdjustment) -> None:
    trades = make_trades([100.0, -50.0, 100.0, 0.0], base_time)
    outcome = compute_kelly(CalculationMode.FROM_TRADES, trades, full_kelly)

    result = outcome.result
    assert result is not None
    assert result.total_trades == 4
    assert result.win_rate == pytest.approx(50.0)
    assert result.avg_win == pytest.approx(100.0)
    assert result.avg_loss == pytest.approx(50.0)
    # W=0.5, R=2 => 0.25
    assert result.raw_kelly_fraction == pytest.approx(0.25)


def test_empty_trade_log_is_insufficient_data(full_kelly: RiskAdjustment) -> None:
    outcome = compute_kelly(CalculationMode.FROM_TRADES, [], full_kelly)
    assert outcome.result is None
    assert outcome.error_categories() == [ErrorCategory.INSUFFICIENT_DATA]


def test_zero_avg_loss_is_division_by_zero(full_kelly: RiskAdjustment) -> None:
    outcome = compute_kelly("manual", {"win_rate": 60.0, "avg_win": 10.0, "avg_loss": 0.0}, full_kelly)
    assert outcome.result is None
    assert outcome.error_categories() == [ErrorCategory.DIVISION_BY_ZERO]


def test_zero_win_and_loss_is_insufficient_data() -> None:
    outcome = compute_kelly("manual", {"win_rate": 60.0, "avg_win": 0.0, "avg_loss": 0.0})
    assert outcome.error_categories() == [ErrorCategory.INSUFFICIENT_DATA]


def test_only_winning_trades_is_division_by_zero(base_time: datetime) -> None:
    outcome = compute_kelly("from_trades", make_trades([10.0, 20.0], base_time))
    assert outcome.error_categories() == [ErrorCategory.DIVISION_BY_ZERO]


def test_only_losing_trades_recommends_nothing(base_time: datetime) -> None:
    outcome = compute_kelly("from_trades", make_trades([-10.0, -20.0, 0.0], base_time))
    assert outcome.result is not None
    assert outcome.result.adjusted_fraction == 0.0
    assert NON_POSITIVE_EDGE_WARNING in outcome.result.warnings


def test_validation_errors_block_computation() -> None:
    outcome = compute_kelly(
        "manual",
        {"win_rate": -1.0, "avg_win": 100.0, "avg_loss": 50.0},
        {"fraction_multiplier": 1.5},
    )
    assert outcome.result is None
    assert outcome.error_categories() == [ErrorCategory.INVALID_RANGE, ErrorCategory.INVALID_RANGE]
    assert len(outcome.error_messages()) == 2


def test_cap_limits_position() -> None:
    outcome = compute_kelly("manual", _manual(70.0, 200.0, 100.0), RiskAdjustment(max_position_fraction=0.1))
    result = outcome.result
    assert result is not None
    assert result.adjusted_fraction == pytest.approx(0.1)
    assert any("capped" in warning for warning in result.warnings)


def test_repeated_calls_are_identical(base_time: datetime) -> None:
    trades = make_trades([100.0, -40.0, 35.0, -10.0, 0.0], base_time)
    adjustment = RiskAdjustment(fraction_multiplier=0.5, max_position_fraction=0.3)
    first = compute_kelly("from_trades", trades, adjustment)
    second = compute_kelly("from_trades", trades, adjustment)
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_trade_sequence_is_not_mutated(base_time: datetime) -> None:
    trades = make_trades([100.0, -40.0], base_time)
    snapshot = list(trades)
    compute_kelly("from_trades", trades)
    assert trades == snapshot


@pytest.mark.parametrize("win_rate", [0.0, 10.0, 35.0, 50.0, 65.0, 90.0, 100.0])
@pytest.mark.parametrize("multiplier,cap", [(1.0, 1.0), (0.5, 0.25), (0.25, 0.05), (1.0, 0.5)])
def test_adjusted_fraction_stays_within_cap(win_rate: float, multiplier: float, cap: float) -> None:
    adjustment = RiskAdjustment(fraction_multiplier=multiplier, max_position_fraction=cap)
    outcome = compute_kelly("manual", _manual(win_rate, 120.0, 80.0), adjustment)
    result = outcome.result
    assert result is not None
    assert 0.0 <= result.adjusted_fraction <= cap
    assert math.isfinite(result.raw_kelly_fraction)
    if result.raw_kelly_fraction <= 0:
        assert result.adjusted_fraction == 0.0
        assert result.warnings


def test_custom_thresholds_change_advisories(base_time: datetime) -> None:
    calculator = KellyCalculator(high_kelly_threshold=0.9, min_reliable_trades=2)
    outcome = calculator.compute("from_trades", make_trades([100.0, -50.0, 100.0], base_time))
    assert outcome.result is not None
    assert outcome.result.warnings == ()


def test_outcome_requires_result_or_errors() -> None:
    with pytest.raises(ValidationError):
        KellyOutcome()


@pytest.mark.parametrize(
    "avg_win,avg_loss",
    [(1e-300, 1e10), (5e-324, 1e308)],
)
def test_vanishing_win_size_recommends_nothing(avg_win: float, avg_loss: float) -> None:
    outcome = compute_kelly("manual", {"win_rate": 60.0, "avg_win": avg_win, "avg_loss": avg_loss})
    result = outcome.result
    assert result is not None
    assert result.raw_kelly_fraction == -1.0
    assert result.adjusted_fraction == 0.0
    assert NON_POSITIVE_EDGE_WARNING in result.warnings
    assert math.isfinite(result.expected_value)


def test_overflowing_ratios_are_reported_as_undefined(full_kelly: RiskAdjustment) -> None:
    outcome = compute_kelly("manual", {"win_rate": 60.0, "avg_win": 1e308, "avg_loss": 1e-308}, full_kelly)
    result = outcome.result
    assert result is not None
    assert result.payoff_ratio is None
    assert result.profit_factor is None
    assert result.raw_kelly_fraction == pytest.approx(0.6)
    assert math.isfinite(result.expected_value)


def test_oversized_trade_outcomes_are_rejected(base_time: datetime) -> None:
    outcome = compute_kelly("from_trades", make_trades([1e308, 1e308, -1.0], base_time))
    assert outcome.result is None
    assert outcome.error_categories() == [ErrorCategory.INVALID_RANGE]


def test_trade_mappings_accept_id_key(full_kelly: RiskAdjustment) -> None:
    trades = [
        {"id": "a", "outcome": 100.0, "timestamp": 1700000000},
        {"id": "b", "outcome": -50.0, "timestamp": 1700000060},
    ]
    outcome = compute_kelly("fromTrades", trades, full_kelly)
    result = outcome.result
    assert result is not None
    assert result.total_trades == 2
    # W=0.5, R=2 => 0.25
    assert result.raw_kelly_fraction == pytest.approx(0.25)
