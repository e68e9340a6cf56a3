from __future__ import annotations

import pytest

from kelly_sizing.application.use_cases.kelly_estimator import (
    basic_kelly_fraction,
    estimate_kelly_fraction,
    payoff_ratio,
)
from kelly_sizing.domain.errors import KellyComputationError
from kelly_sizing.domain.value_objects.modes import ErrorCategory


def test_estimate_positive_edge() -> None:
    # W=0.6, R=1.5 => 0.6 - 0.4/1.5
    assert estimate_kelly_fraction(60.0, 150.0, 100.0) == pytest.approx(1.0 / 3.0)


def test_estimate_negative_edge() -> None:
    assert estimate_kelly_fraction(40.0, 100.0, 100.0) == pytest.approx(-0.2)


def test_estimate_zero_win_rate_yields_minus_inverse_ratio() -> None:
    assert estimate_kelly_fraction(0.0, 200.0, 100.0) == pytest.approx(-0.5)


def test_estimate_certain_win_yields_one() -> None:
    assert estimate_kelly_fraction(100.0, 50.0, 100.0) == pytest.approx(1.0)


def test_estimate_zero_avg_loss_is_division_by_zero() -> None:
    with pytest.raises(KellyComputationError) as excinfo:
        estimate_kelly_fraction(60.0, 10.0, 0.0)
    assert excinfo.value.category is ErrorCategory.DIVISION_BY_ZERO


def test_estimate_both_zero_is_insufficient_data() -> None:
    with pytest.raises(KellyComputationError) as excinfo:
        estimate_kelly_fraction(50.0, 0.0, 0.0)
    assert excinfo.value.category is ErrorCategory.INSUFFICIENT_DATA


def test_estimate_zero_avg_win_has_no_edge() -> None:
    assert estimate_kelly_fraction(70.0, 0.0, 50.0) == -1.0
    assert estimate_kelly_fraction(100.0, 0.0, 50.0) == 0.0


@pytest.mark.parametrize(
    "avg_win,avg_loss",
    [(1e-300, 1e10), (5e-324, 1e308), (1e-200, 1e200)],
)
def test_estimate_vanishing_ratio_floors_to_no_edge(avg_win: float, avg_loss: float) -> None:
    assert estimate_kelly_fraction(60.0, avg_win, avg_loss) == -1.0


def test_estimate_overflowing_ratio_stays_finite() -> None:
    assert estimate_kelly_fraction(60.0, 1e308, 1e-308) == pytest.approx(0.6)


def test_computation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        estimate_kelly_fraction(60.0, 10.0, 0.0)


def test_payoff_ratio_undefined_without_losses() -> None:
    assert payoff_ratio(10.0, 0.0) is None
    assert payoff_ratio(150.0, 100.0) == pytest.approx(1.5)
    assert payoff_ratio(1e308, 1e-308) is None


def test_basic_kelly_matches_trading_form() -> None:
    # p=0.6, b=1.0 => 0.2
    assert basic_kelly_fraction(0.6, 1.0) == pytest.approx(0.2)
    assert basic_kelly_fraction(0.6, 1.5) == pytest.approx(estimate_kelly_fraction(60.0, 150.0, 100.0))


@pytest.mark.parametrize(
    "win_probability,odds",
    [(-0.1, 1.0), (1.1, 1.0), (0.5, 0.0), (0.5, -1.0)],
)
def test_basic_kelly_invalid_inputs_raise(win_probability: float, odds: float) -> None:
    with pytest.raises(ValueError):
        basic_kelly_fraction(win_probability, odds)
