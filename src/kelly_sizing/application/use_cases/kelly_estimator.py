from __future__ import annotations

import math

from kelly_sizing.domain.errors import KellyComputationError
from kelly_sizing.domain.value_objects.kelly import KellyFormData
from kelly_sizing.domain.value_objects.modes import ErrorCategory

INSUFFICIENT_DATA_MESSAGE = "insufficient data - at least one win or loss amount required"
ZERO_AVG_LOSS_MESSAGE = "average loss must be greater than zero to compute a payoff ratio"
UNDEFINED_FRACTION_MESSAGE = "Kelly fraction is not a finite number for these inputs"

# Floor used whenever wins pay (numerically) nothing against a real loss.
NO_EDGE_FRACTION = -1.0


def payoff_ratio(avg_win: float, avg_loss: float) -> float | None:
    """``avg_win / avg_loss``, or ``None`` when it is undefined or not finite."""
    if avg_loss <= 0:
        return None
    ratio = avg_win / avg_loss
    if not math.isfinite(ratio):
        return None
    return ratio


def estimate_kelly_fraction(win_rate: float, avg_win: float, avg_loss: float) -> float:
    """
    Raw Kelly fraction ``W - (1 - W) / R`` from a percentage win rate.

    The result is signed and always finite; a non-positive value means there
    is no edge. Raises ``KellyComputationError`` when the payoff ratio is undefined.
    """
    if avg_win == 0 and avg_loss == 0:
        raise KellyComputationError(ErrorCategory.INSUFFICIENT_DATA, INSUFFICIENT_DATA_MESSAGE)
    if avg_loss == 0:
        raise KellyComputationError(ErrorCategory.DIVISION_BY_ZERO, ZERO_AVG_LOSS_MESSAGE)

    win_probability = win_rate / 100.0
    loss_probability = 1.0 - win_probability
    ratio = avg_win / avg_loss
    if ratio == 0:
        # Wins pay nothing (or underflow to nothing): any stake loses.
        return NO_EDGE_FRACTION if loss_probability > 0 else 0.0

    raw = win_probability - loss_probability / ratio
    if math.isfinite(raw):
        return raw
    if raw < 0:
        return NO_EDGE_FRACTION
    raise KellyComputationError(ErrorCategory.DIVISION_BY_ZERO, UNDEFINED_FRACTION_MESSAGE)


def estimate_from_form(form: KellyFormData) -> float:
    return estimate_kelly_fraction(form.win_rate, form.avg_win, form.avg_loss)


def basic_kelly_fraction(win_probability: float, odds: float) -> float:
    """Odds form ``(b * p - q) / b`` with ``p`` as a probability in [0, 1]."""
    if not (0.0 <= win_probability <= 1.0):
        raise ValueError("win_probability must be within [0, 1]")
    if odds <= 0:
        raise ValueError("odds must be > 0")
    q = 1.0 - win_probability
    return (odds * win_probability - q) / odds
