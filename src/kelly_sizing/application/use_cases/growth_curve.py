from __future__ import annotations

import numpy as np
import pandas as pd

from kelly_sizing.application.use_cases.kelly_estimator import basic_kelly_fraction, payoff_ratio
from kelly_sizing.config import GROWTH_CURVE_POINTS
from kelly_sizing.domain.value_objects.kelly import KellyFormData


def expected_log_growth(win_probability: float, payoff_ratio: float, fractions: np.ndarray) -> np.ndarray:
    """
    Expected log growth per bet, ``p * log(1 + f * b) + q * log(1 - f)``.

    Fractions must lie in ``[0, 1)``; the curve peaks at the Kelly fraction.
    """
    fractions = np.asarray(fractions, dtype="float64")
    if np.any(fractions < 0) or np.any(fractions >= 1):
        raise ValueError("fractions must be within [0, 1)")
    if payoff_ratio <= 0:
        raise ValueError("payoff_ratio must be > 0")
    q = 1.0 - win_probability
    return win_probability * np.log1p(fractions * payoff_ratio) + q * np.log1p(-fractions)


def growth_curve(form: KellyFormData, points: int = GROWTH_CURVE_POINTS) -> pd.DataFrame:
    ratio = payoff_ratio(form.avg_win, form.avg_loss)
    if ratio is None or ratio <= 0:
        return pd.DataFrame(columns=["fraction", "expected_log_growth"])
    # Stop short of 1.0 where log(1 - f) diverges.
    fractions = np.linspace(0.0, 0.99, points)
    growth = expected_log_growth(form.win_probability(), ratio, fractions)
    return pd.DataFrame({"fraction": fractions, "expected_log_growth": growth})


def kelly_peak(form: KellyFormData) -> float | None:
    """Fraction where the growth curve peaks, or ``None`` when it lies outside ``(0, 1)``."""
    ratio = payoff_ratio(form.avg_win, form.avg_loss)
    if ratio is None or ratio <= 0:
        return None
    peak = basic_kelly_fraction(form.win_probability(), ratio)
    return peak if 0 < peak < 1 else None
