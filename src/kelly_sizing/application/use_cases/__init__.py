from kelly_sizing.application.use_cases.growth_curve import expected_log_growth, growth_curve, kelly_peak
from kelly_sizing.application.use_cases.kelly_calculator import KellyCalculator, compute_kelly
from kelly_sizing.application.use_cases.kelly_estimator import (
    basic_kelly_fraction,
    estimate_kelly_fraction,
    payoff_ratio,
)
from kelly_sizing.application.use_cases.risk_adjuster import (
    ValidatedRequest,
    apply_risk_adjustment,
    build_result,
    validate_request,
)
from kelly_sizing.application.use_cases.trade_aggregator import aggregate_trades
from kelly_sizing.application.use_cases.trade_log import (
    add_trade,
    remove_trade,
    replace_trade_outcome,
    set_trade_enabled,
    trades_from_outcomes,
)

__all__ = [
    "expected_log_growth",
    "growth_curve",
    "kelly_peak",
    "KellyCalculator",
    "compute_kelly",
    "basic_kelly_fraction",
    "estimate_kelly_fraction",
    "payoff_ratio",
    "ValidatedRequest",
    "apply_risk_adjustment",
    "build_result",
    "validate_request",
    "aggregate_trades",
    "add_trade",
    "remove_trade",
    "replace_trade_outcome",
    "set_trade_enabled",
    "trades_from_outcomes",
]
