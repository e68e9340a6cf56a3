from __future__ import annotations

from typing import Any, Mapping

from kelly_sizing.application.use_cases.kelly_estimator import estimate_from_form
from kelly_sizing.application.use_cases.risk_adjuster import build_result, validate_request
from kelly_sizing.application.use_cases.trade_aggregator import aggregate_trades
from kelly_sizing.config import HIGH_KELLY_THRESHOLD, MIN_RELIABLE_TRADES
from kelly_sizing.domain.errors import KellyComputationError
from kelly_sizing.domain.value_objects.kelly import (
    KellyError,
    KellyOutcome,
    TradeStatistics,
)
from kelly_sizing.domain.value_objects.modes import CalculationMode
from kelly_sizing.domain.value_objects.risk_adjustment import RiskAdjustment
from kelly_sizing.infrastructure.logging import get_logger

logger = get_logger(__name__)


class KellyCalculator:
    """
    Turns manual statistics or a trade log into a Kelly sizing recommendation.

    Stateless: every call validates, estimates and adjusts from its own
    arguments and returns a ``KellyOutcome`` holding either a result or errors.
    """

    def __init__(
        self,
        high_kelly_threshold: float = HIGH_KELLY_THRESHOLD,
        min_reliable_trades: int = MIN_RELIABLE_TRADES,
    ) -> None:
        self._high_kelly_threshold = high_kelly_threshold
        self._min_reliable_trades = min_reliable_trades

    def compute(
        self,
        mode: CalculationMode | str,
        payload: Any,
        adjustment: RiskAdjustment | Mapping[str, Any] | None = None,
    ) -> KellyOutcome:
        request, errors = validate_request(mode, payload, adjustment)
        if request is None:
            logger.info(
                "Kelly request rejected",
                extra={"mode": getattr(mode, "value", mode), "errors": [error.category.value for error in errors]},
            )
            return KellyOutcome(errors=tuple(errors))

        stats: TradeStatistics | None = None
        if request.mode is CalculationMode.FROM_TRADES:
            stats = aggregate_trades(request.trades)
        form = stats.to_form_data() if stats is not None else request.form

        try:
            raw_fraction = estimate_from_form(form)
        except KellyComputationError as exc:
            logger.info(
                "Kelly estimate undefined",
                extra={"mode": request.mode.value, "category": exc.category.value},
            )
            return KellyOutcome(errors=(KellyError(category=exc.category, message=exc.message),))

        result = build_result(
            request.mode,
            form,
            raw_fraction,
            request.adjustment,
            stats=stats,
            high_kelly_threshold=self._high_kelly_threshold,
            min_reliable_trades=self._min_reliable_trades,
        )
        logger.debug(
            "Kelly computed",
            extra={
                "mode": request.mode.value,
                "raw": round(result.raw_kelly_fraction, 6),
                "adjusted": round(result.adjusted_fraction, 6),
            },
        )
        return KellyOutcome(result=result)


def compute_kelly(
    mode: CalculationMode | str,
    payload: Any,
    adjustment: RiskAdjustment | Mapping[str, Any] | None = None,
) -> KellyOutcome:
    return KellyCalculator().compute(mode, payload, adjustment)
