from kelly_sizing.domain.value_objects.kelly import (
    KellyError,
    KellyFormData,
    KellyOutcome,
    KellyResult,
    TradeStatistics,
)
from kelly_sizing.domain.value_objects.modes import CalculationMode, ErrorCategory, RiskTolerance
from kelly_sizing.domain.value_objects.risk_adjustment import RiskAdjustment

__all__ = [
    "CalculationMode",
    "ErrorCategory",
    "RiskTolerance",
    "KellyError",
    "KellyFormData",
    "KellyOutcome",
    "KellyResult",
    "TradeStatistics",
    "RiskAdjustment",
]
