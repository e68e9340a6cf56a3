from kelly_sizing.domain.base import DomainModel, FrozenDomainModel
from kelly_sizing.domain.entities import TradeRecord
from kelly_sizing.domain.errors import KellyComputationError
from kelly_sizing.domain.value_objects import (
    CalculationMode,
    ErrorCategory,
    KellyError,
    KellyFormData,
    KellyOutcome,
    KellyResult,
    RiskAdjustment,
    RiskTolerance,
    TradeStatistics,
)

__all__ = [
    "DomainModel",
    "FrozenDomainModel",
    "TradeRecord",
    "KellyComputationError",
    "CalculationMode",
    "ErrorCategory",
    "KellyError",
    "KellyFormData",
    "KellyOutcome",
    "KellyResult",
    "RiskAdjustment",
    "RiskTolerance",
    "TradeStatistics",
]
