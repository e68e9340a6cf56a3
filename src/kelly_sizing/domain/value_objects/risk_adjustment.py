from __future__ import annotations

from pydantic import Field

from kelly_sizing.config import (
    DEFAULT_FRACTION_MULTIPLIER,
    DEFAULT_MAX_POSITION_FRACTION,
    RISK_TOLERANCE_FACTORS,
)
from kelly_sizing.domain.base import FrozenDomainModel
from kelly_sizing.domain.value_objects.modes import RiskTolerance


class RiskAdjustment(FrozenDomainModel):
    fraction_multiplier: float = Field(default=DEFAULT_FRACTION_MULTIPLIER, gt=0.0, le=1.0)
    max_position_fraction: float = Field(default=DEFAULT_MAX_POSITION_FRACTION, gt=0.0, le=1.0)
    risk_tolerance: RiskTolerance = RiskTolerance.AGGRESSIVE

    def tolerance_factor(self) -> float:
        return RISK_TOLERANCE_FACTORS[self.risk_tolerance.value]

    def effective_multiplier(self) -> float:
        return self.fraction_multiplier * self.tolerance_factor()
