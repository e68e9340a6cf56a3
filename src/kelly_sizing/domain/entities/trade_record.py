from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from pydantic import AliasChoices, Field

from kelly_sizing.domain.base import FrozenDomainModel


def generate_record_id() -> str:
    return uuid4().hex


class TradeRecord(FrozenDomainModel):
    record_id: str = Field(..., min_length=1, validation_alias=AliasChoices("record_id", "id"))
    outcome: float = Field(..., allow_inf_nan=False)
    timestamp: datetime
    enabled: bool = True

    @classmethod
    def create(cls, outcome: float, timestamp: datetime | None = None) -> "TradeRecord":
        return cls(
            record_id=generate_record_id(),
            outcome=outcome,
            timestamp=timestamp or datetime.now(),
        )

    def is_win(self) -> bool:
        return self.outcome > 0

    def is_loss(self) -> bool:
        return self.outcome < 0

    def is_breakeven(self) -> bool:
        return self.outcome == 0
