from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from kelly_sizing.domain.entities.trade_record import TradeRecord
from kelly_sizing.domain.value_objects.risk_adjustment import RiskAdjustment


@pytest.fixture
def base_time() -> datetime:
    return datetime(2024, 1, 2, 9, 0, 0)


@pytest.fixture
def full_kelly() -> RiskAdjustment:
    return RiskAdjustment(fraction_multiplier=1.0, max_position_fraction=1.0)


def make_trade(outcome: float, timestamp: datetime, record_id: str | None = None, enabled: bool = True) -> TradeRecord:
    return TradeRecord(
        record_id=record_id or f"t{timestamp:%H%M%S}",
        outcome=outcome,
        timestamp=timestamp,
        enabled=enabled,
    )


def make_trades(outcomes: list[float], start: datetime) -> list[TradeRecord]:
    trades: list[TradeRecord] = []
    for idx, outcome in enumerate(outcomes):
        trades.append(make_trade(outcome, start + timedelta(minutes=idx), record_id=f"trade-{idx}"))
    return trades
