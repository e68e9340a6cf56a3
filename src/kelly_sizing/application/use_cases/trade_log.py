from __future__ import annotations

from datetime import datetime
from typing import Sequence

from kelly_sizing.domain.entities.trade_record import TradeRecord


def _index_of(trades: Sequence[TradeRecord], record_id: str) -> int:
    for index, trade in enumerate(trades):
        if trade.record_id == record_id:
            return index
    raise KeyError(record_id)


def add_trade(
    trades: Sequence[TradeRecord],
    outcome: float = 0.0,
    timestamp: datetime | None = None,
) -> tuple[TradeRecord, ...]:
    return (*trades, TradeRecord.create(outcome, timestamp=timestamp))


def remove_trade(trades: Sequence[TradeRecord], record_id: str) -> tuple[TradeRecord, ...]:
    index = _index_of(trades, record_id)
    return (*trades[:index], *trades[index + 1 :])


def set_trade_enabled(
    trades: Sequence[TradeRecord],
    record_id: str,
    enabled: bool,
) -> tuple[TradeRecord, ...]:
    index = _index_of(trades, record_id)
    updated = trades[index].model_copy(update={"enabled": enabled})
    return (*trades[:index], updated, *trades[index + 1 :])


def replace_trade_outcome(
    trades: Sequence[TradeRecord],
    record_id: str,
    outcome: float,
) -> tuple[TradeRecord, ...]:
    """Swap in a corrected outcome; id, timestamp and position are preserved."""
    index = _index_of(trades, record_id)
    current = trades[index]
    updated = TradeRecord(
        record_id=current.record_id,
        outcome=outcome,
        timestamp=current.timestamp,
        enabled=current.enabled,
    )
    return (*trades[:index], updated, *trades[index + 1 :])


def trades_from_outcomes(
    outcomes: Sequence[float],
    timestamp: datetime | None = None,
) -> tuple[TradeRecord, ...]:
    trades: tuple[TradeRecord, ...] = ()
    for outcome in outcomes:
        trades = add_trade(trades, outcome, timestamp=timestamp)
    return trades
