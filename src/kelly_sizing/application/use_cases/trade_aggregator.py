from __future__ import annotations

from typing import Iterable

from kelly_sizing.domain.entities.trade_record import TradeRecord
from kelly_sizing.domain.value_objects.kelly import TradeStatistics


def active_trades(records: Iterable[TradeRecord]) -> list[TradeRecord]:
    return [record for record in records if record.enabled]


def aggregate_trades(records: Iterable[TradeRecord]) -> TradeStatistics:
    """
    Reduce trade outcomes to win rate (percent), average win and average loss.

    Breakeven trades count towards ``total_trades`` only. Disabled records are
    ignored. An empty sequence yields all-zero statistics.
    """
    trades = active_trades(records)
    total_trades = len(trades)
    if total_trades == 0:
        return TradeStatistics()

    wins = [trade.outcome for trade in trades if trade.is_win()]
    losses = [abs(trade.outcome) for trade in trades if trade.is_loss()]

    gross_profit = sum(wins)
    gross_loss = sum(losses)

    return TradeStatistics(
        win_rate=len(wins) / total_trades * 100.0,
        avg_win=gross_profit / len(wins) if wins else 0.0,
        avg_loss=gross_loss / len(losses) if losses else 0.0,
        total_trades=total_trades,
        win_count=len(wins),
        loss_count=len(losses),
        breakeven_count=total_trades - len(wins) - len(losses),
        gross_profit=gross_profit,
        gross_loss=gross_loss,
    )
