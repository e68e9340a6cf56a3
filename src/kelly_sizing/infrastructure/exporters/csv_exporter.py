from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Iterable

from kelly_sizing.application.ports.exporters import KellyResultExporter, TradeRecordExporter
from kelly_sizing.domain.entities.trade_record import TradeRecord
from kelly_sizing.domain.value_objects.kelly import KellyResult
from kelly_sizing.infrastructure.logging import get_logger

logger = get_logger(__name__)

TRADE_FIELDS = ["record_id", "timestamp", "outcome", "enabled", "result"]


def _result_rows(result: KellyResult) -> list[dict[str, Any]]:
    payload = result.model_dump(mode="json", exclude={"warnings"})
    rows = [{"metric": key, "value": "" if value is None else value} for key, value in payload.items()]
    rows.append({"metric": "warnings", "value": "; ".join(result.warnings)})
    return rows


def _classify(trade: TradeRecord) -> str:
    if trade.is_win():
        return "win"
    if trade.is_loss():
        return "loss"
    return "breakeven"


class CsvTradeRecordExporter(TradeRecordExporter):
    def export_trades(self, trades: Iterable[TradeRecord], destination: str) -> None:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)

        rows = [
            {
                "record_id": trade.record_id,
                "timestamp": trade.timestamp.isoformat(),
                "outcome": trade.outcome,
                "enabled": trade.enabled,
                "result": _classify(trade),
            }
            for trade in trades
        ]

        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=TRADE_FIELDS)
            writer.writeheader()
            writer.writerows(rows)

        logger.debug("Exported trades", extra={"path": str(path), "count": len(rows)})


class CsvKellyResultExporter(KellyResultExporter):
    def export_result(self, result: KellyResult, destination: str) -> None:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)

        rows = _result_rows(result)
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=["metric", "value"])
            writer.writeheader()
            writer.writerows(rows)

        logger.debug("Exported Kelly result", extra={"path": str(path), "count": len(rows)})
