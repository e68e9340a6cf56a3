from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd
from pydantic import ValidationError

from kelly_sizing.application.ports.repositories import TradeRecordRepository
from kelly_sizing.domain.entities.trade_record import TradeRecord
from kelly_sizing.infrastructure.logging import get_logger

logger = get_logger(__name__)

COLUMNS = ["record_id", "outcome", "timestamp", "enabled"]


def _parse_enabled(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes"}


class CsvTradeRecordRepository(TradeRecordRepository):
    """Keeps the trade log in a single CSV file, in insertion order."""

    def __init__(self, csv_path: Path) -> None:
        self._csv_path = csv_path

    def load(self) -> Sequence[TradeRecord]:
        if not self._csv_path.exists():
            logger.debug("Trade log not found", extra={"path": str(self._csv_path)})
            return []

        df = pd.read_csv(self._csv_path, dtype={"record_id": str})
        missing = [column for column in COLUMNS if column not in df.columns]
        if missing:
            raise ValueError(f"trade log {self._csv_path} is missing columns: {', '.join(missing)}")
        if df.empty:
            return []

        df["timestamp"] = pd.to_datetime(df["timestamp"], format="ISO8601")
        records: list[TradeRecord] = []
        for index, row in df.iterrows():
            try:
                records.append(
                    TradeRecord(
                        record_id=str(row["record_id"]),
                        outcome=float(row["outcome"]),
                        timestamp=row["timestamp"].to_pydatetime(),
                        enabled=_parse_enabled(row["enabled"]),
                    )
                )
            except (ValidationError, TypeError, ValueError) as exc:
                raise ValueError(f"invalid trade record on row {index} of {self._csv_path}: {exc}") from exc

        logger.debug("Loaded trade log", extra={"path": str(self._csv_path), "count": len(records)})
        return records

    def save(self, records: Sequence[TradeRecord]) -> None:
        df = pd.DataFrame(
            [
                {
                    "record_id": record.record_id,
                    "outcome": record.outcome,
                    "timestamp": record.timestamp.isoformat(),
                    "enabled": record.enabled,
                }
                for record in records
            ],
            columns=COLUMNS,
        )
        self._csv_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(self._csv_path, index=False)
        logger.debug("Stored trade log", extra={"path": str(self._csv_path), "count": len(records)})

    def clear(self) -> None:
        if self._csv_path.exists():
            self._csv_path.unlink()
            logger.info("Cleared trade log", extra={"path": str(self._csv_path)})
