from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from kelly_sizing.domain.entities.trade_record import TradeRecord
from kelly_sizing.domain.value_objects.kelly import KellyResult


class TradeRecordExporter(ABC):
    @abstractmethod
    def export_trades(self, trades: Sequence[TradeRecord], destination: str) -> None:
        raise NotImplementedError


class KellyResultExporter(ABC):
    @abstractmethod
    def export_result(self, result: KellyResult, destination: str) -> None:
        raise NotImplementedError
