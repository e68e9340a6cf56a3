from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from kelly_sizing.domain.entities.trade_record import TradeRecord


class TradeRecordRepository(ABC):
    @abstractmethod
    def load(self) -> Sequence[TradeRecord]:
        raise NotImplementedError

    @abstractmethod
    def save(self, records: Sequence[TradeRecord]) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError
