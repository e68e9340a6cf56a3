from kelly_sizing.application.ports.exporters import KellyResultExporter, TradeRecordExporter
from kelly_sizing.application.ports.repositories import TradeRecordRepository

__all__ = [
    "TradeRecordRepository",
    "TradeRecordExporter",
    "KellyResultExporter",
]
