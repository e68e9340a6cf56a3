from kelly_sizing.domain.entities.trade_record import TradeRecord, generate_record_id

__all__ = ["TradeRecord", "generate_record_id"]
