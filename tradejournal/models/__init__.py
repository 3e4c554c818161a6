# tradejournal/models/__init__.py
"""Domain models for the trading journal."""

from .trade import (
    AdjustmentType,
    BankrollAdjustment,
    Trade,
    TradeResult,
    TradingSettings,
)

__all__ = [
    "AdjustmentType",
    "BankrollAdjustment",
    "Trade",
    "TradeResult",
    "TradingSettings",
]
