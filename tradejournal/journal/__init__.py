# tradejournal/journal/__init__.py
"""Journal module for trade storage and re-derivation."""

from .journal_manager import JournalManager
from .repository import JsonTradeRepository, TradeRepository
from .settings import JournalSettings

__all__ = [
    "JournalManager",
    "JournalSettings",
    "JsonTradeRepository",
    "TradeRepository",
]
