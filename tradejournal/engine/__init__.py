# tradejournal/engine/__init__.py
"""Trade settlement, bankroll and recalculation engine."""

from .bankroll import BankrollSnapshot, calculate_bankroll_history
from .helpers import INFINITE_RATIO, parse_locale_number, settle_trade
from .recalculator import TradeRecalculator, recalculate_trades

__all__ = [
    "INFINITE_RATIO",
    "BankrollSnapshot",
    "TradeRecalculator",
    "calculate_bankroll_history",
    "parse_locale_number",
    "recalculate_trades",
    "settle_trade",
]
