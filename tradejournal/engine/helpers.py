# tradejournal/engine/helpers.py
"""Numeric helpers for parsing, formatting and settling trades."""
import re
from dataclasses import replace
from typing import Any

from tradejournal.models.trade import Trade, TradeResult

INFINITE_RATIO = 999.0

_CURRENCY_CHARS = re.compile(r"[€$£%\s]")


def parse_locale_number(value: Any) -> float:
    """Parse a number written in either European or US notation.

    Handles values such as ``"1.000,50"``, ``"1,000.50"``, ``"3,50"``,
    ``"1 €"`` and ``"3,00%"``. Anything unparseable becomes 0.

    Args:
        value: Raw value from an import or form field.

    Returns:
        The parsed float.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)

    text = _CURRENCY_CHARS.sub("", str(value))
    if not text:
        return 0.0

    last_comma = text.rfind(",")
    last_dot = text.rfind(".")

    if last_comma > -1 and last_dot > -1:
        if last_comma > last_dot:
            # 1.000,50
            text = text.replace(".", "").replace(",", ".")
        else:
            # 1,000.50
            text = text.replace(",", "")
    elif last_comma > -1:
        text = text.replace(",", ".", 1)

    match = re.match(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", text)
    if not match:
        return 0.0
    return float(match.group(0))


def format_currency(value: float, symbol: str = "€") -> str:
    """Format an amount in Italian euro notation, e.g. ``1.234,56 €``."""
    formatted = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 and round(abs(value), 2) != 0 else ""
    return f"{sign}{formatted} {symbol}"


def format_percent(value: float) -> str:
    """Format a percentage with two decimals."""
    return f"{value:.2f}%"


def format_ratio(value: float) -> str:
    """Format a ratio, rendering the infinite sentinel as ``∞``."""
    if value >= INFINITE_RATIO:
        return "∞"
    return f"{value:.2f}"


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide two non-negative totals, using the infinite sentinel for x/0.

    Returns:
        numerator / denominator, 999 when only the denominator is zero,
        0 when both are zero.
    """
    if denominator > 0:
        return numerator / denominator
    if numerator > 0:
        return INFINITE_RATIO
    return 0.0


def calculate_stake(bankroll: float, stake_percent: float) -> float:
    """Convert a stake percentage into a currency amount."""
    if not bankroll or not stake_percent:
        return 0.0
    return bankroll * stake_percent / 100


def calculate_profit_loss(stake: float, odds: float, result: TradeResult) -> float:
    """Calculate profit/loss for a single settled back position.

    Args:
        stake: Amount staked.
        odds: Decimal odds.
        result: Trade outcome.

    Returns:
        stake * (odds - 1) on a win, -stake on a loss, 0 otherwise.
    """
    if result == TradeResult.WIN:
        return stake * (odds - 1)
    if result == TradeResult.LOSE:
        return -stake
    return 0.0


def calculate_roi(profit_loss: float, stake: float) -> float:
    """Return on investment relative to the trade's own stake."""
    return profit_loss / stake * 100 if stake > 0 else 0.0


def settle_trade(
    trade: Trade,
    bankroll: float | None = None,
    manual_profit_loss: float | None = None,
) -> Trade:
    """Fill stake, profit/loss and ROI on a trade.

    When ``bankroll`` is given the currency stake is recomputed from the
    stake percentage. ``manual_profit_loss`` overrides the formula for
    positions (lays, partial cash-outs) whose P/L the user entered by hand.

    Args:
        trade: Trade to settle.
        bankroll: Bankroll used to size the stake, if any.
        manual_profit_loss: Hand-entered profit/loss, if any.

    Returns:
        A new Trade with the settled values.
    """
    stake = trade.stake_euro
    if bankroll is not None:
        stake = calculate_stake(bankroll, trade.stake_percent)

    if trade.is_open:
        return replace(trade, stake_euro=stake, profit_loss=0.0, roi=0.0)

    if manual_profit_loss is not None:
        profit_loss = manual_profit_loss
    else:
        profit_loss = calculate_profit_loss(stake, trade.odds, trade.result)

    return replace(
        trade,
        stake_euro=stake,
        profit_loss=profit_loss,
        roi=calculate_roi(profit_loss, stake),
    )
