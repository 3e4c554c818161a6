# tradejournal/reports/common.py
"""Building blocks shared by the report calculators."""
from datetime import date

from tradejournal.models.trade import Trade, TradeResult


def closed_trades(trades: list[Trade]) -> list[Trade]:
    """Trades that count toward profit, win rate and risk (WIN or LOSE)."""
    return [t for t in trades if t.is_closed]


def sort_chronologically(trades: list[Trade]) -> list[Trade]:
    """Stable ascending sort by date with undated trades last."""
    return sorted(trades, key=lambda t: (t.date is None, t.date or date.min))


def win_rate(wins: int, losses: int) -> float:
    """Wins over decided trades as a percentage."""
    decided = wins + losses
    return wins / decided * 100 if decided > 0 else 0.0


def expectancy(win_rate_percent: float, avg_win: float, avg_loss: float) -> float:
    """Expected profit per trade from win rate and average outcomes."""
    rate = win_rate_percent / 100
    return rate * avg_win - (1 - rate) * avg_loss


def max_streaks(chronological: list[Trade]) -> tuple[int, int]:
    """Longest winning and losing runs.

    Args:
        chronological: Closed trades sorted ascending by date.

    Returns:
        Tuple of (max_consecutive_wins, max_consecutive_losses).
    """
    current = 0
    max_wins = 0
    max_losses = 0
    last_result: TradeResult | None = None

    for trade in chronological:
        if last_result is None or trade.result == last_result:
            current += 1
        else:
            current = 1

        if trade.result == TradeResult.WIN:
            max_wins = max(max_wins, current)
        elif trade.result == TradeResult.LOSE:
            max_losses = max(max_losses, current)

        last_result = trade.result

    return max_wins, max_losses


def max_drawdown(
    chronological: list[Trade], start_bankroll: float
) -> tuple[float, float, float]:
    """Walk the running bankroll and find the largest peak-to-trough fall.

    The percentage is taken relative to the peak at the moment the maximum
    drawdown occurred.

    Args:
        chronological: Closed trades sorted ascending by date.
        start_bankroll: Bankroll before the first trade.

    Returns:
        Tuple of (max_drawdown, max_drawdown_percent, peak_bankroll).
    """
    current = start_bankroll
    peak = start_bankroll
    worst = 0.0
    worst_percent = 0.0

    for trade in chronological:
        current += trade.profit_loss
        if current > peak:
            peak = current
        drawdown = peak - current
        if drawdown > worst:
            worst = drawdown
            worst_percent = drawdown / peak * 100 if peak > 0 else 0.0

    return worst, worst_percent, peak


def per_trade_returns(trades: list[Trade]) -> list[float]:
    """Profit/loss divided by stake for each trade (0 for zero stakes)."""
    return [t.profit_loss / t.stake_euro if t.stake_euro > 0 else 0.0 for t in trades]
