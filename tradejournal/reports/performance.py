# tradejournal/reports/performance.py
"""Performance, risk and behaviour metrics for a window of trades."""
import math
from collections import defaultdict
from datetime import date

from tradejournal.engine.bankroll import net_adjustments_between, starting_bankroll
from tradejournal.engine.helpers import INFINITE_RATIO, safe_ratio
from tradejournal.models.trade import BankrollAdjustment, Trade, TradeResult
from tradejournal.reports.common import (
    closed_trades,
    expectancy,
    max_drawdown,
    max_streaks,
    per_trade_returns,
    sort_chronologically,
    win_rate,
)
from tradejournal.reports.models import (
    DayResult,
    PerformanceOverview,
    RiskMetrics,
    TradingBehavior,
)


def calculate_performance_overview(
    trades: list[Trade],
    initial_bankroll: float,
    adjustments: list[BankrollAdjustment],
    window_start: date,
    window_end: date,
    history: list[Trade] | None = None,
) -> PerformanceOverview:
    """Summarize bankroll and profitability for a window.

    Args:
        trades: Trades inside the window.
        initial_bankroll: Initial bankroll from settings.
        adjustments: Every deposit and withdrawal.
        window_start: First day of the window.
        window_end: Last day of the window (inclusive).
        history: Complete trade history used for the profit carried into
            the window. Defaults to ``trades``.

    Returns:
        PerformanceOverview for the window.
    """
    closed = closed_trades(trades)
    total_trades = len(closed)

    start_bank = starting_bankroll(
        history if history is not None else trades,
        initial_bankroll,
        adjustments,
        window_start,
    )
    net_profit = sum(t.profit_loss for t in closed)
    ending_bank = (
        start_bank + net_profit + net_adjustments_between(adjustments, window_start, window_end)
    )

    total_staked = sum(t.stake_euro for t in closed)

    wins = sum(1 for t in closed if t.result == TradeResult.WIN)
    losses = sum(1 for t in closed if t.result == TradeResult.LOSE)
    rate = win_rate(wins, losses)

    gross_win = sum(t.profit_loss for t in closed if t.profit_loss > 0)
    gross_loss = abs(sum(t.profit_loss for t in closed if t.profit_loss < 0))

    avg_win = gross_win / wins if wins > 0 else 0.0
    avg_loss = gross_loss / losses if losses > 0 else 0.0

    return PerformanceOverview(
        starting_bankroll=start_bank,
        ending_bankroll=ending_bank,
        net_profit=net_profit,
        roi=net_profit / total_staked * 100 if total_staked > 0 else 0.0,
        total_staked=total_staked,
        total_trades=total_trades,
        win_rate=rate,
        profit_factor=safe_ratio(gross_win, gross_loss),
        expectancy=expectancy(rate, avg_win, avg_loss),
        avg_profit_per_trade=net_profit / total_trades if total_trades > 0 else 0.0,
    )


def calculate_risk_metrics(
    trades: list[Trade],
    initial_bankroll: float,
    adjustments: list[BankrollAdjustment],
    window_start: date,
    history: list[Trade] | None = None,
) -> RiskMetrics:
    """Calculate drawdown, streaks and volatility for a window.

    Args:
        trades: Trades inside the window.
        initial_bankroll: Initial bankroll from settings.
        adjustments: Every deposit and withdrawal.
        window_start: First day of the window.
        history: Complete trade history. Defaults to ``trades``.

    Returns:
        RiskMetrics for the window.
    """
    closed = sort_chronologically(closed_trades(trades))

    start_bank = starting_bankroll(
        history if history is not None else trades,
        initial_bankroll,
        adjustments,
        window_start,
    )
    drawdown, drawdown_percent, peak = max_drawdown(closed, start_bank)
    max_wins, max_losses = max_streaks(closed)

    total_staked = sum(t.stake_euro for t in closed)
    avg_stake = total_staked / len(closed) if closed else 0.0
    reference_bank = peak if peak > 0 else initial_bankroll
    avg_risk = avg_stake / reference_bank * 100 if reference_bank > 0 else 0.0

    net_profit = sum(t.profit_loss for t in closed)

    return RiskMetrics(
        max_drawdown=drawdown,
        max_drawdown_percent=drawdown_percent,
        max_consecutive_losses=max_losses,
        max_consecutive_wins=max_wins,
        avg_risk_per_trade=avg_risk,
        sharpe_ratio=_sharpe_ratio(per_trade_returns(closed)),
        recovery_factor=_recovery_factor(net_profit, drawdown),
    )


def calculate_trading_behavior(trades: list[Trade]) -> TradingBehavior:
    """Summarize trading frequency and day-level consistency."""
    closed = closed_trades(trades)

    daily: dict[date | None, float] = defaultdict(float)
    for trade in closed:
        daily[trade.date] += trade.profit_loss

    total_days = len(daily)
    if total_days == 0:
        return TradingBehavior(
            total_trading_days=0,
            avg_trades_per_day=0.0,
            best_day=None,
            worst_day=None,
            profitable_days_percent=0.0,
        )

    best_date = max(daily, key=lambda d: daily[d])
    worst_date = min(daily, key=lambda d: daily[d])
    profitable_days = sum(1 for profit in daily.values() if profit > 0)

    return TradingBehavior(
        total_trading_days=total_days,
        avg_trades_per_day=len(closed) / total_days,
        best_day=DayResult(date=best_date, profit=daily[best_date]),
        worst_day=DayResult(date=worst_date, profit=daily[worst_date]),
        profitable_days_percent=profitable_days / total_days * 100,
    )


def _sharpe_ratio(returns: list[float]) -> float:
    """Mean return over population standard deviation (no annualization)."""
    if not returns:
        return 0.0

    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    std_dev = math.sqrt(variance)

    # identical returns can leave rounding noise instead of an exact zero
    if std_dev < 1e-12:
        return 0.0
    return mean / std_dev


def _recovery_factor(net_profit: float, drawdown: float) -> float:
    """Net profit over max drawdown with the infinite sentinel."""
    if drawdown > 0:
        return net_profit / drawdown
    return INFINITE_RATIO if net_profit > 0 else 0.0
