# tradejournal/reports/comparison.py
"""Calendar windows and month-over-month comparison."""
import calendar
from datetime import date

from tradejournal.models.trade import BankrollAdjustment, Trade
from tradejournal.reports.models import MonthlyComparison, PerformanceOverview
from tradejournal.reports.performance import calculate_performance_overview


def get_month_range(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def filter_trades_by_range(trades: list[Trade], start: date, end: date) -> list[Trade]:
    """Trades dated within ``[start, end]``; undated trades are excluded."""
    return [t for t in trades if t.date is not None and start <= t.date <= end]


def filter_trades_by_month(trades: list[Trade], year: int, month: int) -> list[Trade]:
    """Trades dated within a calendar month."""
    start, end = get_month_range(year, month)
    return filter_trades_by_range(trades, start, end)


def calculate_monthly_comparison(
    trades: list[Trade],
    initial_bankroll: float,
    adjustments: list[BankrollAdjustment],
    year: int,
    month: int,
) -> list[MonthlyComparison]:
    """Compare key KPIs of a month with the month before.

    Args:
        trades: Complete trade history.
        initial_bankroll: Initial bankroll from settings.
        adjustments: Every deposit and withdrawal.
        year: Year of the current month.
        month: Current month (1-12).

    Returns:
        Rows for ROI %, Win Rate %, Profit Factor and Avg Profit/Trade.
    """
    current = _month_overview(trades, initial_bankroll, adjustments, year, month)
    previous = _month_overview(
        trades, initial_bankroll, adjustments, *previous_month(year, month)
    )

    return [
        _compare("ROI %", current.roi, previous.roi),
        _compare("Win Rate %", current.win_rate, previous.win_rate),
        _compare("Profit Factor", current.profit_factor, previous.profit_factor),
        _compare(
            "Avg Profit/Trade",
            current.avg_profit_per_trade,
            previous.avg_profit_per_trade,
        ),
    ]


def _month_overview(
    trades: list[Trade],
    initial_bankroll: float,
    adjustments: list[BankrollAdjustment],
    year: int,
    month: int,
) -> PerformanceOverview:
    """Performance overview of one calendar month."""
    start, end = get_month_range(year, month)
    return calculate_performance_overview(
        filter_trades_by_range(trades, start, end),
        initial_bankroll,
        adjustments,
        start,
        end,
        history=trades,
    )


def _compare(kpi: str, current: float, previous: float) -> MonthlyComparison:
    """Build one comparison row; percent change is 0 against a zero baseline."""
    change = current - previous
    change_percent = change / abs(previous) * 100 if previous != 0 else 0.0
    return MonthlyComparison(
        kpi=kpi,
        current=current,
        previous=previous,
        change=change,
        change_percent=change_percent,
    )
