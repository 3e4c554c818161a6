# tradejournal/reports/dashboard.py
"""All-time dashboard KPIs, current streak and period targets."""
from collections import defaultdict
from datetime import date, timedelta

from tradejournal.engine.bankroll import calculate_total_capital_invested
from tradejournal.engine.helpers import safe_ratio
from tradejournal.models.trade import (
    STOP_LOSS,
    TARGET_PROFIT,
    BankrollAdjustment,
    Trade,
    TradeResult,
    TradingSettings,
)
from tradejournal.reports.common import (
    closed_trades,
    expectancy,
    max_streaks,
    sort_chronologically,
    win_rate,
)
from tradejournal.reports.models import (
    CurrentStreak,
    DashboardMetrics,
    DayResult,
    PeriodTargets,
    StreakAlert,
    TargetPeriod,
)
from tradejournal.reports.settings import ReportSettings


def calculate_dashboard_metrics(
    trades: list[Trade],
    settings: TradingSettings,
    adjustments: list[BankrollAdjustment],
) -> DashboardMetrics:
    """Calculate all-time KPIs over the recalculated journal.

    Args:
        trades: Recalculated trades (derived TP/SL labels are counted).
        settings: Bankroll settings.
        adjustments: Every deposit and withdrawal.

    Returns:
        DashboardMetrics for the whole history.
    """
    settled = [t for t in trades if t.is_settled]
    closed = sort_chronologically(closed_trades(trades))

    wins = sum(1 for t in closed if t.result == TradeResult.WIN)
    losses = sum(1 for t in closed if t.result == TradeResult.LOSE)
    voids = sum(1 for t in trades if t.result == TradeResult.VOID)
    rate = win_rate(wins, losses)

    total_profit = sum(t.profit_loss for t in settled)
    capital = calculate_total_capital_invested(settings.initial_bank, adjustments)
    if settings.current_bank is not None:
        current_bankroll = settings.current_bank
    else:
        current_bankroll = capital + total_profit

    daily: dict[date | None, float] = defaultdict(float)
    for trade in settled:
        daily[trade.date] += trade.profit_loss

    best_day = worst_day = None
    if daily:
        best_date = max(daily, key=lambda d: daily[d])
        worst_date = min(daily, key=lambda d: daily[d])
        best_day = DayResult(date=best_date, profit=daily[best_date])
        worst_day = DayResult(date=worst_date, profit=daily[worst_date])

    gross_win = sum(t.profit_loss for t in closed if t.profit_loss > 0)
    gross_loss = abs(sum(t.profit_loss for t in closed if t.profit_loss < 0))
    avg_win = gross_win / wins if wins > 0 else 0.0
    avg_loss = gross_loss / losses if losses > 0 else 0.0

    max_wins, max_losses = max_streaks(closed)

    return DashboardMetrics(
        total_trades=len(closed),
        wins=wins,
        losses=losses,
        voids=voids,
        win_rate=rate,
        total_profit=total_profit,
        capital_invested=capital,
        current_bankroll=current_bankroll,
        roi=total_profit / capital * 100 if closed and capital > 0 else 0.0,
        best_trade=max(settled, key=lambda t: t.profit_loss) if settled else None,
        worst_trade=min(settled, key=lambda t: t.profit_loss) if settled else None,
        daily_tp_hits=sum(1 for t in trades if t.tp_sl == TARGET_PROFIT),
        daily_sl_hits=sum(1 for t in trades if t.tp_sl == STOP_LOSS),
        best_day=best_day,
        worst_day=worst_day,
        profit_factor=safe_ratio(gross_win, gross_loss),
        avg_profit_per_trade=total_profit / len(closed) if closed else 0.0,
        expectancy=expectancy(rate, avg_win, avg_loss) if closed else 0.0,
        max_win_streak=max_wins,
        max_loss_streak=max_losses,
        avg_odds=sum(t.odds for t in settled) / len(settled) if settled else 0.0,
    )


def calculate_current_streak(
    trades: list[Trade], settings: ReportSettings | None = None
) -> CurrentStreak:
    """Find the run of identical results ending at the latest closed trade.

    Returns:
        CurrentStreak with an alert for long winning runs (over-confidence),
        long losing runs (revenge trading) and shorter losing runs (tilt).
    """
    settings = settings or ReportSettings()
    newest_first = list(reversed(sort_chronologically(closed_trades(trades))))

    if not newest_first:
        return CurrentStreak(type=None, count=0)

    latest = newest_first[0].result
    count = 0
    for trade in newest_first:
        if trade.result != latest:
            break
        count += 1

    alert = None
    if latest == TradeResult.WIN and count >= settings.streak_alert_length:
        alert = StreakAlert.OVER_CONFIDENCE
    elif latest == TradeResult.LOSE and count >= settings.streak_alert_length:
        alert = StreakAlert.REVENGE_TRADING
    elif latest == TradeResult.LOSE and count >= settings.tilt_length:
        alert = StreakAlert.TILT

    return CurrentStreak(type=latest.value, count=count, alert=alert)


def period_start(period: TargetPeriod, today: date) -> date:
    """First day of the daily, weekly (Monday) or monthly period."""
    if period == TargetPeriod.WEEKLY:
        return today - timedelta(days=today.weekday())
    if period == TargetPeriod.MONTHLY:
        return today.replace(day=1)
    return today


def calculate_period_targets(
    trades: list[Trade],
    settings: TradingSettings,
    today: date,
    period: TargetPeriod = TargetPeriod.DAILY,
) -> PeriodTargets:
    """Track progress toward a period's take-profit and stop-loss.

    Thresholds are percentages of the bankroll at the start of the period,
    so they compound with earlier results the same way the daily labels do.

    Args:
        trades: Journal trades.
        settings: Bankroll and target settings.
        today: Reference date.
        period: Which pair of targets to evaluate.

    Returns:
        PeriodTargets for the period containing ``today``.
    """
    start = period_start(period, today)
    tp_percent, sl_percent = _period_percentages(settings, period)

    settled = [t for t in trades if t.is_settled and t.date is not None]
    pl_before = sum(t.profit_loss for t in settled if t.date < start)
    period_pl = sum(t.profit_loss for t in settled if start <= t.date <= today)

    start_bank = settings.bankroll_base + pl_before
    tp_target = start_bank * tp_percent / 100
    sl_target = start_bank * sl_percent / 100

    return PeriodTargets(
        period=period,
        period_start=start,
        start_bankroll=start_bank,
        current_bankroll=start_bank + period_pl,
        period_pl=period_pl,
        tp_percent=tp_percent,
        sl_percent=sl_percent,
        tp_target=tp_target,
        sl_target=sl_target,
        tp_remaining=tp_target - period_pl,
        sl_remaining=sl_target - period_pl,
        tp_hit=tp_percent > 0 and period_pl >= tp_target,
        sl_hit=sl_percent < 0 and period_pl <= sl_target,
    )


def _period_percentages(settings: TradingSettings, period: TargetPeriod) -> tuple[float, float]:
    """Take-profit and stop-loss percentages for a period."""
    if period == TargetPeriod.WEEKLY:
        return settings.weekly_tp, settings.weekly_sl
    if period == TargetPeriod.MONTHLY:
        return settings.monthly_tp, settings.monthly_sl
    return settings.daily_tp, settings.daily_sl
