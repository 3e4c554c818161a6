# tradejournal/reports/segmentation.py
"""Breakdowns of closed trades by strategy, competition, odds and time."""
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass

from tradejournal.engine.helpers import safe_ratio
from tradejournal.models.trade import DEFAULT_INITIAL_BANK, Trade, TradeResult
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
    BucketPerformance,
    KellyStatus,
    SegmentAlert,
    SegmentPerformance,
)
from tradejournal.reports.settings import ReportSettings

DAYS_OF_WEEK = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

UNKNOWN_HOUR = "Unknown"


@dataclass(frozen=True)
class OddsRange:
    """Odds bucket; an upper bound of None means unbounded."""

    label: str
    upper: float | None


ODDS_RANGES = [
    OddsRange("1.01 - 1.50", 1.50),
    OddsRange("1.51 - 2.00", 2.00),
    OddsRange("2.01 - 3.00", 3.00),
    OddsRange("3.01+", None),
]

HOUR_RANGES = [
    ("00:00 - 14:00", 0, 14),
    ("14:00 - 18:00", 14, 18),
    ("18:00 - 22:00", 18, 22),
    ("22:00 - 24:00", 22, 24),
]


def calculate_kelly(
    win_rate_percent: float,
    avg_odds: float,
    sample_size: int,
    settings: ReportSettings | None = None,
) -> tuple[float, float]:
    """Calculate full and fractional Kelly stakes as bankroll percentages.

    ``kelly = p - (1 - p) / (odds - 1)``, clamped at zero. Kelly is
    unavailable (0) for negative edge, odds that pay nothing, or samples
    below the configured minimum.

    Args:
        win_rate_percent: Win rate as a percentage.
        avg_odds: Mean decimal odds.
        sample_size: Number of closed trades behind the estimate.
        settings: Report thresholds.

    Returns:
        Tuple of (kelly_percent, fractional_kelly).
    """
    settings = settings or ReportSettings()

    if sample_size < settings.kelly_min_sample or avg_odds <= 1:
        return 0.0, 0.0

    p = win_rate_percent / 100
    kelly = p - (1 - p) / (avg_odds - 1)
    if kelly <= 0:
        return 0.0, 0.0

    kelly_percent = kelly * 100
    return kelly_percent, kelly_percent * settings.kelly_fraction


def kelly_status(
    segment: SegmentPerformance, settings: ReportSettings | None = None
) -> KellyStatus | None:
    """Compare average stake with the fractional Kelly recommendation.

    Returns:
        The staking status, or None when Kelly is unavailable.
    """
    settings = settings or ReportSettings()
    if segment.fractional_kelly == 0:
        return None

    ratio = segment.avg_stake_percent / segment.fractional_kelly
    if ratio > settings.over_betting_ratio:
        return KellyStatus.OVER_BETTING
    if ratio < settings.under_betting_ratio:
        return KellyStatus.UNDER_BETTING
    return KellyStatus.OPTIMAL


def calculate_strategy_performance(
    trades: list[Trade],
    initial_bankroll: float = DEFAULT_INITIAL_BANK,
    settings: ReportSettings | None = None,
) -> list[SegmentPerformance]:
    """Break down closed trades by strategy, most profitable first."""
    return _segment_performance(trades, lambda t: t.strategy_key, initial_bankroll, settings)


def calculate_competition_performance(
    trades: list[Trade],
    initial_bankroll: float = DEFAULT_INITIAL_BANK,
    settings: ReportSettings | None = None,
) -> list[SegmentPerformance]:
    """Break down closed trades by competition, most profitable first."""
    return _segment_performance(
        trades, lambda t: t.competition_key, initial_bankroll, settings
    )


def calculate_odds_range_analysis(trades: list[Trade]) -> list[BucketPerformance]:
    """Break down closed trades by odds bucket; every bucket is reported."""
    buckets: dict[str, list[Trade]] = {r.label: [] for r in ODDS_RANGES}
    for trade in closed_trades(trades):
        buckets[_odds_label(trade.odds)].append(trade)

    return [_bucket(label, bucket_trades) for label, bucket_trades in buckets.items()]


def calculate_day_of_week_performance(trades: list[Trade]) -> list[BucketPerformance]:
    """Break down closed trades by weekday, Monday first, empty days dropped."""
    by_day: dict[str, list[Trade]] = defaultdict(list)
    for trade in closed_trades(trades):
        if trade.date is None:
            continue
        by_day[DAYS_OF_WEEK[trade.date.weekday()]].append(trade)

    return [_bucket(day, by_day[day]) for day in DAYS_OF_WEEK if by_day.get(day)]


def calculate_hour_range_performance(
    trades: list[Trade], settings: ReportSettings | None = None
) -> list[BucketPerformance]:
    """Break down closed trades by time of day, empty ranges dropped.

    The hour comes from ``created_at``. Trades without a timestamp use
    ``settings.default_trade_hour``, or land in an Unknown bucket when the
    default is disabled.
    """
    settings = settings or ReportSettings()
    by_range: dict[str, list[Trade]] = defaultdict(list)

    for trade in closed_trades(trades):
        hour = trade.created_at.hour if trade.created_at else settings.default_trade_hour
        if hour is None:
            by_range[UNKNOWN_HOUR].append(trade)
            continue
        for label, start, end in HOUR_RANGES:
            if start <= hour < end:
                by_range[label].append(trade)
                break

    labels = [label for label, _, _ in HOUR_RANGES] + [UNKNOWN_HOUR]
    return [_bucket(label, by_range[label]) for label in labels if by_range.get(label)]


def _segment_performance(
    trades: list[Trade],
    key: Callable[[Trade], str],
    initial_bankroll: float,
    settings: ReportSettings | None,
) -> list[SegmentPerformance]:
    """Group closed trades by ``key`` and build a segment for each group."""
    settings = settings or ReportSettings()
    groups: dict[str, list[Trade]] = defaultdict(list)

    for trade in closed_trades(trades):
        groups[key(trade)].append(trade)

    segments = [
        _build_segment(name, group, initial_bankroll or DEFAULT_INITIAL_BANK, settings)
        for name, group in groups.items()
    ]
    return sorted(segments, key=lambda s: s.profit, reverse=True)


def _build_segment(
    name: str,
    trades: list[Trade],
    initial_bankroll: float,
    settings: ReportSettings,
) -> SegmentPerformance:
    """Compute every segment metric for one group of closed trades.

    Args:
        name: Group key.
        trades: Closed trades in the group.
        initial_bankroll: Bankroll the group's drawdown is measured from.
        settings: Report thresholds.

    Returns:
        SegmentPerformance for the group.
    """
    count = len(trades)
    chronological = sort_chronologically(trades)

    wins = sum(1 for t in trades if t.result == TradeResult.WIN)
    losses = sum(1 for t in trades if t.result == TradeResult.LOSE)
    rate = win_rate(wins, losses)

    profit = sum(t.profit_loss for t in trades)
    total_staked = sum(t.stake_euro for t in trades)
    roi = profit / total_staked * 100 if total_staked > 0 else 0.0

    gross_win = sum(t.profit_loss for t in trades if t.profit_loss > 0)
    gross_loss = abs(sum(t.profit_loss for t in trades if t.profit_loss < 0))
    avg_win = gross_win / wins if wins > 0 else 0.0
    avg_loss = gross_loss / losses if losses > 0 else 0.0

    avg_odds = sum(t.odds for t in trades) / count if count else 0.0
    avg_stake_percent = sum(t.stake_percent for t in trades) / count if count else 0.0

    drawdown, drawdown_percent, _ = max_drawdown(chronological, initial_bankroll)
    _, consecutive_losses = max_streaks(chronological)

    returns = per_trade_returns(trades)
    normalized_yield = sum(returns) / len(returns) * 100 if returns else 0.0

    kelly_percent, fractional_kelly = calculate_kelly(rate, avg_odds, count, settings)

    segment = SegmentPerformance(
        name=name,
        trades=count,
        wins=wins,
        losses=losses,
        win_rate=rate,
        profit=profit,
        roi=roi,
        total_staked=total_staked,
        avg_odds=avg_odds,
        avg_stake_percent=avg_stake_percent,
        profit_factor=safe_ratio(gross_win, gross_loss),
        expectancy=expectancy(rate, avg_win, avg_loss),
        avg_win=avg_win,
        avg_loss=avg_loss,
        payoff_ratio=safe_ratio(avg_win, avg_loss),
        max_drawdown=drawdown,
        max_drawdown_percent=drawdown_percent,
        yield_percent=roi,
        normalized_yield=normalized_yield,
        max_consecutive_losses=consecutive_losses,
        kelly_percent=kelly_percent,
        fractional_kelly=fractional_kelly,
        alert=_segment_alert(count, consecutive_losses, roi, settings),
    )
    segment.kelly_status = kelly_status(segment, settings)
    return segment


def _segment_alert(
    count: int, consecutive_losses: int, roi: float, settings: ReportSettings
) -> SegmentAlert | None:
    """Pick at most one alert, in priority order."""
    if count < settings.low_sample_threshold:
        return SegmentAlert.LOW_SAMPLE
    if consecutive_losses >= settings.consecutive_loss_alert:
        return SegmentAlert.CONSECUTIVE_LOSSES
    if roi > settings.scale_up_roi and count > settings.scale_up_min_trades:
        return SegmentAlert.SCALE_UP
    return None


def _odds_label(odds: float) -> str:
    """Find the odds bucket for a price; buckets are contiguous."""
    for odds_range in ODDS_RANGES:
        if odds_range.upper is None or odds <= odds_range.upper:
            return odds_range.label
    return ODDS_RANGES[-1].label


def _bucket(label: str, trades: list[Trade]) -> BucketPerformance:
    """Build count, win rate, profit and ROI for one bucket."""
    wins = sum(1 for t in trades if t.result == TradeResult.WIN)
    losses = sum(1 for t in trades if t.result == TradeResult.LOSE)
    profit = sum(t.profit_loss for t in trades)
    staked = sum(t.stake_euro for t in trades)

    return BucketPerformance(
        label=label,
        trades=len(trades),
        wins=wins,
        losses=losses,
        win_rate=win_rate(wins, losses),
        profit=profit,
        roi=profit / staked * 100 if staked > 0 else 0.0,
    )
