# tradejournal/reports/models.py
"""Data models for journal reports."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from tradejournal.models.trade import Trade


class SegmentAlert(str, Enum):
    """Alert attached to a strategy or competition segment."""

    LOW_SAMPLE = "LOW_SAMPLE"
    CONSECUTIVE_LOSSES = "CONSECUTIVE_LOSSES"
    SCALE_UP = "SCALE_UP"


class KellyStatus(str, Enum):
    """Actual staking compared with the fractional Kelly recommendation."""

    OVER_BETTING = "OVER_BETTING"
    UNDER_BETTING = "UNDER_BETTING"
    OPTIMAL = "OPTIMAL"


class StreakAlert(str, Enum):
    """Behavioural alert for the current streak."""

    OVER_CONFIDENCE = "OVER_CONFIDENCE"
    REVENGE_TRADING = "REVENGE_TRADING"
    TILT = "TILT"


class TargetPeriod(str, Enum):
    """Period used for take-profit / stop-loss targets."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass
class PerformanceOverview:
    """Bankroll and profitability summary for a time window."""

    starting_bankroll: float
    ending_bankroll: float
    net_profit: float
    roi: float
    total_staked: float
    total_trades: int
    win_rate: float
    profit_factor: float
    expectancy: float
    avg_profit_per_trade: float


@dataclass
class RiskMetrics:
    """Drawdown, streak and volatility measures for a time window."""

    max_drawdown: float
    max_drawdown_percent: float
    max_consecutive_losses: int
    max_consecutive_wins: int
    avg_risk_per_trade: float
    sharpe_ratio: float
    recovery_factor: float


@dataclass
class DayResult:
    """Net profit for a single trading day."""

    date: date | None
    profit: float


@dataclass
class TradingBehavior:
    """How often and how consistently the user trades."""

    total_trading_days: int
    avg_trades_per_day: float
    best_day: DayResult | None
    worst_day: DayResult | None
    profitable_days_percent: float


@dataclass
class SegmentPerformance:
    """Full performance breakdown for a strategy or competition.

    Attributes:
        name: Normalized grouping key.
        trades: Closed trades in the segment.
        wins: Winning trades.
        losses: Losing trades.
        win_rate: Wins / (wins + losses) as a percentage.
        profit: Net profit.
        roi: Net profit / total staked as a percentage.
        total_staked: Sum of stakes.
        avg_odds: Mean decimal odds.
        avg_stake_percent: Mean stake as a percentage of bankroll.
        profit_factor: Gross wins / gross losses (999 = infinite).
        expectancy: Expected profit per trade.
        avg_win: Mean winning amount.
        avg_loss: Mean losing amount (positive).
        payoff_ratio: avg_win / avg_loss (999 = infinite).
        max_drawdown: Largest peak-to-trough decline within the segment.
        max_drawdown_percent: That decline relative to the peak bankroll.
        yield_percent: Profit over stakes as a percentage.
        normalized_yield: Mean per-trade return as a percentage.
        max_consecutive_losses: Longest losing run within the segment.
        kelly_percent: Full Kelly stake as a percentage (0 = unavailable).
        fractional_kelly: Quarter Kelly recommendation.
        alert: At most one alert tag.
        kelly_status: Average stake compared with fractional Kelly, None
            when Kelly is unavailable.
    """

    name: str
    trades: int
    wins: int
    losses: int
    win_rate: float
    profit: float
    roi: float
    total_staked: float
    avg_odds: float
    avg_stake_percent: float
    profit_factor: float
    expectancy: float
    avg_win: float
    avg_loss: float
    payoff_ratio: float
    max_drawdown: float
    max_drawdown_percent: float
    yield_percent: float
    normalized_yield: float
    max_consecutive_losses: int
    kelly_percent: float
    fractional_kelly: float
    alert: SegmentAlert | None = None
    kelly_status: KellyStatus | None = None


@dataclass
class BucketPerformance:
    """Count, win rate and profit for an odds, day or hour bucket."""

    label: str
    trades: int
    wins: int
    losses: int
    win_rate: float
    profit: float
    roi: float


@dataclass
class MonthlyComparison:
    """One KPI compared between a month and the month before."""

    kpi: str
    current: float
    previous: float
    change: float
    change_percent: float


@dataclass
class Insights:
    """Human-readable strengths and areas for improvement."""

    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)


@dataclass
class CurrentStreak:
    """The run of identical results ending at the latest closed trade."""

    type: str | None
    count: int
    alert: StreakAlert | None = None


@dataclass
class DashboardMetrics:
    """All-time KPIs over the recalculated journal."""

    total_trades: int
    wins: int
    losses: int
    voids: int
    win_rate: float
    total_profit: float
    capital_invested: float
    current_bankroll: float
    roi: float
    best_trade: Trade | None
    worst_trade: Trade | None
    daily_tp_hits: int
    daily_sl_hits: int
    best_day: DayResult | None
    worst_day: DayResult | None
    profit_factor: float
    avg_profit_per_trade: float
    expectancy: float
    max_win_streak: int
    max_loss_streak: int
    avg_odds: float


@dataclass
class PeriodTargets:
    """Progress toward the take-profit and stop-loss of a period."""

    period: TargetPeriod
    period_start: date
    start_bankroll: float
    current_bankroll: float
    period_pl: float
    tp_percent: float
    sl_percent: float
    tp_target: float
    sl_target: float
    tp_remaining: float
    sl_remaining: float
    tp_hit: bool
    sl_hit: bool


@dataclass
class MonthlyReport:
    """Every aggregate for one calendar month."""

    year: int
    month: int
    trades: list[Trade]
    performance: PerformanceOverview
    risk: RiskMetrics
    behavior: TradingBehavior
    strategies: list[SegmentPerformance]
    competitions: list[SegmentPerformance]
    odds_ranges: list[BucketPerformance]
    days_of_week: list[BucketPerformance]
    hour_ranges: list[BucketPerformance]
    comparison: list[MonthlyComparison]
    insights: Insights
