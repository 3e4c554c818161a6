# tests/reports/test_dashboard.py
"""Tests for dashboard KPIs, current streak and period targets."""
from datetime import date, timedelta

import pytest

from tradejournal.models.trade import (
    STOP_LOSS,
    TARGET_PROFIT,
    AdjustmentType,
    BankrollAdjustment,
    Trade,
    TradeResult,
    TradingSettings,
)
from tradejournal.reports.dashboard import (
    calculate_current_streak,
    calculate_dashboard_metrics,
    calculate_period_targets,
    period_start,
)
from tradejournal.reports.models import StreakAlert, TargetPeriod
from tradejournal.reports.settings import ReportSettings


def make_trade(
    trade_id: str,
    trade_date: date | None,
    profit_loss: float,
    result: TradeResult,
    odds: float = 2.0,
    tp_sl: str | None = "",
) -> Trade:
    """Create a recalculated trade for testing."""
    return Trade(
        id=trade_id,
        date=trade_date,
        competition="Premier League",
        home_team="Arsenal",
        away_team="Chelsea",
        strategy="Lay the Draw",
        odds=odds,
        stake_percent=1.0,
        stake_euro=10.0,
        result=result,
        profit_loss=profit_loss,
        tp_sl=tp_sl,
    )


def make_streak(results: str) -> list[Trade]:
    """Create one closed trade per day from a string like ``"WLL"``."""
    start = date(2026, 3, 1)
    trades = []
    for i, r in enumerate(results):
        if r == "W":
            trades.append(make_trade(f"t{i}", start + timedelta(days=i), 10, TradeResult.WIN))
        else:
            trades.append(make_trade(f"t{i}", start + timedelta(days=i), -10, TradeResult.LOSE))
    return trades


class TestDashboardMetrics:
    """Tests for calculate_dashboard_metrics."""

    @pytest.fixture
    def trades(self) -> list[Trade]:
        return [
            make_trade("t1", date(2026, 3, 2), 20, TradeResult.WIN, odds=3.0, tp_sl=TARGET_PROFIT),
            make_trade("t2", date(2026, 3, 2), -10, TradeResult.LOSE),
            make_trade("t3", date(2026, 3, 3), 0, TradeResult.VOID, odds=1.5),
            make_trade("t4", date(2026, 3, 4), 0, TradeResult.OPEN, tp_sl=None),
            make_trade("t5", date(2026, 3, 4), -10, TradeResult.LOSE, tp_sl=STOP_LOSS),
        ]

    @pytest.fixture
    def adjustments(self) -> list[BankrollAdjustment]:
        return [BankrollAdjustment("a1", date(2026, 3, 1), AdjustmentType.DEPOSIT, 500)]

    def test_counts(self, trades, adjustments):
        metrics = calculate_dashboard_metrics(trades, TradingSettings(), adjustments)

        assert metrics.total_trades == 3
        assert metrics.wins == 1
        assert metrics.losses == 2
        assert metrics.voids == 1
        assert metrics.win_rate == pytest.approx(100 / 3)
        assert metrics.daily_tp_hits == 1
        assert metrics.daily_sl_hits == 1

    def test_bankroll(self, trades, adjustments):
        metrics = calculate_dashboard_metrics(trades, TradingSettings(), adjustments)

        assert metrics.total_profit == 0.0
        assert metrics.capital_invested == 1500.0
        assert metrics.current_bankroll == 1500.0
        assert metrics.roi == 0.0

    def test_current_bank_override(self, trades, adjustments):
        settings = TradingSettings(current_bank=1234.0)

        metrics = calculate_dashboard_metrics(trades, settings, adjustments)

        assert metrics.current_bankroll == 1234.0

    def test_best_and_worst(self, trades, adjustments):
        metrics = calculate_dashboard_metrics(trades, TradingSettings(), adjustments)

        assert metrics.best_trade.id == "t1"
        assert metrics.worst_trade.id == "t2"
        assert metrics.best_day.date == date(2026, 3, 2)
        assert metrics.best_day.profit == 10.0
        assert metrics.worst_day.date == date(2026, 3, 4)
        assert metrics.worst_day.profit == -10.0

    def test_ratios_and_streaks(self, trades, adjustments):
        metrics = calculate_dashboard_metrics(trades, TradingSettings(), adjustments)

        assert metrics.profit_factor == 1.0
        assert metrics.avg_profit_per_trade == 0.0
        assert metrics.expectancy == pytest.approx(0.0)
        assert metrics.max_win_streak == 1
        assert metrics.max_loss_streak == 2
        assert metrics.avg_odds == pytest.approx(2.125)

    def test_empty_journal(self):
        metrics = calculate_dashboard_metrics([], TradingSettings(initial_bank=800), [])

        assert metrics.total_trades == 0
        assert metrics.capital_invested == 800.0
        assert metrics.current_bankroll == 800.0
        assert metrics.roi == 0.0
        assert metrics.best_trade is None
        assert metrics.best_day is None
        assert metrics.avg_odds == 0.0


class TestCurrentStreak:
    """Tests for calculate_current_streak."""

    def test_empty(self):
        streak = calculate_current_streak([])

        assert streak.type is None
        assert streak.count == 0
        assert streak.alert is None

    def test_short_winning_run(self):
        streak = calculate_current_streak(make_streak("LWW"))

        assert streak.type == "WIN"
        assert streak.count == 2
        assert streak.alert is None

    def test_tilt(self):
        streak = calculate_current_streak(make_streak("WWLLL"))

        assert streak.type == "LOSE"
        assert streak.count == 3
        assert streak.alert == StreakAlert.TILT

    def test_revenge_trading(self):
        streak = calculate_current_streak(make_streak("WLLLLL"))

        assert streak.count == 5
        assert streak.alert == StreakAlert.REVENGE_TRADING

    def test_over_confidence(self):
        streak = calculate_current_streak(make_streak("WWWWWW"))

        assert streak.count == 6
        assert streak.alert == StreakAlert.OVER_CONFIDENCE

    def test_open_and_void_do_not_break_streak(self):
        trades = make_streak("LLL") + [
            make_trade("v", date(2026, 3, 10), 0, TradeResult.VOID),
            make_trade("o", date(2026, 3, 11), 0, TradeResult.OPEN),
        ]

        streak = calculate_current_streak(trades)

        assert streak.type == "LOSE"
        assert streak.count == 3

    def test_custom_thresholds(self):
        settings = ReportSettings(streak_alert_length=3, tilt_length=2)

        streak = calculate_current_streak(make_streak("WLL"), settings)

        assert streak.alert == StreakAlert.TILT


class TestPeriodTargets:
    """Tests for calculate_period_targets."""

    TODAY = date(2026, 3, 4)

    @pytest.fixture
    def trades(self) -> list[Trade]:
        return [
            make_trade("t1", date(2026, 2, 27), 100, TradeResult.WIN),
            make_trade("t2", date(2026, 3, 2), 20, TradeResult.WIN),
            make_trade("t3", date(2026, 3, 4), 40, TradeResult.WIN),
            make_trade("t4", date(2026, 3, 4), 0, TradeResult.OPEN),
        ]

    @pytest.fixture
    def settings(self) -> TradingSettings:
        return TradingSettings(
            initial_bank=1000, daily_tp=3, daily_sl=-2, weekly_tp=5, weekly_sl=-5
        )

    def test_period_start(self):
        assert period_start(TargetPeriod.DAILY, self.TODAY) == self.TODAY
        assert period_start(TargetPeriod.WEEKLY, self.TODAY) == date(2026, 3, 2)
        assert period_start(TargetPeriod.MONTHLY, self.TODAY) == date(2026, 3, 1)

    def test_daily(self, trades, settings):
        targets = calculate_period_targets(trades, settings, self.TODAY)

        assert targets.period == TargetPeriod.DAILY
        assert targets.start_bankroll == 1120.0
        assert targets.period_pl == 40.0
        assert targets.current_bankroll == 1160.0
        assert targets.tp_target == pytest.approx(33.6)
        assert targets.sl_target == pytest.approx(-22.4)
        assert targets.tp_remaining == pytest.approx(-6.4)
        assert targets.tp_hit is True
        assert targets.sl_hit is False

    def test_weekly(self, trades, settings):
        targets = calculate_period_targets(trades, settings, self.TODAY, TargetPeriod.WEEKLY)

        assert targets.period_start == date(2026, 3, 2)
        assert targets.start_bankroll == 1100.0
        assert targets.period_pl == 60.0
        assert targets.tp_target == pytest.approx(55.0)
        assert targets.tp_hit is True

    def test_disabled_targets_never_hit(self, trades, settings):
        targets = calculate_period_targets(trades, settings, self.TODAY, TargetPeriod.MONTHLY)

        assert targets.tp_percent == 0.0
        assert targets.tp_hit is False
        assert targets.sl_hit is False

    def test_stop_loss_hit(self, settings):
        trades = [make_trade("t1", self.TODAY, -25, TradeResult.LOSE)]

        targets = calculate_period_targets(trades, settings, self.TODAY)

        assert targets.sl_hit is True
        assert targets.sl_remaining == pytest.approx(-20 + 25)
