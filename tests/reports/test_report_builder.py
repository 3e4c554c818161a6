# tests/reports/test_report_builder.py
"""Tests for MonthlyReportBuilder."""
import logging
from datetime import date, datetime

import pytest

from tradejournal.engine.recalculator import recalculate_trades
from tradejournal.models.trade import (
    AdjustmentType,
    BankrollAdjustment,
    Trade,
    TradeResult,
    TradingSettings,
)
from tradejournal.reports.report_builder import MonthlyReportBuilder, build_monthly_report
from tradejournal.reports.settings import ReportSettings


def make_trade(
    trade_id: str,
    trade_date: date,
    profit_loss: float,
    strategy: str = "Lay the Draw",
    competition: str = "Serie A",
    odds: float = 2.0,
) -> Trade:
    """Create a closed trade with a 10 stake."""
    return Trade(
        id=trade_id,
        date=trade_date,
        competition=competition,
        home_team="Home",
        away_team="Away",
        strategy=strategy,
        odds=odds,
        stake_percent=1.0,
        stake_euro=10.0,
        result=TradeResult.WIN if profit_loss > 0 else TradeResult.LOSE,
        profit_loss=profit_loss,
        created_at=datetime.combine(trade_date, datetime.min.time()).replace(hour=19),
    )


class TestMonthlyReportBuilder:
    """Tests for MonthlyReportBuilder."""

    @pytest.fixture
    def trades(self) -> list[Trade]:
        raw = [
            make_trade("f1", date(2026, 2, 20), 100),
            make_trade("m1", date(2026, 3, 2), 10, strategy="Over 2.5", odds=2.0),
            make_trade("m2", date(2026, 3, 3), -10, competition="Liga", odds=1.4),
            make_trade("m3", date(2026, 3, 5), 25, odds=3.5),
            make_trade("a1", date(2026, 4, 1), 50),
        ]
        return recalculate_trades(raw, TradingSettings(initial_bank=1000))

    @pytest.fixture
    def adjustments(self) -> list[BankrollAdjustment]:
        return [BankrollAdjustment("d1", date(2026, 3, 10), AdjustmentType.DEPOSIT, 200)]

    def test_month_window(self, trades, adjustments):
        report = MonthlyReportBuilder().build(
            trades, TradingSettings(initial_bank=1000), adjustments, 2026, 3
        )

        assert report.year == 2026
        assert report.month == 3
        assert sorted(t.id for t in report.trades) == ["m1", "m2", "m3"]

    def test_bankroll_carries_prior_months(self, trades, adjustments):
        report = MonthlyReportBuilder().build(
            trades, TradingSettings(initial_bank=1000), adjustments, 2026, 3
        )

        assert report.performance.starting_bankroll == 1100.0
        assert report.performance.net_profit == 25.0
        assert report.performance.ending_bankroll == 1325.0

    def test_segmentations(self, trades, adjustments):
        report = MonthlyReportBuilder().build(
            trades, TradingSettings(initial_bank=1000), adjustments, 2026, 3
        )

        assert [s.name for s in report.strategies] == ["Lay the Draw", "Over 2.5"]
        assert [c.name for c in report.competitions] == ["Serie A", "Liga"]
        assert [b.trades for b in report.odds_ranges] == [1, 1, 0, 1]
        assert [d.label for d in report.days_of_week] == ["Monday", "Tuesday", "Thursday"]
        assert [h.label for h in report.hour_ranges] == ["18:00 - 22:00"]

    def test_comparison_and_insights(self, trades, adjustments):
        report = MonthlyReportBuilder().build(
            trades, TradingSettings(initial_bank=1000), adjustments, 2026, 3
        )

        assert len(report.comparison) == 4
        assert report.comparison[1].previous == 100.0
        assert "Contained drawdown: 0.9%" in report.insights.strengths

    def test_logs_report_generation(self, trades, adjustments, caplog):
        with caplog.at_level(logging.INFO):
            MonthlyReportBuilder().build(
                trades, TradingSettings(initial_bank=1000), adjustments, 2026, 3
            )

        assert "Building report for 2026-03 (3 trades)" in caplog.text

    def test_empty_month(self, trades):
        report = build_monthly_report(trades, TradingSettings(initial_bank=1000), [], 2025, 6)

        assert report.trades == []
        assert report.performance.starting_bankroll == 1000.0
        assert report.strategies == []
        assert report.days_of_week == []
        assert report.insights.strengths == ["Contained drawdown: 0.0%"]

    def test_settings_flow_to_insights(self, trades):
        settings = ReportSettings(currency_symbol="$")

        report = build_monthly_report(
            trades, TradingSettings(initial_bank=1000), [], 2026, 3, settings
        )

        assert any(s.startswith("Positive expectancy: $") for s in report.insights.strengths)
