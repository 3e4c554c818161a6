# tradejournal/reports/report_builder.py
"""Assembles every report aggregate for a calendar month."""
import logging

from tradejournal.models.trade import BankrollAdjustment, Trade, TradingSettings
from tradejournal.reports.comparison import (
    calculate_monthly_comparison,
    filter_trades_by_range,
    get_month_range,
)
from tradejournal.reports.insights import generate_insights
from tradejournal.reports.models import MonthlyReport
from tradejournal.reports.performance import (
    calculate_performance_overview,
    calculate_risk_metrics,
    calculate_trading_behavior,
)
from tradejournal.reports.segmentation import (
    calculate_competition_performance,
    calculate_day_of_week_performance,
    calculate_hour_range_performance,
    calculate_odds_range_analysis,
    calculate_strategy_performance,
)
from tradejournal.reports.settings import ReportSettings

logger = logging.getLogger(__name__)


class MonthlyReportBuilder:
    """Builds a MonthlyReport from the full journal history."""

    def __init__(self, settings: ReportSettings | None = None) -> None:
        """Initialize the builder.

        Args:
            settings: Report thresholds; defaults are used when omitted.
        """
        self._settings = settings or ReportSettings()

    def build(
        self,
        trades: list[Trade],
        trading_settings: TradingSettings,
        adjustments: list[BankrollAdjustment],
        year: int,
        month: int,
    ) -> MonthlyReport:
        """Build the report for one month.

        Args:
            trades: Complete recalculated trade history.
            trading_settings: Bankroll settings.
            adjustments: Every deposit and withdrawal.
            year: Report year.
            month: Report month (1-12).

        Returns:
            MonthlyReport with all aggregates and insights.
        """
        start, end = get_month_range(year, month)
        month_trades = filter_trades_by_range(trades, start, end)
        initial_bank = trading_settings.initial_bank

        logger.info(f"Building report for {year}-{month:02d} ({len(month_trades)} trades)")

        performance = calculate_performance_overview(
            month_trades, initial_bank, adjustments, start, end, history=trades
        )
        risk = calculate_risk_metrics(
            month_trades, initial_bank, adjustments, start, history=trades
        )
        strategies = calculate_strategy_performance(
            month_trades, performance.starting_bankroll, self._settings
        )
        competitions = calculate_competition_performance(
            month_trades, performance.starting_bankroll, self._settings
        )

        return MonthlyReport(
            year=year,
            month=month,
            trades=month_trades,
            performance=performance,
            risk=risk,
            behavior=calculate_trading_behavior(month_trades),
            strategies=strategies,
            competitions=competitions,
            odds_ranges=calculate_odds_range_analysis(month_trades),
            days_of_week=calculate_day_of_week_performance(month_trades),
            hour_ranges=calculate_hour_range_performance(month_trades, self._settings),
            comparison=calculate_monthly_comparison(
                trades, initial_bank, adjustments, year, month
            ),
            insights=generate_insights(
                performance, risk, strategies, competitions, self._settings
            ),
        )


def build_monthly_report(
    trades: list[Trade],
    trading_settings: TradingSettings,
    adjustments: list[BankrollAdjustment],
    year: int,
    month: int,
    settings: ReportSettings | None = None,
) -> MonthlyReport:
    """Build a monthly report with a one-off builder."""
    return MonthlyReportBuilder(settings).build(
        trades, trading_settings, adjustments, year, month
    )
