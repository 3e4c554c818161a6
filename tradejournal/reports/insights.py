# tradejournal/reports/insights.py
"""Rule-based strengths and improvement areas."""
from tradejournal.engine.helpers import format_ratio
from tradejournal.reports.models import (
    Insights,
    PerformanceOverview,
    RiskMetrics,
    SegmentPerformance,
)
from tradejournal.reports.settings import ReportSettings


def generate_insights(
    performance: PerformanceOverview,
    risk: RiskMetrics,
    strategies: list[SegmentPerformance],
    competitions: list[SegmentPerformance],
    settings: ReportSettings | None = None,
) -> Insights:
    """Turn computed aggregates into human-readable insights.

    Only reads the aggregates; nothing is recomputed from trades.

    Args:
        performance: Overview for the period.
        risk: Risk metrics for the period.
        strategies: Strategy segments sorted by profit descending.
        competitions: Competition segments sorted by profit descending.
        settings: Report settings (currency symbol, streak threshold).

    Returns:
        Insights with ordered strengths and improvements.
    """
    settings = settings or ReportSettings()
    symbol = settings.currency_symbol
    insights = Insights()

    # Strengths
    if performance.win_rate >= 60:
        insights.strengths.append(f"Excellent win rate of {performance.win_rate:.1f}%")
    elif performance.win_rate >= 55:
        insights.strengths.append(f"Good win rate of {performance.win_rate:.1f}%")

    if performance.profit_factor >= 2.0:
        insights.strengths.append(f"Very high profit factor: {format_ratio(performance.profit_factor)}")
    elif performance.profit_factor >= 1.5:
        insights.strengths.append(f"Positive profit factor: {format_ratio(performance.profit_factor)}")

    if risk.max_drawdown_percent < 10:
        insights.strengths.append(f"Contained drawdown: {risk.max_drawdown_percent:.1f}%")

    top_strategies = [s for s in strategies if s.profit > 0][:3]
    if top_strategies:
        names = ", ".join(s.name for s in top_strategies)
        insights.strengths.append(f"Winning strategies: {names}")

    if competitions and competitions[0].profit > 0:
        insights.strengths.append(f"Most profitable competition: {competitions[0].name}")

    if performance.expectancy > 0:
        insights.strengths.append(
            f"Positive expectancy: {symbol}{performance.expectancy:.2f} per trade"
        )

    # Improvements
    if performance.win_rate < 50:
        insights.improvements.append(
            f"Low win rate ({performance.win_rate:.1f}%). Consider reviewing your strategies."
        )

    if performance.profit_factor < 1.0:
        insights.improvements.append(
            f"Profit factor below 1 ({performance.profit_factor:.2f}). Losses exceed gains."
        )

    if risk.max_drawdown_percent > 20:
        insights.improvements.append(
            f"High drawdown: {risk.max_drawdown_percent:.1f}%. Consider reducing your stake."
        )

    losing_strategies = [s for s in strategies if s.profit < 0]
    if losing_strategies:
        names = ", ".join(s.name for s in losing_strategies)
        insights.improvements.append(f"Losing strategies: {names}")

    if risk.max_consecutive_losses >= settings.consecutive_loss_alert:
        insights.improvements.append(
            f"Long losing streak: {risk.max_consecutive_losses} in a row. Consider taking a break."
        )

    if performance.expectancy < 0:
        insights.improvements.append(
            f"Negative expectancy: {symbol}{performance.expectancy:.2f} per trade. "
            "Review your approach."
        )

    return insights
