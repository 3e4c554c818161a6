# tradejournal/reports/__init__.py
"""Statistics engine for journal reports."""

from .dashboard import (
    calculate_current_streak,
    calculate_dashboard_metrics,
    calculate_period_targets,
)
from .models import (
    DashboardMetrics,
    MonthlyReport,
    PerformanceOverview,
    RiskMetrics,
    SegmentPerformance,
)
from .report_builder import MonthlyReportBuilder, build_monthly_report
from .settings import ReportSettings

__all__ = [
    "DashboardMetrics",
    "MonthlyReport",
    "MonthlyReportBuilder",
    "PerformanceOverview",
    "ReportSettings",
    "RiskMetrics",
    "SegmentPerformance",
    "build_monthly_report",
    "calculate_current_streak",
    "calculate_dashboard_metrics",
    "calculate_period_targets",
]
