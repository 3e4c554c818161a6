# main.py
"""Main entry point for the trading journal."""
import asyncio
import sys
import logging
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from tradejournal.config.settings import Settings
from tradejournal.engine.helpers import format_currency, format_percent, format_ratio
from tradejournal.journal import JournalManager, JsonTradeRepository
from tradejournal.reports.models import DashboardMetrics, MonthlyReport, TargetPeriod


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def create_data_dirs(settings: Settings) -> None:
    """Create the journal data directory if it doesn't exist."""
    Path(settings.journal.data_dir).mkdir(parents=True, exist_ok=True)
    logger.info("Data directories verified")


def print_startup_banner(settings: Settings) -> None:
    """Print system startup banner."""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.system.name}")
    logger.info(f"Version: {settings.system.version}")
    logger.info(f"Data dir: {settings.journal.data_dir}")
    logger.info("=" * 60)


def load_and_validate_config(config_path: Path = Path("config/settings.yaml")) -> Settings:
    """Load and validate configuration.

    Returns:
        Settings object loaded from YAML.

    Raises:
        SystemExit: If config file missing or YAML parsing fails.
    """
    # Load environment variables
    load_dotenv()
    logger.info("✓ Loaded environment variables")

    if not config_path.exists():
        logger.error(f"{config_path} not found")
        sys.exit(1)

    try:
        settings = Settings.from_yaml(config_path)
        logger.info(f"✓ Settings loaded from {config_path}")
    except Exception as e:
        logger.error(f"Failed to parse {config_path}: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.system.log_level)
    create_data_dirs(settings)

    return settings


def parse_report_month(args: list[str], today: date) -> tuple[int, int]:
    """Read an optional ``YYYY-MM`` argument, defaulting to the current month.

    Raises:
        SystemExit: If the argument is not a valid month.
    """
    if not args:
        return today.year, today.month

    try:
        year_text, month_text = args[0].split("-")
        year, month = int(year_text), int(month_text)
    except ValueError:
        logger.error(f"Invalid month {args[0]!r}, expected YYYY-MM")
        sys.exit(1)

    if not 1 <= month <= 12:
        logger.error(f"Invalid month {args[0]!r}, expected YYYY-MM")
        sys.exit(1)

    return year, month


def log_dashboard(metrics: DashboardMetrics, symbol: str) -> None:
    """Log the all-time KPIs."""
    logger.info("-" * 60)
    logger.info(
        f"Trades: {metrics.total_trades} "
        f"(W {metrics.wins} / L {metrics.losses} / V {metrics.voids})"
    )
    logger.info(f"Win rate: {format_percent(metrics.win_rate)}")
    logger.info(f"Total profit: {format_currency(metrics.total_profit, symbol)}")
    logger.info(f"Capital invested: {format_currency(metrics.capital_invested, symbol)}")
    logger.info(f"Current bankroll: {format_currency(metrics.current_bankroll, symbol)}")
    logger.info(f"ROI: {format_percent(metrics.roi)}")
    logger.info(f"Profit factor: {format_ratio(metrics.profit_factor)}")
    logger.info(
        f"Daily targets hit: TP {metrics.daily_tp_hits} / SL {metrics.daily_sl_hits}"
    )


def log_monthly_report(report: MonthlyReport, symbol: str) -> None:
    """Log the headline numbers and insights of a monthly report."""
    performance = report.performance
    risk = report.risk

    logger.info("-" * 60)
    logger.info(f"Report {report.year}-{report.month:02d}")
    logger.info(
        f"Bankroll: {format_currency(performance.starting_bankroll, symbol)} -> "
        f"{format_currency(performance.ending_bankroll, symbol)}"
    )
    logger.info(f"Net profit: {format_currency(performance.net_profit, symbol)}")
    logger.info(f"ROI: {format_percent(performance.roi)}")
    logger.info(
        f"Max drawdown: {format_currency(risk.max_drawdown, symbol)} "
        f"({format_percent(risk.max_drawdown_percent)})"
    )

    for segment in report.strategies:
        alert = f" [{segment.alert.value}]" if segment.alert else ""
        staking = f" Kelly: {segment.kelly_status.value}" if segment.kelly_status else ""
        logger.info(
            f"Strategy {segment.name}: {segment.trades} trades, "
            f"{format_currency(segment.profit, symbol)}{alert}{staking}"
        )

    for strength in report.insights.strengths:
        logger.info(f"+ {strength}")
    for improvement in report.insights.improvements:
        logger.info(f"- {improvement}")


async def main() -> None:
    """Load the journal, recalculate it and log the reports."""
    settings = load_and_validate_config()
    print_startup_banner(settings)

    year, month = parse_report_month(sys.argv[1:], date.today())
    symbol = settings.reports.currency_symbol

    repository = JsonTradeRepository(settings.journal)
    manager = JournalManager(repository, settings.journal, settings.reports)
    await manager.refresh()
    logger.info("✓ Journal loaded")

    log_dashboard(manager.get_dashboard_metrics(), symbol)

    streak = manager.get_current_streak()
    if streak.alert:
        logger.warning(f"Current streak: {streak.count} x {streak.type} ({streak.alert.value})")

    targets = manager.get_period_targets(date.today(), TargetPeriod.DAILY)
    if targets.tp_hit:
        logger.info("Daily take-profit reached")
    elif targets.sl_hit:
        logger.warning("Daily stop-loss reached")

    log_monthly_report(manager.get_monthly_report(year, month), symbol)


if __name__ == "__main__":
    asyncio.run(main())
