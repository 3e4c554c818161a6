# tradejournal/journal/journal_manager.py
"""Manager that owns the enriched journal and re-derives it on change."""
import asyncio
import logging
from datetime import date

from tradejournal.engine.bankroll import BankrollSnapshot, calculate_bankroll_history
from tradejournal.engine.helpers import settle_trade
from tradejournal.engine.recalculator import TradeRecalculator
from tradejournal.journal.repository import TradeRepository
from tradejournal.journal.settings import JournalSettings
from tradejournal.models.trade import BankrollAdjustment, Trade, TradingSettings
from tradejournal.reports.dashboard import (
    calculate_current_streak,
    calculate_dashboard_metrics,
    calculate_period_targets,
)
from tradejournal.reports.models import (
    CurrentStreak,
    DashboardMetrics,
    MonthlyReport,
    PeriodTargets,
    TargetPeriod,
)
from tradejournal.reports.report_builder import MonthlyReportBuilder
from tradejournal.reports.settings import ReportSettings

logger = logging.getLogger(__name__)


class JournalManager:
    """Coordinates the repository, recalculation and reports.

    Every mutation is persisted first and then followed by a full reload and
    recalculation; the enriched trade list is replaced wholesale, never
    patched. A single lock serializes mutations and refreshes so overlapping
    calls cannot interleave writes.
    """

    def __init__(
        self,
        repository: TradeRepository,
        settings: JournalSettings,
        report_settings: ReportSettings | None = None,
    ) -> None:
        """Initialize the journal manager.

        Args:
            repository: Storage for trades, settings and adjustments.
            settings: Journal configuration settings.
            report_settings: Report thresholds.
        """
        self._repository = repository
        self._settings = settings
        self._report_settings = report_settings or ReportSettings()
        self._recalculator = TradeRecalculator()
        self._report_builder = MonthlyReportBuilder(self._report_settings)
        self._lock = asyncio.Lock()

        self._trades: list[Trade] = []
        self._trading_settings = TradingSettings(initial_bank=settings.default_initial_bank)
        self._adjustments: list[BankrollAdjustment] = []

    @property
    def trades(self) -> list[Trade]:
        """Enriched trades, newest first."""
        return list(self._trades)

    @property
    def trading_settings(self) -> TradingSettings:
        """Current bankroll and target settings."""
        return self._trading_settings

    @property
    def adjustments(self) -> list[BankrollAdjustment]:
        """Current bankroll adjustments."""
        return list(self._adjustments)

    async def refresh(self) -> list[Trade]:
        """Reload everything from the repository and recalculate.

        Returns:
            The enriched trade list.
        """
        async with self._lock:
            await self._refresh_locked()
        return self.trades

    async def _refresh_locked(self) -> None:
        """Reload and recalculate; the caller holds the lock."""
        raw_trades = await self._repository.load_trades()
        trading_settings = await self._repository.load_settings()
        adjustments = await self._repository.load_adjustments()

        self._trades = self._recalculator.recalculate(raw_trades, trading_settings)
        self._trading_settings = trading_settings
        self._adjustments = adjustments

        logger.info(
            f"Journal recalculated: {len(self._trades)} trades, "
            f"{len(self._adjustments)} adjustments"
        )

    async def save_trade(self, trade: Trade) -> None:
        """Add or replace a trade, then re-derive the journal.

        Args:
            trade: Trade as entered by the user.
        """
        if not self._settings.enabled:
            return

        async with self._lock:
            if self._settings.settle_on_save:
                # stored settings, the cached copy may predate the first refresh
                trading_settings = await self._repository.load_settings()
                bankroll = trading_settings.initial_bank if trade.stake_percent else None
                trade = settle_trade(trade, bankroll=bankroll)
            await self._repository.save_trade(trade)
            await self._refresh_locked()

    async def delete_trade(self, trade_id: str) -> None:
        """Delete a trade, then re-derive the journal.

        Raises:
            ValueError: If the trade does not exist.
        """
        if not self._settings.enabled:
            return

        async with self._lock:
            await self._repository.delete_trade(trade_id)
            await self._refresh_locked()

    async def update_settings(self, trading_settings: TradingSettings) -> None:
        """Replace the settings, then re-derive the journal."""
        if not self._settings.enabled:
            return

        async with self._lock:
            await self._repository.save_settings(trading_settings)
            await self._refresh_locked()

    async def save_adjustment(self, adjustment: BankrollAdjustment) -> None:
        """Add or replace a bankroll adjustment, then re-derive the journal."""
        if not self._settings.enabled:
            return

        async with self._lock:
            await self._repository.save_adjustment(adjustment)
            await self._refresh_locked()

    async def delete_adjustment(self, adjustment_id: str) -> None:
        """Delete a bankroll adjustment, then re-derive the journal.

        Raises:
            ValueError: If the adjustment does not exist.
        """
        if not self._settings.enabled:
            return

        async with self._lock:
            await self._repository.delete_adjustment(adjustment_id)
            await self._refresh_locked()

    def get_monthly_report(self, year: int, month: int) -> MonthlyReport:
        """Build the report for a calendar month from the current journal."""
        return self._report_builder.build(
            self._trades, self._trading_settings, self._adjustments, year, month
        )

    def get_dashboard_metrics(self) -> DashboardMetrics:
        """All-time KPIs from the current journal."""
        return calculate_dashboard_metrics(
            self._trades, self._trading_settings, self._adjustments
        )

    def get_current_streak(self) -> CurrentStreak:
        """Streak ending at the most recent closed trade."""
        return calculate_current_streak(self._trades, self._report_settings)

    def get_bankroll_history(self) -> list[BankrollSnapshot]:
        """Bankroll evolution across trades and adjustments."""
        return calculate_bankroll_history(
            self._trades, self._trading_settings.initial_bank, self._adjustments
        )

    def get_period_targets(
        self, today: date, period: TargetPeriod = TargetPeriod.DAILY
    ) -> PeriodTargets:
        """Progress toward the take-profit and stop-loss of a period."""
        return calculate_period_targets(self._trades, self._trading_settings, today, period)
