# tests/journal/test_journal_manager.py
"""Tests for JournalManager."""
import asyncio
import logging
from datetime import date
from pathlib import Path

import pytest

from tradejournal.journal.journal_manager import JournalManager
from tradejournal.journal.repository import JsonTradeRepository
from tradejournal.journal.settings import JournalSettings
from tradejournal.models.trade import (
    TARGET_PROFIT,
    AdjustmentType,
    BankrollAdjustment,
    Trade,
    TradeResult,
    TradingSettings,
)
from tradejournal.reports.models import StreakAlert, TargetPeriod


def make_trade(
    trade_id: str = "t1",
    trade_date: date = date(2026, 3, 2),
    result: TradeResult = TradeResult.WIN,
    odds: float = 2.0,
    stake_percent: float = 1.0,
) -> Trade:
    """Create a trade as the user would enter it."""
    return Trade(
        id=trade_id,
        date=trade_date,
        competition="Serie A",
        home_team="Fiorentina",
        away_team="Bologna",
        strategy="Back Home",
        odds=odds,
        stake_percent=stake_percent,
        stake_euro=0.0,
        result=result,
    )


class TestJournalManager:
    """Tests for JournalManager."""

    @pytest.fixture
    def settings(self, tmp_path: Path) -> JournalSettings:
        """Create settings with temporary data directory."""
        return JournalSettings(data_dir=str(tmp_path / "journal"))

    @pytest.fixture
    def manager(self, settings: JournalSettings) -> JournalManager:
        return JournalManager(JsonTradeRepository(settings), settings)

    async def test_refresh_empty_journal(self, manager):
        trades = await manager.refresh()

        assert trades == []
        assert manager.trading_settings.initial_bank == 1000.0
        assert manager.adjustments == []

    async def test_save_trade_settles_and_recalculates(self, manager):
        """Bank 1000, 1% at 2.00 winning: stake 10, P/L 10, 1 point."""
        await manager.save_trade(make_trade())

        trade = manager.trades[0]
        assert trade.stake_euro == 10.0
        assert trade.profit_loss == 10.0
        assert trade.roi == 100.0
        assert trade.points == 1.0
        assert trade.daily_pl == 10.0

    async def test_save_trade_sizes_stake_from_stored_settings(self, settings):
        """A fresh manager sizes stakes from the stored bank, not the default."""
        repository = JsonTradeRepository(settings)
        await repository.save_settings(TradingSettings(initial_bank=2000))
        manager = JournalManager(repository, settings)

        await manager.save_trade(make_trade())

        trade = manager.trades[0]
        assert trade.stake_euro == 20.0
        assert trade.profit_loss == 20.0
        assert trade.points == 1.0
        stored = await repository.load_trades()
        assert stored[0].stake_euro == 20.0

    async def test_save_trade_without_settling(self, tmp_path):
        settings = JournalSettings(data_dir=str(tmp_path / "raw"), settle_on_save=False)
        manager = JournalManager(JsonTradeRepository(settings), settings)
        trade = make_trade()
        trade.stake_euro = 50.0
        trade.profit_loss = 42.0

        await manager.save_trade(trade)

        assert manager.trades[0].profit_loss == 42.0
        assert manager.trades[0].stake_euro == 50.0

    async def test_settings_change_rederives_labels(self, manager):
        await manager.save_trade(make_trade("t1", stake_percent=2.0))
        await manager.save_trade(make_trade("t2", stake_percent=2.0))
        assert all(t.tp_sl == "" for t in manager.trades)

        await manager.update_settings(TradingSettings(initial_bank=1000, daily_tp=3))

        labels = [t.tp_sl for t in manager.trades]
        assert labels == ["", TARGET_PROFIT]

    async def test_trades_are_newest_first(self, manager):
        await manager.save_trade(make_trade("t1", date(2026, 3, 1)))
        await manager.save_trade(make_trade("t2", date(2026, 3, 5)))
        await manager.save_trade(make_trade("t3", date(2026, 3, 3)))

        assert [t.id for t in manager.trades] == ["t2", "t3", "t1"]

    async def test_delete_trade(self, manager):
        await manager.save_trade(make_trade("t1"))
        await manager.save_trade(make_trade("t2"))

        await manager.delete_trade("t1")

        assert [t.id for t in manager.trades] == ["t2"]

    async def test_delete_unknown_trade(self, manager):
        with pytest.raises(ValueError):
            await manager.delete_trade("missing")

    async def test_adjustments_flow_into_dashboard(self, manager):
        await manager.save_trade(make_trade())
        await manager.save_adjustment(
            BankrollAdjustment("a1", date(2026, 3, 1), AdjustmentType.DEPOSIT, 500.0)
        )

        metrics = manager.get_dashboard_metrics()

        assert metrics.capital_invested == 1500.0
        assert metrics.current_bankroll == 1510.0

        await manager.delete_adjustment("a1")

        assert manager.get_dashboard_metrics().capital_invested == 1000.0

    async def test_disabled_journal_ignores_mutations(self, tmp_path):
        settings = JournalSettings(data_dir=str(tmp_path / "off"), enabled=False)
        manager = JournalManager(JsonTradeRepository(settings), settings)

        await manager.save_trade(make_trade())

        assert await manager.refresh() == []

    async def test_bankroll_history(self, manager):
        await manager.save_trade(make_trade("t1", date(2026, 3, 2)))
        await manager.save_trade(make_trade("t2", date(2026, 3, 3), TradeResult.LOSE))
        await manager.save_adjustment(
            BankrollAdjustment("a1", date(2026, 3, 2), AdjustmentType.WITHDRAWAL, 100.0)
        )

        history = manager.get_bankroll_history()

        assert [s.balance for s in history] == [1000.0, 1010.0, 910.0, 900.0]
        assert history[2].is_adjustment is True

    async def test_monthly_report(self, manager):
        await manager.save_trade(make_trade("t1", date(2026, 3, 2)))
        await manager.save_trade(make_trade("t2", date(2026, 3, 3), TradeResult.LOSE))
        await manager.save_trade(make_trade("t3", date(2026, 4, 1)))

        report = manager.get_monthly_report(2026, 3)

        assert len(report.trades) == 2
        assert report.performance.net_profit == 0.0
        assert report.strategies[0].name == "Back Home"

    async def test_current_streak(self, manager):
        for day in range(1, 4):
            await manager.save_trade(
                make_trade(f"t{day}", date(2026, 3, day), TradeResult.LOSE)
            )

        streak = manager.get_current_streak()

        assert streak.count == 3
        assert streak.alert == StreakAlert.TILT

    async def test_period_targets(self, manager):
        await manager.update_settings(TradingSettings(initial_bank=1000, daily_tp=1))
        await manager.save_trade(make_trade("t1", date(2026, 3, 4), stake_percent=2.0))

        targets = manager.get_period_targets(date(2026, 3, 4), TargetPeriod.DAILY)

        assert targets.period_pl == 20.0
        assert targets.tp_hit is True

    async def test_concurrent_saves_keep_every_trade(self, manager):
        await asyncio.gather(*(manager.save_trade(make_trade(f"t{i}")) for i in range(10)))

        assert len(manager.trades) == 10
        assert len(await manager.refresh()) == 10

    async def test_refresh_logs_counts(self, manager, caplog):
        await manager.save_trade(make_trade())

        with caplog.at_level(logging.INFO):
            await manager.refresh()

        assert "Journal recalculated: 1 trades, 0 adjustments" in caplog.text
