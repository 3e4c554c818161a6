# tradejournal/engine/recalculator.py
"""Chronological recalculation of derived trade fields."""
from collections import defaultdict
from dataclasses import replace
from datetime import date

from tradejournal.models.trade import (
    STOP_LOSS,
    TARGET_PROFIT,
    Trade,
    TradingSettings,
)


class TradeRecalculator:
    """Derives points, running daily P/L and TP/SL labels for every trade.

    Each call is a full re-derivation over the complete history: the daily
    thresholds depend on the bankroll compounded through every earlier day,
    so there is no incremental path.
    """

    def recalculate(self, trades: list[Trade], settings: TradingSettings) -> list[Trade]:
        """Recalculate derived fields for all trades.

        Args:
            trades: Complete trade history in any order.
            settings: Bankroll and daily target settings.

        Returns:
            New Trade objects sorted newest first. Inputs are not modified.
        """
        if not trades:
            return []

        chronological = sorted(trades, key=lambda t: _date_key(t.date))
        start_of_day = self._start_of_day_bankrolls(chronological, settings)

        running_daily: dict[date | None, float] = defaultdict(float)
        computed: list[Trade] = []

        for trade in chronological:
            if trade.is_open:
                computed.append(
                    replace(
                        trade,
                        points=None,
                        daily_pl=None,
                        tp_sl=None,
                        profit_loss=0.0,
                        roi=0.0,
                    )
                )
                continue

            running_daily[trade.date] += trade.profit_loss
            daily_pl = running_daily[trade.date]

            points = (
                trade.profit_loss / settings.initial_bank * 100
                if settings.initial_bank
                else 0.0
            )
            day_start_bank = start_of_day.get(trade.date) or settings.bankroll_base
            tp_sl = self._target_label(daily_pl, day_start_bank, settings)

            computed.append(replace(trade, points=points, daily_pl=daily_pl, tp_sl=tp_sl))

        # Newest first; stable so same-day trades keep chronological order
        return sorted(computed, key=lambda t: _date_key(t.date, descending=True))

    def _start_of_day_bankrolls(
        self, chronological: list[Trade], settings: TradingSettings
    ) -> dict[date | None, float]:
        """Map each date to the bankroll entering that date.

        Args:
            chronological: Trades sorted ascending by date.
            settings: Settings providing the initial bankroll.

        Returns:
            Dict of date -> bankroll before that day's trades.
        """
        bankrolls: dict[date | None, float] = {}
        running = settings.bankroll_base

        for trade in chronological:
            if trade.date not in bankrolls:
                bankrolls[trade.date] = running
            if trade.is_settled:
                running += trade.profit_loss

        return bankrolls

    def _target_label(
        self, daily_pl: float, day_start_bank: float, settings: TradingSettings
    ) -> str:
        """Return the TP/SL label for a running daily P/L."""
        tp_threshold = day_start_bank * settings.daily_tp / 100
        sl_threshold = day_start_bank * settings.daily_sl / 100

        if settings.daily_tp > 0 and tp_threshold > 0 and daily_pl >= tp_threshold:
            return TARGET_PROFIT
        if settings.daily_sl < 0 and sl_threshold < 0 and daily_pl <= sl_threshold:
            return STOP_LOSS
        return ""


def recalculate_trades(trades: list[Trade], settings: TradingSettings) -> list[Trade]:
    """Recalculate derived fields with a default TradeRecalculator."""
    return TradeRecalculator().recalculate(trades, settings)


def _date_key(value: date | None, descending: bool = False) -> tuple[int, int]:
    """Sort key that keeps undated trades after every dated trade."""
    if value is None:
        return (1, 0)
    ordinal = value.toordinal()
    return (0, -ordinal if descending else ordinal)
