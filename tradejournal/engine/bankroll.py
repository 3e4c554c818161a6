# tradejournal/engine/bankroll.py
"""Capital and bankroll helpers built on the adjustment ledger."""
from dataclasses import dataclass
from datetime import date

from tradejournal.models.trade import BankrollAdjustment, Trade


@dataclass
class BankrollSnapshot:
    """Bankroll balance after a trade or adjustment."""

    date: date | None
    balance: float
    is_adjustment: bool = False


def calculate_total_capital_invested(
    initial_bank: float, adjustments: list[BankrollAdjustment]
) -> float:
    """Initial bankroll plus deposits minus withdrawals."""
    return initial_bank + sum(adj.signed_amount for adj in adjustments)


def capital_before(
    initial_bank: float, adjustments: list[BankrollAdjustment], cutoff: date
) -> float:
    """Capital invested counting only adjustments strictly before ``cutoff``."""
    prior = [adj for adj in adjustments if adj.date is not None and adj.date < cutoff]
    return calculate_total_capital_invested(initial_bank, prior)


def net_adjustments_between(
    adjustments: list[BankrollAdjustment], start: date, end: date
) -> float:
    """Sum of signed adjustments dated within ``[start, end]``."""
    return sum(
        adj.signed_amount
        for adj in adjustments
        if adj.date is not None and start <= adj.date <= end
    )


def profit_before(trades: list[Trade], cutoff: date) -> float:
    """Cumulative profit of settled trades dated strictly before ``cutoff``."""
    return sum(
        t.profit_loss
        for t in trades
        if t.is_settled and t.date is not None and t.date < cutoff
    )


def starting_bankroll(
    history: list[Trade],
    initial_bank: float,
    adjustments: list[BankrollAdjustment],
    window_start: date,
) -> float:
    """Bankroll entering a window: prior capital plus prior profit."""
    return capital_before(initial_bank, adjustments, window_start) + profit_before(
        history, window_start
    )


def calculate_bankroll_history(
    trades: list[Trade],
    initial_bank: float,
    adjustments: list[BankrollAdjustment] | None = None,
) -> list[BankrollSnapshot]:
    """Build the bankroll evolution merging trades and adjustments by date.

    Open trades are skipped. On equal dates trades are applied before
    adjustments; undated items come last.

    Args:
        trades: Journal trades in any order.
        initial_bank: Starting bankroll.
        adjustments: Deposits and withdrawals.

    Returns:
        Snapshots starting with the initial bankroll.
    """
    adjustments = adjustments or []
    events: list[tuple[date | None, float, bool]] = []

    for t in trades:
        if t.is_settled:
            events.append((t.date, t.profit_loss, False))
    for adj in adjustments:
        events.append((adj.date, adj.signed_amount, True))

    # list.sort is stable, so same-day trades keep their input order
    events.sort(key=lambda e: (_date_key(e[0]), e[2]))

    balance = initial_bank
    history = [BankrollSnapshot(date=None, balance=balance)]
    for event_date, amount, is_adjustment in events:
        balance += amount
        history.append(
            BankrollSnapshot(date=event_date, balance=balance, is_adjustment=is_adjustment)
        )

    return history


def _date_key(value: date | None) -> tuple[bool, date]:
    """Sort key placing undated items after every dated one."""
    if value is None:
        return (True, date.max)
    return (False, value)
