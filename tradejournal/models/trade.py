# tradejournal/models/trade.py
"""Data models for sports-trading journal records."""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

logger = logging.getLogger(__name__)

NO_STRATEGY = "N/A"
TARGET_PROFIT = "TARGET PROFIT"
STOP_LOSS = "STOP LOSS"
DEFAULT_INITIAL_BANK = 1000.0


class TradeResult(str, Enum):
    """Outcome of a logged trade."""

    WIN = "WIN"
    LOSE = "LOSE"
    VOID = "VOID"
    OPEN = "OPEN"


class AdjustmentType(str, Enum):
    """Direction of a bankroll adjustment."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"


def parse_trade_date(value: date | datetime | str | None) -> date | None:
    """Parse a calendar date from a stored value.

    Accepts date objects, ISO strings (with or without a time part) and the
    day-first ``DD/MM/YYYY`` form used by spreadsheet exports.

    Args:
        value: Raw date value.

    Returns:
        The calendar date, or None if the value cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in ("%d/%m/%Y", "%d-%m-%Y", "%d.%m.%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    logger.warning(f"Unparseable trade date: {value!r}")
    return None


def parse_result(value: TradeResult | str | None) -> TradeResult:
    """Parse a stored trade result, treating unknown values as OPEN."""
    if isinstance(value, TradeResult):
        return value
    try:
        return TradeResult(str(value or TradeResult.OPEN.value).strip().upper())
    except ValueError:
        logger.warning(f"Unknown trade result {value!r}, treating as OPEN")
        return TradeResult.OPEN


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Parse an optional creation timestamp."""
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable timestamp: {value!r}")
        return None


@dataclass
class Trade:
    """A single logged position in the journal.

    ``points``, ``daily_pl`` and ``tp_sl`` are derived by the recalculation
    pass and are always written together.
    """

    id: str
    date: date | None
    competition: str
    home_team: str
    away_team: str
    strategy: str
    odds: float
    stake_percent: float
    stake_euro: float
    result: TradeResult
    profit_loss: float = 0.0
    roi: float = 0.0

    matched_parts: float = 100.0
    position: str = ""
    notes: str | None = None
    created_at: datetime | None = None

    # Derived fields
    points: float | None = None
    daily_pl: float | None = None
    tp_sl: str | None = None

    @property
    def is_open(self) -> bool:
        """Check if the trade is still open."""
        return self.result == TradeResult.OPEN

    @property
    def is_closed(self) -> bool:
        """Check if the trade counts toward win rate and streaks."""
        return self.result in (TradeResult.WIN, TradeResult.LOSE)

    @property
    def is_settled(self) -> bool:
        """Check if the trade counts toward bankroll continuity."""
        return self.result != TradeResult.OPEN

    @property
    def strategy_key(self) -> str:
        """Strategy name normalized for grouping."""
        return normalize_key(self.strategy)

    @property
    def competition_key(self) -> str:
        """Competition name normalized for grouping."""
        return normalize_key(self.competition)

    def to_dict(self) -> dict:
        """Convert the trade to a dictionary for JSON storage."""
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "competition": self.competition,
            "home_team": self.home_team,
            "away_team": self.away_team,
            "strategy": self.strategy,
            "odds": self.odds,
            "stake_percent": self.stake_percent,
            "stake_euro": self.stake_euro,
            "result": self.result.value,
            "profit_loss": self.profit_loss,
            "roi": self.roi,
            "matched_parts": self.matched_parts,
            "position": self.position,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "points": self.points,
            "daily_pl": self.daily_pl,
            "tp_sl": self.tp_sl,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Trade":
        """Build a trade from a stored dictionary."""
        matched_parts = data.get("matched_parts")
        return cls(
            id=str(data["id"]),
            date=parse_trade_date(data.get("date")),
            competition=data.get("competition") or "",
            home_team=data.get("home_team") or "",
            away_team=data.get("away_team") or "",
            strategy=data.get("strategy") or "",
            odds=float(data.get("odds") or 0.0),
            stake_percent=float(data.get("stake_percent") or 0.0),
            stake_euro=float(data.get("stake_euro") or 0.0),
            result=parse_result(data.get("result")),
            profit_loss=float(data.get("profit_loss") or 0.0),
            roi=float(data.get("roi") or 0.0),
            matched_parts=float(matched_parts) if matched_parts is not None else 100.0,
            position=data.get("position") or "",
            notes=data.get("notes"),
            created_at=parse_timestamp(data.get("created_at")),
            points=data.get("points"),
            daily_pl=data.get("daily_pl"),
            tp_sl=data.get("tp_sl"),
        )


def normalize_key(value: str | None) -> str:
    """Trim a free-text grouping key, falling back to the N/A sentinel."""
    text = (value or "").strip()
    return text or NO_STRATEGY


@dataclass
class TradingSettings:
    """Per-user bankroll and target settings.

    Attributes:
        initial_bank: Starting bankroll in currency.
        current_bank: Optional imported override for the current bankroll.
        daily_tp: Daily take-profit percentage (positive, 0 disables).
        daily_sl: Daily stop-loss percentage (negative, 0 disables).
        weekly_tp: Weekly take-profit percentage.
        weekly_sl: Weekly stop-loss percentage.
        monthly_tp: Monthly take-profit percentage.
        monthly_sl: Monthly stop-loss percentage.
        monthly_target: Optional monthly goal as a percentage of the
            start-of-month bankroll.
    """

    initial_bank: float = DEFAULT_INITIAL_BANK
    current_bank: float | None = None
    daily_tp: float = 0.0
    daily_sl: float = 0.0
    weekly_tp: float = 0.0
    weekly_sl: float = 0.0
    monthly_tp: float = 0.0
    monthly_sl: float = 0.0
    monthly_target: float | None = None

    @property
    def bankroll_base(self) -> float:
        """Initial bankroll with the guarded default for zero values."""
        return self.initial_bank or DEFAULT_INITIAL_BANK

    def to_dict(self) -> dict:
        """Convert settings to a dictionary for JSON storage."""
        return {
            "initial_bank": self.initial_bank,
            "current_bank": self.current_bank,
            "daily_tp": self.daily_tp,
            "daily_sl": self.daily_sl,
            "weekly_tp": self.weekly_tp,
            "weekly_sl": self.weekly_sl,
            "monthly_tp": self.monthly_tp,
            "monthly_sl": self.monthly_sl,
            "monthly_target": self.monthly_target,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TradingSettings":
        """Build settings from a stored dictionary."""
        current_bank = data.get("current_bank")
        monthly_target = data.get("monthly_target")
        return cls(
            initial_bank=float(data.get("initial_bank") or 0.0),
            current_bank=float(current_bank) if current_bank is not None else None,
            daily_tp=float(data.get("daily_tp") or 0.0),
            daily_sl=float(data.get("daily_sl") or 0.0),
            weekly_tp=float(data.get("weekly_tp") or 0.0),
            weekly_sl=float(data.get("weekly_sl") or 0.0),
            monthly_tp=float(data.get("monthly_tp") or 0.0),
            monthly_sl=float(data.get("monthly_sl") or 0.0),
            monthly_target=float(monthly_target) if monthly_target is not None else None,
        )


@dataclass
class BankrollAdjustment:
    """A dated deposit or withdrawal of capital."""

    id: str
    date: date | None
    type: AdjustmentType
    amount: float
    notes: str | None = None

    @property
    def signed_amount(self) -> float:
        """Amount with the sign of its effect on the bankroll."""
        if self.type == AdjustmentType.DEPOSIT:
            return self.amount
        return -self.amount

    def to_dict(self) -> dict:
        """Convert the adjustment to a dictionary for JSON storage."""
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "type": self.type.value,
            "amount": self.amount,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BankrollAdjustment":
        """Build an adjustment from a stored dictionary."""
        return cls(
            id=str(data["id"]),
            date=parse_trade_date(data.get("date")),
            type=AdjustmentType(str(data["type"]).strip().upper()),
            amount=float(data.get("amount") or 0.0),
            notes=data.get("notes"),
        )
