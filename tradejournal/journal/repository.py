# tradejournal/journal/repository.py
"""Persistence interface for the journal and its JSON-file implementation."""
import json
import logging
from pathlib import Path
from typing import Protocol

import aiofiles

from tradejournal.journal.settings import JournalSettings
from tradejournal.models.trade import BankrollAdjustment, Trade, TradingSettings

logger = logging.getLogger(__name__)


class TradeRepository(Protocol):
    """Storage for trades, settings and bankroll adjustments."""

    async def load_trades(self) -> list[Trade]: ...

    async def save_trade(self, trade: Trade) -> None: ...

    async def delete_trade(self, trade_id: str) -> None: ...

    async def load_settings(self) -> TradingSettings: ...

    async def save_settings(self, settings: TradingSettings) -> None: ...

    async def load_adjustments(self) -> list[BankrollAdjustment]: ...

    async def save_adjustment(self, adjustment: BankrollAdjustment) -> None: ...

    async def delete_adjustment(self, adjustment_id: str) -> None: ...


class JsonTradeRepository:
    """Repository storing the journal as JSON files.

    Files: ``{data_dir}/trades.json``, ``{data_dir}/settings.json`` and
    ``{data_dir}/adjustments.json``. Saving a record with an existing id
    replaces it.
    """

    TRADES_FILE = "trades.json"
    SETTINGS_FILE = "settings.json"
    ADJUSTMENTS_FILE = "adjustments.json"

    def __init__(self, settings: JournalSettings) -> None:
        """Initialize the repository.

        Args:
            settings: Journal configuration settings.
        """
        self._settings = settings
        self._data_dir = Path(settings.data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)

    async def _read_json(self, name: str, default):
        """Read a JSON file, returning ``default`` when it does not exist."""
        file_path = self._data_dir / name
        if not file_path.exists():
            return default

        async with aiofiles.open(file_path, "r") as f:
            content = await f.read()
            return json.loads(content) if content.strip() else default

    async def _write_json(self, name: str, data) -> None:
        """Write data to a JSON file."""
        file_path = self._data_dir / name
        async with aiofiles.open(file_path, "w") as f:
            await f.write(json.dumps(data, indent=2, default=str))

    async def load_trades(self) -> list[Trade]:
        """Load every stored trade."""
        records = await self._read_json(self.TRADES_FILE, [])
        return [Trade.from_dict(r) for r in records]

    async def save_trade(self, trade: Trade) -> None:
        """Insert or replace a trade by id."""
        records = await self._read_json(self.TRADES_FILE, [])
        records = _upsert(records, trade.to_dict())
        await self._write_json(self.TRADES_FILE, records)

    async def delete_trade(self, trade_id: str) -> None:
        """Delete a trade by id.

        Raises:
            ValueError: If no trade has that id.
        """
        records = await self._read_json(self.TRADES_FILE, [])
        remaining = [r for r in records if str(r["id"]) != trade_id]
        if len(remaining) == len(records):
            raise ValueError(f"Unknown trade id: {trade_id}")
        await self._write_json(self.TRADES_FILE, remaining)

    async def load_settings(self) -> TradingSettings:
        """Load settings, falling back to the configured initial bankroll."""
        data = await self._read_json(self.SETTINGS_FILE, None)
        if data is None:
            logger.info("No stored settings, using defaults")
            return TradingSettings(initial_bank=self._settings.default_initial_bank)
        return TradingSettings.from_dict(data)

    async def save_settings(self, settings: TradingSettings) -> None:
        """Replace the stored settings."""
        await self._write_json(self.SETTINGS_FILE, settings.to_dict())

    async def load_adjustments(self) -> list[BankrollAdjustment]:
        """Load every stored bankroll adjustment."""
        records = await self._read_json(self.ADJUSTMENTS_FILE, [])
        return [BankrollAdjustment.from_dict(r) for r in records]

    async def save_adjustment(self, adjustment: BankrollAdjustment) -> None:
        """Insert or replace an adjustment by id."""
        records = await self._read_json(self.ADJUSTMENTS_FILE, [])
        records = _upsert(records, adjustment.to_dict())
        await self._write_json(self.ADJUSTMENTS_FILE, records)

    async def delete_adjustment(self, adjustment_id: str) -> None:
        """Delete an adjustment by id.

        Raises:
            ValueError: If no adjustment has that id.
        """
        records = await self._read_json(self.ADJUSTMENTS_FILE, [])
        remaining = [r for r in records if str(r["id"]) != adjustment_id]
        if len(remaining) == len(records):
            raise ValueError(f"Unknown adjustment id: {adjustment_id}")
        await self._write_json(self.ADJUSTMENTS_FILE, remaining)


def _upsert(records: list[dict], record: dict) -> list[dict]:
    """Replace the record with the same id, or append it."""
    for index, existing in enumerate(records):
        if str(existing["id"]) == str(record["id"]):
            records[index] = record
            return records
    records.append(record)
    return records
