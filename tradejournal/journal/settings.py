# tradejournal/journal/settings.py
"""Settings for the journal module."""
from pydantic import BaseModel, Field, field_validator


class JournalSettings(BaseModel):
    """Configuration settings for the trading journal.

    Attributes:
        enabled: Whether journal mutations are persisted.
        data_dir: Directory holding trades, settings and adjustments JSON.
        default_initial_bank: Initial bankroll used when no settings file
            exists yet.
        settle_on_save: Recompute stake, P/L and ROI from stake percentage
            and odds when a trade is saved.
    """

    enabled: bool = True
    data_dir: str = "data/journal"

    default_initial_bank: float = Field(default=1000.0, gt=0)
    settle_on_save: bool = True

    @field_validator("data_dir")
    @classmethod
    def validate_data_dir(cls, v: str) -> str:
        """Validate that data_dir is not blank."""
        if not v.strip():
            raise ValueError("data_dir must not be blank")
        return v
