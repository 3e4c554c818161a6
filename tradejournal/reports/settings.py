# tradejournal/reports/settings.py
"""Settings for the reports module."""
from pydantic import BaseModel, Field, field_validator


class ReportSettings(BaseModel):
    """Thresholds used by the statistics engine and insight rules.

    Attributes:
        kelly_min_sample: Minimum closed trades before Kelly is reported.
        kelly_fraction: Scale applied to full Kelly (0.25 = quarter Kelly).
        low_sample_threshold: Segments below this size get LOW_SAMPLE.
        consecutive_loss_alert: Losing run that triggers CONSECUTIVE_LOSSES.
        scale_up_roi: ROI a segment must exceed to get SCALE_UP.
        scale_up_min_trades: Trades a segment must exceed to get SCALE_UP.
        default_trade_hour: Hour assumed for trades without a timestamp;
            None reports them in an explicit Unknown bucket.
        currency_symbol: Symbol used in insight messages.
    """

    kelly_min_sample: int = Field(default=30, ge=1)
    kelly_fraction: float = Field(default=0.25, gt=0.0, le=1.0)

    low_sample_threshold: int = Field(default=30, ge=0)
    consecutive_loss_alert: int = Field(default=5, ge=1)
    scale_up_roi: float = Field(default=30.0)
    scale_up_min_trades: int = Field(default=50, ge=0)

    over_betting_ratio: float = Field(default=2.0, gt=1.0)
    under_betting_ratio: float = Field(default=0.5, gt=0.0, lt=1.0)

    streak_alert_length: int = Field(default=5, ge=1)
    tilt_length: int = Field(default=3, ge=1)

    default_trade_hour: int | None = Field(default=12, ge=0, le=23)
    currency_symbol: str = "€"

    @field_validator("currency_symbol")
    @classmethod
    def validate_currency_symbol(cls, v: str) -> str:
        """Validate that the currency symbol is not blank."""
        if not v.strip():
            raise ValueError("currency_symbol must not be blank")
        return v.strip()
