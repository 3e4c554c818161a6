# tradejournal/config/settings.py
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tradejournal.journal.settings import JournalSettings
from tradejournal.reports.settings import ReportSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SystemConfig(BaseModel):
    name: str = "Trading Journal"
    version: str = "1.0.0"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a standard logging level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


class EnvironmentConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TRADEJOURNAL_")

    data_dir: Optional[str] = None
    log_level: Optional[str] = None
    initial_bank: Optional[float] = Field(default=None, gt=0)


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    reports: ReportSettings = Field(default_factory=ReportSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data).with_overrides(EnvironmentConfig())

    def with_overrides(self, env: EnvironmentConfig) -> "Settings":
        """Return a copy with the environment values applied on top."""
        data = self.model_dump()

        if env.data_dir is not None:
            data["journal"]["data_dir"] = env.data_dir
        if env.log_level is not None:
            data["system"]["log_level"] = env.log_level
        if env.initial_bank is not None:
            data["journal"]["default_initial_bank"] = env.initial_bank

        return Settings(**data)
