"""Application settings for the Landak server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from landak.domain.rules_config import DEFAULT_RULES, RulesConfig


class Settings(BaseSettings):
    """Runtime settings, overridable through the environment or ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    data_dir: Path = Field(default=Path("saves"), description="Where save slots live")
    save_slot: str = Field(default="default", description="Slot used when none is given")
    rules_version: str = Field(default="1.0", description="Ruleset version used by the domain")
    auction_tick_seconds: float = Field(
        default=1.0,
        description="Real-time seconds between auction countdown ticks",
        gt=0.0,
    )
    bot_delay_seconds: float = Field(
        default=0.0,
        description="Pause between scheduled bot actions",
        ge=0.0,
    )
    history_limit: int = Field(
        default=50, description="Maximum undo snapshots kept per session", ge=1
    )
    event_log_limit: int | None = Field(
        default=None, description="Maximum event log entries kept in a game (unbounded when unset)"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )

    def rules(self) -> RulesConfig:
        """Rule configuration honouring the configured log bound."""

        if self.event_log_limit is None:
            return DEFAULT_RULES
        return RulesConfig(event_log_limit=self.event_log_limit)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
