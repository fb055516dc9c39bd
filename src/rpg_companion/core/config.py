"""Configuration management for the RPG companion.

Settings are read with pydantic-settings from environment variables and an
optional ``.env`` file. Each domain has its own settings class; ``Settings``
aggregates them and ``get_settings()`` caches a single instance.

Example:
    >>> from rpg_companion.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.dice.max_count
    10

Environment Variables:
    RPG_COMPANION_DATABASE_PATH: Path to the SQLite database file
    RPG_COMPANION_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    RPG_COMPANION_JSON_LOGS: Emit JSON log lines instead of console output
    RPG_COMPANION_DICE_MAX_COUNT: Most dice a single roll may request
    RPG_COMPANION_DICE_SEED: Seed for reproducible dice rolls
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rpg_companion.core.constants import (
    MAX_DICE_COUNT,
    MIN_DICE_COUNT,
    PUSHABLE_DIE_SIDES,
)
from rpg_companion.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for the table store.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="RPG_COMPANION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/rpg_companion.db"),
        description="Path to SQLite database",
    )

    @field_validator("database_path", mode="after")
    @classmethod
    def ensure_parent_exists(cls, value: Path) -> Path:
        """Create the database's parent directory if necessary."""
        value.parent.mkdir(parents=True, exist_ok=True)
        return value


class DiceSettings(BaseSettings):
    """Configuration for the dice roller.

    Attributes:
        min_count: Fewest dice a roll request may ask for.
        max_count: Most dice a roll request may ask for.
        pushable_sides: Die size whose results may be pushed.
        seed: Optional seed for reproducible rolls.
    """

    model_config = SettingsConfigDict(
        env_prefix="RPG_COMPANION_DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    min_count: int = Field(default=MIN_DICE_COUNT, ge=1, description="Minimum dice per roll")
    max_count: int = Field(default=MAX_DICE_COUNT, ge=1, le=100, description="Maximum dice per roll")
    pushable_sides: int = Field(
        default=PUSHABLE_DIE_SIDES,
        ge=2,
        description="Die size that may be pushed",
    )
    seed: int | None = Field(default=None, description="Seed for reproducible rolls")

    @model_validator(mode="after")
    def validate_count_range(self) -> "DiceSettings":
        """Ensure the dice count range is not empty.

        Raises:
            ConfigurationError: If min_count > max_count.
        """
        if self.min_count > self.max_count:
            raise ConfigurationError(
                f"min_count ({self.min_count}) must not exceed max_count ({self.max_count})",
                config_key="min_count",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON lines.
        storage: Table store settings.
        dice: Dice roller settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="RPG_COMPANION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="RPG Companion", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON log lines")

    storage: StorageSettings = Field(default_factory=StorageSettings)
    dice: DiceSettings = Field(default_factory=DiceSettings)

    @property
    def is_production(self) -> bool:
        """True if not in debug mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "DiceSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
