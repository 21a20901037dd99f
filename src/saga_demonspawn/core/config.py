"""Configuration management for the Sagas of the Demonspawn companion.

Settings are loaded with pydantic-settings from environment variables and an
optional ``.env`` file. Rule toggles live in RulesSettings and are handed to
the CombatEncounter and the dice rollers; Settings adds the logging setup.

Example:
    >>> from saga_demonspawn.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.spell_effects_reduce_damage
    False

Environment Variables:
    SAGA_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    SAGA_LOG_FILE: Write a JSON session log to this path
    SAGA_RULES_SPELL_EFFECTS_REDUCE_DAMAGE: Let ARMOUR/XENOPHOBIA reduce damage
    SAGA_RULES_LOG_ROLLS: Log every die rolled at debug level
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from saga_demonspawn.core.exceptions import ConfigurationError


class RulesSettings(BaseSettings):
    """Toggles for rule behaviour left open by the gamebook.

    Attributes:
        spell_effects_reduce_damage: Apply recorded ARMOUR and XENOPHOBIA
            effects to damage the player takes. Off by default, matching the
            rules as printed where the effects are only bookkeeping.
        log_rolls: Emit a debug log event for every die rolled.
    """

    model_config = SettingsConfigDict(
        env_prefix="SAGA_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    spell_effects_reduce_damage: bool = Field(
        default=False,
        description="Let recorded spell effects reduce incoming damage",
    )
    log_rolls: bool = Field(
        default=True,
        description="Log every dice roll at debug level",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Render log events as JSON lines instead of console text.
        log_file: Optional file receiving every event as a JSON line.
        rules: Rule toggles.
    """

    model_config = SettingsConfigDict(
        env_prefix="SAGA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Sagas of the Demonspawn Companion",
        description="Application name",
    )
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(default=False, description="Render logs as JSON")
    log_file: Path | None = Field(default=None, description="Session log file")

    rules: RulesSettings = Field(default_factory=RulesSettings)

    @field_validator("log_file", mode="after")
    @classmethod
    def expand_user(cls, value: Path | None) -> Path | None:
        """Expand a leading ``~`` in the session log path."""
        return value.expanduser() if value is not None else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
