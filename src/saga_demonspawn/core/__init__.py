"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        SagaError: Base exception for all rules-engine errors.
        ValidationError: Construction errors.
        RuleViolationError: Rejected mutations.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
"""

from __future__ import annotations

from saga_demonspawn.core.config import (
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from saga_demonspawn.core.exceptions import (
    CombatError,
    ConfigurationError,
    GameEngineError,
    InvalidCombatPhaseError,
    RuleViolationError,
    SagaError,
    SpellError,
    ValidationError,
)
from saga_demonspawn.core.logging import (
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "SagaError",
    "ConfigurationError",
    "ValidationError",
    "RuleViolationError",
    "GameEngineError",
    "CombatError",
    "InvalidCombatPhaseError",
    "SpellError",
    # Configuration
    "Settings",
    "RulesSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
