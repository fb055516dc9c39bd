"""Core module providing configuration, logging, constants and exceptions.

Exports:
    Exceptions:
        CompanionError: Base exception for all application errors.
        InvalidArgumentError: Rejected arguments (fail fast, no partial result).
        CollaboratorError: Store / identity failures, surfaced unchanged.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        log_context: Bind logging context for one block.
"""

from __future__ import annotations

from rpg_companion.core.config import (
    DiceSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from rpg_companion.core.exceptions import (
    CollaboratorError,
    CompanionError,
    ConfigurationError,
    DiceRollError,
    GameRuleError,
    IdentityError,
    InvalidArgumentError,
    PermissionDeniedError,
    PushNotAllowedError,
    RecordNotFoundError,
    StoreError,
    ValidationError,
)
from rpg_companion.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    log_context,
)


__all__ = [
    # Exceptions
    "CompanionError",
    "InvalidArgumentError",
    "DiceRollError",
    "GameRuleError",
    "PushNotAllowedError",
    "CollaboratorError",
    "StoreError",
    "RecordNotFoundError",
    "IdentityError",
    "PermissionDeniedError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "StorageSettings",
    "DiceSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
