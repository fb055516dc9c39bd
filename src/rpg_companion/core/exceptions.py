"""Custom exception hierarchy for the RPG companion.

All exceptions inherit from CompanionError, enabling unified error handling
at the application boundary while preserving domain-specific context in
``details``.

Two families matter most to callers:

- InvalidArgumentError: a caller passed something the rules engine cannot
  accept (unknown attribute, dice count out of range, ...). Raised before
  any work is done, so there is never a partial result.
- CollaboratorError: the store or identity collaborator failed. These are
  reported upward unchanged; nothing in this package retries them.

Example:
    >>> from rpg_companion.core.exceptions import InvalidArgumentError
    >>> raise InvalidArgumentError("Unknown attribute", argument="attribute", invalid_value="LUK")
"""

from __future__ import annotations

from typing import Any


class CompanionError(Exception):
    """Base exception for all RPG companion errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details."""
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Argument Errors
# =============================================================================


class InvalidArgumentError(CompanionError):
    """Raised when an argument is outside what the rules accept.

    Covers unknown attribute codes, condition names, professions, skills
    and rest modes, as well as out-of-range numeric inputs.
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending argument.

        Args:
            message: Human-readable error description.
            argument: Name of the argument that was rejected.
            invalid_value: The rejected value.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if argument:
            combined_details["argument"] = argument
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class DiceRollError(InvalidArgumentError):
    """Raised when dice parameters or a dice expression are invalid."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        argument: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(
            message,
            argument=argument,
            invalid_value=invalid_value,
            details=combined_details,
        )


# =============================================================================
# Rules Errors
# =============================================================================


class GameRuleError(CompanionError):
    """Raised when a well-formed request is not allowed by the rules right now."""


class PushNotAllowedError(GameRuleError):
    """Raised when a push is requested but the last roll cannot be pushed.

    A push is only available right after a fresh d20 roll; a pushed result
    can never be pushed again.
    """


# =============================================================================
# Collaborator Errors
# =============================================================================


class CollaboratorError(CompanionError):
    """Base exception for failures of external collaborators.

    These are surfaced, never generated, by the rules engine.
    """

    def __init__(
        self,
        message: str,
        *,
        collaborator: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if collaborator:
            combined_details["collaborator"] = collaborator
        super().__init__(message, details=combined_details)


class StoreError(CollaboratorError):
    """Raised when the table store fails with a transport or constraint error."""

    def __init__(
        self,
        message: str,
        *,
        table: str | None = None,
        record_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize store error with table context.

        Args:
            message: Human-readable error description.
            table: Name of the table involved.
            record_id: Id of the record involved, if any.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if table:
            combined_details["table"] = table
        if record_id:
            combined_details["record_id"] = record_id
        super().__init__(message, collaborator="store", details=combined_details)


class RecordNotFoundError(StoreError):
    """Raised when a record id does not exist in its table."""


class IdentityError(CollaboratorError):
    """Raised when no authenticated identity is available."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, collaborator="identity", details=details)


class PermissionDeniedError(CompanionError):
    """Raised when a non-admin identity attempts an admin-only action."""

    def __init__(
        self,
        message: str,
        *,
        user_id: str | None = None,
        action: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if user_id:
            combined_details["user_id"] = user_id
        if action:
            combined_details["action"] = action
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(CompanionError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(CompanionError):
    """Raised when user-supplied data fails validation.

    Used for credential and form checks where the caller wants one
    message per failing field.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    "CompanionError",
    # Arguments
    "InvalidArgumentError",
    "DiceRollError",
    # Rules
    "GameRuleError",
    "PushNotAllowedError",
    # Collaborators
    "CollaboratorError",
    "StoreError",
    "RecordNotFoundError",
    "IdentityError",
    "PermissionDeniedError",
    # Configuration & validation
    "ConfigurationError",
    "ValidationError",
]
