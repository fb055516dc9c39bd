"""The identity collaborator.

Sessions and sign-in belong to an external identity service. This package
only needs to know who the current user is and whether they are an admin;
admin-only compendium actions are gated with ``require_admin``.
"""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from rpg_companion.core.exceptions import IdentityError, PermissionDeniedError
from rpg_companion.core.logging import get_logger


logger = get_logger(__name__)


class Identity(BaseModel):
    """An authenticated user as reported by the identity service."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    email: str | None = None
    username: str | None = None
    is_admin: bool = False


class IdentityProvider(Protocol):
    """Source of the current identity."""

    def current_user(self) -> Identity | None:
        """The signed-in user, or None when nobody is signed in."""
        ...


class StaticIdentityProvider:
    """Identity provider that always reports the same user.

    Useful for scripts and tests where there is no identity service.
    """

    def __init__(self, identity: Identity | None = None) -> None:
        self._identity = identity

    def current_user(self) -> Identity | None:
        return self._identity

    def sign_in(self, identity: Identity) -> None:
        self._identity = identity

    def sign_out(self) -> None:
        self._identity = None


def require_user(provider: IdentityProvider) -> Identity:
    """Current identity, or IdentityError when nobody is signed in."""
    identity = provider.current_user()
    if identity is None:
        raise IdentityError("No authenticated user")
    return identity


def require_admin(identity: Identity | None, action: str) -> Identity:
    """Gate an admin-only action.

    Raises:
        IdentityError: If there is no identity.
        PermissionDeniedError: If the identity is not an admin.
    """
    if identity is None:
        raise IdentityError("No authenticated user", details={"action": action})
    if not identity.is_admin:
        logger.warning("Admin action denied", user_id=identity.user_id, action=action)
        raise PermissionDeniedError(
            "Admin privileges required",
            user_id=identity.user_id,
            action=action,
        )
    return identity


__all__ = [
    "Identity",
    "IdentityProvider",
    "StaticIdentityProvider",
    "require_user",
    "require_admin",
]
