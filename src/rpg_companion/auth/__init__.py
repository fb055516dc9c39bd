"""Identity collaborator interface and credential validation."""

from rpg_companion.auth.identity import (
    Identity,
    IdentityProvider,
    StaticIdentityProvider,
    require_admin,
    require_user,
)
from rpg_companion.auth.validation import Login, PasswordChange, Registration, validate_form

__all__ = [
    "Identity",
    "IdentityProvider",
    "StaticIdentityProvider",
    "require_admin",
    "require_user",
    "Registration",
    "Login",
    "PasswordChange",
    "validate_form",
]
