"""Authentication domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AuthKind(str, Enum):
    """Supported authentication scopes."""

    STANDARD_USER = "standardUser"
    ADMINISTRATOR = "administrator"


class AuthModule(str, Enum):
    """Authentication capabilities a domain can enable."""

    SESSION = "session"
    SIGN_IN = "signIn"
    SIGN_UP = "signUp"
    FORGOT_PASSWORD = "forgotPassword"


@dataclass(frozen=True)
class AuthDomainDeclaration:
    """Authentication domain bound to a collection and a region."""

    entity_name: str
    kind: AuthKind
    bound_collection: str
    region: str
    enabled_modules: frozenset[AuthModule]

    def ordered_modules(self) -> tuple[AuthModule, ...]:
        """Return enabled modules in declaration-enum order."""
        return tuple(module for module in AuthModule if module in self.enabled_modules)
