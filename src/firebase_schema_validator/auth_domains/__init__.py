"""Authentication domain exports."""

from .auth_models import AuthDomainDeclaration, AuthKind, AuthModule
from .auth_validation import AuthDomainModel

__all__ = [
    "AuthDomainDeclaration",
    "AuthDomainModel",
    "AuthKind",
    "AuthModule",
]
