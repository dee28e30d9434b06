"""Authentication domain validation service."""

from __future__ import annotations

from collections.abc import Mapping, Set

from firebase_schema_validator.diagnostics.issue_models import ErrorKind, ValidationIssue

from .auth_models import AuthDomainDeclaration, AuthKind


class AuthDomainModel:
    """Accepted authentication domains, at most one per kind.

    Must be fed after collection resolution: bound collections are checked
    against the resolved full paths.
    """

    def __init__(self, resolved_paths: Set[str]) -> None:
        self._resolved_paths = frozenset(resolved_paths)
        self._by_kind: dict[AuthKind, AuthDomainDeclaration] = {}
        self._issues: list[ValidationIssue] = []

    @property
    def domains(self) -> Mapping[AuthKind, AuthDomainDeclaration]:
        return dict(self._by_kind)

    @property
    def issues(self) -> tuple[ValidationIssue, ...]:
        return tuple(self._issues)

    def register(self, declaration: AuthDomainDeclaration) -> list[ValidationIssue]:
        """Validate one domain; every problem is reported, nothing is raised."""
        issues: list[ValidationIssue] = []
        if declaration.bound_collection not in self._resolved_paths:
            issues.append(
                ValidationIssue(
                    error_kind=ErrorKind.UNKNOWN_COLLECTION,
                    entity_name=declaration.entity_name,
                    path=declaration.bound_collection,
                    message=(
                        f"{declaration.kind.value} auth domain is bound to unknown "
                        f"collection '{declaration.bound_collection}'."
                    ),
                    reference=declaration.bound_collection,
                )
            )
        if not declaration.enabled_modules:
            issues.append(
                _invalid(declaration, "at least one auth module must be enabled")
            )
        if not isinstance(declaration.region, str) or not declaration.region.strip():
            issues.append(_invalid(declaration, "region must not be empty"))

        existing = self._by_kind.get(declaration.kind)
        if existing is not None:
            issues.append(
                ValidationIssue(
                    error_kind=ErrorKind.DUPLICATE_AUTH_DOMAIN,
                    entity_name=declaration.entity_name,
                    path=declaration.kind.value,
                    message=(
                        f"A {declaration.kind.value} auth domain is already declared "
                        f"by '{existing.entity_name}'."
                    ),
                    reference=existing.entity_name,
                )
            )
        else:
            self._by_kind[declaration.kind] = declaration

        self._issues.extend(issues)
        return issues


def _invalid(declaration: AuthDomainDeclaration, reason: str) -> ValidationIssue:
    return ValidationIssue(
        error_kind=ErrorKind.INVALID_DECLARATION,
        entity_name=declaration.entity_name,
        path=declaration.kind.value,
        message=f"Invalid auth domain: {reason}.",
    )
