"""Diagnostics exports."""

from .issue_models import ErrorKind, Severity, ValidationIssue

__all__ = [
    "ErrorKind",
    "Severity",
    "ValidationIssue",
]
