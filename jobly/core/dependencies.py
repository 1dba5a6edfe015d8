"""Dependency injection type aliases."""

from jobly.core.auth import AuthenticatedUser, RequireAdmin

__all__ = [
    "AuthenticatedUser",
    "RequireAdmin",
]
