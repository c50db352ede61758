"""
Custom exception hierarchy for the registry.

Guarded operations raise a RegistryError subclass on the first violated
precondition. The registry catches it, rolls the ledger transaction back and
hands the caller an ``Err`` carrying the same code.
"""

from __future__ import annotations

from .models import ErrorCode


class RegistryError(Exception):
    """Base exception for every rule violation a caller can trigger."""

    def __init__(self, code: ErrorCode, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class Unauthorized(RegistryError):
    """The caller lacks the role the operation requires."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorCode.UNAUTHORIZED, message, details)


class AlreadyExists(RegistryError):
    """A property with this identifier is already registered."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorCode.ALREADY_EXISTS, message, details)


class InvalidTransition(RegistryError):
    """The record is in a terminal state and cannot move again."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorCode.INVALID_TRANSITION, message, details)


class NotFound(RegistryError):
    """No property is registered under this identifier."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(ErrorCode.NOT_FOUND, message, details)


class ConfigurationError(Exception):
    """Settings could not be loaded from the environment."""
