"""
Custom exceptions for the gradebook.
"""

from typing import Optional, Any, Dict

from .enums import ValidationKind


class GradebookException(Exception):
    """Base exception for all gradebook errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(GradebookException):
    """Raised when an entity violates a field or reference rule."""

    def __init__(self, message: str, kind: ValidationKind, field: str,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code=kind.value, details=details)
        self.kind = kind
        self.field = field


class ContractViolationError(GradebookException):
    """Raised when a required identifier is absent.

    This is a programming error on the caller's side, not bad user input,
    so it deliberately does not derive from :class:`ValidationError`.
    """
    pass


class ResourceNotFoundError(GradebookException):
    """Raised when an operation needs an entity that does not exist."""
    pass


class PersistenceError(GradebookException):
    """Raised when the durable store cannot be read or written."""
    pass


class ConfigurationError(GradebookException):
    """Raised when configuration is invalid or a collaborator is missing."""
    pass
