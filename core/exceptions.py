"""
Exception Definitions - Custom exceptions for the Tech Support Responder
========================================================================

This module defines the exceptions used throughout the application.
Resource errors are raised inside the loaders and recovered there;
only configuration errors and the optional empty-defaults error ever
reach the caller.
"""

from pathlib import Path
from typing import Union


class TechSupportError(Exception):
    """
    Base exception for all Tech Support Responder errors.

    Attributes:
        message (str): Human-readable error description
        details (dict): Additional error details for debugging
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            details: Optional dictionary with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return formatted error message with details if present."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(TechSupportError):
    """
    Configuration-related errors.

    Raised when there are issues with:
    - Invalid configuration values
    - Configuration file parsing errors
    - Unreadable configuration files
    """
    pass


class ResourceError(TechSupportError):
    """
    A response resource could not be loaded.

    Attributes:
        path (Path): The resource that failed
    """

    def __init__(self, message: str, path: Union[str, Path], details: dict = None):
        self.path = Path(path)
        details = dict(details or {})
        details.setdefault("path", str(self.path.absolute()))
        super().__init__(message, details)


class ResourceNotFoundError(ResourceError):
    """The resource file does not exist."""
    pass


class ResourceUnreadableError(ResourceError):
    """The resource file exists but could not be read or decoded."""
    pass


class NoDefaultResponsesError(TechSupportError):
    """
    No keyword matched and there are no default responses to pick from.

    Only raised when the responder is configured with
    ``on_empty_defaults: raise``.
    """
    pass
