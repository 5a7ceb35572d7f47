"""
Error types for the deepset package.

The container itself never raises on its own account. Failures coming out of
an injected hash or equality provider are propagated to the caller unchanged,
so the only package-level errors are configuration problems.
"""

from typing import Optional, Any, Dict


class DeepSetError(Exception):
    """
    Base exception for all deepset errors.

    Provides common functionality for error tracking and reporting.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize deepset error.

        Args:
            message: Error message
            details: Optional detailed error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DeepSetError, ValueError):
    """Raised when a DeepSetConfig value is out of range or malformed."""

    def __init__(self, message: str,
                 field_name: Optional[str] = None,
                 value: Any = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Error message
            field_name: Name of the offending configuration field
            value: The rejected value
            details: Additional error context
        """
        super().__init__(message, details)
        self.field_name = field_name
        self.value = value

        self.details.update({
            'field_name': field_name,
            'value': value
        })


def is_configuration_error(error: Exception) -> bool:
    """Check if error comes from configuration validation."""
    return isinstance(error, ConfigurationError)
