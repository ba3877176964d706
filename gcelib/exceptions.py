"""Custom exception types for gcelib.

This module defines the exception hierarchy for gcelib errors. Note that
attribute validation failures are never raised: they are collected by an
error sink. Exceptions are reserved for malformed data coming back from the
compute API and for unusable configuration.

Exception Hierarchy:
    GceLibError (base)
    ├── MalformedIdentifierError - Resource URL does not have the expected shape
    ├── UnsupportedLoadBalancerError - No disabled-state rule for a balancer type
    └── ConfigurationError - Config or input document cannot be loaded
"""

from typing import Any, Dict, Optional


class GceLibError(Exception):
    """Base exception for all gcelib-specific errors.

    Attributes:
        message: Human-readable error description
        context: Additional contextual information (e.g., offending URL, file path)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class MalformedIdentifierError(GceLibError):
    """Raised when a resource URL does not follow the compute API path grammar.

    Examples:
        - Server group URL with fewer than four segments
        - Target proxy URL whose collection is not a known proxy type
        - Zone-from-group lookup on a regional server group URL
    """

    pass


class UnsupportedLoadBalancerError(GceLibError):
    """Raised when asked for the disabled state of an unknown balancer type."""

    pass


class ConfigurationError(GceLibError):
    """Raised when a configuration or input document cannot be loaded.

    Examples:
        - File missing or unreadable
        - Invalid YAML/JSON syntax
        - Accounts section with the wrong shape
    """

    pass
