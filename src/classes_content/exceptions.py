"""
Exception hierarchy for the class content engine.

Only construction-time problems (bad configuration, malformed alias data)
are raised. Resolution and parsing failures are reported as empty results.
"""

from __future__ import annotations

from typing import Any


class ClassesContentError(Exception):
    """Base exception for all class content errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(ClassesContentError):
    """Invalid configuration value (environment or explicit)."""


class AliasTableError(ClassesContentError):
    """Alias table file is missing or malformed.

    Attributes:
        path: File the alias table was read from
    """

    def __init__(self, message: str, path: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.path = path


__all__ = [
    "ClassesContentError",
    "ConfigError",
    "AliasTableError",
]
