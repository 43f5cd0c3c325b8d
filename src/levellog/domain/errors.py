from __future__ import annotations

"""
Exception Hierarchy.

Errors raised synchronously by the library. Persistence failures are never
raised from the severity methods; they travel through the completion
callback and the returned future instead.
"""


class LevellogError(Exception):
    """Base class for every error raised by levellog."""


class ConfigurationError(LevellogError, ValueError):
    """
    Invalid construction input.

    Raised when a logger is built with inconsistent options, e.g. a database
    connection without a table name, or an unknown severity level.
    """
