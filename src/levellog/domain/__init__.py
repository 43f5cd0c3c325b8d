from __future__ import annotations

from .config import DatabaseConfig, LoggerConfig
from .errors import ConfigurationError, LevellogError
from .models import CompletionCallback, LogOptions, LogRecord, Target
from .severity import SEVERITY_NAMES, SEVERITY_RANKS, Severity, coerce_level, lookup_label

__all__ = [
    "CompletionCallback",
    "ConfigurationError",
    "DatabaseConfig",
    "LevellogError",
    "LogOptions",
    "LogRecord",
    "LoggerConfig",
    "SEVERITY_NAMES",
    "SEVERITY_RANKS",
    "Severity",
    "Target",
    "coerce_level",
    "lookup_label",
]
