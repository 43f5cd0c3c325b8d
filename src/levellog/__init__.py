from __future__ import annotations

"""
levellog: leveled logging with stream and database targets.

Messages are filtered against a severity threshold, rendered as
``[timestamp] LEVEL [tag] message`` lines, and either written to a stream or
inserted into a relational table. Read mode decodes the same line format
back into structured records.
"""

from levellog.core import (
    ABSENT,
    LineParser,
    Logger,
    ensure_table,
    format_line,
    format_record,
    interpolate,
    parse_line,
)
from levellog.domain import (
    SEVERITY_NAMES,
    SEVERITY_RANKS,
    ConfigurationError,
    DatabaseConfig,
    LevellogError,
    LogOptions,
    LogRecord,
    LoggerConfig,
    Severity,
    Target,
)

__version__ = "0.1.0"

EMERGENCY = Severity.EMERGENCY
ALERT = Severity.ALERT
CRITICAL = Severity.CRITICAL
ERROR = Severity.ERROR
WARNING = Severity.WARNING
NOTICE = Severity.NOTICE
INFO = Severity.INFO
DEBUG = Severity.DEBUG

DATABASE = Target.DATABASE
STREAM = Target.STREAM

__all__ = [
    "ABSENT",
    "ALERT",
    "CRITICAL",
    "ConfigurationError",
    "DATABASE",
    "DEBUG",
    "DatabaseConfig",
    "EMERGENCY",
    "ERROR",
    "INFO",
    "LevellogError",
    "LineParser",
    "LogOptions",
    "LogRecord",
    "Logger",
    "LoggerConfig",
    "NOTICE",
    "SEVERITY_NAMES",
    "SEVERITY_RANKS",
    "STREAM",
    "Severity",
    "Target",
    "WARNING",
    "__version__",
    "ensure_table",
    "format_line",
    "format_record",
    "interpolate",
    "parse_line",
]
