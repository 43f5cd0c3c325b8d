from __future__ import annotations

"""
Diagnostics Logging Configuration.

Settings for the library's own diagnostic messages (parse drops, failed
inserts). These travel through the standard ``logging`` module and are
unrelated to the leveled lines a Logger writes.
"""

import logging
from dataclasses import dataclass
from typing import Dict

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

ROOT_LOGGER_NAME = "levellog"


@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Immutable settings for diagnostics output.

    Attributes:
        level: Minimum diagnostic level to emit.
        console: Write diagnostics to stderr.
        fmt: Format string for diagnostic records.
        logger_name: Logger the handler is attached to.
    """
    level: str = "WARNING"
    console: bool = True
    fmt: str = "%(levelname)s | %(name)s | %(message)s"
    logger_name: str = ROOT_LOGGER_NAME
