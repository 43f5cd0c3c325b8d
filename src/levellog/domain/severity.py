from __future__ import annotations

"""
Severity Scale.

Eight ordered urgency classes with numeric ranks 0-7. A lower rank means a
more urgent message. The name/rank tables are built once at import time and
exposed read-only.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from levellog.domain.errors import ConfigurationError


class Severity(IntEnum):
    """Syslog-style severity levels."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


# -----------------------------------------------------------------------------
# READ-ONLY LOOKUP TABLES
# -----------------------------------------------------------------------------

SEVERITY_NAMES: Mapping[int, str] = MappingProxyType(
    {int(s): s.name for s in Severity}
)
SEVERITY_RANKS: Mapping[str, int] = MappingProxyType(
    {s.name: int(s) for s in Severity}
)

LevelLike = Union[Severity, int, str]


def coerce_level(value: LevelLike) -> Severity:
    """
    Normalize a threshold given as a Severity, a rank, or a name.

    Names are matched case-insensitively after stripping whitespace.

    Args:
        value: Level in any accepted representation.

    Returns:
        Severity: The matching level.

    Raises:
        ConfigurationError: If the value does not denote one of the eight levels.
    """
    if isinstance(value, Severity):
        return value

    # bool is an int subclass; True/False are never a meaningful level
    if isinstance(value, int) and not isinstance(value, bool):
        if value in SEVERITY_NAMES:
            return Severity(value)
        raise ConfigurationError(f"Severity rank out of range: {value}")

    if isinstance(value, str):
        key = value.strip().upper()
        if key in SEVERITY_RANKS:
            return Severity(SEVERITY_RANKS[key])
        raise ConfigurationError(f"Unknown severity name: {value!r}")

    raise ConfigurationError(f"Unsupported severity value: {value!r}")


def lookup_label(label: str) -> Optional[Severity]:
    """Resolve a canonical label exactly as written on the wire, or None."""
    rank = SEVERITY_RANKS.get(label)
    return Severity(rank) if rank is not None else None
