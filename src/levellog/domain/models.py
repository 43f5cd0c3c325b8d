from __future__ import annotations

"""
Log Domain Data Models.

Defines the record produced by the formatter and consumed by the parser,
the per-call target selector, and the optional fields that accompany a
single logging call.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from levellog.domain.severity import Severity

CompletionCallback = Callable[[Optional[BaseException]], None]


class Target(str, Enum):
    """Destination of a single logging call."""

    STREAM = "stream"
    DATABASE = "db"


# -----------------------------------------------------------------------------
# RECORD MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LogRecord:
    """
    One decoded or to-be-encoded log line.

    Attributes:
        timestamp: Moment the message was logged.
        severity: Parsed level, or None when the label is unknown.
        severity_label: Level name as it appears on the wire.
        application_tag: Optional application identifier.
        message: Interpolated message text.
    """
    timestamp: datetime
    severity: Optional[Severity]
    severity_label: str
    message: str
    application_tag: Optional[str] = None

    def __post_init__(self) -> None:
        if self.severity is not None and self.severity_label != self.severity.name:
            raise ValueError(
                f"Label {self.severity_label!r} does not match severity {self.severity.name}"
            )

    @classmethod
    def create(
            cls,
            severity: Severity,
            message: str,
            timestamp: datetime,
            application_tag: Optional[str] = None,
    ) -> LogRecord:
        """Build a record whose label is derived from the severity."""
        return cls(
            timestamp=timestamp,
            severity=severity,
            severity_label=severity.name,
            message=message,
            application_tag=application_tag,
        )

    def to_dict(self) -> dict:
        """Plain JSON-friendly representation."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "severity": int(self.severity) if self.severity is not None else None,
            "severity_label": self.severity_label,
            "application_tag": self.application_tag,
            "message": self.message,
        }


@dataclass(frozen=True)
class LogOptions:
    """
    Optional per-call fields.

    Attributes:
        tag: Overrides the configured application tag for this call.
        module: Module or source name persisted with database rows.
        target: Sink selector.
        callback: Invoked with None or the failure once a database insert completes.
    """
    tag: Optional[str] = None
    module: Optional[str] = None
    target: Target = Target.STREAM
    callback: Optional[CompletionCallback] = None
