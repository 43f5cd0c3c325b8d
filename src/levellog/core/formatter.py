from __future__ import annotations

"""
Line Formatter.

Renders the wire format shared by the stream sink and the parser:

    [<timestamp>] <LEVEL>[ [<tag>]] <message>\\n

Pure functions only; writing the line is the sink's responsibility.
"""

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from levellog.domain.models import LogRecord
from levellog.domain.severity import Severity

PLACEHOLDER = "%s"
ABSENT = "<absent>"


def interpolate(template: str, args: Sequence[Any] = ()) -> str:
    """
    Substitute each ``%s`` with the next value, left to right.

    Missing values render as ``ABSENT``; surplus values are ignored. No other
    ``%`` sequence is interpreted.

    Args:
        template: Message template.
        args: Substitution values, consumed in order.

    Returns:
        str: The interpolated message.
    """
    parts = template.split(PLACEHOLDER)
    if len(parts) == 1:
        return template

    out = [parts[0]]
    for i, tail in enumerate(parts[1:]):
        out.append(str(args[i]) if i < len(args) else ABSENT)
        out.append(tail)
    return "".join(out)


def format_timestamp(dt: Optional[datetime] = None) -> str:
    """ISO 8601 with whole-second precision and an explicit UTC offset."""
    if dt is None:
        dt = datetime.now(timezone.utc)
    elif dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.isoformat(timespec="seconds")


def format_line(
        severity: Severity,
        message: str,
        application_tag: Optional[str] = None,
        timestamp: Optional[datetime] = None,
) -> str:
    """
    Render one newline-terminated log line.

    The ``[tag]`` segment is omitted entirely when no tag is given.
    """
    return _render(format_timestamp(timestamp), severity.name, application_tag, message)


def format_message(
        severity: Severity,
        template: str,
        args: Sequence[Any] = (),
        application_tag: Optional[str] = None,
        timestamp: Optional[datetime] = None,
) -> str:
    """Interpolate ``template`` with ``args`` and render the resulting line."""
    return format_line(severity, interpolate(template, args), application_tag, timestamp)


def format_record(record: LogRecord) -> str:
    """Render a record; records with an unknown severity keep their label."""
    return _render(
        format_timestamp(record.timestamp),
        record.severity_label,
        record.application_tag,
        record.message,
    )


def _render(stamp: str, label: str, tag: Optional[str], message: str) -> str:
    head = f"[{stamp}] {label}"
    if tag:
        head = f"{head} [{tag}]"
    return f"{head} {message}\n"
