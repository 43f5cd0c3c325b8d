from __future__ import annotations

"""
Line Parser (Read Mode).

Consumes chunks of previously formatted output, splits them on newlines and
decodes each complete line back into a LogRecord. Decoded records are
delivered to "line" observers; end of input is announced once to "end"
observers. Malformed lines are dropped without surfacing an error.
"""

import logging
import re
import threading
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Union

from levellog.domain.models import LogRecord
from levellog.domain.severity import lookup_label

logger = logging.getLogger(__name__)

LINE_RE = re.compile(r"^\[([^\]]+)\] (\w+) (?:\[([^\]]*)\] )?(.*)$")
DEFAULT_CHUNK_SIZE = 4096

LineHandler = Callable[[LogRecord], None]
EndHandler = Callable[[], None]


# -----------------------------------------------------------------------------
# SINGLE LINE DECODING
# -----------------------------------------------------------------------------

def parse_timestamp(text: str) -> datetime:
    """
    Parse an ISO 8601 timestamp, accepting a trailing ``Z`` for UTC.

    Raises:
        ValueError: If the text is not a valid ISO 8601 date-time.
    """
    text = text.strip()
    if text.endswith(("Z", "z")):
        return datetime.fromisoformat(text[:-1]).replace(tzinfo=timezone.utc)
    return datetime.fromisoformat(text)


def parse_line(line: str) -> Optional[LogRecord]:
    """
    Decode one formatted line (without its newline).

    Unknown level names yield a record with ``severity=None`` and the label
    kept verbatim. A bracketed word right after the level is always read as
    the application tag, so an untagged message that itself starts with
    ``[word] `` decodes with that word as its tag.

    Returns:
        Optional[LogRecord]: The record, or None if the line does not match
        the wire format or its timestamp cannot be parsed.
    """
    match = LINE_RE.match(line)
    if not match:
        return None

    stamp, label, tag, message = match.groups()
    try:
        timestamp = parse_timestamp(stamp)
    except ValueError:
        return None

    return LogRecord(
        timestamp=timestamp,
        severity=lookup_label(label),
        severity_label=label,
        message=message,
        application_tag=tag,
    )


# -----------------------------------------------------------------------------
# STREAM DECODING
# -----------------------------------------------------------------------------

class LineParser:
    """
    Incremental decoder with observer registration.

    The accumulation buffer is guarded by a lock so that chunks delivered from
    several threads cannot interleave. The ``lines_emitted`` and
    ``lines_dropped`` counters are updated under the same lock. Observers run
    outside it; an observer that raises is logged and the rest still run.

    With ``retain_partial=True`` complete lines are decoded as soon as they
    arrive and the unterminated tail is kept for the next chunk. With
    ``retain_partial=False`` the buffer is only processed once it ends with a
    newline, and is then cleared entirely.
    """

    def __init__(self, retain_partial: bool = True) -> None:
        self.retain_partial = retain_partial
        self._buffer = ""
        self._lock = threading.Lock()
        self._line_handlers: List[LineHandler] = []
        self._end_handlers: List[EndHandler] = []
        self._ended = False
        self.lines_emitted = 0
        self.lines_dropped = 0

    # --- Observer registration ---

    def on_line(self, handler: LineHandler) -> LineHandler:
        """Register a "line" observer. Returns the handler (decorator-friendly)."""
        self._line_handlers.append(handler)
        return handler

    def on_end(self, handler: EndHandler) -> EndHandler:
        """Register an "end" observer. Returns the handler (decorator-friendly)."""
        self._end_handlers.append(handler)
        return handler

    @property
    def pending(self) -> str:
        """Unconsumed text currently held in the buffer."""
        return self._buffer

    @property
    def ended(self) -> bool:
        return self._ended

    # --- Data delivery ---

    def feed(self, chunk: Union[bytes, str]) -> None:
        """
        Append a chunk and emit a "line" event per complete, valid line.

        Bytes are decoded as ASCII; undecodable bytes are replaced. A handler
        that raises is logged and skipped; delivery of the remaining records
        continues.
        """
        if isinstance(chunk, (bytes, bytearray)):
            chunk = bytes(chunk).decode("ascii", errors="replace")

        with self._lock:
            self._buffer += chunk
            records = self._decode(self._take_lines())

        for record in records:
            for handler in list(self._line_handlers):
                self._dispatch(handler, record)

    def finish(self) -> None:
        """Announce end of input. Emits "end" at most once."""
        with self._lock:
            if self._ended:
                return
            self._ended = True
            leftover, self._buffer = self._buffer, ""

        if leftover:
            logger.debug(f"LineParser: Discarding unterminated fragment ({len(leftover)} chars).")

        for handler in list(self._end_handlers):
            self._dispatch(handler)

    def consume(self, stream: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """
        Read ``stream`` until EOF, feeding each chunk, then call ``finish``.

        Args:
            stream: Object with a ``read(n)`` method returning bytes or str.
            chunk_size: Maximum size requested per read.
        """
        read = getattr(stream, "read1", None) or stream.read
        while True:
            chunk = read(chunk_size)
            if not chunk:
                break
            self.feed(chunk)
        self.finish()

    # --- Internals ---

    def _take_lines(self) -> List[str]:
        """Split consumable text out of the buffer. Caller holds the lock."""
        if self.retain_partial:
            head, sep, tail = self._buffer.rpartition("\n")
            if not sep:
                return []
            self._buffer = tail
            return head.split("\n")

        if not self._buffer.endswith("\n"):
            return []
        lines = self._buffer.split("\n")
        self._buffer = ""
        return lines

    def _decode(self, lines: List[str]) -> List[LogRecord]:
        """Parse lines and update counters. Caller holds the lock."""
        records: List[LogRecord] = []
        for line in lines:
            if not line:
                continue
            record = parse_line(line)
            if record is None:
                self.lines_dropped += 1
                logger.debug(f"LineParser: Dropping malformed line: {line[:80]!r}")
                continue
            self.lines_emitted += 1
            records.append(record)
        return records

    @staticmethod
    def _dispatch(handler: Callable[..., None], *payload: Any) -> None:
        try:
            handler(*payload)
        except Exception:
            logger.exception(f"LineParser: Observer {getattr(handler, '__name__', handler)!r} raised.")
