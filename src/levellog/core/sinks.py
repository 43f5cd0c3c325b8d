from __future__ import annotations

"""
Output Sinks.

The stream sink writes formatted lines synchronously to a borrowed stream.
The database sink submits parameterized inserts to a single worker thread
and reports completion through a callback and a Future. Neither sink opens
or closes the resources it writes to.
"""

import io
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Optional

from levellog.core.formatter import format_timestamp
from levellog.domain.config import DatabaseConfig
from levellog.domain.models import CompletionCallback
from levellog.domain.severity import Severity

logger = logging.getLogger(__name__)

LOG_COLUMNS = ("date_created", "application", "module", "level", "message")


# -----------------------------------------------------------------------------
# STREAM SINK
# -----------------------------------------------------------------------------

class StreamSink:
    """Synchronous writer for formatted lines."""

    def __init__(self, stream: Any) -> None:
        self.stream = stream
        self._binary = _is_binary(stream)
        self._lock = threading.Lock()

    def write(self, line: str) -> None:
        """
        Write one line and flush it if the stream supports flushing.

        Raises:
            OSError: Propagated from the underlying stream.
        """
        data = line.encode("ascii", errors="replace") if self._binary else line
        flush = getattr(self.stream, "flush", None)

        with self._lock:
            self.stream.write(data)
            if flush is not None:
                flush()


def _is_binary(stream: Any) -> bool:
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    if isinstance(stream, io.TextIOBase):
        return False
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


# -----------------------------------------------------------------------------
# DATABASE SINK
# -----------------------------------------------------------------------------

def build_insert_sql(table_name: str, paramstyle: str = "qmark") -> str:
    """Parameterized INSERT statement for the log table."""
    mark = "?" if paramstyle == "qmark" else "%s"
    placeholders = ", ".join([mark] * len(LOG_COLUMNS))
    return f"INSERT INTO {table_name} ({', '.join(LOG_COLUMNS)}) VALUES ({placeholders})"


def ensure_table(database: DatabaseConfig) -> None:
    """
    Create the log table if it does not exist.

    Uses portable column types; callers with stricter schemas should create
    the table themselves.
    """
    conn = database.connection
    cursor = conn.cursor()
    try:
        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS {database.table_name} (
                id INTEGER PRIMARY KEY,
                date_created TEXT NOT NULL,
                application TEXT,
                module TEXT,
                level TEXT NOT NULL,
                message TEXT
            )
        """)
        conn.commit()
    finally:
        cursor.close()
    logger.debug(f"DatabaseSink: Ensured table '{database.table_name}'.")


class DatabaseSink:
    """
    Asynchronous relational writer.

    Inserts run on one worker thread owned by the sink, so a borrowed
    connection is only ever used from that thread. Completion order follows
    submission order.
    """

    def __init__(self, database: DatabaseConfig) -> None:
        self.database = database
        self._sql = build_insert_sql(database.table_name, database.paramstyle)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="LevellogDB")

    def submit(
            self,
            severity: Severity,
            message: str,
            application: Optional[str] = None,
            module: Optional[str] = None,
            callback: Optional[CompletionCallback] = None,
            timestamp: Optional[datetime] = None,
    ) -> Future:
        """
        Schedule one insert and return immediately.

        The returned Future resolves to None on success, or carries the
        driver's exception on failure. ``callback`` receives None or that
        exception once the insert completes.
        """
        created = timestamp or datetime.now(timezone.utc)
        params = (format_timestamp(created), application, module, severity.name, message)

        try:
            future = self._executor.submit(self._insert, params)
        except RuntimeError as e:
            # Executor already shut down; report through the same channel
            logger.warning(f"DatabaseSink: Insert rejected after close: {e}")
            future = Future()
            future.set_exception(e)

        if callback is not None:
            future.add_done_callback(lambda f: _notify(callback, f))
        return future

    def close(self, wait: bool = True) -> None:
        """Stop accepting inserts; optionally wait for pending ones."""
        self._executor.shutdown(wait=wait)

    def _insert(self, params: tuple) -> None:
        conn = self.database.connection
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(self._sql, params)
            finally:
                cursor.close()
            conn.commit()
        except Exception as e:
            logger.warning(f"DatabaseSink: Insert into '{self.database.table_name}' failed: {e}")
            _rollback(conn)
            raise


def _notify(callback: CompletionCallback, future: Future) -> None:
    try:
        callback(future.exception())
    except Exception:
        logger.exception("DatabaseSink: Completion callback raised.")


def _rollback(conn: Any) -> None:
    rollback = getattr(conn, "rollback", None)
    if rollback is None:
        return
    try:
        rollback()
    except Exception as e:
        logger.debug(f"DatabaseSink: Rollback failed: {e}")
