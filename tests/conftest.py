from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for output streams and a throwaway SQLite log table.
"""

import io
import os
import sqlite3
import sys
from typing import Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from levellog.core.sinks import ensure_table  # noqa: E402
from levellog.domain.config import DatabaseConfig  # noqa: E402

LOG_TABLE = "dashboard_log"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def out() -> io.StringIO:
    """In-memory text stream standing in for stdout."""
    return io.StringIO()


@pytest.fixture
def sqlite_conn(tmp_path) -> Iterator[sqlite3.Connection]:
    """
    Provide a file-backed SQLite connection with the log table created.

    ``check_same_thread=False`` lets the logger's worker thread use the
    connection created here.

    Yields:
        sqlite3.Connection: Open connection, closed after the test.
    """
    conn = sqlite3.connect(str(tmp_path / "logs.db"), check_same_thread=False)
    ensure_table(DatabaseConfig(connection=conn, table_name=LOG_TABLE))
    yield conn
    conn.close()
