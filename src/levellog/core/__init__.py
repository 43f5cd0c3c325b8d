from __future__ import annotations

from .formatter import ABSENT, format_line, format_message, format_record, format_timestamp, interpolate
from .logger import Logger
from .parser import LineParser, parse_line, parse_timestamp
from .sinks import DatabaseSink, StreamSink, build_insert_sql, ensure_table

__all__ = [
    "ABSENT",
    "DatabaseSink",
    "LineParser",
    "Logger",
    "StreamSink",
    "build_insert_sql",
    "ensure_table",
    "format_line",
    "format_message",
    "format_record",
    "format_timestamp",
    "interpolate",
    "parse_line",
    "parse_timestamp",
]
