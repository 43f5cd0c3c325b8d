from __future__ import annotations

"""
Unit tests for Logger dispatch.

Verifies:
1. Threshold filtering for every severity method.
2. Tag rendering and per-call tag override.
3. Database dispatch, completion callbacks, and failure policy.
4. Read-mode wiring.
"""

import io
from concurrent.futures import Future
from unittest.mock import Mock

import pytest

from levellog.core.logger import Logger
from levellog.domain.config import LoggerConfig
from levellog.domain.errors import ConfigurationError
from levellog.domain.models import LogOptions, Target
from levellog.domain.severity import Severity

METHODS = ["emergency", "alert", "critical", "error", "warning", "notice", "info", "debug"]


def make_db_logger(conn, out, **options) -> Logger:
    return Logger.from_options(
        output_stream=out, connection=conn, table_name="dashboard_log", **options
    )


# -----------------------------------------------------------------------------
# THRESHOLD
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("threshold", list(Severity))
def test_threshold_filters_each_method(threshold: Severity, out: io.StringIO) -> None:
    log = Logger.from_options(level=threshold, output_stream=out)

    for name in METHODS:
        getattr(log, name)("msg from %s", [name])

    lines = out.getvalue().splitlines()
    expected = [s.name for s in Severity if s <= threshold]
    assert [line.split(" ")[1] for line in lines] == expected


def test_default_threshold_passes_everything(out: io.StringIO) -> None:
    log = Logger.from_options(output_stream=out)
    log.debug("lowest")
    assert out.getvalue().endswith(" DEBUG lowest\n")


def test_suppressed_message_returns_none_and_skips_callback(out: io.StringIO) -> None:
    conn = Mock()
    cb = Mock()
    log = make_db_logger(conn, out, level="error")

    result = log.debug("noise", target=Target.DATABASE, callback=cb)
    log.close()

    assert result is None
    cb.assert_not_called()
    conn.cursor.assert_not_called()


def test_is_enabled_for(out: io.StringIO) -> None:
    log = Logger.from_options(level="warning", output_stream=out)
    assert log.is_enabled_for("error") is True
    assert log.is_enabled_for(Severity.NOTICE) is False


# -----------------------------------------------------------------------------
# STREAM SINK
# -----------------------------------------------------------------------------

def test_stream_line_contains_tag(out: io.StringIO) -> None:
    log = Logger.from_options(application_tag="svc1", output_stream=out)
    log.warning("disk %s at %s", ["sda", 91])

    line = out.getvalue()
    assert " WARNING [svc1] disk sda at 91" in line
    assert line.endswith("\n")


def test_stream_line_without_tag(out: io.StringIO) -> None:
    log = Logger.from_options(output_stream=out)
    log.warning("plain")
    assert " WARNING plain\n" in out.getvalue()
    assert "[" not in out.getvalue().split("]", 1)[1]


def test_per_call_tag_override(out: io.StringIO) -> None:
    log = Logger.from_options(application_tag="svc1", output_stream=out)
    log.info("x", tag="worker")
    assert " INFO [worker] x" in out.getvalue()


def test_generic_log_with_options(out: io.StringIO) -> None:
    log = Logger.from_options(output_stream=out)
    assert log.log("notice", "a %s b %s", ["X"], LogOptions(tag="t")) is None
    assert " NOTICE [t] a X b <absent>" in out.getvalue()


def test_binary_stream_receives_bytes() -> None:
    buf = io.BytesIO()
    log = Logger.from_options(output_stream=buf)
    log.info("bytes")
    assert buf.getvalue().endswith(b" INFO bytes\n")


def test_legacy_string_target_selects_stream(out: io.StringIO) -> None:
    log = Logger.from_options(output_stream=out)
    log.info("to stream", target="stream")  # type: ignore[arg-type]
    assert "to stream" in out.getvalue()


# -----------------------------------------------------------------------------
# DATABASE SINK
# -----------------------------------------------------------------------------

def test_database_dispatch_inserts_once_and_calls_back(out: io.StringIO) -> None:
    conn = Mock()
    cursor = conn.cursor.return_value
    cb = Mock()
    log = make_db_logger(conn, out, level="error", application_tag="svc1")

    future = log.error("disk full", target=Target.DATABASE, callback=cb, module="storage")
    assert isinstance(future, Future)
    assert future.result(timeout=5) is None
    log.close()

    cursor.execute.assert_called_once()
    sql, params = cursor.execute.call_args[0]
    assert sql.startswith("INSERT INTO dashboard_log (date_created, application, module, level, message)")
    assert params[1:] == ("svc1", "storage", "ERROR", "disk full")
    conn.commit.assert_called_once()
    cb.assert_called_once_with(None)
    assert out.getvalue() == ""


def test_database_failure_reaches_callback_and_future(out: io.StringIO) -> None:
    boom = RuntimeError("E")
    conn = Mock()
    conn.cursor.return_value.execute.side_effect = boom
    cb = Mock()
    log = make_db_logger(conn, out, level="error")

    future = log.error("disk full", target=Target.DATABASE, callback=cb)
    assert future.exception(timeout=5) is boom
    log.close()

    cb.assert_called_once_with(boom)
    conn.rollback.assert_called_once()
    assert out.getvalue() == ""


def test_database_failure_fallback_uses_original_severity(out: io.StringIO) -> None:
    conn = Mock()
    conn.cursor.return_value.execute.side_effect = RuntimeError("table missing")
    log = make_db_logger(conn, out, fallback_to_stream=True, application_tag="svc1")

    log.notice("hi", target=Target.DATABASE).exception(timeout=5)
    log.close()

    assert " NOTICE [svc1] table missing\n" in out.getvalue()


def test_callback_errors_do_not_affect_future(out: io.StringIO) -> None:
    conn = Mock()
    log = make_db_logger(conn, out)

    future = log.info("x", target=Target.DATABASE, callback=Mock(side_effect=ValueError("cb")))
    log.close()

    assert future.exception() is None


def test_database_target_without_database_is_configuration_error(out: io.StringIO) -> None:
    log = Logger.from_options(output_stream=out)
    with pytest.raises(ConfigurationError):
        log.error("x", target=Target.DATABASE)


def test_insert_after_close_fails_through_future(out: io.StringIO) -> None:
    conn = Mock()
    cb = Mock()
    log = make_db_logger(conn, out)
    log.close()

    future = log.info("late", target=Target.DATABASE, callback=cb)

    assert isinstance(future.exception(), RuntimeError)
    cb.assert_called_once()


def test_constructing_with_connection_but_no_table_fails(out: io.StringIO) -> None:
    with pytest.raises(ConfigurationError):
        Logger.from_options(output_stream=out, connection=Mock())


# -----------------------------------------------------------------------------
# READ MODE
# -----------------------------------------------------------------------------

def test_read_emits_lines_and_end(out: io.StringIO) -> None:
    source = io.BytesIO(b"[2024-01-01T00:00:00Z] INFO hel" b"lo\n")
    log = Logger(LoggerConfig(input_stream=source, output_stream=out))
    events: list = []
    log.on_line(lambda r: events.append(r.message))
    log.on_end(lambda: events.append("<end>"))

    log.read()

    assert events == ["hello", "<end>"]


def test_start_reading_runs_in_background(out: io.StringIO) -> None:
    source = io.BytesIO(b"[2024-01-01T00:00:00Z] CRITICAL [svc] down\n")
    log = Logger(LoggerConfig(input_stream=source, output_stream=out))
    records: list = []
    log.on_line(records.append)

    thread = log.start_reading()
    thread.join(timeout=5)

    assert not thread.is_alive()
    assert records[0].severity is Severity.CRITICAL
    assert records[0].application_tag == "svc"


def test_read_without_input_stream_fails(out: io.StringIO) -> None:
    log = Logger.from_options(output_stream=out)
    with pytest.raises(ConfigurationError):
        log.read()
    with pytest.raises(ConfigurationError):
        log.start_reading()


def test_context_manager_closes_database_worker(out: io.StringIO) -> None:
    conn = Mock()
    with make_db_logger(conn, out) as log:
        future = log.info("x", target=Target.DATABASE)
    assert future.done()
