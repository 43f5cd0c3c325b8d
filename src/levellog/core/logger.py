from __future__ import annotations

"""
Leveled Logger.

Checks each call against the configured threshold and dispatches it to the
stream sink or the database sink. In read mode the logger also owns a
LineParser that decodes its input stream into "line" and "end" events.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Any, Optional, Sequence

from levellog.core.formatter import format_line, interpolate
from levellog.core.parser import EndHandler, LineHandler, LineParser
from levellog.core.sinks import DatabaseSink, StreamSink
from levellog.domain.config import LoggerConfig
from levellog.domain.errors import ConfigurationError
from levellog.domain.models import CompletionCallback, LogOptions, Target
from levellog.domain.severity import LevelLike, Severity, coerce_level

logger = logging.getLogger(__name__)


class Logger:
    """
    Severity-filtered logger with stream and database targets.

    The logger borrows its streams and database connection; ``close`` only
    stops the worker thread used for database inserts.
    """

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        self.config = config or LoggerConfig()
        self._stream_sink = StreamSink(self.config.output_stream)
        self._db_sink = DatabaseSink(self.config.database) if self.config.database else None
        self._parser = LineParser(retain_partial=self.config.retain_partial_lines)
        self._reader: Optional[threading.Thread] = None

        logger.debug(
            f"Logger initialized (threshold={self.threshold.name}, "
            f"database={'on' if self._db_sink else 'off'}, read_mode={self.config.read_mode})"
        )

    @classmethod
    def from_options(cls, **options: Any) -> Logger:
        """Shortcut for ``Logger(LoggerConfig.from_options(**options))``."""
        return cls(LoggerConfig.from_options(**options))

    # --- Properties ---

    @property
    def threshold(self) -> Severity:
        return self.config.threshold

    @property
    def application_tag(self) -> Optional[str]:
        return self.config.application_tag

    @property
    def parser(self) -> LineParser:
        return self._parser

    def is_enabled_for(self, severity: LevelLike) -> bool:
        """True if a message of ``severity`` passes the threshold."""
        return coerce_level(severity) <= self.threshold

    # ==========================================================================
    # DISPATCH
    # ==========================================================================

    def log(
            self,
            severity: LevelLike,
            template: str,
            args: Sequence[Any] = (),
            options: Optional[LogOptions] = None,
    ) -> Optional[Future]:
        """
        Log ``template`` interpolated with ``args`` at ``severity``.

        Suppressed messages return None without side effects. Stream writes
        happen synchronously and return None. Database writes return a Future
        immediately; the outcome is delivered through it and ``options.callback``.

        Raises:
            ConfigurationError: If the database target is requested but no
                database is configured.
        """
        level = coerce_level(severity)
        if level > self.threshold:
            return None

        options = options or LogOptions()
        tag = options.tag if options.tag is not None else self.application_tag
        message = interpolate(template, args)

        if options.target == Target.DATABASE:
            return self._log_db(level, message, tag, options.module, options.callback)

        self._stream_sink.write(format_line(level, message, tag))
        return None

    def _log_db(
            self,
            level: Severity,
            message: str,
            tag: Optional[str],
            module: Optional[str],
            callback: Optional[CompletionCallback],
    ) -> Future:
        if self._db_sink is None:
            raise ConfigurationError("Database target requested but no database is configured.")

        future = self._db_sink.submit(level, message, application=tag, module=module, callback=callback)
        if self.config.fallback_to_stream:
            future.add_done_callback(lambda f: self._fallback(level, tag, f))
        return future

    def _fallback(self, level: Severity, tag: Optional[str], future: Future) -> None:
        err = future.exception()
        if err is None:
            return
        try:
            self._stream_sink.write(format_line(level, str(err), tag))
        except OSError as e:
            logger.warning(f"Logger: Fallback stream write failed: {e}")

    # ==========================================================================
    # SEVERITY METHODS
    # ==========================================================================

    def _call(
            self,
            severity: Severity,
            template: str,
            args: Sequence[Any],
            tag: Optional[str],
            module: Optional[str],
            target: Target,
            callback: Optional[CompletionCallback],
    ) -> Optional[Future]:
        options = LogOptions(tag=tag, module=module, target=target, callback=callback)
        return self.log(severity, template, args, options)

    def emergency(self, template: str, args: Sequence[Any] = (), *, tag: Optional[str] = None,
                  module: Optional[str] = None, target: Target = Target.STREAM,
                  callback: Optional[CompletionCallback] = None) -> Optional[Future]:
        """System is unusable."""
        return self._call(Severity.EMERGENCY, template, args, tag, module, target, callback)

    def alert(self, template: str, args: Sequence[Any] = (), *, tag: Optional[str] = None,
              module: Optional[str] = None, target: Target = Target.STREAM,
              callback: Optional[CompletionCallback] = None) -> Optional[Future]:
        """Action must be taken immediately."""
        return self._call(Severity.ALERT, template, args, tag, module, target, callback)

    def critical(self, template: str, args: Sequence[Any] = (), *, tag: Optional[str] = None,
                 module: Optional[str] = None, target: Target = Target.STREAM,
                 callback: Optional[CompletionCallback] = None) -> Optional[Future]:
        """Critical condition."""
        return self._call(Severity.CRITICAL, template, args, tag, module, target, callback)

    def error(self, template: str, args: Sequence[Any] = (), *, tag: Optional[str] = None,
              module: Optional[str] = None, target: Target = Target.STREAM,
              callback: Optional[CompletionCallback] = None) -> Optional[Future]:
        """Error condition."""
        return self._call(Severity.ERROR, template, args, tag, module, target, callback)

    def warning(self, template: str, args: Sequence[Any] = (), *, tag: Optional[str] = None,
                module: Optional[str] = None, target: Target = Target.STREAM,
                callback: Optional[CompletionCallback] = None) -> Optional[Future]:
        """Warning condition."""
        return self._call(Severity.WARNING, template, args, tag, module, target, callback)

    def notice(self, template: str, args: Sequence[Any] = (), *, tag: Optional[str] = None,
               module: Optional[str] = None, target: Target = Target.STREAM,
               callback: Optional[CompletionCallback] = None) -> Optional[Future]:
        """Normal but significant condition."""
        return self._call(Severity.NOTICE, template, args, tag, module, target, callback)

    def info(self, template: str, args: Sequence[Any] = (), *, tag: Optional[str] = None,
             module: Optional[str] = None, target: Target = Target.STREAM,
             callback: Optional[CompletionCallback] = None) -> Optional[Future]:
        """Purely informational message."""
        return self._call(Severity.INFO, template, args, tag, module, target, callback)

    def debug(self, template: str, args: Sequence[Any] = (), *, tag: Optional[str] = None,
              module: Optional[str] = None, target: Target = Target.STREAM,
              callback: Optional[CompletionCallback] = None) -> Optional[Future]:
        """Application debug message."""
        return self._call(Severity.DEBUG, template, args, tag, module, target, callback)

    # ==========================================================================
    # READ MODE
    # ==========================================================================

    def on_line(self, handler: LineHandler) -> LineHandler:
        return self._parser.on_line(handler)

    def on_end(self, handler: EndHandler) -> EndHandler:
        return self._parser.on_end(handler)

    def read(self) -> None:
        """
        Consume the input stream until EOF, emitting "line" then "end".

        Raises:
            ConfigurationError: If no input stream is configured.
        """
        if not self.config.read_mode:
            raise ConfigurationError("Read mode requires an input stream.")
        self._parser.consume(self.config.input_stream)

    def start_reading(self) -> threading.Thread:
        """Run ``read`` on a daemon thread and return it."""
        if self._reader is not None and self._reader.is_alive():
            return self._reader
        if not self.config.read_mode:
            raise ConfigurationError("Read mode requires an input stream.")

        self._reader = threading.Thread(target=self.read, name="LevellogReader", daemon=True)
        self._reader.start()
        return self._reader

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    def close(self, wait: bool = True) -> None:
        """Shut down the database worker. Borrowed resources stay open."""
        if self._db_sink is not None:
            self._db_sink.close(wait=wait)

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
