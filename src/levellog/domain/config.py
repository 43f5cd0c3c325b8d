from __future__ import annotations

"""
Logger Configuration Models.

Immutable construction options for a Logger. Validation happens in
``__post_init__`` so that an inconsistent configuration fails before any
logging method can be called.
"""

import os
import re
import sys
from dataclasses import dataclass
from typing import Any, Optional

from levellog.domain.errors import ConfigurationError
from levellog.domain.severity import LevelLike, Severity, coerce_level

ENV_LEVEL = "LEVELLOG_LEVEL"
ENV_APPLICATION = "LEVELLOG_APPLICATION"
ENV_FALLBACK = "LEVELLOG_FALLBACK_TO_STREAM"

_TRUTHY = {"1", "true", "yes", "on"}
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")
_PARAMSTYLES = ("qmark", "format")


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Relational sink settings.

    Attributes:
        connection: Borrowed DB-API 2.0 connection. Never closed by the logger.
        table_name: Destination table. Interpolated into SQL, so it must be a
            plain (optionally schema-qualified) identifier.
        paramstyle: Placeholder style of the driver ("qmark" or "format").
    """
    connection: Any = None
    table_name: Optional[str] = None
    paramstyle: str = "qmark"

    def __post_init__(self) -> None:
        if self.connection is None:
            raise ConfigurationError("Database sink requires a connection.")
        if not self.table_name:
            raise ConfigurationError("Database sink requires a table name.")
        if not _IDENTIFIER_RE.match(self.table_name):
            raise ConfigurationError(f"Invalid table name: {self.table_name!r}")
        if self.paramstyle not in _PARAMSTYLES:
            raise ConfigurationError(f"Unsupported paramstyle: {self.paramstyle!r}")


@dataclass(frozen=True)
class LoggerConfig:
    """
    Immutable settings for a Logger.

    Attributes:
        level: Threshold; messages with a higher rank are suppressed.
        output_stream: Writable stream for the stream sink (default stdout).
        input_stream: Readable stream; its presence enables read mode.
        application_tag: Tag rendered as ``[tag]`` after the level name.
        database: Optional relational sink settings.
        fallback_to_stream: Also write database failures to the stream sink.
        retain_partial_lines: Keep unterminated fragments between chunks in
            read mode instead of waiting for a newline-terminated buffer.
    """
    level: LevelLike = Severity.DEBUG
    output_stream: Any = None
    input_stream: Any = None
    application_tag: Optional[str] = None
    database: Optional[DatabaseConfig] = None
    fallback_to_stream: bool = False
    retain_partial_lines: bool = True

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "level", coerce_level(self.level))
        if self.output_stream is None:
            object.__setattr__(self, "output_stream", sys.stdout)
        if self.database is not None and not isinstance(self.database, DatabaseConfig):
            raise ConfigurationError("database must be a DatabaseConfig instance.")

    @property
    def threshold(self) -> Severity:
        return self.level  # type: ignore[return-value]

    @property
    def read_mode(self) -> bool:
        return self.input_stream is not None

    @classmethod
    def from_options(
            cls,
            level: LevelLike = Severity.DEBUG,
            output_stream: Any = None,
            input_stream: Any = None,
            application_tag: Optional[str] = None,
            connection: Any = None,
            table_name: Optional[str] = None,
            **kwargs: Any,
    ) -> LoggerConfig:
        """
        Build a configuration from flat keyword options.

        Supplying only one of ``connection`` / ``table_name`` is a
        configuration error.

        Raises:
            ConfigurationError: On inconsistent database options or bad level.
        """
        database = None
        paramstyle = kwargs.pop("paramstyle", "qmark")
        if connection is not None or table_name is not None:
            database = DatabaseConfig(
                connection=connection,
                table_name=table_name,
                paramstyle=paramstyle,
            )
        return cls(
            level=level,
            output_stream=output_stream,
            input_stream=input_stream,
            application_tag=application_tag,
            database=database,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> LoggerConfig:
        """
        Load level, tag, and fallback policy from environment variables.

        Explicit keyword overrides win over the environment.
        """
        values: dict = {}
        level = os.getenv(ENV_LEVEL, "")
        if level:
            values["level"] = int(level) if level.strip().isdigit() else level
        application = os.getenv(ENV_APPLICATION, "")
        if application:
            values["application_tag"] = application
        fallback = os.getenv(ENV_FALLBACK, "")
        if fallback:
            values["fallback_to_stream"] = fallback.strip().lower() in _TRUTHY

        values.update(overrides)
        return cls.from_options(**values)
