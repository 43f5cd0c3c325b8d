from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

``levellog write`` logs one message to stdout or to an SQLite table.
``levellog parse`` runs a read-mode logger over stdin and prints each
decoded record.
"""

import json
import sqlite3
import sys
from typing import IO, Any, List, Optional

from levellog.core.logger import Logger
from levellog.core.sinks import ensure_table
from levellog.domain.config import LoggerConfig
from levellog.domain.errors import ConfigurationError
from levellog.domain.models import LogRecord, Target
from levellog.domain.severity import Severity, coerce_level
from levellog.infra.logging import DiagnosticsConfig, configure_logging, get_logger
from levellog.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(
        argv: Optional[List[str]] = None,
        stdin: Optional[IO[Any]] = None,
        stdout: Optional[IO[str]] = None,
) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.
        stdin: Input for ``parse`` (binary or text). Defaults to stdin's buffer.
        stdout: Output for formatted lines and decoded records.

    Returns:
        int: 0 on success, 1 on a database failure, 2 on bad configuration.
    """
    args = cli_args.parse_argv(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(DiagnosticsConfig(level=log_level, console=True))

    out = stdout or sys.stdout
    options = cli_args.args_to_options(args)

    try:
        if args.command == "write":
            return _run_write(args, options, out)
        source = stdin if stdin is not None else sys.stdin.buffer
        return _run_parse(args, options, source, out)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG


# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_write(args: Any, options: dict, out: IO[str]) -> int:
    severity = coerce_level(args.severity)

    if not args.db_path:
        with Logger(LoggerConfig.from_options(output_stream=out, **options)) as log:
            log.log(severity, args.template, args.args)
        return EXIT_OK

    conn = sqlite3.connect(args.db_path, check_same_thread=False)
    try:
        config = LoggerConfig.from_options(output_stream=out, connection=conn, **options)
        ensure_table(config.database)

        with Logger(config) as log:
            if not log.is_enabled_for(severity):
                logger.debug(f"Suppressed {severity.name} (threshold {log.threshold.name}).")
                return EXIT_OK
            future = getattr(log, severity.name.lower())(
                args.template, args.args, module=args.module, target=Target.DATABASE,
            )
            err = future.exception()

        if err is not None:
            logger.error(f"Database write failed: {err}")
            return EXIT_FAILURE

        logger.debug(f"Stored {severity.name} row in '{config.database.table_name}'.")
        return EXIT_OK
    finally:
        conn.close()


def _run_parse(args: Any, options: dict, source: IO[Any], out: IO[str]) -> int:
    min_level: Optional[Severity] = coerce_level(args.min_level) if args.min_level else None
    printed = 0

    def _print(record: LogRecord) -> None:
        nonlocal printed
        if min_level is not None and (record.severity is None or record.severity > min_level):
            return
        if args.as_json:
            out.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
        else:
            tag = f" [{record.application_tag}]" if record.application_tag else ""
            out.write(f"{record.timestamp.isoformat()}\t{record.severity_label}{tag}\t{record.message}\n")
        printed += 1

    with Logger(LoggerConfig.from_options(input_stream=source, output_stream=out, **options)) as log:
        log.on_line(_print)
        log.read()

    logger.info(
        f"Parsed {log.parser.lines_emitted} line(s), printed {printed}, "
        f"dropped {log.parser.lines_dropped}."
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
