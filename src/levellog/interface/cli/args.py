from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the ``levellog`` command-line schema and translates parsed
namespaces into LoggerConfig keyword options.
"""

import argparse
from typing import Any, Dict, List, Optional

from levellog.domain.severity import Severity

_LEVEL_CHOICES = [s.name.lower() for s in Severity]


# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the levellog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="levellog",
        description="Write leveled log lines or parse them back into records.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Print diagnostic messages to stderr.",
    )

    sub = p.add_subparsers(dest="command", required=True)

    # --- write ---
    w = sub.add_parser("write", help="Log one message.")
    w.add_argument("severity", type=str.lower, choices=_LEVEL_CHOICES)
    w.add_argument("template", help="Message template; each %%s takes the next ARG.")
    w.add_argument("args", nargs="*", help="Substitution values.")
    w.add_argument(
        "-l", "--level",
        dest="threshold",
        default="debug",
        help="Threshold level name or rank (default: debug).",
    )
    w.add_argument("-t", "--tag", dest="application_tag", default=None)
    w.add_argument("-m", "--module", default=None, help="Module name stored with database rows.")
    w.add_argument("--db", dest="db_path", default=None, help="SQLite database file.")
    w.add_argument("--table", dest="table_name", default=None)
    w.add_argument(
        "--fallback",
        dest="fallback_to_stream",
        action="store_true",
        help="Also print database failures to stdout.",
    )

    # --- parse ---
    r = sub.add_parser("parse", help="Decode formatted lines from stdin.")
    r.add_argument("--json", dest="as_json", action="store_true", help="Emit JSON lines.")
    r.add_argument(
        "--min-level",
        dest="min_level",
        default=None,
        help="Only print records at this level or more urgent.",
    )
    r.add_argument(
        "--wait-for-newline",
        dest="retain_partial_lines",
        action="store_false",
        help="Only decode once the whole buffer ends with a newline.",
    )

    return p


# -----------------------------------------------------------------------------
# NAMESPACE MAPPING
# -----------------------------------------------------------------------------

def args_to_options(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Map parsed CLI arguments to LoggerConfig.from_options keywords.

    Streams and connections are resolved by the application layer.
    """
    options: Dict[str, Any] = {}

    if args.command == "write":
        options["level"] = _level_value(args.threshold)
        if args.application_tag:
            options["application_tag"] = args.application_tag
        if args.table_name:
            options["table_name"] = args.table_name
        options["fallback_to_stream"] = bool(args.fallback_to_stream)

    elif args.command == "parse":
        options["retain_partial_lines"] = bool(args.retain_partial_lines)

    return options


def _level_value(raw: Optional[str]) -> Any:
    if raw is None:
        return Severity.DEBUG
    return int(raw) if raw.strip().isdigit() else raw


def parse_argv(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
