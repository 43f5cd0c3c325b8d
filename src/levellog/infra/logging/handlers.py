from __future__ import annotations

"""
Diagnostics Handlers.

Handler factory and tagging helpers so reconfiguration only ever removes
handlers this package installed.
"""

import logging
import sys
from typing import IO, Optional

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_levellog_handler"


def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as installed by levellog."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_stream_handler(
        level_int: int,
        formatter: logging.Formatter,
        stream: Optional[IO[str]] = None,
) -> logging.StreamHandler:
    """
    Build a tagged StreamHandler.

    Args:
        level_int: Numeric logging level.
        formatter: Pre-configured logging formatter.
        stream: Destination; stderr when omitted.
    """
    sh = logging.StreamHandler(stream or sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh
