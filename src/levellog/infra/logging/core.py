from __future__ import annotations

"""
Diagnostics Logging Orchestrator.

Idempotent setup of the ``levellog`` diagnostics logger. Library modules only
call ``logging.getLogger(__name__)``; handlers are attached here, by the CLI
or by an embedding application that opts in.
"""

import logging
from typing import IO, Optional

from levellog.infra.logging.config import _LEVEL_MAP, ROOT_LOGGER_NAME, DiagnosticsConfig
from levellog.infra.logging.handlers import _create_stream_handler, _is_our_handler

# Internal state flag for idempotency
_CONFIGURED_FLAG_ATTR: str = "_levellog_configured"


def configure_logging(
        cfg: DiagnosticsConfig,
        *,
        force: bool = False,
        stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Attach a single tagged console handler to the diagnostics logger.

    Repeated calls are no-ops unless ``force`` is set, in which case
    previously installed handlers are replaced.

    Args:
        cfg: Diagnostics settings.
        force: Re-initialize even if already configured.
        stream: Override for the console destination (stderr by default).

    Returns:
        logging.Logger: The configured diagnostics logger.
    """
    target = logging.getLogger(cfg.logger_name)

    already_configured = bool(getattr(target, _CONFIGURED_FLAG_ATTR, False))
    if already_configured and not force:
        return target

    level_int = _parse_level(cfg.level)
    target.setLevel(level_int)
    _remove_our_handlers(target)

    if cfg.console:
        formatter = logging.Formatter(cfg.fmt)
        target.addHandler(_create_stream_handler(level_int, formatter, stream))

    setattr(target, _CONFIGURED_FLAG_ATTR, True)
    return target


def reset_logging(logger_name: str = ROOT_LOGGER_NAME) -> None:
    """Detach our handlers and clear the configured flag."""
    target = logging.getLogger(logger_name)
    _remove_our_handlers(target)
    if hasattr(target, _CONFIGURED_FLAG_ATTR):
        delattr(target, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """Acquire a named logger (usually ``__name__``)."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(target: logging.Logger) -> None:
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)
            h.close()
