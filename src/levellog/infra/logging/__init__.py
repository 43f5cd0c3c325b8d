from __future__ import annotations

from .config import ROOT_LOGGER_NAME, DiagnosticsConfig
from .core import _CONFIGURED_FLAG_ATTR, configure_logging, get_logger, reset_logging
from .handlers import _HANDLER_TAG_ATTR

__all__ = [
    "DiagnosticsConfig",
    "ROOT_LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "reset_logging",
    "_CONFIGURED_FLAG_ATTR",
    "_HANDLER_TAG_ATTR",
]
