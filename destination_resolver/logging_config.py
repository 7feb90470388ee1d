"""Logging setup.

Human-readable logs by default, JSON logs when
``ObservabilityConfig.structured`` is set.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import json_log_formatter

from .config import ObservabilityConfig, get_config

_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3", "faster_whisper")


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure the root logger from the observability settings.

    Args:
        config: Optional override, defaults to the application config.
    """
    config = config or get_config().observability
    level = getattr(logging, config.level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if config.structured:
        handler.setFormatter(json_log_formatter.VerboseJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
