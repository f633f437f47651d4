"""Logging setup. Board rows own stdout, so log records go to stderr or a file."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from starrybus.config import LoggingConfig

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILENAME = "starrybus.log"


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger from ``config``. Repeated calls are no-ops."""
    level = getattr(logging, config.level.upper(), logging.INFO)
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILENAME, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
        )
    else:
        handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
