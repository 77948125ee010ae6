"""
Logging configuration for the slidextract CLI.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Pillow logs every plugin it probes at DEBUG
_NOISY_LOGGERS = ("PIL", "asyncio")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Route slidextract logs to stdout and, optionally, a log file.

    Handlers installed by an earlier call are replaced, so calling this
    twice in one process does not duplicate output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if getattr(h, "_slidextract", False)]:
        root_logger.removeHandler(handler)
        handler.close()

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._slidextract = True
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger("slidextract")
