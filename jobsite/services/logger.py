"""Namespaced logging for the jobsite service.

Every component logs under ``jobsite.<component>`` so a single handler on the
``jobsite`` logger controls the whole application.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

APP_LOGGER_NAME = "jobsite"

DEFAULT_FORMAT = "%(asctime)s [%(levelname).4s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> None:
    """Install stdout (and optional file) handlers on the application logger.

    Safe to call more than once; existing handlers are replaced.
    """
    root = logging.getLogger(APP_LOGGER_NAME)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    if name.startswith(APP_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
