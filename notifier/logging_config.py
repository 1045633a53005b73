"""Logging setup for the command-line driver. Library code only creates loggers."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import config


def _file_handler(log_file: str, level: int) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    h = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
    )
    h.setLevel(level)
    return h


def _console_handler(level: int) -> logging.Handler:
    h = logging.StreamHandler()
    h.setLevel(level)
    return h


def setup_logging(level_name: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger: console handler, plus a rotating file handler
    when a log file is given (argument or config.LOG_FILE). Replaces any
    handlers already installed so repeated calls don't duplicate output.
    """
    level_name = (level_name or config.LOG_LEVEL).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATEFMT)

    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)

    console = _console_handler(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    log_file = log_file or config.LOG_FILE
    if log_file:
        fh = _file_handler(log_file, level)
        fh.setFormatter(formatter)
        root.addHandler(fh)
