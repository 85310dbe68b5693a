"""
Logging setup for the cape-build CLI.

The console shows short ``LEVEL: message`` lines next to the command's own
output. With ``--log-dir`` every run is also appended, with timestamps and
source locations, to ``<dir>/<name>.log``, rotated at midnight.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_BACKUP_DAYS = 14


def setup_logger(name: str, level: int = logging.INFO, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure the package logger for a CLI run.

    Calling it again only updates the level; handlers are attached once.

    Example:
        >>> setup_logger("cape_build", level=logging.DEBUG, log_dir=Path("logs"))
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        build_log = TimedRotatingFileHandler(
            log_dir / f"{name}.log",
            when="midnight",
            backupCount=LOG_BACKUP_DAYS,
            encoding="utf-8",
        )
        build_log.setLevel(level)
        build_log.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(build_log)

    return logger


def level_from_name(name: str) -> int:
    """Map a level name like 'debug' to its logging constant (INFO if unknown)."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
