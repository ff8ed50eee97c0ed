"""Centralized logging configuration for vidshuffle"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .utils import get_timestamp

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Configure the package logger with rich console output.

    Args:
        log_level: Name of the logging level
        log_dir: When given, also write a timestamped log file there

    Returns:
        Path of the log file, or None when file logging is off
    """
    logger = logging.getLogger("vidshuffle")
    logger.setLevel(logging._nameToLevel.get(log_level.upper(), logging.INFO))
    logger.propagate = False

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"vidshuffle_{get_timestamp()}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        logger.addHandler(file_handler)
        logger.info("Log file: %s", log_file)

    logging.captureWarnings(True)
    return log_file
