"""
Logging utilities for the command-line tools.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: str = None,
    name: str = None,
    console_level: int = logging.WARNING
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        log_file: Path to log file (if None, only console output)
        level: Logging level for the logger and the file handler
        format_string: Custom format string
        name: Logger name (if None, uses root logger)
        console_level: Level of the console handler (rich handles normal output)

    Returns:
        Configured logger
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

