"""
Logging utilities for fieldclip.
Console output goes to stderr so the document can be printed on stdout.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
import colorlog


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "WARNING",
    colorize: bool = True
) -> logging.Logger:
    """
    Set up a logger with a console handler and an optional file handler.

    Args:
        name: Logger name (typically __name__ of the calling module)
        log_file: Path to log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        colorize: Whether to colorize console output

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("fieldclip", level="INFO")
        >>> logger.info("Profiling 12 fields")
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    file_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if colorize:
        console_formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )
    else:
        console_formatter = file_formatter

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Loggers inside the package propagate to the ``fieldclip`` root logger,
    which is configured with defaults on first use.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    root = logging.getLogger("fieldclip")
    if not root.handlers:
        setup_logger("fieldclip")

    return logging.getLogger(name)
