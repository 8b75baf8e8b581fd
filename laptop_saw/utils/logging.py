"""Logging setup for laptop-saw.

All module loggers are children of the ``laptop_saw`` logger, which owns
the handlers; it writes to stdout and optionally to a rotating log file.
"""

import logging
import logging.handlers
import re
import sys
from pathlib import Path
from typing import List, Optional
from ..config.settings import get_logging_config


ROOT_LOGGER_NAME = "laptop_saw"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_SIZE_UNITS = {"": 1, "KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}
_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*(KB|MB|GB)?\s*$", re.IGNORECASE)


def _parse_size(size_str: str) -> int:
    """Parse a size such as '10MB' or '512' into bytes."""
    match = _SIZE_PATTERN.match(str(size_str))
    if match is None:
        raise ValueError(f"Invalid size: {size_str!r}")
    number, unit = match.groups()
    return int(number) * _SIZE_UNITS[(unit or "").upper()]


def _build_handlers(formatter: logging.Formatter, log_file: Optional[str],
                    max_bytes: int, backup_count: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    logger_name: Optional[str] = None,
    file_logging: Optional[bool] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the application logger from the ``logging`` config section.

    Explicit arguments win over configured values. Calling this again
    replaces the handlers installed by the previous call.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Log record format
        logger_name: Logger to configure (defaults to 'laptop_saw')
        file_logging: Also write to a rotating log file
        log_file: Path of the log file

    Returns:
        The configured logger
    """
    log_config = get_logging_config()

    level_name = (level or log_config.get("level", "INFO")).upper()
    if file_logging is None:
        file_logging = log_config.get("file_logging", False)

    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    logger.setLevel(level_name)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = _build_handlers(
        logging.Formatter(format_string or log_config.get("format", DEFAULT_FORMAT)),
        (log_file or log_config.get("log_file", "logs/laptop_saw.log")) if file_logging else None,
        _parse_size(log_config.get("max_file_size", "10MB")),
        log_config.get("backup_count", 5)
    )
    for handler in handlers:
        logger.addHandler(handler)

    # Records stop here instead of reaching the root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the application logger.

    Names already inside the ``laptop_saw`` hierarchy (such as a module's
    ``__name__``) are used as they are; others are prefixed.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# Create default application logger
app_logger = setup_logging()


class LoggerMixin:
    """Gives a class a ``logger`` named after its module and class."""

    @property
    def logger(self) -> logging.Logger:
        cls = type(self)
        return get_logger(f"{cls.__module__}.{cls.__name__}")
