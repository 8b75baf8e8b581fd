# Utilities package

from .error_handling import (
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    ErrorResponse,
    ErrorSeverity,
    LaptopSAWError,
    get_error_handler,
)
from .logging import LoggerMixin, get_logger, setup_logging

__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ErrorHandler",
    "ErrorResponse",
    "ErrorSeverity",
    "LaptopSAWError",
    "LoggerMixin",
    "get_error_handler",
    "get_logger",
    "setup_logging",
]
