"""Error taxonomy and central error reporting for laptop-saw.

Every failure that crosses a component boundary is turned into an
``ErrorResponse`` by ``ErrorHandler.handle_error``. The response is logged,
counted per component and error code, and attached to the exception so the
API layer can render it without classifying it again.
"""

import logging
import traceback
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

from .logging import get_logger

logger = get_logger(__name__)


class ErrorSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    VALIDATION = "validation"
    SCORING = "scoring"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where an error happened: component, operation and the record involved."""
    component: str
    operation: str
    record_id: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    additional_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "operation": self.operation,
            "record_id": self.record_id,
            "timestamp": self.timestamp.isoformat(),
            "additional_data": self.additional_data,
        }


@dataclass
class ErrorResponse:
    """Classified error, serializable as an API error body."""
    error_code: str
    message: str
    severity: ErrorSeverity
    category: ErrorCategory
    context: ErrorContext
    timestamp: datetime = field(default_factory=datetime.now)
    suggestions: List[str] = field(default_factory=list)
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "suggestions": list(self.suggestions),
            "context": self.context.to_dict(),
            "details": self.details,
        }


class LaptopSAWError(Exception):
    """Base exception for laptop-saw errors.

    Subclasses set ``category`` and ``severity`` so the error handler can
    classify them without inspecting names.
    """

    category: Optional[ErrorCategory] = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, error_response: Optional[ErrorResponse] = None):
        super().__init__(message)
        self.message = message
        self.error_response = error_response


# Classification of exceptions that carry no category, first match wins.
# A rule matches on isinstance or on a fragment of the exception class name.
_FALLBACK_RULES: List[Tuple[Tuple[Type[BaseException], ...], str, ErrorCategory, ErrorSeverity]] = [
    ((KeyError,), "NotFound", ErrorCategory.NOT_FOUND, ErrorSeverity.LOW),
    ((ValueError,), "Validation", ErrorCategory.VALIDATION, ErrorSeverity.LOW),
    ((OSError,), "Repository", ErrorCategory.STORAGE, ErrorSeverity.HIGH),
    ((), "Config", ErrorCategory.CONFIGURATION, ErrorSeverity.MEDIUM),
]

SUGGESTIONS: Dict[ErrorCategory, List[str]] = {
    ErrorCategory.SCORING: [
        "Check that every laptop has a numeric value for each criterion attribute",
        "Make sure benefit attributes are not all zero and cost attributes contain no zero",
    ],
    ErrorCategory.VALIDATION: [
        "Check the submitted fields and their values",
        "Criteria weights must lie in [0, 1] and sum to 1.0",
    ],
    ErrorCategory.NOT_FOUND: ["Verify the record identifier exists"],
    ErrorCategory.STORAGE: [
        "Check that the data file is readable and writable",
        "Verify the storage backend configuration",
    ],
    ErrorCategory.CONFIGURATION: ["Review configuration files", "Check LAPTOP_SAW_* environment variables"],
}

_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class ErrorHandler:
    """Classifies, logs and counts errors reported by the components."""

    def __init__(self):
        self.error_counts: Counter = Counter()

    def handle_error(self, error: Exception, context: ErrorContext) -> ErrorResponse:
        """Turn an exception into an ErrorResponse and record it.

        The response is attached to ``LaptopSAWError`` instances that do not
        carry one yet.

        Args:
            error: Exception being reported
            context: Where it happened

        Returns:
            The classified error response
        """
        category, severity = self._classify_error(error)
        error_code = f"{category.name}_{type(error).__name__.upper()}"

        error_response = ErrorResponse(
            error_code=error_code,
            message=str(error),
            severity=severity,
            category=category,
            context=context,
            suggestions=list(SUGGESTIONS.get(category, [])),
            details=self._extract_error_details(error)
        )

        self.error_counts[f"{context.component}:{error_code}"] += 1
        self._log_error(error_response, error)

        if isinstance(error, LaptopSAWError) and error.error_response is None:
            error.error_response = error_response

        return error_response

    def _classify_error(self, error: Exception) -> Tuple[ErrorCategory, ErrorSeverity]:
        if isinstance(error, LaptopSAWError) and error.category is not None:
            return error.category, error.severity

        error_type = type(error).__name__
        for types, name_fragment, category, severity in _FALLBACK_RULES:
            if isinstance(error, types) or name_fragment in error_type:
                return category, severity

        return ErrorCategory.INTERNAL, ErrorSeverity.HIGH

    def _extract_error_details(self, error: Exception) -> Dict[str, Any]:
        """Type, message, traceback (if raised) and public scalar attributes of an error."""
        details: Dict[str, Any] = {"type": type(error).__name__, "message": str(error)}

        if error.__traceback__ is not None:
            details["traceback"] = "".join(traceback.format_exception(type(error), error, error.__traceback__))

        # e.g. criterion, attribute, alternative_id, record_id
        for key, value in vars(error).items():
            if key.startswith('_') or key in ('message', 'error_response'):
                continue
            if value is None or isinstance(value, (str, int, float, bool)):
                details[key] = value

        return details

    def _log_error(self, error_response: ErrorResponse, original_error: Exception) -> None:
        context = error_response.context
        level = _LOG_LEVELS[error_response.severity]
        logger.log(
            level,
            f"Error in {context.component}.{context.operation}: {error_response.message}",
            exc_info=original_error if level >= logging.ERROR else None
        )

    def get_error_statistics(self) -> Dict[str, Any]:
        """Total and per ``component:error_code`` error counts."""
        return {
            "total_errors": sum(self.error_counts.values()),
            "error_counts_by_type": dict(self.error_counts),
        }

    def reset_statistics(self) -> None:
        self.error_counts.clear()
        logger.info("Error statistics reset")


# Global error handler instance
error_handler = ErrorHandler()


def get_error_handler() -> ErrorHandler:
    """Return the process-wide ErrorHandler."""
    return error_handler
