"""Tests for error handling functionality."""

import pytest

from laptop_saw.repositories.base import RecordNotFoundError, RepositoryError
from laptop_saw.services.saw import DegenerateCriterionError, MissingAttributeError, WeightValidationError
from laptop_saw.utils.error_handling import (
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    ErrorResponse,
    ErrorSeverity,
    LaptopSAWError,
    get_error_handler,
)


class TestErrorHandler:
    """Test cases for ErrorHandler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()
        self.context = ErrorContext(component="test", operation="test_op")

    def test_error_classification_scoring_error(self):
        """Test classification of scoring errors."""
        error = MissingAttributeError("missing ram", criterion="RAM", attribute="ram", alternative_id="l1")

        response = self.error_handler.handle_error(error, self.context)

        assert response.category == ErrorCategory.SCORING
        assert response.severity == ErrorSeverity.MEDIUM
        assert response.error_code == "SCORING_MISSINGATTRIBUTEERROR"
        assert response.details["criterion"] == "RAM"
        assert response.details["alternative_id"] == "l1"

    def test_error_classification_degenerate_criterion(self):
        """Test degenerate criteria are scoring errors with suggestions."""
        response = self.error_handler.handle_error(DegenerateCriterionError("zero price"), self.context)

        assert response.category == ErrorCategory.SCORING
        assert any("cost attributes contain no zero" in suggestion for suggestion in response.suggestions)

    def test_error_classification_weight_validation(self):
        """Test weight validation errors are low severity validation errors."""
        response = self.error_handler.handle_error(WeightValidationError("bad weights"), self.context)

        assert response.category == ErrorCategory.VALIDATION
        assert response.severity == ErrorSeverity.LOW
        assert "Criteria weights must lie in [0, 1] and sum to 1.0" in response.suggestions

    def test_error_classification_not_found(self):
        """Test classification of missing records."""
        response = self.error_handler.handle_error(RecordNotFoundError("laptop", "x"), self.context)

        assert response.category == ErrorCategory.NOT_FOUND
        assert response.severity == ErrorSeverity.LOW
        assert response.details["collection"] == "laptop"

    def test_error_classification_storage(self):
        """Test classification of storage errors."""
        response = self.error_handler.handle_error(RepositoryError("disk full"), self.context)

        assert response.category == ErrorCategory.STORAGE
        assert response.severity == ErrorSeverity.HIGH

    @pytest.mark.parametrize("error,category,code", [
        (ValueError("bad"), ErrorCategory.VALIDATION, "VALIDATION_VALUEERROR"),
        (KeyError("id"), ErrorCategory.NOT_FOUND, "NOT_FOUND_KEYERROR"),
        (OSError("io"), ErrorCategory.STORAGE, "STORAGE_OSERROR"),
        (AttributeError("attr"), ErrorCategory.INTERNAL, "INTERNAL_ATTRIBUTEERROR"),
        (RuntimeError("boom"), ErrorCategory.INTERNAL, "INTERNAL_RUNTIMEERROR"),
    ])
    def test_error_classification_builtin(self, error, category, code):
        """Test classification of builtin exceptions."""
        response = self.error_handler.handle_error(error, self.context)

        assert response.category == category
        assert response.error_code == code

    def test_base_error_without_category(self):
        """Test a plain LaptopSAWError falls back to internal."""
        response = self.error_handler.handle_error(LaptopSAWError("unexpected"), self.context)

        assert response.category == ErrorCategory.INTERNAL

    def test_error_response_attached(self):
        """Test the response is attached to project errors once."""
        error = RepositoryError("disk full")

        first = self.error_handler.handle_error(error, self.context)
        self.error_handler.handle_error(error, ErrorContext(component="other", operation="retry"))

        assert error.error_response is first

    def test_traceback_only_for_raised_errors(self):
        """Test tracebacks are captured only when an error was raised."""
        assert "traceback" not in self.error_handler.handle_error(ValueError("x"), self.context).details

        try:
            raise ValueError("raised")
        except ValueError as e:
            response = self.error_handler.handle_error(e, self.context)

        assert "raised" in response.details["traceback"]

    def test_error_statistics(self):
        """Test error counts per component and code."""
        for _ in range(2):
            self.error_handler.handle_error(ValueError("bad"), self.context)
        self.error_handler.handle_error(KeyError("id"), ErrorContext(component="store", operation="get"))

        stats = self.error_handler.get_error_statistics()

        assert stats["total_errors"] == 3
        assert stats["error_counts_by_type"] == {
            "test:VALIDATION_VALUEERROR": 2,
            "store:NOT_FOUND_KEYERROR": 1,
        }

        self.error_handler.reset_statistics()
        assert self.error_handler.get_error_statistics()["total_errors"] == 0


class TestErrorResponse:
    """Test cases for ErrorResponse serialization."""

    def test_to_dict(self):
        """Test the dictionary form used for API bodies."""
        context = ErrorContext(component="api", operation="GET /laptops/x", record_id="x",
                               additional_data={"attempt": 1})
        response = ErrorResponse(
            error_code="NOT_FOUND_RECORDNOTFOUNDERROR",
            message="No laptop record with id 'x'",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.NOT_FOUND,
            context=context,
        )

        data = response.to_dict()

        assert data["severity"] == "low"
        assert data["category"] == "not_found"
        assert data["context"]["record_id"] == "x"
        assert data["context"]["additional_data"] == {"attempt": 1}
        assert data["details"] is None


def test_global_error_handler():
    """Test the global handler is a singleton."""
    assert get_error_handler() is get_error_handler()
    assert isinstance(get_error_handler(), ErrorHandler)
