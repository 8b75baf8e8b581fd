"""Simple Additive Weighting (SAW) scoring engine.

Ranks alternatives by normalizing every criterion column of the decision
matrix (benefit: ``value / max``, cost: ``min / value``), taking the
weighted sum per alternative and sorting by that score.

The engine is a pure function of its inputs: it keeps no state between
calls and never mutates the alternatives or criteria it is given, so a
single instance may be shared by concurrent requests.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Iterable, List, Mapping, Optional

import numpy as np

from ..models.core import CriterionType, RankedLaptop, WeightValidationResult
from ..utils.error_handling import ErrorCategory, ErrorSeverity, LaptopSAWError
from ..utils.logging import get_logger


logger = get_logger(__name__)

_MISSING = object()

DEFAULT_PRECISION = 4
DEFAULT_WEIGHT_TOLERANCE = 0.001


class SAWError(LaptopSAWError):
    """Base exception for an aborted scoring run."""

    category = ErrorCategory.SCORING

    def __init__(self, message: str, criterion: Optional[str] = None,
                 attribute: Optional[str] = None, alternative_id: Optional[str] = None):
        super().__init__(message)
        self.criterion = criterion
        self.attribute = attribute
        self.alternative_id = alternative_id


class MissingAttributeError(SAWError):
    """A criterion references an attribute that is absent or non-numeric on an alternative."""
    pass


class DegenerateCriterionError(SAWError):
    """The normalization denominator of a criterion is zero."""
    pass


class NegativeAttributeError(SAWError):
    """A negative raw value was found while scoring in strict mode."""
    pass


class WeightValidationError(LaptopSAWError):
    """Criteria weights do not form a valid weighting (sum 1.0, each in [0, 1])."""

    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.LOW

    def __init__(self, message: str, result: Optional[WeightValidationResult] = None):
        super().__init__(message)
        self.result = result
        self.total = result.total if result is not None else None


def round_score(value: float, places: int = DEFAULT_PRECISION) -> float:
    """Round half away from zero to ``places`` decimals.

    Rounding is applied to the shortest decimal representation of the float,
    so ``0.12345`` becomes ``0.1235`` and ``-0.00005`` becomes ``-0.0001``.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def _field(record: Any, name: str, default: Any = _MISSING) -> Any:
    if isinstance(record, Mapping):
        value = record.get(name, default)
    else:
        value = getattr(record, name, default)
    if value is _MISSING:
        raise AttributeError(f"Record {record!r} has no field '{name}'")
    return value


def resolve_attribute(alternative: Any, attribute: str) -> Any:
    """Look up a named attribute on an alternative.

    Mappings are read by key, other objects by attribute name. Keys not found
    directly fall back to the alternative's ``extra_attributes`` mapping.
    Returns a sentinel object when the attribute does not exist.
    """
    if isinstance(alternative, Mapping):
        value = alternative.get(attribute, _MISSING)
        extra = alternative.get("extra_attributes")
    else:
        value = getattr(alternative, attribute, _MISSING)
        extra = getattr(alternative, "extra_attributes", None)

    if value is _MISSING and isinstance(extra, Mapping):
        value = extra.get(attribute, _MISSING)
    return value


def alternative_id(alternative: Any) -> Optional[str]:
    value = _field(alternative, "id", None)
    return None if value is None else str(value)


def _is_numeric(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def validate_weights(criteria: Iterable[Any],
                     tolerance: float = DEFAULT_WEIGHT_TOLERANCE) -> WeightValidationResult:
    """Check that criteria weights each lie in [0, 1] and sum to 1.0 within ``tolerance``.

    This is a caller-side precondition; ``SAWScoringEngine.score`` never calls it.
    """
    weights = []
    out_of_range = []
    for criterion in criteria:
        weight = float(_field(criterion, "weight"))
        weights.append(weight)
        if not 0.0 <= weight <= 1.0:
            out_of_range.append(str(_field(criterion, "name", _field(criterion, "attribute", "?"))))

    total = math.fsum(weights)
    is_valid = abs(total - 1.0) <= tolerance and not out_of_range
    return WeightValidationResult(
        total=total,
        tolerance=tolerance,
        is_valid=is_valid,
        out_of_range=out_of_range,
    )


def ensure_valid_weights(criteria: Iterable[Any],
                         tolerance: float = DEFAULT_WEIGHT_TOLERANCE) -> WeightValidationResult:
    """Like :func:`validate_weights` but raise ``WeightValidationError`` when invalid."""
    result = validate_weights(criteria, tolerance)
    if result.out_of_range:
        raise WeightValidationError(
            f"Criteria weights must lie in [0, 1]: {', '.join(result.out_of_range)}", result
        )
    if not result.is_valid:
        raise WeightValidationError(
            f"Total criteria weight must equal 1.0 (got {result.total:.4f}, tolerance {tolerance})",
            result
        )
    return result


class SAWScoringEngine:
    """Scores and ranks alternatives with Simple Additive Weighting."""

    def __init__(self, strict: bool = False, precision: int = DEFAULT_PRECISION):
        """Initialize the scoring engine.

        Args:
            strict: Reject negative raw attribute values with NegativeAttributeError
            precision: Number of decimals the composite score is rounded to
        """
        self.strict = strict
        self.precision = precision

    def score(self, alternatives: Iterable[Any], criteria: Iterable[Any]) -> List[RankedLaptop]:
        """Score alternatives against criteria and rank them.

        Args:
            alternatives: Laptop records (dataclasses, objects or mappings)
            criteria: Criterion records with ``weight``, ``type`` and ``attribute``

        Returns:
            One RankedLaptop per alternative, sorted by descending score with
            ranks 1..N. Equal scores keep their input order. Empty when either
            input is empty.

        Raises:
            MissingAttributeError: An alternative lacks a numeric value for a criterion
            DegenerateCriterionError: A criterion's normalization divides by zero
            NegativeAttributeError: A negative value was found in strict mode
        """
        alternatives = list(alternatives)
        criteria = list(criteria)

        if not alternatives or not criteria:
            logger.debug(f"Nothing to rank: {len(alternatives)} alternatives, {len(criteria)} criteria")
            return []

        logger.debug(f"Scoring {len(alternatives)} alternatives against {len(criteria)} criteria")

        decision_matrix = self._build_decision_matrix(alternatives, criteria)
        normalized_matrix = self._normalize(decision_matrix, alternatives, criteria)

        weights = np.array([float(_field(criterion, "weight")) for criterion in criteria])
        raw_scores = normalized_matrix.dot(weights)

        attributes = [_field(criterion, "attribute") for criterion in criteria]
        results = []
        for row, alternative in enumerate(alternatives):
            normalized_values = {
                attribute: float(normalized_matrix[row, column])
                for column, attribute in enumerate(attributes)
            }
            results.append(RankedLaptop(
                laptop=alternative,
                score=round_score(float(raw_scores[row]), self.precision),
                rank=0,
                normalized_values=normalized_values,
            ))

        # sorted() is stable with reverse=True: ties keep input order
        ranked = sorted(results, key=lambda result: result.score, reverse=True)
        for position, result in enumerate(ranked, start=1):
            result.rank = position

        logger.info(f"Ranked {len(ranked)} alternatives; top: {ranked[0].id} ({ranked[0].score})")
        return ranked

    def _build_decision_matrix(self, alternatives: List[Any], criteria: List[Any]) -> np.ndarray:
        """Collect raw attribute values into an (alternatives x criteria) matrix."""
        matrix = np.empty((len(alternatives), len(criteria)), dtype=float)

        for column, criterion in enumerate(criteria):
            attribute = _field(criterion, "attribute")
            name = _field(criterion, "name", attribute)

            for row, alternative in enumerate(alternatives):
                value = resolve_attribute(alternative, attribute)

                if value is _MISSING or not _is_numeric(value):
                    reason = "missing" if value is _MISSING else f"not a finite number ({value!r})"
                    raise MissingAttributeError(
                        f"Attribute '{attribute}' of criterion '{name}' is {reason} "
                        f"on alternative {alternative_id(alternative)}",
                        criterion=name,
                        attribute=attribute,
                        alternative_id=alternative_id(alternative),
                    )

                if self.strict and value < 0:
                    raise NegativeAttributeError(
                        f"Attribute '{attribute}' of criterion '{name}' is negative ({value}) "
                        f"on alternative {alternative_id(alternative)}",
                        criterion=name,
                        attribute=attribute,
                        alternative_id=alternative_id(alternative),
                    )

                matrix[row, column] = float(value)

        return matrix

    def _normalize(self, matrix: np.ndarray, alternatives: List[Any], criteria: List[Any]) -> np.ndarray:
        """Normalize each criterion column; benefit divides by max, cost divides min by value."""
        normalized = np.empty_like(matrix)

        for column, criterion in enumerate(criteria):
            values = matrix[:, column]
            attribute = _field(criterion, "attribute")
            name = _field(criterion, "name", attribute)
            criterion_type = CriterionType(_field(criterion, "type"))

            if criterion_type is CriterionType.BENEFIT:
                max_row = int(np.argmax(values))
                max_value = values[max_row]
                if max_value == 0:
                    raise DegenerateCriterionError(
                        f"Benefit criterion '{name}' cannot be normalized: maximum of "
                        f"'{attribute}' is 0 (alternative {alternative_id(alternatives[max_row])})",
                        criterion=name,
                        attribute=attribute,
                        alternative_id=alternative_id(alternatives[max_row]),
                    )
                normalized[:, column] = values / max_value
            else:
                zero_rows = np.flatnonzero(values == 0)
                if zero_rows.size:
                    offender = alternatives[int(zero_rows[0])]
                    raise DegenerateCriterionError(
                        f"Cost criterion '{name}' cannot be normalized: '{attribute}' is 0 "
                        f"on alternative {alternative_id(offender)}",
                        criterion=name,
                        attribute=attribute,
                        alternative_id=alternative_id(offender),
                    )
                normalized[:, column] = values.min() / values

        return normalized


def calculate_saw(alternatives: Iterable[Any], criteria: Iterable[Any],
                  strict: bool = False, precision: int = DEFAULT_PRECISION) -> List[RankedLaptop]:
    """Rank alternatives with a throwaway :class:`SAWScoringEngine`."""
    return SAWScoringEngine(strict=strict, precision=precision).score(alternatives, criteria)
