"""Services module for laptop-saw."""

from .saw import (
    DegenerateCriterionError,
    MissingAttributeError,
    NegativeAttributeError,
    SAWError,
    SAWScoringEngine,
    WeightValidationError,
    calculate_saw,
    ensure_valid_weights,
    round_score,
    validate_weights,
)
from .decision_support import DecisionSupportService

__all__ = [
    'DegenerateCriterionError',
    'MissingAttributeError',
    'NegativeAttributeError',
    'SAWError',
    'SAWScoringEngine',
    'WeightValidationError',
    'calculate_saw',
    'ensure_valid_weights',
    'round_score',
    'validate_weights',
    'DecisionSupportService',
]
