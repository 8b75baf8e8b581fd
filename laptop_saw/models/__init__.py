# Data models package

from .core import (
    Criterion,
    CriterionType,
    Laptop,
    RankedLaptop,
    WeightValidationResult,
)

__all__ = [
    "Criterion",
    "CriterionType",
    "Laptop",
    "RankedLaptop",
    "WeightValidationResult",
]
