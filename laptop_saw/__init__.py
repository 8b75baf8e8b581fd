# Laptop SAW - Main package

from .config.settings import config, config_manager
from .utils.logging import setup_logging, get_logger
from .models import (
    Criterion,
    CriterionType,
    Laptop,
    RankedLaptop,
    WeightValidationResult,
)
from .services import (
    DecisionSupportService,
    SAWScoringEngine,
    calculate_saw,
    validate_weights,
)

__version__ = "0.1.0"

__all__ = [
    "config",
    "config_manager",
    "setup_logging",
    "get_logger",
    "Criterion",
    "CriterionType",
    "Laptop",
    "RankedLaptop",
    "WeightValidationResult",
    "DecisionSupportService",
    "SAWScoringEngine",
    "calculate_saw",
    "validate_weights",
]
