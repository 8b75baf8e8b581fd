"""Decision support service tying the laptop catalog, criteria and SAW engine together."""

import asyncio
from typing import Any, Dict, List, Mapping, Optional

from .saw import SAWError, SAWScoringEngine, WeightValidationError, ensure_valid_weights, validate_weights
from ..config.settings import get_scoring_config
from ..models.core import Criterion, Laptop, RankedLaptop, WeightValidationResult
from ..repositories.base import CriteriaRepository, LaptopRepository, RecordNotFoundError, RepositoryError
from ..utils.error_handling import ErrorContext, ErrorHandler, get_error_handler
from ..utils.logging import LoggerMixin


class DecisionSupportService(LoggerMixin):
    """Application layer over the catalog and criteria stores."""

    def __init__(self, laptop_repository: LaptopRepository, criteria_repository: CriteriaRepository,
                 engine: Optional[SAWScoringEngine] = None, weight_tolerance: Optional[float] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """Initialize the service.

        Args:
            laptop_repository: Catalog collaborator
            criteria_repository: Criteria collaborator
            engine: Scoring engine (built from the scoring configuration if None)
            weight_tolerance: Allowed deviation of the weight total from 1.0
            error_handler: Optional error handler instance
        """
        scoring_config = get_scoring_config()

        self.laptop_repository = laptop_repository
        self.criteria_repository = criteria_repository
        self.engine = engine or SAWScoringEngine(
            strict=scoring_config.get("strict", False),
            precision=scoring_config.get("precision", 4)
        )
        self.weight_tolerance = (
            weight_tolerance if weight_tolerance is not None
            else scoring_config.get("weight_tolerance", 0.001)
        )
        self.error_handler = error_handler or get_error_handler()

        self.logger.info("DecisionSupportService initialized")

    def _report(self, error: Exception, operation: str, record_id: Optional[str] = None,
                **additional_data: Any) -> None:
        context = ErrorContext(
            component="DecisionSupportService",
            operation=operation,
            record_id=record_id,
            additional_data=additional_data
        )
        self.error_handler.handle_error(error, context)

    # Catalog

    async def list_laptops(self) -> List[Laptop]:
        return await self.laptop_repository.list_all()

    async def get_laptop(self, laptop_id: str) -> Laptop:
        try:
            return await self.laptop_repository.get(laptop_id)
        except RecordNotFoundError as e:
            self._report(e, "get_laptop", laptop_id)
            raise

    async def add_laptop(self, data: Mapping[str, Any]) -> Laptop:
        try:
            return await self.laptop_repository.insert(data)
        except (ValueError, RepositoryError) as e:
            self._report(e, "add_laptop")
            raise

    async def update_laptop(self, laptop_id: str, changes: Mapping[str, Any]) -> Laptop:
        try:
            return await self.laptop_repository.update(laptop_id, changes)
        except (ValueError, RepositoryError) as e:
            self._report(e, "update_laptop", laptop_id)
            raise

    async def delete_laptop(self, laptop_id: str) -> None:
        try:
            await self.laptop_repository.delete(laptop_id)
        except RepositoryError as e:
            self._report(e, "delete_laptop", laptop_id)
            raise

    # Criteria

    async def list_criteria(self) -> List[Criterion]:
        return await self.criteria_repository.list_all()

    async def _proposed_weighting(self, weights: Dict[str, float]) -> List[Dict[str, Any]]:
        """Current criteria with the proposed weights applied."""
        criteria = await self.criteria_repository.list_all()
        known_ids = {criterion.id for criterion in criteria}
        for criterion_id in weights:
            if criterion_id not in known_ids:
                raise RecordNotFoundError("criterion", criterion_id)

        return [
            {"name": criterion.name, "weight": weights.get(criterion.id, criterion.weight)}
            for criterion in criteria
        ]

    async def validate_weights(self, weights: Dict[str, float]) -> WeightValidationResult:
        """Check proposed weights applied over the current criteria without writing them.

        Raises:
            RecordNotFoundError: If a proposed id is not a known criterion
        """
        return validate_weights(await self._proposed_weighting(weights), self.weight_tolerance)

    async def update_criteria_weights(self, weights: Dict[str, float]) -> List[Criterion]:
        """Replace the weights of several criteria at once.

        The total over all criteria after the update must equal 1.0 within the
        tolerance and every weight must lie in [0, 1].

        Raises:
            WeightValidationError: If the resulting weighting is invalid
            RecordNotFoundError: If a proposed id is not a known criterion
        """
        try:
            ensure_valid_weights(await self._proposed_weighting(weights), self.weight_tolerance)
            return await self.criteria_repository.update_weights(weights)
        except (WeightValidationError, RepositoryError) as e:
            self._report(e, "update_criteria_weights", proposed=len(weights))
            raise

    # Ranking

    async def compute_ranking(self) -> List[RankedLaptop]:
        """Load the catalog and criteria and rank every laptop.

        Raises:
            SAWError: If the stored data cannot be scored; no partial ranking is returned
        """
        laptops, criteria = await asyncio.gather(
            self.laptop_repository.list_all(),
            self.criteria_repository.list_all()
        )

        try:
            ranking = self.engine.score(laptops, criteria)
        except SAWError as e:
            self._report(
                e, "compute_ranking", e.alternative_id,
                criterion=e.criterion, attribute=e.attribute
            )
            raise

        self.logger.info(f"Computed ranking of {len(ranking)} laptops over {len(criteria)} criteria")
        return ranking

    async def get_statistics(self) -> Dict[str, Any]:
        laptops, criteria = await asyncio.gather(
            self.laptop_repository.count(),
            self.criteria_repository.count()
        )
        return {
            "laptops": laptops,
            "criteria": criteria,
            "errors": self.error_handler.get_error_statistics(),
        }
