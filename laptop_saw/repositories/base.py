"""Abstract base classes for the laptop catalog and criteria stores."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from ..models.core import Criterion, Laptop
from ..utils.error_handling import ErrorCategory, ErrorSeverity, LaptopSAWError


class RepositoryError(LaptopSAWError):
    """Base exception for storage failures."""

    category = ErrorCategory.STORAGE
    severity = ErrorSeverity.HIGH


class RecordNotFoundError(RepositoryError):
    """Exception raised when no record exists for an identifier."""

    category = ErrorCategory.NOT_FOUND
    severity = ErrorSeverity.LOW

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"No {collection} record with id '{record_id}'")
        self.collection = collection
        self.record_id = record_id


class LaptopRepository(ABC):
    """Catalog of laptop alternatives.

    Implementations hand out copies; callers never share mutable state with
    the store.
    """

    @abstractmethod
    async def list_all(self) -> List[Laptop]:
        """Return every laptop, most recently created first."""
        pass

    @abstractmethod
    async def get(self, laptop_id: str) -> Laptop:
        """Return one laptop.

        Raises:
            RecordNotFoundError: If the id is unknown
        """
        pass

    @abstractmethod
    async def insert(self, data: Mapping[str, Any]) -> Laptop:
        """Create a laptop from field values; id and created_at are assigned here."""
        pass

    @abstractmethod
    async def update(self, laptop_id: str, changes: Mapping[str, Any]) -> Laptop:
        """Apply field changes to a laptop and return the updated record.

        Raises:
            RecordNotFoundError: If the id is unknown
        """
        pass

    @abstractmethod
    async def delete(self, laptop_id: str) -> None:
        """Remove a laptop.

        Raises:
            RecordNotFoundError: If the id is unknown
        """
        pass

    async def count(self) -> int:
        return len(await self.list_all())


class CriteriaRepository(ABC):
    """Store of weighted criteria."""

    @abstractmethod
    async def list_all(self) -> List[Criterion]:
        """Return every criterion ordered by attribute key."""
        pass

    @abstractmethod
    async def get(self, criterion_id: str) -> Criterion:
        """Return one criterion.

        Raises:
            RecordNotFoundError: If the id is unknown
        """
        pass

    @abstractmethod
    async def insert(self, data: Mapping[str, Any]) -> Criterion:
        """Create a criterion from field values."""
        pass

    @abstractmethod
    async def update_weights(self, weights: Dict[str, float]) -> List[Criterion]:
        """Set several weights in one logical operation.

        Unknown ids fail the whole update before anything is written.

        Raises:
            RecordNotFoundError: If any id is unknown
        """
        pass

    async def update_weight(self, criterion_id: str, weight: float) -> Criterion:
        updated = await self.update_weights({criterion_id: weight})
        return next(criterion for criterion in updated if criterion.id == criterion_id)

    async def count(self) -> int:
        return len(await self.list_all())
