"""In-memory catalog and criteria stores for testing and development."""

import asyncio
import copy
import itertools
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .base import CriteriaRepository, LaptopRepository, RecordNotFoundError
from ..models.core import Criterion, Laptop
from ..utils.logging import get_logger


logger = get_logger(__name__)

LAPTOP_FIELDS = ("name", "brand") + Laptop.NUMERIC_FIELDS
CRITERION_FIELDS = ("name", "weight", "type", "attribute")


def _check_fields(data: Mapping[str, Any], allowed: Iterable[str], required: Iterable[str] = ()) -> None:
    unknown = set(data) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
    missing = [name for name in required if name not in data]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")


class InMemoryLaptopRepository(LaptopRepository):
    """Laptop catalog held in a dictionary.

    Records with equal ``created_at`` keep a stable order: the later insert
    is listed first.
    """

    def __init__(self, laptops: Optional[Iterable[Laptop]] = None):
        self._laptops: Dict[str, Laptop] = {}
        self._sequence: Dict[str, int] = {}
        self._counter = itertools.count()
        self._lock = asyncio.Lock()

        for laptop in laptops or []:
            self._store(copy.deepcopy(laptop))

    def _store(self, laptop: Laptop) -> None:
        if laptop.id not in self._sequence:
            self._sequence[laptop.id] = next(self._counter)
        self._laptops[laptop.id] = laptop

    def _require(self, laptop_id: str) -> Laptop:
        try:
            return self._laptops[laptop_id]
        except KeyError:
            raise RecordNotFoundError("laptop", laptop_id) from None

    async def _after_write(self) -> None:
        """Hook run after every mutation while the lock is held."""
        pass

    def _snapshot(self):
        return copy.deepcopy(self._laptops), dict(self._sequence)

    async def _commit(self, snapshot) -> None:
        """Run the write hook, restoring the pre-mutation state if it fails."""
        try:
            await self._after_write()
        except Exception:
            self._laptops, self._sequence = snapshot
            raise

    async def list_all(self) -> List[Laptop]:
        ordered = sorted(
            self._laptops.values(),
            key=lambda laptop: (laptop.created_at, self._sequence[laptop.id]),
            reverse=True
        )
        return [copy.deepcopy(laptop) for laptop in ordered]

    async def get(self, laptop_id: str) -> Laptop:
        return copy.deepcopy(self._require(laptop_id))

    async def insert(self, data: Mapping[str, Any]) -> Laptop:
        _check_fields(data, LAPTOP_FIELDS + ("extra_attributes",), LAPTOP_FIELDS)

        async with self._lock:
            snapshot = self._snapshot()
            laptop = Laptop(
                id=str(uuid.uuid4()),
                created_at=datetime.now(),
                extra_attributes=dict(data.get("extra_attributes") or {}),
                **{name: data[name] for name in LAPTOP_FIELDS}
            )
            self._store(laptop)
            await self._commit(snapshot)

        logger.info(f"Inserted laptop {laptop.id} ({laptop.brand} {laptop.name})")
        return copy.deepcopy(laptop)

    async def update(self, laptop_id: str, changes: Mapping[str, Any]) -> Laptop:
        _check_fields(changes, LAPTOP_FIELDS + ("extra_attributes",))

        async with self._lock:
            snapshot = self._snapshot()
            laptop = self._require(laptop_id)
            for name, value in changes.items():
                if name == "extra_attributes":
                    value = dict(value or {})
                setattr(laptop, name, value)
            await self._commit(snapshot)

        logger.info(f"Updated laptop {laptop_id}: {', '.join(sorted(changes)) or 'no changes'}")
        return copy.deepcopy(laptop)

    async def delete(self, laptop_id: str) -> None:
        async with self._lock:
            snapshot = self._snapshot()
            self._require(laptop_id)
            del self._laptops[laptop_id]
            del self._sequence[laptop_id]
            await self._commit(snapshot)

        logger.info(f"Deleted laptop {laptop_id}")


class InMemoryCriteriaRepository(CriteriaRepository):
    """Criteria held in a dictionary."""

    def __init__(self, criteria: Optional[Iterable[Criterion]] = None):
        self._criteria: Dict[str, Criterion] = {}
        self._lock = asyncio.Lock()

        for criterion in criteria or []:
            self._criteria[criterion.id] = copy.deepcopy(criterion)

    def _require(self, criterion_id: str) -> Criterion:
        try:
            return self._criteria[criterion_id]
        except KeyError:
            raise RecordNotFoundError("criterion", criterion_id) from None

    async def _after_write(self) -> None:
        """Hook run after every mutation while the lock is held."""
        pass

    async def _commit(self, snapshot) -> None:
        """Run the write hook, restoring the pre-mutation state if it fails."""
        try:
            await self._after_write()
        except Exception:
            self._criteria = snapshot
            raise

    async def list_all(self) -> List[Criterion]:
        ordered = sorted(self._criteria.values(), key=lambda criterion: criterion.attribute)
        return [copy.deepcopy(criterion) for criterion in ordered]

    async def get(self, criterion_id: str) -> Criterion:
        return copy.deepcopy(self._require(criterion_id))

    async def insert(self, data: Mapping[str, Any]) -> Criterion:
        _check_fields(data, CRITERION_FIELDS, CRITERION_FIELDS)

        async with self._lock:
            snapshot = copy.deepcopy(self._criteria)
            criterion = Criterion(
                id=str(uuid.uuid4()),
                name=data["name"],
                weight=float(data["weight"]),
                type=data["type"],
                attribute=data["attribute"],
                created_at=datetime.now(),
            )
            self._criteria[criterion.id] = criterion
            await self._commit(snapshot)

        logger.info(f"Inserted criterion {criterion.id} ({criterion.name} -> {criterion.attribute})")
        return copy.deepcopy(criterion)

    async def update_weights(self, weights: Dict[str, float]) -> List[Criterion]:
        async with self._lock:
            snapshot = copy.deepcopy(self._criteria)
            # Resolve every id first so an unknown one leaves the store untouched
            targets = [(self._require(criterion_id), float(weight)) for criterion_id, weight in weights.items()]
            for criterion, weight in targets:
                criterion.weight = weight
            await self._commit(snapshot)

        logger.info(f"Updated weights of {len(weights)} criteria")
        return await self.list_all()
