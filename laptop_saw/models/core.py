"""Core data models for laptop-saw."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class CriterionType(str, Enum):
    """Direction of a criterion: higher raw values win (benefit) or lower do (cost)."""
    BENEFIT = "benefit"
    COST = "cost"


def _parse_datetime(value: Any) -> datetime:
    if value is None:
        return datetime.now()
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass
class Laptop:
    """A laptop alternative in the catalog.

    Units follow the catalog convention: price in IDR, ram and storage in GB,
    screen_size in inches, processor_score a benchmark score.
    """
    id: str
    name: str
    brand: str
    price: float
    ram: float
    processor_score: float
    storage: float
    screen_size: float
    created_at: datetime = field(default_factory=datetime.now)
    extra_attributes: Dict[str, float] = field(default_factory=dict)

    NUMERIC_FIELDS = ("price", "ram", "processor_score", "storage", "screen_size")

    def numeric_attributes(self) -> Dict[str, float]:
        """All numeric attributes a criterion can bind to, keyed by name."""
        values = {name: getattr(self, name) for name in self.NUMERIC_FIELDS}
        values.update(self.extra_attributes)
        return values

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "price": self.price,
            "ram": self.ram,
            "processor_score": self.processor_score,
            "storage": self.storage,
            "screen_size": self.screen_size,
            "created_at": self.created_at.isoformat(),
            "extra_attributes": dict(self.extra_attributes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Laptop":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            brand=data["brand"],
            price=data["price"],
            ram=data["ram"],
            processor_score=data["processor_score"],
            storage=data["storage"],
            screen_size=data["screen_size"],
            created_at=_parse_datetime(data.get("created_at")),
            extra_attributes=dict(data.get("extra_attributes") or {}),
        )


@dataclass
class Criterion:
    """A weighted criterion bound to one numeric laptop attribute."""
    id: str
    name: str
    weight: float
    type: CriterionType
    attribute: str
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        # Accept plain strings from storage and configuration
        self.type = CriterionType(self.type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "weight": self.weight,
            "type": self.type.value,
            "attribute": self.attribute,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Criterion":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            weight=float(data["weight"]),
            type=data["type"],
            attribute=data["attribute"],
            created_at=_parse_datetime(data.get("created_at")),
        )


@dataclass
class RankedLaptop:
    """A scored alternative. The wrapped laptop record is never modified."""
    laptop: Any
    score: float
    rank: int
    normalized_values: Dict[str, float]

    @property
    def id(self) -> Optional[str]:
        if isinstance(self.laptop, dict):
            return self.laptop.get("id")
        return getattr(self.laptop, "id", None)

    def to_dict(self) -> Dict[str, Any]:
        """Laptop fields flattened together with score, rank and normalized values."""
        if isinstance(self.laptop, dict):
            data = dict(self.laptop)
        elif hasattr(self.laptop, "to_dict"):
            data = self.laptop.to_dict()
        else:
            data = {"id": self.id}
        data.update({
            "score": self.score,
            "rank": self.rank,
            "normalized_values": dict(self.normalized_values),
        })
        return data


@dataclass
class WeightValidationResult:
    """Outcome of checking that criteria weights sum to 1.0."""
    total: float
    tolerance: float
    is_valid: bool
    # Names of criteria whose weight lies outside [0, 1]
    out_of_range: List[str] = field(default_factory=list)

    @property
    def difference(self) -> float:
        return self.total - 1.0
