"""Request and response models for the laptop-saw HTTP API."""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.core import Criterion, CriterionType, Laptop, RankedLaptop, WeightValidationResult


class LaptopCreate(BaseModel):
    """Fields required to add a laptop to the catalog."""
    name: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    price: float = Field(ge=0, description="Price in IDR")
    ram: float = Field(ge=0, description="Memory in GB")
    processor_score: float = Field(ge=0, description="Processor benchmark score")
    storage: float = Field(ge=0, description="Storage in GB")
    screen_size: float = Field(ge=0, description="Screen diagonal in inches")
    extra_attributes: Dict[str, float] = Field(default_factory=dict)


class LaptopUpdate(BaseModel):
    """Partial update of a laptop; omitted fields are left unchanged."""
    name: Optional[str] = Field(default=None, min_length=1)
    brand: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    ram: Optional[float] = Field(default=None, ge=0)
    processor_score: Optional[float] = Field(default=None, ge=0)
    storage: Optional[float] = Field(default=None, ge=0)
    screen_size: Optional[float] = Field(default=None, ge=0)
    extra_attributes: Optional[Dict[str, float]] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "LaptopUpdate":
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


class LaptopResponse(BaseModel):
    """A laptop record."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    brand: str
    price: float
    ram: float
    processor_score: float
    storage: float
    screen_size: float
    created_at: datetime
    extra_attributes: Dict[str, float] = Field(default_factory=dict)

    @classmethod
    def from_laptop(cls, laptop: Laptop) -> "LaptopResponse":
        return cls.model_validate(laptop)


class CriterionResponse(BaseModel):
    """A weighted criterion."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    weight: float
    type: CriterionType
    attribute: str
    created_at: datetime

    @classmethod
    def from_criterion(cls, criterion: Criterion) -> "CriterionResponse":
        return cls.model_validate(criterion)


class WeightUpdate(BaseModel):
    id: str
    weight: float


class CriteriaWeightsUpdate(BaseModel):
    """Bulk weight update; the resulting total must equal 1.0."""
    weights: List[WeightUpdate] = Field(min_length=1)

    def as_mapping(self) -> Dict[str, float]:
        return {item.id: item.weight for item in self.weights}


class WeightValidationResponse(BaseModel):
    total: float
    tolerance: float
    is_valid: bool
    difference: float
    out_of_range: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: WeightValidationResult) -> "WeightValidationResponse":
        return cls(
            total=result.total,
            tolerance=result.tolerance,
            is_valid=result.is_valid,
            difference=result.difference,
            out_of_range=list(result.out_of_range),
        )


class RankedLaptopResponse(LaptopResponse):
    """A laptop with its SAW score, rank and normalized criterion values."""
    score: float
    rank: int
    normalized_values: Dict[str, float]

    @classmethod
    def from_ranked(cls, ranked: RankedLaptop) -> "RankedLaptopResponse":
        return cls.model_validate(ranked.to_dict())


class HealthStatus(BaseModel):
    """Health status response model."""
    status: str
    timestamp: str
    version: str
    uptime_seconds: Optional[float] = None
