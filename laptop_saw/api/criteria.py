"""Criteria endpoints."""

from typing import List
from fastapi import APIRouter, Depends

from .dependencies import get_service
from .schemas import CriteriaWeightsUpdate, CriterionResponse, WeightValidationResponse
from ..services.decision_support import DecisionSupportService


router = APIRouter(prefix="/criteria", tags=["criteria"])


@router.get("", response_model=List[CriterionResponse])
async def list_criteria(service: DecisionSupportService = Depends(get_service)) -> List[CriterionResponse]:
    """List criteria ordered by attribute key."""
    return [CriterionResponse.from_criterion(criterion) for criterion in await service.list_criteria()]


@router.put("/weights", response_model=List[CriterionResponse])
async def update_weights(payload: CriteriaWeightsUpdate,
                         service: DecisionSupportService = Depends(get_service)) -> List[CriterionResponse]:
    """Replace several weights at once.

    Rejected with 400 unless the weights over all criteria sum to 1.0.
    """
    criteria = await service.update_criteria_weights(payload.as_mapping())
    return [CriterionResponse.from_criterion(criterion) for criterion in criteria]


@router.post("/validate", response_model=WeightValidationResponse)
async def validate_weights(payload: CriteriaWeightsUpdate,
                           service: DecisionSupportService = Depends(get_service)) -> WeightValidationResponse:
    """Check proposed weights without saving them."""
    result = await service.validate_weights(payload.as_mapping())
    return WeightValidationResponse.from_result(result)
