"""SAW ranking endpoint."""

from typing import List
from fastapi import APIRouter, Depends

from .dependencies import get_service
from .schemas import RankedLaptopResponse
from ..services.decision_support import DecisionSupportService


router = APIRouter(prefix="/ranking", tags=["ranking"])


@router.get("", response_model=List[RankedLaptopResponse])
async def get_ranking(service: DecisionSupportService = Depends(get_service)) -> List[RankedLaptopResponse]:
    """Rank the whole catalog with the current criteria weights.

    Returns an empty list when there are no laptops or no criteria. Data that
    cannot be scored yields 422 and no partial ranking.
    """
    ranking = await service.compute_ranking()
    return [RankedLaptopResponse.from_ranked(ranked) for ranked in ranking]
