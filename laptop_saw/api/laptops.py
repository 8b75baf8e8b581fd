"""Laptop catalog endpoints."""

from typing import List
from fastapi import APIRouter, Depends, Response

from .dependencies import get_service
from .schemas import LaptopCreate, LaptopResponse, LaptopUpdate
from ..services.decision_support import DecisionSupportService


router = APIRouter(prefix="/laptops", tags=["laptops"])


@router.get("", response_model=List[LaptopResponse])
async def list_laptops(service: DecisionSupportService = Depends(get_service)) -> List[LaptopResponse]:
    """List the catalog, most recently added first."""
    return [LaptopResponse.from_laptop(laptop) for laptop in await service.list_laptops()]


@router.get("/{laptop_id}", response_model=LaptopResponse)
async def get_laptop(laptop_id: str, service: DecisionSupportService = Depends(get_service)) -> LaptopResponse:
    return LaptopResponse.from_laptop(await service.get_laptop(laptop_id))


@router.post("", response_model=LaptopResponse, status_code=201)
async def add_laptop(payload: LaptopCreate,
                     service: DecisionSupportService = Depends(get_service)) -> LaptopResponse:
    laptop = await service.add_laptop(payload.model_dump())
    return LaptopResponse.from_laptop(laptop)


@router.put("/{laptop_id}", response_model=LaptopResponse)
async def update_laptop(laptop_id: str, payload: LaptopUpdate,
                        service: DecisionSupportService = Depends(get_service)) -> LaptopResponse:
    """Update the fields present in the request body."""
    laptop = await service.update_laptop(laptop_id, payload.model_dump(exclude_unset=True))
    return LaptopResponse.from_laptop(laptop)


@router.delete("/{laptop_id}", status_code=204)
async def delete_laptop(laptop_id: str, service: DecisionSupportService = Depends(get_service)) -> Response:
    await service.delete_laptop(laptop_id)
    return Response(status_code=204)
