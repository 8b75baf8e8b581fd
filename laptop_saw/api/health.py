"""Health check endpoints for the laptop-saw API."""

from datetime import datetime
from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException

from .dependencies import get_service
from .schemas import HealthStatus
from ..services.decision_support import DecisionSupportService
from ..utils.logging import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

API_VERSION = "0.1.0"

# Track application start time for uptime calculation
_app_start_time = datetime.now()


def _uptime_seconds() -> float:
    return (datetime.now() - _app_start_time).total_seconds()


@router.get("/", response_model=HealthStatus)
async def basic_health_check() -> HealthStatus:
    """Basic health check endpoint.

    Returns:
        Basic health status
    """
    return HealthStatus(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        version=API_VERSION,
        uptime_seconds=_uptime_seconds()
    )


@router.get("/liveness")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check: the process is up and answering."""
    return {
        "status": "alive",
        "uptime_seconds": _uptime_seconds(),
        "timestamp": datetime.now().isoformat()
    }


@router.get("/readiness")
async def readiness_check(service: DecisionSupportService = Depends(get_service)) -> Dict[str, Any]:
    """Readiness check: both stores answer and criteria are configured.

    Returns:
        Readiness status with record counts
    """
    try:
        statistics = await service.get_statistics()
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        raise HTTPException(status_code=503, detail=f"Service not ready: {str(e)}")

    if statistics["criteria"] == 0:
        raise HTTPException(status_code=503, detail="No criteria configured")

    return {
        "status": "ready",
        "laptops": statistics["laptops"],
        "criteria": statistics["criteria"],
        "timestamp": datetime.now().isoformat()
    }


@router.get("/detailed")
async def detailed_health_check(service: DecisionSupportService = Depends(get_service)) -> Dict[str, Any]:
    """Store counts, error statistics and the active weighting."""
    statistics = await service.get_statistics()
    weighting = await service.validate_weights({})

    issues = []
    if statistics["criteria"] == 0:
        issues.append("no_criteria")
    if not weighting.is_valid:
        issues.append("criteria_weights_invalid")

    return {
        "status": "degraded" if issues else "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": API_VERSION,
        "uptime_seconds": _uptime_seconds(),
        "issues": issues,
        "components": {
            "catalog": {"laptops": statistics["laptops"]},
            "criteria": {
                "count": statistics["criteria"],
                "weight_total": weighting.total,
                "weights_valid": weighting.is_valid,
            },
            "error_statistics": statistics["errors"],
        },
    }
