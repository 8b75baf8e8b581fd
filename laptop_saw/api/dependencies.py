"""FastAPI dependencies shared by the routers."""

from fastapi import HTTPException, Request

from ..services.decision_support import DecisionSupportService


def get_service(request: Request) -> DecisionSupportService:
    """Dependency returning the application's DecisionSupportService."""
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return service
