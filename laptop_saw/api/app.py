"""FastAPI application factory for laptop-saw."""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import criteria, health, laptops, ranking
from ..config.settings import get_api_config
from ..repositories.base import RecordNotFoundError
from ..repositories.factory import build_repositories
from ..services.decision_support import DecisionSupportService
from ..services.saw import SAWError, WeightValidationError
from ..utils.error_handling import ErrorContext, LaptopSAWError, get_error_handler
from ..utils.logging import get_logger


logger = get_logger(__name__)

# First match wins
ERROR_STATUS_CODES = (
    (RecordNotFoundError, 404),
    (WeightValidationError, 400),
    (SAWError, 422),
    (LaptopSAWError, 500),
)


def _status_code_for(error: LaptopSAWError) -> int:
    return next(code for error_class, code in ERROR_STATUS_CODES if isinstance(error, error_class))


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Render LaptopSAWError subclasses as ErrorResponse JSON bodies."""

    @app.exception_handler(LaptopSAWError)
    async def handle_laptop_saw_error(request: Request, exc: LaptopSAWError) -> JSONResponse:
        error_response = exc.error_response
        if error_response is None:
            context = ErrorContext(component="api", operation=f"{request.method} {request.url.path}")
            error_response = get_error_handler().handle_error(exc, context)

        body: Dict[str, Any] = error_response.to_dict()
        if not debug and body.get("details"):
            body["details"] = {key: value for key, value in body["details"].items() if key != "traceback"}

        return JSONResponse(status_code=_status_code_for(exc), content=body)


def create_app(service: Optional[DecisionSupportService] = None) -> FastAPI:
    """Create the API application.

    Args:
        service: Pre-built service; when None the configured stores are built
            and seeded on startup

    Returns:
        Configured FastAPI application
    """
    api_config = get_api_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.service is None:
            laptop_repository, criteria_repository = await build_repositories()
            app.state.service = DecisionSupportService(laptop_repository, criteria_repository)
        logger.info("Laptop SAW API started")
        yield
        logger.info("Laptop SAW API stopped")

    app = FastAPI(
        title=api_config.get("title", "Laptop SAW Decision Support"),
        version=health.API_VERSION,
        debug=api_config.get("debug", False),
        lifespan=lifespan,
    )
    app.state.service = service

    app.include_router(laptops.router)
    app.include_router(criteria.router)
    app.include_router(ranking.router)
    app.include_router(health.router)

    register_exception_handlers(app, debug=api_config.get("debug", False))
    return app
