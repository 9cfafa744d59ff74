"""
FastAPI application factory for the clinic web application.

Startup creates the async engine and session manager, creates missing tables
and seeds the pet type catalog (both configurable). Shutdown disposes of the
engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request

from .. import __version__
from ..database import SessionManager, create_engine
from ..exceptions import (
    ConcurrentModificationException,
    ConnectionException,
    NotFoundException,
    ValidationException,
    VetClinicException,
    create_error_response,
)
from ..models import Base
from ..repositories import PetTypeRepository
from ..utils.config import AppConfig, EnvironmentConfig, LoggingConfigurator
from . import owners, pets, visits
from .dependencies import get_request_session_manager
from .templating import render

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles startup and shutdown of the database layer.
    """
    config: AppConfig = app.state.config
    logger.info("Starting vet-clinic web application")

    engine = create_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        echo=config.db_echo,
    )
    session_manager = SessionManager(engine)
    app.state.session_manager = session_manager

    if config.create_schema:
        if not await session_manager.initialize_database(Base.metadata):
            await session_manager.close()
            raise ConnectionException(
                "Database initialization failed", database_url=config.database_url
            )

    if config.seed_pet_types:
        async with session_manager.get_transaction() as session:
            await PetTypeRepository(session).ensure_defaults(config.pet_types)

    logger.info("vet-clinic startup complete")

    yield

    logger.info("Shutting down vet-clinic web application")
    await session_manager.close()


def _error_status(exc: VetClinicException) -> int:
    if isinstance(exc, NotFoundException):
        return 404
    if isinstance(exc, ConcurrentModificationException):
        return 409
    if isinstance(exc, ValidationException):
        return 400
    return 500


async def handle_vet_clinic_exception(request: Request, exc: VetClinicException):
    """Render the error page with a status matching the exception type."""
    status_code = _error_status(exc)
    level = logging.ERROR if status_code >= 500 else logging.WARNING
    exc.log_error(logger, level=level)
    return render(
        request,
        "error.html",
        {"status_code": status_code, "error": create_error_response(exc)["error"]},
        status_code=status_code,
    )


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Application settings; read from the environment when omitted

    Returns:
        Configured application. The database is only touched when the
        lifespan runs (server start, or ``with TestClient(app)``).
    """
    config = config or AppConfig.from_environment()
    LoggingConfigurator.configure_from_app_config(config)

    app = FastAPI(
        title="Vet Clinic",
        description="Owner, pet and visit records for a veterinary clinic",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_exception_handler(VetClinicException, handle_vet_clinic_exception)

    app.include_router(owners.router)
    app.include_router(pets.router)
    app.include_router(visits.router)

    @app.get("/", include_in_schema=False)
    async def welcome(request: Request):
        return render(request, "welcome.html")

    @app.get("/health", tags=["health"])
    async def health(request: Request) -> Dict[str, Any]:
        """Report database connectivity."""
        session_manager = get_request_session_manager(request)
        return await session_manager.health_check()

    return app


def run() -> None:
    """Serve the application with uvicorn (``vet-clinic`` console script)."""
    uvicorn.run(
        create_app(),
        host=EnvironmentConfig.get_str("VET_CLINIC_HOST", "127.0.0.1"),
        port=EnvironmentConfig.get_int("VET_CLINIC_PORT", 8000),
    )
