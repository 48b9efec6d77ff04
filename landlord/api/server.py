"""FastAPI application setup"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from landlord.api.middleware import setup_cors, setup_rate_limiting
from landlord.api.routes import router
from landlord.config import DATA_PATH, LOG_LEVEL, STORAGE_BACKEND, get_engine_config
from landlord.db.store import ProgressStore, create_store
from landlord.exceptions import (
    LandlordError,
    PermissionDeniedError,
    PersistenceError,
    RecordNotFoundError,
    ValidationError,
)
from landlord.observability.metrics_middleware import setup_metrics_middleware
from landlord.services.container import init_container, reset_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL, logging.INFO)
)

logger = logging.getLogger(__name__)


def status_for_error(error: LandlordError) -> int:
    """HTTP status code for a domain error"""
    if isinstance(error, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(error, RecordNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, PermissionDeniedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(error, PersistenceError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_api_application(store: Optional[ProgressStore] = None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        store: Progress store to serve from. Built from STORAGE_BACKEND
            and DATA_PATH when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle manager for FastAPI application"""
        # Startup
        logger.info("Starting API server...")
        active_store = store or create_store(STORAGE_BACKEND, DATA_PATH)
        init_container(active_store, get_engine_config())
        logger.info(f"Progress store initialized: {type(active_store).__name__}")

        yield

        # Shutdown
        logger.info("Shutting down API server...")
        reset_container()

    app = FastAPI(
        title="Landlord Progression API",
        description="REST API for the Landlord quest and progression engine",
        version="1.0.0",
        lifespan=lifespan
    )

    # Setup middleware
    setup_cors(app)
    setup_rate_limiting(app)
    setup_metrics_middleware(app)

    # Include routes
    app.include_router(router)

    @app.exception_handler(LandlordError)
    async def landlord_exception_handler(request: Request, exc: LandlordError):
        return JSONResponse(status_code=status_for_error(exc), content=exc.to_dict())

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)}
        )

    logger.info("FastAPI application created")

    return app
