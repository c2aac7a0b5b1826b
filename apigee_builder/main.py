"""FastAPI application entry point.

Main application setup with middleware, routing, and lifecycle management.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apigee_builder import __version__
from apigee_builder.api.schemas import ErrorResponse
from apigee_builder.api.variabilization import router as variabilization_router
from apigee_builder.core.config import Settings, get_settings
from apigee_builder.core.factory import ComponentFactory
from apigee_builder.core.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Builds the configured strategies at startup so misconfiguration
    surfaces before the first request.
    """
    factory: ComponentFactory = app.state.factory

    logger.info("Starting Apigee Builder API...")

    try:
        factory.get_variabilizer()
        factory.get_server_extractor()
        logger.info(f"Strategies ready for environments: {factory.settings.environments}")
    except ValueError as e:
        logger.error(f"Failed to initialize strategies: {e}", exc_info=True)
        raise

    yield

    logger.info("Shutting down Apigee Builder API...")
    factory.clear_cache()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()
    else:
        settings.configure_logging()
    setup_logging(settings)

    app = FastAPI(
        title="Apigee Builder",
        description="Backend URL variabilization for Apigee proxy bundles",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Store settings and strategies in app state
    app.state.settings = settings
    app.state.factory = ComponentFactory(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(variabilization_router)
    logger.info("Registered variabilization router")

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "service": "apigee-builder-api",
            "version": __version__,
        }

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        """Handle Pydantic validation errors."""
        logger.warning(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": "Validation error",
                "errors": jsonable_errors(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                detail="Internal server error",
                error_code="INTERNAL_ERROR",
            ).model_dump(),
        )

    logger.info("FastAPI application created successfully")
    return app


def jsonable_errors(errors: list[dict]) -> list[dict]:
    """Drop the non-serializable ``ctx``/``url`` members of pydantic errors."""
    return [{k: v for k, v in error.items() if k not in ("ctx", "url")} for error in errors]


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting uvicorn server on {settings.api_host}:{settings.api_port}...")
    uvicorn.run(
        "apigee_builder.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
