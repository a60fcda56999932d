"""
Main FastAPI application entry point.

Uses Application Factory Pattern. Configuration is loaded and validated
before the app is built: a missing secret, domain or uri raises
ConfigError and no app is created.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from sceau import __version__
from sceau.config.settings import Settings, load_config
from sceau.di import (
    DIContainer,
    initialize_container,
    set_container,
    shutdown_container,
)
from sceau.domain.exceptions import SceauException
from sceau.infrastructure.monitoring import get_logger, setup_logging
from sceau.presentation.api.middleware import (
    MetricsMiddleware,
    RequestIDMiddleware,
    sceau_exception_handler,
)
from sceau.presentation.api.routes import auth, health


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[DIContainer] = None,
) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)
        container: Optional prebuilt container (for testing)

    Returns:
        Configured FastAPI application

    Raises:
        ConfigError: If configuration is missing or invalid
    """
    if container is not None:
        settings = container.settings
    elif settings is None:
        settings = load_config()

    settings.validate_required()

    if container is None:
        container = DIContainer(settings)
    set_container(container)

    # Structured logging (JSON only in production)
    json_logs = settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Sceau application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Sceau application...")
        await initialize_container()
        logger.info(
            "Sceau application started",
            extra={"networks": container.network_registry.networks},
        )

        yield

        logger.info("Shutting down Sceau application...")
        await shutdown_container()
        logger.info("Sceau application shutdown complete")

    app = FastAPI(
        title="Sceau API",
        description="Wallet sign-in: challenge, signature verification, sessions",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain (last added runs first)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(SceauException, sceau_exception_handler)

    # Register routes
    app.include_router(auth.router, prefix="/api")
    app.include_router(health.router)

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint."""
        return {
            "service": "Sceau",
            "status": "running",
            "version": __version__,
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """
            Prometheus metrics endpoint.

            Returns metrics in Prometheus text format for scraping.
            """
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST,
            )

    logger.info("Sceau application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Create application instance.

    For uvicorn: uvicorn sceau.main:get_app --factory
    """
    return create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = load_config()
    uvicorn.run(
        "sceau.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
    )


if __name__ == "__main__":
    main()
