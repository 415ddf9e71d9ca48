"""
FastAPI application factory for the Product API
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from product_api import __version__
from product_api.api import health, products
from product_api.auth.verifier import JWTTokenVerifier, TokenVerifier
from product_api.core.config import Config, config
from product_api.core.errors import ErrorResponse, error_response_handler, validation_error_handler
from product_api.core.logger import logger
from product_api.core.telemetry import instrument_app, instrument_engine
from product_api.db.session import Database
from product_api.middleware import CorrelationIdMiddleware


def create_app(
    settings: Config = config,
    database: Optional[Database] = None,
    token_verifier: Optional[TokenVerifier] = None,
) -> FastAPI:
    """
    Build the application.

    `database` and `token_verifier` default to instances built from
    `settings`. The lifespan connects the database at startup and
    disposes it at shutdown.
    """
    database = database or Database.from_config(settings)
    token_verifier = token_verifier or JWTTokenVerifier.from_config(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Product API...")
        await database.connect()
        if settings.telemetry_enabled:
            instrument_engine(database.engine)

        logger.info(
            "Product API started successfully",
            metadata={
                "service_name": settings.service_name,
                "version": settings.service_version,
                "environment": settings.environment,
                "port": settings.port,
            },
        )

        yield

        logger.info("Shutting down Product API...")
        await database.disconnect()

    app = FastAPI(
        title="Product API",
        description="Product catalogue with bearer-token authorization",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.token_verifier = token_verifier

    if settings.telemetry_enabled:
        instrument_app(app)

    app.add_exception_handler(ErrorResponse, error_response_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.add_middleware(CorrelationIdMiddleware, header_name=settings.correlation_id_header)

    app.include_router(health.router, tags=["health"])
    app.include_router(products.router, prefix=products.PREFIX, tags=["products"])

    return app
