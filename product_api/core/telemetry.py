"""
OpenTelemetry instrumentation for the FastAPI application and its database engine.

Spans are created locally; exporting them is left to the OpenTelemetry SDK
configuration of the deployment.
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor

from product_api.core.logger import logger


def instrument_app(app):
    """Instrument FastAPI application with OpenTelemetry for automatic span creation."""
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumented with OpenTelemetry")
    except Exception as e:
        logger.error(f"Failed to instrument application: {e}", error=e)


def instrument_engine(engine: AsyncEngine):
    """Create spans for queries issued through `engine`."""
    try:
        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)
        logger.info("SQLAlchemy engine instrumented with OpenTelemetry")
    except Exception as e:
        logger.error(f"Failed to instrument database engine: {e}", error=e)
