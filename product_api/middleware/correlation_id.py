"""
Correlation ID Middleware for request tracing
Ensures every request has a unique correlation ID for log correlation
"""

import uuid
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from product_api.core.config import config
from product_api.utils.correlation_id import get_correlation_id, set_correlation_id

__all__ = ["CorrelationIdMiddleware", "get_correlation_id", "set_correlation_id"]


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle correlation IDs for request tracing

    - Extracts correlation ID from request headers (or generates a new one)
    - Stores it in context for use throughout the request lifecycle
    - Adds it to response headers
    """

    def __init__(self, app, header_name: Optional[str] = None):
        super().__init__(app)
        self.header_name = header_name or config.correlation_id_header

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(self.header_name) or str(uuid.uuid4())

        set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id

        response = await call_next(request)

        response.headers[self.header_name] = correlation_id
        return response
