"""
Error handling utilities for the Product API
"""

import traceback
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from product_api.core.config import config
from product_api.core.logger import logger


class ErrorResponse(Exception):
    """Application error that terminates the request with `status_code`"""

    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def content(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class InputError(ErrorResponse):
    """Required request input (body or path parameter) is missing or unusable"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

    def content(self) -> Dict[str, Any]:
        return {"content": "error", "message": self.message}


class AuthorizationDenied(ErrorResponse):
    """The caller lacks the capability a route requires"""

    def __init__(self, required_capability: str, user_id: Optional[str] = None):
        details = {"required_capability": required_capability}
        super().__init__("Forbidden", status_code=403, details=details)
        self.user_id = user_id


class ErrorResponseModel(BaseModel):
    """Pydantic model for error responses"""
    error: str
    details: Optional[dict] = None


class InputErrorModel(BaseModel):
    """Pydantic model for missing-input responses"""
    content: str = "error"
    message: str


async def error_response_handler(request: Request, exc: ErrorResponse):
    """Handler for ErrorResponse and its subclasses"""
    metadata = {
        "event": "error_response",
        "status_code": exc.status_code,
        "url": str(request.url),
        "method": request.method,
        **exc.details,
    }

    settings = getattr(request.app.state, "settings", config)
    if settings.is_development:
        metadata["traceback"] = traceback.format_exc()

    if exc.status_code >= 500:
        logger.error(f"Error: {exc.message}", metadata=metadata)
    else:
        logger.warning(f"Request rejected: {exc.message}", metadata=metadata)

    return JSONResponse(status_code=exc.status_code, content=exc.content())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Handler for request validation failures raised by FastAPI"""
    logger.warning(
        "Request validation failed",
        metadata={"event": "validation_error", "url": str(request.url), "method": request.method},
    )
    return JSONResponse(
        status_code=422,
        content={"error": "Validation error", "details": jsonable_encoder(exc.errors())},
    )
