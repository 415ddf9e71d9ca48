"""
Translation of data-access outcomes into HTTP responses
"""

from typing import Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from product_api.core.config import Config, config
from product_api.core.errors import InputError
from product_api.core.logger import logger
from product_api.db.models import INTEGER_MAX, INTEGER_MIN
from product_api.repositories.outcome import Failure, NotFound, Outcome, Success

GENERIC_FAILURE_MESSAGE = "Internal Server Error"


def to_response(
    outcome: Outcome,
    not_found_message: str = "Product not found",
    settings: Config = config,
) -> Response:
    """Map each outcome tag to exactly one response"""
    if isinstance(outcome, Success):
        return JSONResponse(status_code=200, content=jsonable_encoder(outcome.value))

    if isinstance(outcome, NotFound):
        return JSONResponse(status_code=404, content={"error": not_found_message})

    if isinstance(outcome, Failure):
        logger.error(
            "Data access failed",
            metadata={"event": "data_access_failure", "status_code": 500},
            error=outcome.message,
        )
        message = outcome.message if settings.expose_store_errors else GENERIC_FAILURE_MESSAGE
        return PlainTextResponse(status_code=500, content=message)

    raise TypeError(f"Unhandled outcome: {outcome!r}")


def require_present(value: Optional[object], message: str) -> None:
    """Raise InputError when a required body or parameter is missing"""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InputError(message)


def parse_id(value: Optional[str], name: str) -> int:
    """Validate a required integer path parameter"""
    require_present(value, f"Bad Request - missing {name}")
    try:
        parsed = int(value.strip())
    except ValueError:
        raise InputError(f"Bad Request - invalid {name}", details={name: value})
    if not INTEGER_MIN <= parsed <= INTEGER_MAX:
        raise InputError(f"Bad Request - invalid {name}", details={name: value})
    return parsed
