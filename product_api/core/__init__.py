"""
Core module initialization
"""

from .config import config, Config
from .errors import ErrorResponse, ErrorResponseModel, InputError, AuthorizationDenied
from .logger import logger

__all__ = [
    "config",
    "Config",
    "ErrorResponse",
    "ErrorResponseModel",
    "InputError",
    "AuthorizationDenied",
    "logger",
]
