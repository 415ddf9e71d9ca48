"""
Repositories module initialization
"""

from .outcome import Failure, NotFound, Outcome, Success
from .product import ProductRepository
from .user import UserRepository

__all__ = [
    "Failure",
    "NotFound",
    "Outcome",
    "Success",
    "ProductRepository",
    "UserRepository",
]
