"""
Dependencies module initialization
"""

from .auth import get_bearer_token, get_caller_identity, get_identity_resolver, require_capability
from .product import get_database, get_product_repository, get_user_repository
from .settings import get_settings

__all__ = [
    "get_bearer_token",
    "get_caller_identity",
    "get_identity_resolver",
    "require_capability",
    "get_database",
    "get_product_repository",
    "get_user_repository",
    "get_settings",
]
