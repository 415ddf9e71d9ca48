"""
API routers
"""

from . import health, products

__all__ = ["health", "products"]
