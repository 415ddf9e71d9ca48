"""
Database module initialization
"""

from .models import AppUser, Base, Product
from .session import Database

__all__ = [
    "AppUser",
    "Base",
    "Database",
    "Product",
]
