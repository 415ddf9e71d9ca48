"""
Models module initialization
"""

from .identity import ANONYMOUS, AnonymousIdentity, AuthenticatedIdentity, CallerIdentity

__all__ = [
    "ANONYMOUS",
    "AnonymousIdentity",
    "AuthenticatedIdentity",
    "CallerIdentity",
]
