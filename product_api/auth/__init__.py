"""
Authentication and authorization building blocks
"""

from .capabilities import Capability, ROUTE_CAPABILITIES, capabilities_from_claims
from .credentials import extract_bearer_token
from .verifier import Claims, JWTTokenVerifier, TokenVerifier, VerificationError

__all__ = [
    "Capability",
    "ROUTE_CAPABILITIES",
    "capabilities_from_claims",
    "extract_bearer_token",
    "Claims",
    "JWTTokenVerifier",
    "TokenVerifier",
    "VerificationError",
]
