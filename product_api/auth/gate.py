"""
Authorization gate for mutating product operations
"""

from enum import Enum

from product_api.auth.capabilities import Capability
from product_api.core.errors import AuthorizationDenied
from product_api.core.logger import logger
from product_api.models.identity import CallerIdentity


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


def check(identity: CallerIdentity, required: Capability) -> Decision:
    """Allow only authenticated callers holding the required capability"""
    if identity.is_authenticated and identity.has_capability(required):
        return Decision.ALLOW
    return Decision.DENY


def enforce(identity: CallerIdentity, required: Capability) -> CallerIdentity:
    """Return the identity if allowed, raise AuthorizationDenied otherwise"""
    if check(identity, required) is Decision.ALLOW:
        return identity

    user_id = identity.user_id if identity.is_authenticated else None
    logger.warning(
        f"Authorization denied: '{required.value}' capability required",
        user_id=user_id,
        metadata={
            "event": "authorization_denied",
            "required_capability": required.value,
            "authenticated": identity.is_authenticated,
        },
    )
    raise AuthorizationDenied(required.value, user_id=user_id)
