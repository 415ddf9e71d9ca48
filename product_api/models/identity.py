"""
Caller identity resolved for a single request
"""

from typing import FrozenSet, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from product_api.auth.capabilities import Capability


class AnonymousIdentity(BaseModel):
    """No usable credential was presented"""

    model_config = ConfigDict(frozen=True)

    is_authenticated: Literal[False] = False

    def has_capability(self, capability: Capability) -> bool:
        return False


class AuthenticatedIdentity(BaseModel):
    """Verified caller matched to an application user"""

    model_config = ConfigDict(frozen=True)

    is_authenticated: Literal[True] = True
    user_id: str
    email: Optional[str] = None
    capabilities: FrozenSet[Capability] = frozenset()

    def has_capability(self, capability: Capability) -> bool:
        return capability in self.capabilities


ANONYMOUS = AnonymousIdentity()

CallerIdentity = Union[AnonymousIdentity, AuthenticatedIdentity]
