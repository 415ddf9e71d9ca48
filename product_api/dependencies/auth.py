"""
Authentication and authorization dependencies for FastAPI.

`get_caller_identity` resolves the caller of the current request (possibly
anonymous). `require_capability` builds a dependency that additionally runs
the authorization gate; routes using it never reach their body on denial.
"""

from typing import Callable, Optional

from fastapi import Depends, Request

from product_api.auth.capabilities import Capability
from product_api.auth.credentials import extract_bearer_token
from product_api.auth.gate import enforce
from product_api.auth.resolver import IdentityResolver
from product_api.core.config import Config
from product_api.dependencies.product import get_user_repository
from product_api.dependencies.settings import get_settings
from product_api.models.identity import CallerIdentity
from product_api.repositories.user import UserRepository


def get_bearer_token(request: Request) -> Optional[str]:
    return extract_bearer_token(request.headers)


def get_identity_resolver(
    request: Request,
    users: UserRepository = Depends(get_user_repository),
    settings: Config = Depends(get_settings),
) -> IdentityResolver:
    return IdentityResolver(request.app.state.token_verifier, users, settings)


async def get_caller_identity(
    token: Optional[str] = Depends(get_bearer_token),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> CallerIdentity:
    """
    Resolve the caller of the current request.

    Usage:
        @router.get("")
        async def list_items(identity: CallerIdentity = Depends(get_caller_identity)):
            # identity may be anonymous
            pass
    """
    return await resolver.resolve(token)


def require_capability(capability: Capability) -> Callable:
    """
    Dependency factory enforcing `capability` before the route runs.

    Usage:
        @router.delete("/{id}")
        async def delete_item(identity: CallerIdentity = Depends(require_capability(Capability.DELETE))):
            # identity is authenticated and holds the delete capability
            pass
    """

    async def dependency(identity: CallerIdentity = Depends(get_caller_identity)) -> CallerIdentity:
        return enforce(identity, capability)

    dependency.__name__ = f"require_{capability.value}"
    return dependency
