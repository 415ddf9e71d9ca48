"""
Identity resolution with fail-open-to-anonymous semantics.

A missing, malformed or expired token, or a verified subject with no
matching application user, yields the anonymous identity. The failure is
logged and the request carries on; rejecting callers is the gate's job.
"""

from typing import Optional

from product_api.auth.capabilities import capabilities_from_claims
from product_api.auth.verifier import Claims, TokenVerifier, VerificationError
from product_api.core.config import Config, config
from product_api.core.logger import logger
from product_api.db.models import INTEGER_MAX, INTEGER_MIN
from product_api.models.identity import ANONYMOUS, AuthenticatedIdentity, CallerIdentity
from product_api.repositories.outcome import Failure, NotFound, Outcome, Success
from product_api.repositories.user import UserRepository
from product_api.schemas.user import UserRecord


class IdentityResolver:
    def __init__(self, verifier: TokenVerifier, users: UserRepository, settings: Config = config):
        self.verifier = verifier
        self.users = users
        self.settings = settings

    async def resolve(self, token: Optional[str]) -> CallerIdentity:
        if token is None:
            return ANONYMOUS

        try:
            claims = await self.verifier.verify(token)
        except VerificationError as e:
            logger.warning(
                f"Token verification failed, continuing as anonymous: {e.message}",
                metadata={"event": "identity_resolution_failed", "reason": "verification"},
            )
            return ANONYMOUS

        outcome = await self._lookup_user(claims)
        if isinstance(outcome, Success):
            user: UserRecord = outcome.value
            identity = AuthenticatedIdentity(
                user_id=str(user.id),
                email=user.email,
                capabilities=capabilities_from_claims(claims, self.settings),
            )
            logger.debug(
                f"Authenticated caller {identity.user_id}",
                user_id=identity.user_id,
                metadata={
                    "event": "identity_resolved",
                    "capabilities": sorted(c.value for c in identity.capabilities),
                },
            )
            return identity

        reason = "user_not_found" if isinstance(outcome, NotFound) else "user_lookup_failed"
        logger.warning(
            "Could not resolve user for verified token, continuing as anonymous",
            metadata={
                "event": "identity_resolution_failed",
                "reason": reason,
                "subject": claims.get("sub"),
                **({"error": outcome.message} if isinstance(outcome, Failure) else {}),
            },
        )
        return ANONYMOUS

    async def _lookup_user(self, claims: Claims) -> Outcome[UserRecord]:
        """Find the user by email claim, falling back to a numeric subject id"""
        email = claims.get(self.settings.email_claim)
        if isinstance(email, str) and email:
            return await self.users.get_by_email(email)

        subject = claims.get("sub")
        try:
            user_id = int(subject)
        except (TypeError, ValueError, OverflowError):
            return NotFound()
        if not INTEGER_MIN <= user_id <= INTEGER_MAX:
            return NotFound()
        return await self.users.get_by_id(user_id)
