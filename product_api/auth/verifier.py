"""
Token verification.

`TokenVerifier` is the contract the identity resolver depends on: `verify`
returns the token's claims or raises `VerificationError`. `JWTTokenVerifier`
implements it with PyJWT, using either a shared secret or the signing keys
published at a JWKS endpoint.
"""

from typing import Any, Mapping, Optional, Protocol, Sequence

import jwt
from starlette.concurrency import run_in_threadpool

from product_api.core.config import Config, config

Claims = Mapping[str, Any]


class VerificationError(Exception):
    """Raised when a token cannot be verified"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> Claims: ...


class JWTTokenVerifier:
    """Verifies signature, expiry and (when configured) audience and issuer"""

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithms: Sequence[str] = ("HS256",),
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        jwks_url: Optional[str] = None,
    ):
        if secret is None and jwks_url is None:
            raise ValueError("Either a shared secret or a JWKS URL is required")
        self.secret = secret
        self.algorithms = list(algorithms)
        self.audience = audience
        self.issuer = issuer
        self._jwks_client = jwt.PyJWKClient(jwks_url) if jwks_url else None

    @classmethod
    def from_config(cls, settings: Config = config) -> "JWTTokenVerifier":
        return cls(
            secret=None if settings.jwks_url else settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            jwks_url=settings.jwks_url,
        )

    async def _signing_key(self, token: str):
        if self._jwks_client is None:
            return self.secret
        # PyJWKClient fetches over blocking HTTP
        signing_key = await run_in_threadpool(self._jwks_client.get_signing_key_from_jwt, token)
        return signing_key.key

    async def verify(self, token: str) -> Claims:
        try:
            key = await self._signing_key(token)
            return jwt.decode(
                token,
                key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except jwt.ExpiredSignatureError:
            raise VerificationError("Token has expired")
        except jwt.PyJWTError as e:
            raise VerificationError(f"Invalid token: {e}")
