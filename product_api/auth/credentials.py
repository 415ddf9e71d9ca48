"""
Bearer credential extraction
"""

from typing import Mapping, Optional

BEARER_PREFIX = "Bearer "


def extract_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    """
    Return the token carried in the `authorization` header, or None.

    A leading "Bearer " is stripped; any other value is returned as-is and
    left for the verifier to reject. Absence is normal, never an error.
    """
    authorization = headers.get("authorization")
    if authorization is None:
        # plain dicts are case-sensitive, Starlette's Headers are not
        authorization = next(
            (value for key, value in headers.items() if key.lower() == "authorization"),
            None,
        )
    if not authorization or not authorization.strip():
        return None

    if authorization.startswith(BEARER_PREFIX):
        authorization = authorization[len(BEARER_PREFIX):]

    token = authorization.strip()
    return token or None
