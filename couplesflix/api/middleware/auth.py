"""Verification of Supabase access tokens presented to CouplesFlix.

A token only authenticates a session when it is an ES256 token signed by
the project key, meant for the `authenticated` audience, and issued to a
real (email) account whose `sub` is the ID of its profile row. Anything
else leaves the caller anonymous with one of the reasons below.
"""

from enum import Enum
from functools import lru_cache
from typing import Any

import jwt
from jwt import PyJWK
from pydantic import ValidationError as PydanticValidationError

from couplesflix.core.config import get_settings
from couplesflix.schemas.auth import TokenPayload

SIGNING_ALGORITHM = "ES256"

# Audience Supabase puts on access tokens of signed-in users
SUPABASE_AUDIENCE = "authenticated"


class AuthErrorCode(str, Enum):
    """Why a session resolved to anonymous."""

    MISSING_TOKEN = "MISSING_TOKEN"
    MALFORMED_HEADER = "MALFORMED_HEADER"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    INVALID_TOKEN = "INVALID_TOKEN"
    GUEST_ACCOUNT = "GUEST_ACCOUNT"


class AuthError(Exception):
    """A token or header that cannot authenticate a session."""

    def __init__(self, message: str, code: AuthErrorCode) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


@lru_cache
def get_signing_key() -> Any:
    """Public half of the project's JWT signing key.

    Raises:
        AuthError: If the JWK setting is empty, unparsable, or not an ES256 key.
    """
    jwk_json = get_settings().supabase_signing_key_jwk
    if not jwk_json:
        raise AuthError("Signing key not configured", AuthErrorCode.INVALID_TOKEN)

    try:
        jwk = PyJWK.from_json(jwk_json)
    except (ValueError, jwt.PyJWTError) as e:
        raise AuthError(f"Invalid signing key JWK: {e}", AuthErrorCode.INVALID_TOKEN) from e

    if jwk.algorithm_name != SIGNING_ALGORITHM:
        raise AuthError(
            f"Signing key must be {SIGNING_ALGORITHM}, got {jwk.algorithm_name}",
            AuthErrorCode.INVALID_TOKEN,
        )
    return jwk.key


def bearer_token(authorization: str) -> str:
    """Extract the token from an `Authorization: Bearer <token>` value."""
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthError(
            "Invalid authorization header format. Expected: Bearer <token>",
            AuthErrorCode.MALFORMED_HEADER,
        )
    return parts[1]


def decode_jwt(token: str) -> TokenPayload:
    """Verify an access token and return its claims.

    Args:
        token: The raw JWT.

    Returns:
        TokenPayload: Claims of a signed-in email account.

    Raises:
        AuthError: If the token is expired, forged, malformed, meant for
            another audience, or belongs to a guest (anonymous) sign-in.
    """
    try:
        claims = jwt.decode(
            token,
            get_signing_key(),
            algorithms=[SIGNING_ALGORITHM],
            audience=SUPABASE_AUDIENCE,
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token has expired", AuthErrorCode.TOKEN_EXPIRED) from e
    except jwt.InvalidSignatureError as e:
        raise AuthError("Invalid token signature", AuthErrorCode.INVALID_SIGNATURE) from e
    except jwt.PyJWTError as e:
        raise AuthError(f"Invalid token: {e}", AuthErrorCode.INVALID_TOKEN) from e

    try:
        payload = TokenPayload.model_validate(claims)
    except PydanticValidationError as e:
        # sub must be the UUID of a profiles row
        raise AuthError("Token subject is not a user ID", AuthErrorCode.INVALID_TOKEN) from e

    # Guest sign-ins have no profile, connection code or watchlist
    if payload.is_anonymous:
        raise AuthError("Sign in with an email account to continue", AuthErrorCode.GUEST_ACCOUNT)

    return payload
