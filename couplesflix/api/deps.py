"""FastAPI dependency injection functions."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from couplesflix.api.middleware.auth import AuthError, AuthErrorCode, bearer_token, decode_jwt
from couplesflix.schemas.auth import SessionState, UserContext


@dataclass
class SessionContext:
    """Resolved session for the current request.

    This is the single place where the Authorization header is read; routes
    depend on it (or on `get_current_user`) instead of decoding tokens
    themselves.
    """

    state: SessionState
    user: UserContext | None = None
    error: AuthError | None = None

    @property
    def is_authenticated(self) -> bool:
        """Check if a valid token was presented."""
        return self.state == SessionState.AUTHENTICATED and self.user is not None


async def get_session_context(
    authorization: Annotated[str | None, Header(description="Bearer token")] = None,
) -> SessionContext:
    """Resolve the caller's session from the Authorization header.

    Never raises: a missing, malformed, expired, forged or guest token resolves to
    an anonymous session carrying the reason in `error`.

    Args:
        authorization: Optional Authorization header value.

    Returns:
        SessionContext: Anonymous or authenticated session.
    """
    if not authorization:
        return SessionContext(
            state=SessionState.ANONYMOUS,
            error=AuthError("Authorization header required", AuthErrorCode.MISSING_TOKEN),
        )

    try:
        payload = decode_jwt(bearer_token(authorization))
    except AuthError as e:
        return SessionContext(state=SessionState.ANONYMOUS, error=e)

    return SessionContext(state=SessionState.AUTHENTICATED, user=payload.to_user_context())


Session = Annotated[SessionContext, Depends(get_session_context)]


async def get_current_user(session: Session) -> UserContext:
    """Require an authenticated session.

    An anonymous session is the client's redirect-to-login condition and
    maps to HTTP 401.

    Args:
        session: The resolved session context.

    Returns:
        UserContext: The authenticated user's context.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired or a guest's.
    """
    if session.is_authenticated and session.user is not None:
        return session.user

    error = session.error or AuthError("Authorization header required", AuthErrorCode.MISSING_TOKEN)
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


CurrentUser = Annotated[UserContext, Depends(get_current_user)]
