"""Session state route."""

from fastapi import APIRouter

from couplesflix.api.deps import Session
from couplesflix.schemas.auth import SessionResponse

router = APIRouter(prefix="/session", tags=["session"])


@router.get(
    "",
    response_model=SessionResponse,
    summary="Get session state",
    description=(
        "Reports whether the caller is anonymous or authenticated, with the reason "
        "an anonymous session was not authenticated. Never returns 401."
    ),
)
async def get_session(session: Session) -> SessionResponse:
    """Return the caller's resolved session state and, when anonymous, why."""
    reason = session.error.code.value if session.error else None
    return SessionResponse(state=session.state, user=session.user, reason=reason)
