"""Authentication schemas for JWT tokens and session state."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserContext(BaseModel):
    """Authenticated user context extracted from a Supabase JWT.

    The `user_id` is also the primary key of the user's `profiles` row.
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID = Field(description="Unique identifier for the user (from JWT sub claim)")
    email: str | None = Field(default=None, description="User's email address if available")
    role: str | None = Field(default=None, description="User's role (e.g., 'authenticated')")


class TokenPayload(BaseModel):
    """Claims of a Supabase access token that this API reads."""

    sub: UUID = Field(description="Auth user ID, equal to the profile ID")
    email: str | None = Field(default=None)
    role: str | None = Field(default=None)
    exp: int = Field(description="Expiration timestamp (Unix epoch)")
    iat: int = Field(description="Issued at timestamp (Unix epoch)")
    aud: str | None = Field(default=None)
    iss: str | None = Field(default=None)
    is_anonymous: bool = Field(default=False, description="Set by Supabase for guest sign-ins")

    def to_user_context(self) -> UserContext:
        """Convert token payload to UserContext."""
        return UserContext(user_id=self.sub, email=self.email, role=self.role)


class SessionState(str, Enum):
    """Resolved state of the caller's session.

    The client adds its own `loading` state while this is being fetched.
    """

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class SessionResponse(BaseModel):
    """Response for the session endpoint."""

    model_config = ConfigDict(from_attributes=True)

    state: SessionState = Field(description="Whether the caller presented a valid token")
    user: UserContext | None = Field(default=None, description="The user when authenticated")
    reason: str | None = Field(
        default=None,
        description="Why the session is anonymous, e.g. TOKEN_EXPIRED (the client should refresh)",
    )
