"""Connection (partner pairing) Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from couplesflix.schemas.profile import ProfileResponse


class ConnectRequest(BaseModel):
    """Body for pairing with a partner by their connection code."""

    partner_code: str = Field(min_length=1, max_length=32, description="Partner's code, e.g. MP-AB12CD")


class ConnectionResponse(BaseModel):
    """A connection row. Undirected pairing stored as user_id -> partner_id."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Connection unique identifier")
    user_id: UUID = Field(description="Profile that initiated the pairing")
    partner_id: UUID | None = Field(default=None, description="Profile that was paired with")
    status: str = Field(description="Connection status")
    created_at: datetime = Field(description="When the pairing was made")

    def other_party(self, user_id: UUID) -> UUID | None:
        """Return the ID on the opposite side of `user_id`."""
        return self.partner_id if self.user_id == user_id else self.user_id


class ConnectionWithPartner(BaseModel):
    """The caller's connection, if any, with the partner's profile."""

    connection: ConnectionResponse | None = Field(default=None)
    partner: ProfileResponse | None = Field(default=None)
