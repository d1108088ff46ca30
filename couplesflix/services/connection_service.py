"""Partner connection (pairing) business logic service."""

import logging
from uuid import UUID

from couplesflix.api.middleware.error_handler import ConflictError, NotFoundError, ValidationError
from couplesflix.core.supabase import get_supabase_client
from couplesflix.models.connection import Connection, ConnectionCreate, ConnectionStatus
from couplesflix.models.profile import Profile
from couplesflix.schemas.connection import ConnectionResponse
from couplesflix.schemas.profile import ProfileResponse

logger = logging.getLogger(__name__)

CONNECTION_CODE_PREFIX = "MP-"
CONNECTION_CODE_LENGTH = 9


def validate_connection_code(code: str) -> str:
    """Check a partner code has the MP-XXXXXX shape.

    Only the prefix and total length are checked; whether the code belongs
    to anyone is decided by the lookup.

    Args:
        code: Code as typed by the user.

    Returns:
        str: The code with surrounding whitespace removed.

    Raises:
        ValidationError: If the prefix or length is wrong.
    """
    code = code.strip()
    if not code.startswith(CONNECTION_CODE_PREFIX) or len(code) != CONNECTION_CODE_LENGTH:
        raise ValidationError("Invalid connection code format. Expected MP-XXXXXX")
    return code


class ConnectionService:
    """Service for linking two profiles via a connection code.

    A pairing is a single row (user_id -> partner_id) read in both
    directions. The existence check and the insert are separate round trips,
    so two partners connecting at the same moment can both pass the check;
    only a uniqueness constraint on the unordered pair in the database can
    rule that out.
    """

    def __init__(self) -> None:
        """Initialize connection service with Supabase client."""
        self.client = get_supabase_client()

    async def connect(self, self_user_id: UUID, partner_code: str) -> ConnectionResponse:
        """Pair the caller with the profile owning `partner_code`.

        Args:
            self_user_id: The caller's user ID.
            partner_code: The partner's connection code.

        Returns:
            ConnectionResponse: The created connection.

        Raises:
            ValidationError: If the code is malformed or resolves to the caller.
            NotFoundError: If no profile has that code.
            ConflictError: If either side already has a connection.
        """
        code = validate_connection_code(partner_code)

        partner_response = (
            self.client.table("profiles")
            .select("*")
            .eq("connection_code", code)
            .limit(1)
            .execute()
        )
        if not partner_response.data:
            raise NotFoundError("Invalid connection code")

        partner: Profile = partner_response.data[0]
        partner_id = UUID(partner["id"])
        if partner_id == self_user_id:
            raise ValidationError("You cannot connect with yourself")

        existing = (
            self.client.table("connections")
            .select("id")
            .or_(
                f"user_id.eq.{self_user_id},partner_id.eq.{self_user_id},"
                f"user_id.eq.{partner_id},partner_id.eq.{partner_id}"
            )
            .limit(1)
            .execute()
        )
        if existing.data:
            raise ConflictError("Already connected: you or your partner already has a connection")

        connection_data: ConnectionCreate = {
            "user_id": str(self_user_id),
            "partner_id": str(partner_id),
            "status": ConnectionStatus.CONNECTED.value,
        }
        response = self.client.table("connections").insert(connection_data).execute()
        created: Connection = response.data[0]

        logger.info("Connected user %s with partner %s", self_user_id, partner_id)
        return ConnectionResponse.model_validate(created)

    async def get_connection(self, user_id: UUID) -> ConnectionResponse | None:
        """Get the connection the user takes part in, on either side.

        Args:
            user_id: The user's ID.

        Returns:
            ConnectionResponse | None: The connection or None if unpaired.
        """
        response = (
            self.client.table("connections")
            .select("*")
            .or_(f"user_id.eq.{user_id},partner_id.eq.{user_id}")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None

        row: Connection = response.data[0]
        return ConnectionResponse.model_validate(row)

    async def get_partner(
        self,
        user_id: UUID,
        connection: ConnectionResponse | None = None,
    ) -> ProfileResponse | None:
        """Get the profile on the other side of the user's connection.

        Args:
            user_id: The user's ID.
            connection: The user's connection if already fetched.

        Returns:
            ProfileResponse | None: The partner or None if unpaired.
        """
        connection = connection or await self.get_connection(user_id)
        if connection is None:
            return None

        partner_id = connection.other_party(user_id)
        if partner_id is None:
            return None

        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", str(partner_id))
            .limit(1)
            .execute()
        )

        return ProfileResponse.model_validate(response.data[0]) if response.data else None
