"""Profile business logic service."""

import logging
from uuid import UUID

from couplesflix.api.middleware.error_handler import ValidationError
from couplesflix.core.supabase import get_supabase_client
from couplesflix.models.profile import Profile, ProfileUpdate as ProfileChanges
from couplesflix.schemas.profile import ProfileResponse, ProfileUpdate

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for reading and editing user profiles.

    Profiles (and their connection codes) are created by the backend at
    signup; this service never inserts or deletes them.
    """

    def __init__(self) -> None:
        """Initialize profile service with Supabase client."""
        self.client = get_supabase_client()

    async def get_profile(self, user_id: UUID) -> ProfileResponse | None:
        """Get a profile by user ID.

        Args:
            user_id: The auth user ID, which is also the profile ID.

        Returns:
            ProfileResponse | None: The profile or None if not found.
        """
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None

        row: Profile = response.data[0]
        return ProfileResponse.model_validate(row)

    async def update_profile(self, user_id: UUID, data: ProfileUpdate) -> ProfileResponse | None:
        """Change the user's username.

        Args:
            user_id: The auth user ID.
            data: The new username.

        Returns:
            ProfileResponse | None: The updated profile or None if not found.

        Raises:
            ValidationError: If the username is blank.
        """
        username = data.username.strip()
        if not username:
            raise ValidationError("Username cannot be empty")

        changes: ProfileChanges = {"username": username}
        response = (
            self.client.table("profiles")
            .update(changes)
            .eq("id", str(user_id))
            .execute()
        )

        if not response.data:
            return None

        updated: Profile = response.data[0]
        logger.info("Updated username for user %s", user_id)
        return ProfileResponse.model_validate(updated)

    async def set_avatar_url(self, user_id: UUID, avatar_url: str | None) -> None:
        """Point the profile at a new avatar, or clear it.

        Args:
            user_id: The auth user ID.
            avatar_url: Public URL of the stored image, or None.
        """
        changes: ProfileChanges = {"avatar_url": avatar_url}
        (
            self.client.table("profiles")
            .update(changes)
            .eq("id", str(user_id))
            .execute()
        )
