"""Avatar upload service backed by Supabase Storage."""

import logging
import secrets
from uuid import UUID

from fastapi import UploadFile

from couplesflix.api.middleware.error_handler import ExternalServiceError, ValidationError
from couplesflix.core.config import get_settings
from couplesflix.core.supabase import get_supabase_client
from couplesflix.schemas.common import Upstream
from couplesflix.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}

EXTENSIONS_BY_MIME = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
}


def validate_avatar(content_type: str | None, size: int, max_size: int) -> None:
    """Reject empty, oversized or non-image uploads.

    Args:
        content_type: MIME type declared by the client.
        size: Payload size in bytes.
        max_size: Largest accepted size in bytes.

    Raises:
        ValidationError: If the upload is not acceptable.
    """
    if size == 0:
        raise ValidationError("Select an image to upload")
    if size > max_size:
        raise ValidationError(f"Avatar must be smaller than {max_size // (1024 * 1024)}MB")
    if content_type not in ALLOWED_MIME_TYPES:
        raise ValidationError("Avatar must be an image (jpg, png or gif)")


def storage_name_from_url(avatar_url: str) -> str | None:
    """Extract the object name from a public storage URL."""
    name = avatar_url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    return name or None


class AvatarService:
    """Service for storing and removing profile pictures."""

    def __init__(self) -> None:
        """Initialize avatar service with Supabase client."""
        self.client = get_supabase_client()
        self.settings = get_settings()
        self.profiles = ProfileService()

    async def upload_avatar(self, user_id: UUID, file: UploadFile) -> str:
        """Store an avatar image and point the user's profile at it.

        Validation happens before anything is sent to storage.

        Args:
            user_id: The owning user.
            file: The uploaded image.

        Returns:
            str: Public URL of the stored image.

        Raises:
            ValidationError: If the file is empty, too large, or not an image.
            ExternalServiceError: If storage rejects the upload.
        """
        content = await file.read()
        validate_avatar(file.content_type, len(content), self.settings.avatar_max_size_bytes)

        extension = EXTENSIONS_BY_MIME[file.content_type]
        if file.filename and "." in file.filename:
            given = file.filename.rsplit(".", 1)[-1].lower()
            if given in {"jpg", "jpeg", "png", "gif"}:
                extension = given
        storage_path = f"{user_id}-{secrets.token_hex(6)}.{extension}"

        bucket = self.client.storage.from_(self.settings.avatar_bucket)
        try:
            bucket.upload(
                path=storage_path,
                file=content,
                file_options={"content-type": file.content_type},
            )
        except Exception as e:
            logger.error("Avatar upload failed for user %s: %s", user_id, e)
            raise ExternalServiceError(f"Failed to upload avatar: {e}", upstream=Upstream.STORAGE) from e

        avatar_url = bucket.get_public_url(storage_path).rstrip("?")
        try:
            await self.profiles.set_avatar_url(user_id, avatar_url)
        except Exception:
            self._discard(storage_path)
            raise

        logger.info("Stored avatar %s for user %s", storage_path, user_id)
        return avatar_url

    def _discard(self, storage_path: str) -> None:
        # Removal failures are only logged
        try:
            self.client.storage.from_(self.settings.avatar_bucket).remove([storage_path])
        except Exception as e:
            logger.error("Could not remove orphaned avatar %s: %s", storage_path, e)
        else:
            logger.warning("Removed avatar %s after the profile update failed", storage_path)

    async def remove_avatar(self, user_id: UUID) -> None:
        """Delete the user's stored avatar and clear it from the profile.

        Args:
            user_id: The owning user.

        Raises:
            ExternalServiceError: If storage rejects the removal.
        """
        profile = await self.profiles.get_profile(user_id)
        if profile is None or not profile.avatar_url:
            return

        name = storage_name_from_url(profile.avatar_url)
        if name:
            try:
                self.client.storage.from_(self.settings.avatar_bucket).remove([name])
            except Exception as e:
                logger.error("Avatar removal failed for user %s: %s", user_id, e)
                raise ExternalServiceError(f"Failed to remove avatar: {e}", upstream=Upstream.STORAGE) from e

        await self.profiles.set_avatar_url(user_id, None)
        logger.info("Removed avatar for user %s", user_id)
