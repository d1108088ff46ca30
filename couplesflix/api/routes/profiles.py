"""Profile API routes."""

from fastapi import APIRouter, File, UploadFile, status

from couplesflix.api.deps import CurrentUser
from couplesflix.api.middleware.error_handler import NotFoundError
from couplesflix.schemas.profile import AvatarResponse, ProfileResponse, ProfileUpdate
from couplesflix.services.avatar_service import AvatarService
from couplesflix.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get current user's profile",
    description="Returns the authenticated user's profile, including their connection code.",
)
async def get_my_profile(user: CurrentUser) -> ProfileResponse:
    """Get the authenticated user's profile.

    Raises:
        NotFoundError: If the profile row does not exist yet.
    """
    profile = await ProfileService().get_profile(user.user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


@router.put(
    "/me",
    response_model=ProfileResponse,
    summary="Update current user's profile",
    description="Changes the authenticated user's username.",
)
async def update_my_profile(data: ProfileUpdate, user: CurrentUser) -> ProfileResponse:
    """Update the authenticated user's username."""
    profile = await ProfileService().update_profile(user.user_id, data)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


@router.post(
    "/me/avatar",
    response_model=AvatarResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload avatar",
    responses={
        201: {"description": "Avatar stored"},
        413: {"description": "Request body too large"},
        422: {"description": "Invalid file type or file too large"},
        502: {"description": "Storage failed"},
    },
)
async def upload_my_avatar(
    user: CurrentUser,
    file: UploadFile = File(..., description="Avatar image (JPG, PNG or GIF, max 5MB)"),
) -> AvatarResponse:
    """Upload a new profile picture and return its public URL."""
    avatar_url = await AvatarService().upload_avatar(user.user_id, file)
    return AvatarResponse(avatar_url=avatar_url)


@router.delete(
    "/me/avatar",
    response_model=AvatarResponse,
    summary="Remove avatar",
)
async def remove_my_avatar(user: CurrentUser) -> AvatarResponse:
    """Delete the stored profile picture."""
    await AvatarService().remove_avatar(user.user_id)
    return AvatarResponse(avatar_url=None)
