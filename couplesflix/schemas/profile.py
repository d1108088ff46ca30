"""Profile Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Schema for updating a profile. Only the username is user-editable."""

    model_config = ConfigDict(from_attributes=True)

    username: str = Field(min_length=1, max_length=50, description="New display username")


class ProfileResponse(BaseModel):
    """Schema for profile API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Profile identifier, equal to the auth user ID")
    username: str = Field(description="Display username")
    email: str = Field(description="User email address")
    connection_code: str = Field(description="Shareable pairing code (MP-XXXXXX)")
    avatar_url: str | None = Field(default=None, description="Public URL of the avatar image")
    created_at: datetime = Field(description="Profile creation timestamp")


class AvatarResponse(BaseModel):
    """Result of an avatar upload or removal."""

    model_config = ConfigDict(from_attributes=True)

    avatar_url: str | None = Field(default=None, description="Public URL of the new avatar, null when removed")
