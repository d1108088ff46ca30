"""Profile model type definitions for database operations."""

from typing import TypedDict


class Profile(TypedDict):
    """Profile table row representation.

    Created at signup by the backend together with its connection code.
    The `id` equals the auth user ID.
    """

    id: str
    username: str
    email: str
    connection_code: str
    avatar_url: str | None
    created_at: str


class ProfileUpdate(TypedDict, total=False):
    """Columns the owning user may change."""

    username: str
    avatar_url: str | None
