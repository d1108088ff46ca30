"""Watchlist model type definitions for database operations."""

from typing import Any, TypedDict


class WatchlistEntry(TypedDict):
    """Watchlist table row representation.

    `tmdb_id` is a text column; `genres` is JSON holding a list of
    `{"id": int, "name": str}` objects.
    """

    id: str
    user_id: str
    tmdb_id: str
    media_type: str
    title: str
    poster_url: str | None
    backdrop_url: str | None
    overview: str | None
    year: str | None
    genres: list[dict[str, Any]] | None
    runtime: int | None
    is_watched: bool
    date_added: str
    date_watched: str | None
    user_comment: str | None
    user_rating: int | None


class WatchlistCreate(TypedDict, total=False):
    """Data written when a title is first added."""

    user_id: str
    tmdb_id: str
    media_type: str
    title: str
    poster_url: str | None
    backdrop_url: str | None
    overview: str | None
    year: str | None
    genres: list[dict[str, Any]]
    runtime: int | None
    is_watched: bool
    date_added: str
    date_watched: str | None
    user_comment: str | None
    user_rating: int | None


class WatchlistUpdate(TypedDict, total=False):
    """Mutable columns of an existing entry."""

    is_watched: bool
    date_watched: str | None
    user_comment: str | None
    user_rating: int | None
