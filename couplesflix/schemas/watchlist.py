"""Watchlist Pydantic schemas for API request/response models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from couplesflix.schemas.catalog import Genre


class WatchlistSort(str, Enum):
    """Orderings offered by the watchlist page."""

    TITLE = "title"
    RATING = "rating"
    DATE_WATCHED = "date_watched"
    DATE_ADDED = "date_added"


class WatchlistFilter(BaseModel):
    """Optional filters applied when listing a watchlist."""

    is_watched: bool | None = Field(default=None, description="Only watched (true) or unwatched (false) entries")
    genre_id: int | None = Field(default=None, description="Only entries tagged with this TMDB genre ID")


class WatchlistUpsert(BaseModel):
    """Body for adding a title to the watchlist or updating the existing entry."""

    is_watched: bool = Field(default=False, description="Mark the title as watched")
    user_rating: int | None = Field(default=None, ge=0, le=5, description="Star rating 1-5; 0 clears it")
    user_comment: str | None = Field(default=None, max_length=2000, description="Free-text comment")


class WatchlistEntryResponse(BaseModel):
    """A watchlist row validated from the backing table."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Entry unique identifier")
    user_id: UUID = Field(description="Owning user")
    tmdb_id: int = Field(description="TMDB ID of the title")
    media_type: str = Field(default="movie", description="'movie' or 'tv'")
    title: str = Field(description="Title at the time it was added")
    poster_url: str | None = Field(default=None)
    backdrop_url: str | None = Field(default=None)
    overview: str | None = Field(default=None)
    year: str | None = Field(default=None)
    genres: list[Genre] = Field(default_factory=list)
    runtime: int | None = Field(default=None, description="Runtime in minutes")
    is_watched: bool = Field(default=False)
    date_added: datetime = Field(description="When the entry was created")
    date_watched: datetime | None = Field(default=None, description="When it was last marked watched")
    user_comment: str | None = Field(default=None)
    user_rating: int | None = Field(default=None, description="Star rating 1-5")

    @field_validator("genres", mode="before")
    @classmethod
    def _null_genres(cls, value: object) -> object:
        return value or []

    def has_genre(self, genre_id: int) -> bool:
        """Check whether any of the entry's genres carries `genre_id`."""
        return any(genre.id == genre_id for genre in self.genres)
