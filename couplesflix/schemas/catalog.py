"""Catalog Pydantic schemas for TMDB-backed listings and details."""

from pydantic import BaseModel, ConfigDict, Field


class Genre(BaseModel):
    """A TMDB genre as stored on catalog details and watchlist entries."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="TMDB genre ID")
    name: str = Field(default="", description="Localized genre name")


class CatalogItem(BaseModel):
    """A movie or TV show in a listing. Read-only, never persisted."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="TMDB ID")
    media_type: str = Field(default="movie", description="'movie' or 'tv'")
    title: str = Field(description="Movie title or show name")
    overview: str | None = Field(default=None, description="Synopsis")
    poster_url: str | None = Field(default=None, description="Poster image URL (w500)")
    backdrop_url: str | None = Field(default=None, description="Backdrop image URL (original size)")
    release_date: str | None = Field(default=None, description="Release or first-air date (YYYY-MM-DD)")
    year: str | None = Field(default=None, description="Release year")
    genre_ids: list[int] = Field(default_factory=list, description="TMDB genre IDs")
    vote_average: float = Field(default=0.0, description="TMDB rating on a 0-10 scale")
    display_rating: float = Field(default=0.0, description="Rating on a 0-5 scale, one decimal")


class CatalogPage(BaseModel):
    """One page of catalog results."""

    model_config = ConfigDict(from_attributes=True)

    page: int = Field(default=1, description="Current page number")
    results: list[CatalogItem] = Field(default_factory=list, description="Items on this page")
    total_pages: int = Field(default=0, description="Number of pages available, capped at 500")
    total_results: int = Field(default=0, description="Total matching items reported by TMDB")


class CatalogDetail(CatalogItem):
    """Full movie detail used by the title page and when adding to the watchlist."""

    genres: list[Genre] = Field(default_factory=list, description="Genres with names")
    runtime: int | None = Field(default=None, description="Runtime in minutes")
    tagline: str | None = Field(default=None, description="Marketing tagline")
