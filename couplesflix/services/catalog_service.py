"""Catalog service mapping TMDB responses onto typed catalog schemas."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable

from couplesflix.api.middleware.error_handler import ExternalServiceError
from couplesflix.core.config import get_settings
from couplesflix.core.tmdb import TMDbError, get_tmdb_client
from couplesflix.schemas.catalog import CatalogDetail, CatalogItem, CatalogPage, Genre
from couplesflix.schemas.common import Upstream

logger = logging.getLogger(__name__)

POSTER_SIZE = "w500"
BACKDROP_SIZE = "original"

# TMDB refuses page numbers above 500
MAX_DISPLAY_PAGES = 500

# Genres offered on the discover page (TMDB movie genre IDs, pt-BR names)
MOVIE_GENRES: list[Genre] = [
    Genre(id=28, name="Ação"),
    Genre(id=12, name="Aventura"),
    Genre(id=16, name="Animação"),
    Genre(id=35, name="Comédia"),
    Genre(id=80, name="Crime"),
    Genre(id=99, name="Documentário"),
    Genre(id=18, name="Drama"),
    Genre(id=10751, name="Família"),
    Genre(id=14, name="Fantasia"),
    Genre(id=36, name="História"),
    Genre(id=27, name="Terror"),
    Genre(id=10402, name="Música"),
    Genre(id=9648, name="Mistério"),
    Genre(id=10749, name="Romance"),
    Genre(id=878, name="Ficção Científica"),
    Genre(id=53, name="Thriller"),
    Genre(id=10752, name="Guerra"),
    Genre(id=37, name="Faroeste"),
]


def image_url(base_url: str, size: str, path: str | None) -> str | None:
    """Compose a TMDB CDN URL from a path fragment like '/abc.jpg'."""
    if not path:
        return None
    return f"{base_url.rstrip('/')}/{size}{path}"


def to_display_rating(vote_average: float | None) -> float:
    """Convert a 0-10 TMDB score to the 0-5 star scale, one decimal, half-up."""
    if not vote_average:
        return 0.0
    halved = Decimal(str(vote_average)) / 2
    return float(halved.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class CatalogService:
    """Read-only access to movie and TV metadata.

    Each operation is exactly one TMDB request. Failures of any kind are
    reported as a generic ExternalServiceError.
    """

    def __init__(self) -> None:
        """Initialize catalog service with the TMDB client."""
        self.client = get_tmdb_client()
        self.image_base_url = get_settings().tmdb_image_base_url

    def _fetch(self, operation: Callable[..., dict[str, Any]], *args: Any) -> dict[str, Any]:
        try:
            return operation(*args)
        except TMDbError as e:
            logger.warning("Catalog fetch failed: %s", e.message)
            raise ExternalServiceError("Failed to fetch catalog data", upstream=Upstream.TMDB) from e

    def _to_item(self, raw: dict[str, Any], media_type: str) -> dict[str, Any]:
        release_date = raw.get("release_date") or raw.get("first_air_date") or None
        vote_average = float(raw.get("vote_average") or 0.0)
        return {
            "id": raw["id"],
            "media_type": raw.get("media_type") or media_type,
            "title": raw.get("title") or raw.get("name") or "Untitled",
            "overview": raw.get("overview") or None,
            "poster_url": image_url(self.image_base_url, POSTER_SIZE, raw.get("poster_path")),
            "backdrop_url": image_url(self.image_base_url, BACKDROP_SIZE, raw.get("backdrop_path")),
            "release_date": release_date,
            "year": release_date[:4] if release_date else None,
            "genre_ids": raw.get("genre_ids") or [],
            "vote_average": vote_average,
            "display_rating": to_display_rating(vote_average),
        }

    def _to_page(self, data: dict[str, Any], media_type: str) -> CatalogPage:
        results = [
            CatalogItem(**self._to_item(raw, media_type))
            for raw in data.get("results") or []
            if raw.get("id") is not None
        ]
        return CatalogPage(
            page=data.get("page") or 1,
            results=results,
            total_pages=min(int(data.get("total_pages") or 0), MAX_DISPLAY_PAGES),
            total_results=int(data.get("total_results") or 0),
        )

    async def movies_by_genre(self, genre_id: int, page: int = 1) -> CatalogPage:
        """List popular movies tagged with a genre."""
        data = self._fetch(self.client.discover_movies, genre_id, page)
        return self._to_page(data, "movie")

    async def search_movies(self, query: str, page: int = 1) -> CatalogPage:
        """Free-text movie search. A blank query yields an empty page."""
        query = query.strip()
        if not query:
            return CatalogPage(page=1, results=[], total_pages=0, total_results=0)
        data = self._fetch(self.client.search_movies, query, page)
        return self._to_page(data, "movie")

    async def popular_movies(self, page: int = 1) -> CatalogPage:
        """List currently popular movies."""
        data = self._fetch(self.client.popular_movies, page)
        return self._to_page(data, "movie")

    async def popular_tv(self, page: int = 1) -> CatalogPage:
        """List currently popular TV shows."""
        data = self._fetch(self.client.popular_tv, page)
        return self._to_page(data, "tv")

    async def movie_detail(self, movie_id: int) -> CatalogDetail:
        """Fetch the full detail of one movie."""
        data = self._fetch(self.client.movie_details, movie_id)
        item = self._to_item(data, "movie")
        genres = [Genre(id=g["id"], name=g.get("name") or "") for g in data.get("genres") or []]
        item["genre_ids"] = [genre.id for genre in genres]
        return CatalogDetail(
            **item,
            genres=genres,
            runtime=data.get("runtime") or None,
            tagline=data.get("tagline") or None,
        )

    def genres(self) -> list[Genre]:
        """Genres offered for browsing."""
        return list(MOVIE_GENRES)
