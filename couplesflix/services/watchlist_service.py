"""Watchlist business logic service."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from couplesflix.api.middleware.error_handler import NotFoundError
from couplesflix.core.supabase import get_supabase_client
from couplesflix.models.watchlist import WatchlistCreate, WatchlistEntry, WatchlistUpdate
from couplesflix.schemas.catalog import CatalogDetail, Genre
from couplesflix.schemas.watchlist import (
    WatchlistEntryResponse,
    WatchlistFilter,
    WatchlistSort,
)
from couplesflix.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

TABLE = "watchlist"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_rating(rating: int | None) -> int | None:
    # 0 stars means "not rated"
    return rating if rating else None


def _normalize_comment(comment: str | None) -> str | None:
    if comment is None:
        return None
    return comment.strip() or None


def filter_by_genre(entries: list[WatchlistEntryResponse], genre_id: int) -> list[WatchlistEntryResponse]:
    """Keep entries whose genre list contains `genre_id`."""
    return [entry for entry in entries if entry.has_genre(genre_id)]


def _descending_nulls_last(entries: list[WatchlistEntryResponse], field: str) -> list[WatchlistEntryResponse]:
    present = [entry for entry in entries if getattr(entry, field) is not None]
    missing = [entry for entry in entries if getattr(entry, field) is None]
    return sorted(present, key=lambda entry: getattr(entry, field), reverse=True) + missing


def sort_entries(entries: list[WatchlistEntryResponse], sort: WatchlistSort) -> list[WatchlistEntryResponse]:
    """Order entries for display.

    - title: ascending, case-insensitive
    - rating: user_rating descending, unrated last
    - date_watched: most recent first, never-watched last
    - date_added: most recent first
    """
    if sort == WatchlistSort.TITLE:
        return sorted(entries, key=lambda entry: entry.title.casefold())
    if sort == WatchlistSort.RATING:
        return _descending_nulls_last(entries, "user_rating")
    if sort == WatchlistSort.DATE_WATCHED:
        return _descending_nulls_last(entries, "date_watched")
    return sorted(entries, key=lambda entry: entry.date_added, reverse=True)


class WatchlistService:
    """Service for a user's watchlist entries.

    Entries are keyed by (user_id, tmdb_id) by convention only; the table
    has no uniqueness constraint, so writes look the entry up first.
    """

    def __init__(self) -> None:
        """Initialize watchlist service with Supabase client."""
        self.client = get_supabase_client()

    async def _find_row(self, user_id: UUID, column: str, value: str) -> WatchlistEntry | None:
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq(column, value)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    async def get_entry(self, user_id: UUID, tmdb_id: int) -> WatchlistEntryResponse | None:
        """Get the user's entry for a title.

        Args:
            user_id: The owning user.
            tmdb_id: TMDB ID of the title.

        Returns:
            WatchlistEntryResponse | None: The entry, or None if the title
            has not been added yet.
        """
        row = await self._find_row(user_id, "tmdb_id", str(tmdb_id))
        return WatchlistEntryResponse.model_validate(row) if row else None

    async def add_or_update(
        self,
        user_id: UUID,
        tmdb_id: int,
        is_watched: bool,
        rating: int | None = None,
        comment: str | None = None,
        detail: CatalogDetail | None = None,
    ) -> WatchlistEntryResponse:
        """Add a title to the watchlist, or overwrite the existing entry.

        When an entry exists its rating, comment and watched state are
        replaced and the merged record is returned; TMDB is not consulted.
        Otherwise a new entry is created from the catalog detail with
        `date_added` set to now, fetching the movie detail when none is
        given. Marking watched stamps `date_watched` with the current time;
        unmarking clears it.

        Args:
            user_id: The owning user.
            tmdb_id: TMDB ID of the title.
            is_watched: Watched state to store.
            rating: Star rating 1-5, 0 or None for no rating.
            comment: Free-text comment.
            detail: Catalog detail for a new entry, if already loaded.

        Returns:
            WatchlistEntryResponse: The stored entry.

        Raises:
            ExternalServiceError: If a new entry's detail cannot be fetched.
        """
        now = _utcnow()
        mutable: WatchlistUpdate = {
            "is_watched": is_watched,
            "date_watched": now.isoformat() if is_watched else None,
            "user_rating": _normalize_rating(rating),
            "user_comment": _normalize_comment(comment),
        }

        existing = await self._find_row(user_id, "tmdb_id", str(tmdb_id))

        if existing:
            self.client.table(TABLE).update(mutable).eq("id", existing["id"]).execute()
            logger.info("Updated watchlist entry %s for user %s", existing["id"], user_id)
            return WatchlistEntryResponse.model_validate({**existing, **mutable})

        if detail is None:
            detail = await CatalogService().movie_detail(tmdb_id)

        row: WatchlistCreate = {
            "user_id": str(user_id),
            "tmdb_id": str(tmdb_id),
            "media_type": detail.media_type,
            "title": detail.title,
            "poster_url": detail.poster_url,
            "backdrop_url": detail.backdrop_url,
            "overview": detail.overview,
            "year": detail.year,
            "genres": [genre.model_dump() for genre in detail.genres],
            "runtime": detail.runtime,
            "date_added": now.isoformat(),
            **mutable,
        }

        response = self.client.table(TABLE).insert(row).execute()
        created: WatchlistEntry = response.data[0]
        logger.info("Added title %s to watchlist of user %s", tmdb_id, user_id)
        return WatchlistEntryResponse.model_validate(created)

    async def toggle_watched(self, user_id: UUID, entry_id: UUID) -> WatchlistEntryResponse:
        """Flip an entry's watched state.

        Rating and comment are left as they are.

        Args:
            user_id: The owning user.
            entry_id: The entry's UUID.

        Returns:
            WatchlistEntryResponse: The updated entry.

        Raises:
            NotFoundError: If the entry does not exist or is not the user's.
        """
        existing = await self._find_row(user_id, "id", str(entry_id))
        if not existing:
            raise NotFoundError("Watchlist entry not found")

        watched = not existing.get("is_watched", False)
        update_data: WatchlistUpdate = {
            "is_watched": watched,
            "date_watched": _utcnow().isoformat() if watched else None,
        }

        (
            self.client.table(TABLE)
            .update(update_data)
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )

        return WatchlistEntryResponse.model_validate({**existing, **update_data})

    async def remove(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry owned by the user.

        Args:
            user_id: The owning user.
            entry_id: The entry's UUID.

        Raises:
            NotFoundError: If nothing owned by the user was deleted.
        """
        response = (
            self.client.table(TABLE)
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )

        if not response.data:
            raise NotFoundError("Watchlist entry not found")

        logger.info("Removed watchlist entry %s for user %s", entry_id, user_id)

    async def list_entries(
        self,
        user_id: UUID,
        filters: WatchlistFilter | None = None,
        sort: WatchlistSort = WatchlistSort.DATE_ADDED,
    ) -> list[WatchlistEntryResponse]:
        """List the user's whole watchlist, filtered and ordered.

        Args:
            user_id: The owning user.
            filters: Optional watched-state and genre filters.
            sort: Ordering to apply.

        Returns:
            list[WatchlistEntryResponse]: Matching entries, unpaginated.
        """
        filters = filters or WatchlistFilter()

        query = self.client.table(TABLE).select("*").eq("user_id", str(user_id))
        if filters.is_watched is not None:
            query = query.eq("is_watched", filters.is_watched)

        response = query.execute()
        entries = [WatchlistEntryResponse.model_validate(row) for row in response.data or []]

        if filters.genre_id is not None:
            entries = filter_by_genre(entries, filters.genre_id)

        return sort_entries(entries, sort)

    async def list_genres(self, user_id: UUID) -> list[Genre]:
        """Distinct genres across the user's entries, ordered by name.

        Args:
            user_id: The owning user.

        Returns:
            list[Genre]: Genres usable as list filters.
        """
        response = (
            self.client.table(TABLE)
            .select("genres")
            .eq("user_id", str(user_id))
            .execute()
        )

        seen: dict[int, Genre] = {}
        for row in response.data or []:
            for raw in row.get("genres") or []:
                if isinstance(raw, dict) and raw.get("id") is not None and raw.get("name"):
                    seen.setdefault(int(raw["id"]), Genre(id=raw["id"], name=raw["name"]))

        return sorted(seen.values(), key=lambda genre: genre.name.casefold())
