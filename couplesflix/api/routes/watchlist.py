"""Watchlist API routes."""

from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from couplesflix.api.deps import CurrentUser
from couplesflix.schemas.catalog import Genre
from couplesflix.schemas.watchlist import (
    WatchlistEntryResponse,
    WatchlistFilter,
    WatchlistSort,
    WatchlistUpsert,
)
from couplesflix.services.watchlist_service import WatchlistService

router = APIRouter(prefix="/watchlist", tags=["watchlist"])


@router.get(
    "",
    response_model=list[WatchlistEntryResponse],
    summary="List my watchlist",
    description="Returns every entry matching the filters, in the requested order. No pagination.",
)
async def list_my_watchlist(
    user: CurrentUser,
    is_watched: bool | None = Query(default=None, description="Filter by watched state"),
    genre_id: int | None = Query(default=None, description="Filter by TMDB genre ID"),
    sort: WatchlistSort = Query(default=WatchlistSort.DATE_ADDED, description="Ordering"),
) -> list[WatchlistEntryResponse]:
    """List the caller's watchlist."""
    filters = WatchlistFilter(is_watched=is_watched, genre_id=genre_id)
    return await WatchlistService().list_entries(user.user_id, filters, sort)


@router.get(
    "/genres",
    response_model=list[Genre],
    summary="List genres in my watchlist",
)
async def list_my_watchlist_genres(user: CurrentUser) -> list[Genre]:
    """Distinct genres across the caller's entries, for the genre filter."""
    return await WatchlistService().list_genres(user.user_id)


@router.get(
    "/{tmdb_id}",
    response_model=WatchlistEntryResponse | None,
    summary="Get my entry for a title",
    description="Returns null when the title has not been added.",
)
async def get_my_entry(tmdb_id: int, user: CurrentUser) -> WatchlistEntryResponse | None:
    """Look up the caller's entry for a title."""
    return await WatchlistService().get_entry(user.user_id, tmdb_id)


@router.put(
    "/{tmdb_id}",
    response_model=WatchlistEntryResponse,
    summary="Add or update a title",
    description=(
        "Adds the movie to the watchlist, or overwrites rating, comment and watched state. "
        "Only a new entry needs TMDB."
    ),
)
async def add_or_update_entry(
    tmdb_id: int,
    data: WatchlistUpsert,
    user: CurrentUser,
) -> WatchlistEntryResponse:
    """Add a movie to the caller's watchlist or update the existing entry."""
    return await WatchlistService().add_or_update(
        user.user_id,
        tmdb_id,
        is_watched=data.is_watched,
        rating=data.user_rating,
        comment=data.user_comment,
    )


@router.patch(
    "/entries/{entry_id}/watched",
    response_model=WatchlistEntryResponse,
    summary="Toggle watched",
)
async def toggle_entry_watched(entry_id: UUID, user: CurrentUser) -> WatchlistEntryResponse:
    """Flip an entry between watched and want-to-watch."""
    return await WatchlistService().toggle_watched(user.user_id, entry_id)


@router.delete(
    "/entries/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove an entry",
)
async def remove_entry(entry_id: UUID, user: CurrentUser) -> Response:
    """Delete one of the caller's entries."""
    await WatchlistService().remove(user.user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
