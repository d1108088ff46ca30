"""Catalog API routes backed by TMDB."""

from typing import Annotated

from fastapi import APIRouter, Query

from couplesflix.schemas.catalog import CatalogDetail, CatalogPage, Genre
from couplesflix.services.catalog_service import MAX_DISPLAY_PAGES, CatalogService

router = APIRouter(prefix="/catalog", tags=["catalog"])

Page = Annotated[int, Query(ge=1, le=MAX_DISPLAY_PAGES, description="Page number")]


@router.get("/genres", response_model=list[Genre], summary="List browsable genres")
async def list_genres() -> list[Genre]:
    """Genres offered on the discover page."""
    return CatalogService().genres()


@router.get("/genres/{genre_id}", response_model=CatalogPage, summary="Movies by genre")
async def movies_by_genre(genre_id: int, page: Page = 1) -> CatalogPage:
    """Popular movies tagged with a genre."""
    return await CatalogService().movies_by_genre(genre_id, page)


@router.get("/search", response_model=CatalogPage, summary="Search movies")
async def search_movies(
    query: str = Query(default="", max_length=200, description="Free-text query"),
    page: Page = 1,
) -> CatalogPage:
    """Search movies by title. An empty query returns an empty page."""
    return await CatalogService().search_movies(query, page)


@router.get("/popular", response_model=CatalogPage, summary="Popular movies")
async def popular_movies(page: Page = 1) -> CatalogPage:
    """Currently popular movies."""
    return await CatalogService().popular_movies(page)


@router.get("/tv/popular", response_model=CatalogPage, summary="Popular TV shows")
async def popular_tv(page: Page = 1) -> CatalogPage:
    """Currently popular TV shows."""
    return await CatalogService().popular_tv(page)


@router.get("/movies/{movie_id}", response_model=CatalogDetail, summary="Movie detail")
async def movie_detail(movie_id: int) -> CatalogDetail:
    """Full detail of one movie."""
    return await CatalogService().movie_detail(movie_id)
