"""TMDB REST client with timing and single-attempt error handling."""

import logging
import time
from functools import lru_cache
from typing import Any

import requests

from couplesflix.core.config import get_settings

logger = logging.getLogger(__name__)

# Latency thresholds for logging (milliseconds)
SLOW_CALL_THRESHOLD_MS = 1500
VERY_SLOW_CALL_THRESHOLD_MS = 4000


class TMDbError(Exception):
    """A TMDB request failed (network error or non-success status)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TMDbClient:
    """Thin wrapper over the TMDB v3 API.

    Every call is a single GET carrying the API key and language. There is
    no retry: a failed call raises TMDbError and the caller decides what to
    show.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        language: str,
        timeout: float,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout
        self._session = session or requests.Session()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        query = {**(params or {}), "api_key": self.api_key, "language": self.language}
        url = f"{self.base_url}{path}"
        start_time = time.perf_counter()
        status_code: int | None = None

        try:
            response = self._session.get(url, params=query, timeout=self.timeout)
            status_code = response.status_code
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            logger.error("TMDB request %s failed with status %s", path, status_code)
            raise TMDbError(f"TMDB returned status {status_code}", status_code=status_code) from e
        except requests.RequestException as e:
            logger.error("TMDB request %s failed: %s", path, e)
            raise TMDbError(f"TMDB request failed: {type(e).__name__}") from e
        finally:
            latency_ms = (time.perf_counter() - start_time) * 1000
            log_msg = f"TMDB GET {path} - {status_code} - {latency_ms:.2f}ms"
            if latency_ms > VERY_SLOW_CALL_THRESHOLD_MS:
                logger.warning(f"VERY SLOW TMDB CALL: {log_msg}")
            elif latency_ms > SLOW_CALL_THRESHOLD_MS:
                logger.info(f"SLOW TMDB CALL: {log_msg}")
            else:
                logger.debug(log_msg)

    def discover_movies(self, genre_id: int, page: int = 1) -> dict[str, Any]:
        return self._get(
            "/discover/movie",
            {
                "with_genres": genre_id,
                "page": page,
                "include_adult": "false",
                "sort_by": "popularity.desc",
            },
        )

    def search_movies(self, query: str, page: int = 1) -> dict[str, Any]:
        return self._get(
            "/search/movie",
            {"query": query, "page": page, "include_adult": "false"},
        )

    def popular_movies(self, page: int = 1) -> dict[str, Any]:
        return self._get("/movie/popular", {"page": page})

    def popular_tv(self, page: int = 1) -> dict[str, Any]:
        return self._get("/tv/popular", {"page": page})

    def movie_details(self, movie_id: int) -> dict[str, Any]:
        return self._get(f"/movie/{movie_id}")


@lru_cache
def get_tmdb_client() -> TMDbClient:
    """Get cached TMDB client singleton built from settings."""
    settings = get_settings()
    return TMDbClient(
        api_key=settings.tmdb_api_key,
        base_url=settings.tmdb_base_url,
        language=settings.tmdb_language,
        timeout=settings.tmdb_timeout_seconds,
    )


async def check_tmdb_connection() -> dict[str, Any]:
    """Check that TMDB answers with the configured key.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        get_tmdb_client().popular_movies(page=1)
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}
