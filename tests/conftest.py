"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from contextlib import ExitStack
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPABASE_SIGNING_KEY_JWK", "test-signing-key-jwk")
os.environ.setdefault("TMDB_API_KEY", "test-tmdb-key")

TEST_USER_ID = UUID("550e8400-e29b-41d4-a716-446655440000")

# Every module that binds get_supabase_client at import time
SUPABASE_CLIENT_TARGETS = (
    "couplesflix.core.supabase.get_supabase_client",
    "couplesflix.services.profile_service.get_supabase_client",
    "couplesflix.services.avatar_service.get_supabase_client",
    "couplesflix.services.connection_service.get_supabase_client",
    "couplesflix.services.watchlist_service.get_supabase_client",
)

TMDB_CLIENT_TARGETS = (
    "couplesflix.core.tmdb.get_tmdb_client",
    "couplesflix.services.catalog_service.get_tmdb_client",
)


def make_response(data: Any) -> MagicMock:
    """Build a fake PostgREST response with `.data` set."""
    response = MagicMock()
    response.data = data
    return response


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache."""
    from couplesflix.core.config import get_settings

    get_settings.cache_clear()
    settings = get_settings()
    yield settings
    get_settings.cache_clear()


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked Supabase client wired into every service module."""
    mock_client = MagicMock()
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        make_response([])
    )

    with ExitStack() as stack:
        for target in SUPABASE_CLIENT_TARGETS:
            stack.enter_context(patch(target, return_value=mock_client))
        yield mock_client


@pytest.fixture
def mock_tmdb_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked TMDB client wired into the catalog service."""
    mock_client = MagicMock()
    mock_client.popular_movies.return_value = {"page": 1, "results": [], "total_pages": 1, "total_results": 0}

    with ExitStack() as stack:
        for target in TMDB_CLIENT_TARGETS:
            stack.enter_context(patch(target, return_value=mock_client))
        yield mock_client


@pytest.fixture
def test_user() -> Any:
    """The authenticated user used by route tests."""
    from couplesflix.schemas.auth import UserContext

    return UserContext(user_id=TEST_USER_ID, email="test@example.com", role="authenticated")


@pytest.fixture
def client(
    mock_supabase_client: MagicMock,
    mock_tmdb_client: MagicMock,
) -> Generator[TestClient, None, None]:
    """Provide an anonymous test client with external services mocked."""
    from couplesflix.main import app

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client: TestClient, test_user: Any) -> TestClient:
    """Provide a test client whose requests are authenticated as `test_user`."""
    from couplesflix.api.deps import get_current_user
    from couplesflix.main import app

    app.dependency_overrides[get_current_user] = lambda: test_user
    return client
