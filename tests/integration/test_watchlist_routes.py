"""Integration tests for watchlist endpoints."""

from typing import Any
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

USER_ID = "550e8400-e29b-41d4-a716-446655440000"
ENTRY_ID = "770e8400-e29b-41d4-a716-446655440000"


def make_response(data: Any) -> MagicMock:
    response = MagicMock()
    response.data = data
    return response


def _row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": ENTRY_ID,
        "user_id": USER_ID,
        "tmdb_id": "550",
        "media_type": "movie",
        "title": "Clube da Luta",
        "poster_url": None,
        "backdrop_url": None,
        "overview": None,
        "year": "1999",
        "genres": [{"id": 18, "name": "Drama"}],
        "runtime": 139,
        "is_watched": False,
        "date_added": "2024-01-01T00:00:00Z",
        "date_watched": None,
        "user_comment": None,
        "user_rating": None,
    }
    row.update(overrides)
    return row


def _find(mock_supabase_client: MagicMock) -> MagicMock:
    return (
        mock_supabase_client.table.return_value.select.return_value.eq.return_value.eq.return_value.limit.return_value.execute
    )


class TestListWatchlist:
    """Tests for GET /api/v1/watchlist endpoint."""

    def test_lists_entries_sorted_by_rating(
        self, auth_client: TestClient, mock_supabase_client: MagicMock
    ) -> None:
        mock_supabase_client.table.return_value.select.return_value.eq.return_value.execute.return_value = (
            make_response(
                [
                    _row(id="11111111-1111-1111-1111-111111111111", title="A", user_rating=None),
                    _row(id="22222222-2222-2222-2222-222222222222", title="B", user_rating=5),
                    _row(id="33333333-3333-3333-3333-333333333333", title="C", user_rating=2),
                ]
            )
        )

        response = auth_client.get("/api/v1/watchlist", params={"sort": "rating"})

        assert response.status_code == 200
        assert [entry["title"] for entry in response.json()] == ["B", "C", "A"]

    def test_filters_by_genre(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        mock_supabase_client.table.return_value.select.return_value.eq.return_value.execute.return_value = (
            make_response(
                [
                    _row(id="11111111-1111-1111-1111-111111111111", title="Ação", genres=[{"id": 28, "name": "Ação"}]),
                    _row(id="22222222-2222-2222-2222-222222222222", title="Drama"),
                ]
            )
        )

        response = auth_client.get("/api/v1/watchlist", params={"genre_id": 28})

        assert [entry["title"] for entry in response.json()] == ["Ação"]

    def test_rejects_unknown_sort(self, auth_client: TestClient) -> None:
        response = auth_client.get("/api/v1/watchlist", params={"sort": "popularity"})

        assert response.status_code == 422

    def test_returns_401_without_auth(self, client: TestClient) -> None:
        assert client.get("/api/v1/watchlist").status_code == 401


class TestGetEntry:
    """Tests for GET /api/v1/watchlist/{tmdb_id} endpoint."""

    def test_returns_null_when_not_added(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        _find(mock_supabase_client).return_value = make_response([])

        response = auth_client.get("/api/v1/watchlist/550")

        assert response.status_code == 200
        assert response.json() is None

    def test_returns_entry(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        _find(mock_supabase_client).return_value = make_response([_row(user_rating=4)])

        response = auth_client.get("/api/v1/watchlist/550")

        assert response.json()["user_rating"] == 4
        assert response.json()["tmdb_id"] == 550


class TestAddOrUpdate:
    """Tests for PUT /api/v1/watchlist/{tmdb_id} endpoint."""

    def test_adds_movie(
        self,
        auth_client: TestClient,
        mock_supabase_client: MagicMock,
        mock_tmdb_client: MagicMock,
    ) -> None:
        mock_tmdb_client.movie_details.return_value = {
            "id": 550,
            "title": "Clube da Luta",
            "release_date": "1999-10-15",
            "genres": [{"id": 18, "name": "Drama"}],
            "runtime": 139,
            "vote_average": 8.4,
        }
        _find(mock_supabase_client).return_value = make_response([])
        mock_supabase_client.table.return_value.insert.return_value.execute.return_value = make_response(
            [_row(user_rating=5, user_comment="Incrível")]
        )

        response = auth_client.put(
            "/api/v1/watchlist/550",
            json={"is_watched": False, "user_rating": 5, "user_comment": "Incrível"},
        )

        assert response.status_code == 200
        assert response.json()["user_rating"] == 5
        mock_tmdb_client.movie_details.assert_called_once_with(550)
        payload = mock_supabase_client.table.return_value.insert.call_args[0][0]
        assert payload["genres"] == [{"id": 18, "name": "Drama"}]

    def test_rejects_rating_above_five(self, auth_client: TestClient, mock_tmdb_client: MagicMock) -> None:
        response = auth_client.put("/api/v1/watchlist/550", json={"user_rating": 6})

        assert response.status_code == 422
        mock_tmdb_client.movie_details.assert_not_called()

    def test_tmdb_failure_on_new_entry_returns_502(
        self,
        auth_client: TestClient,
        mock_supabase_client: MagicMock,
        mock_tmdb_client: MagicMock,
    ) -> None:
        from couplesflix.core.tmdb import TMDbError

        _find(mock_supabase_client).return_value = make_response([])
        mock_tmdb_client.movie_details.side_effect = TMDbError("TMDB returned status 500", status_code=500)

        response = auth_client.put("/api/v1/watchlist/550", json={"is_watched": True})

        assert response.status_code == 502
        assert response.json()["message"] == "Failed to fetch catalog data"
        assert response.json()["upstream"] == "tmdb"
        mock_supabase_client.table.return_value.insert.assert_not_called()

    def test_updates_existing_entry_while_tmdb_is_down(
        self,
        auth_client: TestClient,
        mock_supabase_client: MagicMock,
        mock_tmdb_client: MagicMock,
    ) -> None:
        from couplesflix.core.tmdb import TMDbError

        _find(mock_supabase_client).return_value = make_response([_row()])
        mock_tmdb_client.movie_details.side_effect = TMDbError("TMDB request failed", status_code=503)

        response = auth_client.put(
            "/api/v1/watchlist/550",
            json={"is_watched": True, "user_rating": 4, "user_comment": "Rever"},
        )

        assert response.status_code == 200
        assert response.json()["user_rating"] == 4
        assert response.json()["user_comment"] == "Rever"
        assert response.json()["is_watched"] is True
        mock_tmdb_client.movie_details.assert_not_called()


class TestEntryActions:
    """Tests for toggle and delete endpoints."""

    def test_toggle_marks_watched(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        _find(mock_supabase_client).return_value = make_response([_row()])

        response = auth_client.patch(f"/api/v1/watchlist/entries/{ENTRY_ID}/watched")

        assert response.status_code == 200
        assert response.json()["is_watched"] is True
        assert response.json()["date_watched"] is not None

    def test_toggle_unknown_entry_returns_404(
        self, auth_client: TestClient, mock_supabase_client: MagicMock
    ) -> None:
        _find(mock_supabase_client).return_value = make_response([])

        response = auth_client.patch(f"/api/v1/watchlist/entries/{ENTRY_ID}/watched")

        assert response.status_code == 404

    def test_delete_returns_204(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        delete_chain = mock_supabase_client.table.return_value.delete.return_value
        delete_chain.eq.return_value.eq.return_value.execute.return_value = make_response([_row()])

        response = auth_client.delete(f"/api/v1/watchlist/entries/{ENTRY_ID}")

        assert response.status_code == 204

    def test_delete_unknown_returns_404(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        delete_chain = mock_supabase_client.table.return_value.delete.return_value
        delete_chain.eq.return_value.eq.return_value.execute.return_value = make_response([])

        response = auth_client.delete(f"/api/v1/watchlist/entries/{ENTRY_ID}")

        assert response.status_code == 404
