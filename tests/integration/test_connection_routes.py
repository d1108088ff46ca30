"""Integration tests for partner connection endpoints."""

from typing import Any
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

USER_ID = "550e8400-e29b-41d4-a716-446655440000"
PARTNER_ID = "660e8400-e29b-41d4-a716-446655440000"

PARTNER_PROFILE = {
    "id": PARTNER_ID,
    "username": "joao",
    "email": "joao@example.com",
    "connection_code": "MP-ZX98YW",
    "avatar_url": None,
    "created_at": "2024-01-01T00:00:00Z",
}

CONNECTION = {
    "id": "880e8400-e29b-41d4-a716-446655440000",
    "user_id": USER_ID,
    "partner_id": PARTNER_ID,
    "status": "connected",
    "created_at": "2024-01-02T00:00:00Z",
}


def make_response(data: Any) -> MagicMock:
    response = MagicMock()
    response.data = data
    return response


def _profile_lookup(mock_supabase_client: MagicMock) -> MagicMock:
    return mock_supabase_client.table.return_value.select.return_value.eq.return_value.limit.return_value.execute


def _connection_lookup(mock_supabase_client: MagicMock) -> MagicMock:
    return mock_supabase_client.table.return_value.select.return_value.or_.return_value.limit.return_value.execute


class TestGetMyConnection:
    """Tests for GET /api/v1/connections/me endpoint."""

    def test_unpaired_returns_nulls(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        _connection_lookup(mock_supabase_client).return_value = make_response([])

        response = auth_client.get("/api/v1/connections/me")

        assert response.status_code == 200
        assert response.json() == {"connection": None, "partner": None}

    def test_paired_returns_partner(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        _connection_lookup(mock_supabase_client).return_value = make_response([CONNECTION])
        _profile_lookup(mock_supabase_client).return_value = make_response([PARTNER_PROFILE])

        response = auth_client.get("/api/v1/connections/me")

        assert response.status_code == 200
        data = response.json()
        assert data["connection"]["partner_id"] == PARTNER_ID
        assert data["partner"]["username"] == "joao"

    def test_returns_401_without_auth(self, client: TestClient) -> None:
        assert client.get("/api/v1/connections/me").status_code == 401


class TestConnect:
    """Tests for POST /api/v1/connections endpoint."""

    def test_connects_with_valid_code(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        _profile_lookup(mock_supabase_client).return_value = make_response([PARTNER_PROFILE])
        _connection_lookup(mock_supabase_client).return_value = make_response([])
        mock_supabase_client.table.return_value.insert.return_value.execute.return_value = make_response(
            [CONNECTION]
        )

        response = auth_client.post("/api/v1/connections", json={"partner_code": "MP-ZX98YW"})

        assert response.status_code == 201
        assert response.json()["status"] == "connected"

    def test_malformed_code_returns_422(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        response = auth_client.post("/api/v1/connections", json={"partner_code": "MP-AB12"})

        assert response.status_code == 422
        assert "MP-XXXXXX" in response.json()["message"]
        mock_supabase_client.table.assert_not_called()

    def test_unknown_code_returns_404(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        _profile_lookup(mock_supabase_client).return_value = make_response([])

        response = auth_client.post("/api/v1/connections", json={"partner_code": "MP-000000"})

        assert response.status_code == 404
        assert response.json()["message"] == "Invalid connection code"

    def test_own_code_returns_422(self, auth_client: TestClient, mock_supabase_client: MagicMock) -> None:
        _profile_lookup(mock_supabase_client).return_value = make_response(
            [{**PARTNER_PROFILE, "id": USER_ID, "connection_code": "MP-AB12CD"}]
        )

        response = auth_client.post("/api/v1/connections", json={"partner_code": "MP-AB12CD"})

        assert response.status_code == 422
        mock_supabase_client.table.return_value.insert.assert_not_called()

    def test_already_connected_returns_409(
        self, auth_client: TestClient, mock_supabase_client: MagicMock
    ) -> None:
        _profile_lookup(mock_supabase_client).return_value = make_response([PARTNER_PROFILE])
        _connection_lookup(mock_supabase_client).return_value = make_response([{"id": CONNECTION["id"]}])

        response = auth_client.post("/api/v1/connections", json={"partner_code": "MP-ZX98YW"})

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"
