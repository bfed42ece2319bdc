"""Tests for User endpoints and invitee search."""
from tests.conftest import create_test_user


class TestUserCRUD:
    """User create / get / list."""

    def test_create_user(self, client):
        data = create_test_user(client, name="Alice", email="alice@example.com")
        assert data["name"] == "Alice"
        assert data["email"] == "alice@example.com"
        assert "id" in data

    def test_duplicate_email_rejected(self, client):
        create_test_user(client, name="Alice", email="alice@example.com")
        resp = client.post("/api/users/", json={"name": "Other Alice", "email": "alice@example.com"})
        assert resp.status_code == 409
        assert resp.json() == {"error": "conflict", "detail": "Email already registered"}

    def test_get_user(self, client):
        user = create_test_user(client)
        resp = client.get(f"/api/users/{user['id']}")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Test User"

    def test_get_user_not_found(self, client):
        resp = client.get("/api/users/00000000-0000-0000-0000-000000000000")
        assert resp.status_code == 404
        assert resp.json() == {"error": "not_found", "detail": "User not found"}

    def test_list_users(self, client):
        create_test_user(client, name="Alice")
        create_test_user(client, name="Bob")
        resp = client.get("/api/users/")
        assert resp.status_code == 200
        names = [u["name"] for u in resp.json()]
        assert "Alice" in names
        assert "Bob" in names


class TestInviteeSearch:
    """Partial-email lookup used by the invite form."""

    def test_search_by_partial_email(self, client):
        create_test_user(client, name="Alice", email="alice@example.com")
        create_test_user(client, name="Bob", email="bob@sample.org")
        resp = client.get("/api/users/search", params={"q": "example"})
        assert resp.status_code == 200
        assert [u["name"] for u in resp.json()] == ["Alice"]

    def test_short_query_returns_nothing(self, client):
        create_test_user(client, name="Alice", email="alice@example.com")
        resp = client.get("/api/users/search", params={"q": "al"})
        assert resp.status_code == 200
        assert resp.json() == []
