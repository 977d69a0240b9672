"""Integration tests for the user endpoints."""

from storefront.utils.security import decode_token


def _register(client, **fields):
    payload = {"name": "Jane Doe", "email": "jane@example.com", "password": "s3cret!"}
    payload.update(fields)
    return client.post("/api/users/register", json=payload)


class TestRegisterEndpoint:
    def test_register_returns_user_and_token(self, client):
        response = _register(client, address="1 High Street")
        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "jane@example.com"
        assert data["user"]["role"] == "user"
        assert data["user"]["isAdmin"] is False
        assert "password" not in data["user"]
        assert "passwordHash" not in data["user"]
        assert decode_token(data["token"]) == data["user"]["id"]

    def test_duplicate_email(self, client):
        _register(client)
        response = _register(client)
        assert response.status_code == 400
        assert response.json()["message"] == "Email already in use"

    def test_role_cannot_be_chosen(self, client):
        response = _register(client, role="admin")
        assert response.json()["user"]["role"] == "user"

    def test_short_password(self, client):
        response = _register(client, password="123")
        assert response.status_code == 400
        assert response.json()["message"] == "Password must be at least 6 characters"


class TestLoginEndpoint:
    def test_login(self, client):
        user_id = _register(client).json()["user"]["id"]
        response = client.post("/api/users/login", json={"email": "jane@example.com", "password": "s3cret!"})
        assert response.status_code == 200
        assert decode_token(response.json()["token"]) == user_id

    def test_bad_credentials(self, client):
        _register(client)
        response = client.post("/api/users/login", json={"email": "jane@example.com", "password": "wrong!"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


class TestUserCrudEndpoints:
    def test_list_and_get(self, client):
        user_id = _register(client).json()["user"]["id"]

        listing = client.get("/api/users")
        assert [u["id"] for u in listing.json()] == [user_id]

        single = client.get(f"/api/users/{user_id}")
        assert single.json()["name"] == "Jane Doe"

    def test_get_unknown_user(self, client):
        response = client.get("/api/users/missing")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_update_user(self, client):
        user_id = _register(client).json()["user"]["id"]
        response = client.put(f"/api/users/{user_id}", json={"address": "2 Low Road"})
        assert response.status_code == 200
        assert response.json()["address"] == "2 Low Road"

    def test_delete_user(self, client):
        user_id = _register(client).json()["user"]["id"]
        response = client.delete(f"/api/users/{user_id}")
        assert response.json() == {"message": "User deleted"}
        assert client.get(f"/api/users/{user_id}").status_code == 404

    def test_token_of_deleted_user_is_invalid(self, client):
        data = _register(client).json()
        client.delete(f"/api/users/{data['user']['id']}")

        response = client.post(
            "/api/products",
            json={"title": "Widget", "price": 1},
            headers={"Authorization": f"Bearer {data['token']}"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_malformed_token(self, client):
        response = client.post(
            "/api/products",
            json={"title": "Widget", "price": 1},
            headers={"Authorization": "Bearer garbage"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Token error"
