"""
Unit tests for authentication endpoints.

Tests:
- Login (token issuance)
- Registration
"""

from jobly.core.security import decode_token


class TestUserLogin:
    """Test POST /auth/token"""

    def test_login_success(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1", "password": "password1"})

        assert response.status_code == 200
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "u1"
        assert payload["is_admin"] is False

    def test_admin_token_carries_flag(self, client, seed):
        response = client.post("/auth/token", json={"username": "a1", "password": "password2"})

        assert decode_token(response.json()["token"])["is_admin"] is True

    def test_login_nonexistent_user(self, client, seed):
        response = client.post("/auth/token", json={"username": "no-such-user", "password": "password1"})

        assert response.status_code == 401

    def test_login_wrong_password(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid username/password"

    def test_login_missing_data(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1"})

        assert response.status_code == 400


class TestUserRegistration:
    """Test POST /auth/register"""

    new_user = {
        "username": "new",
        "firstName": "first",
        "lastName": "last",
        "password": "password",
        "email": "new@email.com",
    }

    def test_register_success(self, client, seed):
        response = client.post("/auth/register", json=self.new_user)

        assert response.status_code == 201
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "new"
        assert payload["is_admin"] is False

    def test_register_cannot_claim_admin(self, client, seed):
        response = client.post("/auth/register", json={**self.new_user, "isAdmin": True})

        assert response.status_code == 400

    def test_register_duplicate(self, client, seed):
        response = client.post("/auth/register", json={**self.new_user, "username": "u1"})

        assert response.status_code == 400
        assert "duplicate" in response.json()["error"]["message"].lower()

    def test_register_invalid_email(self, client, seed):
        response = client.post("/auth/register", json={**self.new_user, "email": "not-an-email"})

        assert response.status_code == 400

    def test_register_short_password(self, client, seed):
        response = client.post("/auth/register", json={**self.new_user, "password": "abc"})

        assert response.status_code == 400
