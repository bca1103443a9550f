"""Tests for the admin auth endpoints."""

from fastapi.testclient import TestClient

from training_admin.config import Settings
from training_admin.main import create_app


EMAIL = "owner@company.com"
PASSWORD = "S3curePassword"


def _signup(client: TestClient, email: str = EMAIL, password: str = PASSWORD):
    return client.post("/v1/auth/signup", json={"email": email, "password": password})


class TestSignUp:
    def test_signup_returns_tokens(self, client: TestClient, settings: Settings) -> None:
        response = _signup(client)
        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == settings.auth_access_token_expire_minutes * 60
        assert data["admin"]["email"] == EMAIL
        assert settings.auth_cookie_name in response.cookies

    def test_signup_duplicate_email_case_insensitive(self, client: TestClient) -> None:
        _signup(client)
        response = _signup(client, email="OWNER@company.com")
        assert response.status_code == 409
        assert response.json()["error"] is True

    def test_signup_short_password(self, client: TestClient) -> None:
        response = _signup(client, password="short")
        assert response.status_code == 422
        assert response.json()["details"]

    def test_signup_disabled(self, settings: Settings) -> None:
        settings.auth_allow_signup = False
        with TestClient(create_app(settings)) as client:
            assert _signup(client).status_code == 403

    def test_password_stored_hashed(self, client: TestClient, settings: Settings) -> None:
        _signup(client)
        credentials = (
            settings.state_dir + f"/{settings.credentials_storage_key}.json"
        )
        with open(credentials, encoding="utf-8") as f:
            stored = f.read()
        assert PASSWORD not in stored
        assert "$argon2id$" in stored


class TestLogin:
    def test_login_before_signup(self, client: TestClient) -> None:
        response = client.post(
            "/v1/auth/login", json={"email": EMAIL, "password": PASSWORD}
        )
        assert response.status_code == 401
        assert "sign up" in response.json()["message"].lower()

    def test_login_success(self, client: TestClient) -> None:
        _signup(client)
        response = client.post(
            "/v1/auth/login", json={"email": EMAIL, "password": PASSWORD}
        )
        assert response.status_code == 200
        assert response.json()["access_token"]

    def test_login_wrong_password(self, client: TestClient) -> None:
        _signup(client)
        response = client.post(
            "/v1/auth/login", json={"email": EMAIL, "password": "WrongPassword"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_login_unknown_email(self, client: TestClient) -> None:
        _signup(client)
        response = client.post(
            "/v1/auth/login", json={"email": "else@company.com", "password": PASSWORD}
        )
        assert response.status_code == 401


class TestSession:
    def test_me(self, client: TestClient) -> None:
        token = _signup(client).json()["access_token"]
        response = client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == EMAIL

    def test_protected_route_requires_token(self, client: TestClient) -> None:
        response = client.get("/v1/employees")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_protected_route_rejects_garbage(self, client: TestClient) -> None:
        response = client.get(
            "/v1/employees", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    def test_refresh_rotates_token(self, client: TestClient) -> None:
        _signup(client)
        response = client.post("/v1/auth/refresh")
        assert response.status_code == 200
        assert response.json()["access_token"]

    def test_refresh_without_cookie(self, client: TestClient) -> None:
        response = client.post("/v1/auth/refresh")
        assert response.status_code == 401

    def test_logout_revokes_refresh_token(self, client: TestClient) -> None:
        _signup(client)
        assert client.post("/v1/auth/logout").status_code == 204
        assert client.post("/v1/auth/refresh").status_code == 401
