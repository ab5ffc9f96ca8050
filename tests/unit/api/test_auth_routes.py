"""
API tests for the authentication endpoints.

Runs the full FastAPI stack against the in-memory user repository.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from social_api.domain.exceptions import ExternalServiceException


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def login(client, username="alice", password="Secr3t!"):
    return await client.post("/login", json={"username": username, "password": password})


class TestLoginEndpoint:
    """Test POST /login."""

    @pytest.mark.asyncio
    async def test_login_success(self, api_client, alice):
        response = await login(api_client)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["accessToken"]
        assert body["refreshToken"]
        assert body["user"]["id"] == str(alice.id)
        assert body["user"]["username"] == "alice"
        assert body["user"]["nickname"] == "Alice"

    @pytest.mark.asyncio
    async def test_login_never_exposes_credentials(self, api_client, alice):
        response = await login(api_client)

        user = response.json()["user"]
        for key in ("password", "passwordHash", "refreshToken", "refreshTokenHash"):
            assert key not in user

    @pytest.mark.asyncio
    async def test_wrong_password(self, api_client, alice):
        response = await login(api_client, password="Wr0ng!pass")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_unknown_user_same_response_as_wrong_password(self, api_client, alice):
        unknown = await login(api_client, username="mallory", password="Wr0ng!pass")
        wrong = await login(api_client, password="Wr0ng!pass")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    @pytest.mark.asyncio
    async def test_missing_fields(self, api_client):
        response = await api_client.post("/login", json={"username": "alice"})

        assert response.status_code == 422


class TestRefreshEndpoint:
    """Test POST /refresh."""

    @pytest.mark.asyncio
    async def test_refresh_rotates(self, api_client, alice):
        tokens = (await login(api_client)).json()

        response = await api_client.post("/refresh", headers=bearer(tokens["refreshToken"]))

        assert response.status_code == 200
        body = response.json()
        assert body["refreshToken"] != tokens["refreshToken"]
        assert body["accessToken"] != tokens["accessToken"]

    @pytest.mark.asyncio
    async def test_replayed_refresh_token_is_forbidden(self, api_client, alice):
        tokens = (await login(api_client)).json()
        await api_client.post("/refresh", headers=bearer(tokens["refreshToken"]))

        response = await api_client.post("/refresh", headers=bearer(tokens["refreshToken"]))

        assert response.status_code == 403
        assert response.json() == {"detail": "Access denied"}

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(self, api_client, alice):
        tokens = (await login(api_client)).json()

        response = await api_client.post("/refresh", headers=bearer(tokens["accessToken"]))

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_token(self, api_client):
        response = await api_client.post("/refresh")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_after_logout_is_forbidden(self, api_client, alice):
        tokens = (await login(api_client)).json()
        await api_client.post("/logout", headers=bearer(tokens["accessToken"]))

        response = await api_client.post("/refresh", headers=bearer(tokens["refreshToken"]))

        assert response.status_code == 403


class TestLogoutEndpoint:
    """Test POST /logout."""

    @pytest.mark.asyncio
    async def test_logout(self, api_client, alice):
        tokens = (await login(api_client)).json()

        response = await api_client.post("/logout", headers=bearer(tokens["accessToken"]))

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}
        assert alice.has_active_session is False

    @pytest.mark.asyncio
    async def test_logout_requires_access_token(self, api_client, alice):
        tokens = (await login(api_client)).json()

        response = await api_client.post("/logout", headers=bearer(tokens["refreshToken"]))

        assert response.status_code == 401
        assert alice.has_active_session is True

    @pytest.mark.asyncio
    async def test_logout_without_token(self, api_client):
        response = await api_client.post("/logout")

        assert response.status_code == 401


class TestMeEndpoint:
    """Test GET /me."""

    @pytest.mark.asyncio
    async def test_me_returns_profile(self, api_client, alice):
        tokens = (await login(api_client)).json()

        response = await api_client.get("/me", headers=bearer(tokens["accessToken"]))

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(alice.id)
        assert body["username"] == "alice"
        assert "createdAt" in body
        assert "passwordHash" not in body

    @pytest.mark.asyncio
    async def test_me_for_deleted_account(self, api_client, user_repository, alice):
        tokens = (await login(api_client)).json()
        del user_repository.users[alice.id]

        response = await api_client.get("/me", headers=bearer(tokens["accessToken"]))

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_with_garbage_token(self, api_client):
        response = await api_client.get("/me", headers=bearer("garbage"))

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid token"}


class TestSignupEndpoint:
    """Test POST /signup."""

    @pytest.fixture
    def payload(self):
        return {
            "username": "bobby",
            "password": "B0bby!pass",
            "confirmPassword": "B0bby!pass",
            "nickname": "Bob",
        }

    @pytest.mark.asyncio
    async def test_signup(self, api_client, payload):
        response = await api_client.post("/signup", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Signup completed"
        assert body["user"]["username"] == "bobby"
        assert body["user"]["profileImage"] is None

    @pytest.mark.asyncio
    async def test_signed_up_user_can_log_in(self, api_client, payload):
        await api_client.post("/signup", json=payload)

        response = await login(api_client, username="bobby", password="B0bby!pass")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_password_mismatch(self, api_client, payload):
        payload["confirmPassword"] = "Other1!pass"

        response = await api_client.post("/signup", json=payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_duplicate_username(self, api_client, alice, payload):
        payload["username"] = "alice"

        response = await api_client.post("/signup", json=payload)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_duplicate_nickname(self, api_client, alice, payload):
        payload["nickname"] = "Alice"

        response = await api_client.post("/signup", json=payload)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_lost_signup_race(self, api_client, user_repository, alice, payload):
        """Test a unique violation after the availability check still answers 409."""
        payload["username"] = "alice"
        user_repository.username_exists = AsyncMock(return_value=False)

        response = await api_client.post("/signup", json=payload)

        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_ENTITY"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["short1!", "NoDigits!!", "NoSpecial12", "12345678!"])
    async def test_weak_password(self, api_client, payload, password):
        payload["password"] = payload["confirmPassword"] = password

        response = await api_client.post("/signup", json=payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_nickname_needs_a_letter(self, api_client, payload):
        payload["nickname"] = "1234"

        response = await api_client.post("/signup", json=payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_hashing_failure_is_not_leaked(self, api_client, app, payload):
        failing = MagicMock()
        failing.hash.side_effect = ExternalServiceException(
            service="bcrypt", message="Hashing failed", original_error="ValueError"
        )
        app.state.password_hasher = failing

        response = await api_client.post("/signup", json=payload)

        assert response.status_code == 500
        assert response.json() == {
            "error": "INTERNAL_ERROR",
            "message": "An internal error occurred",
        }


class TestCheckIdEndpoint:
    """Test GET /check-id."""

    @pytest.mark.asyncio
    async def test_available(self, api_client):
        response = await api_client.get("/check-id", params={"username": "newcomer"})

        assert response.status_code == 200
        assert response.json() == {"available": True, "message": "Username is available"}

    @pytest.mark.asyncio
    async def test_taken(self, api_client, alice):
        response = await api_client.get("/check-id", params={"username": "alice"})

        assert response.json() == {"available": False, "message": "Username already exists"}

    @pytest.mark.asyncio
    async def test_username_required(self, api_client):
        response = await api_client.get("/check-id")

        assert response.status_code == 422


class TestHealthEndpoint:
    """Test GET /health."""

    @pytest.mark.asyncio
    async def test_healthy(self, api_client):
        with patch("social_api.main.health_check", AsyncMock(return_value=True)):
            response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_degraded(self, api_client):
        with patch("social_api.main.health_check", AsyncMock(return_value=False)):
            response = await api_client.get("/health")

        assert response.json()["services"]["database"] == "down"
