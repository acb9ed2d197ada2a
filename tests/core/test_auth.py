import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.auth.jwt import create_refresh_token, decode_token
from src.core.auth.password import hash_password, verify_password
from src.core.auth.service import AuthService
from src.core.exceptions import AuthenticationError, DuplicateError


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("Password123")
        assert hashed != "Password123"
        assert verify_password("Password123", hashed) is True
        assert verify_password("WrongPassword", hashed) is False

    def test_empty_or_malformed_hash(self):
        assert verify_password("Password123", None) is False
        assert verify_password("Password123", "not-a-bcrypt-hash") is False


class TestAuthService:
    """Tests for AuthService."""

    async def test_create_user(self, db_session: AsyncSession):
        """Test creating a new user."""
        auth_service = AuthService(db_session)

        user = await auth_service.create_user(
            email="Tutor@Example.com",
            password="Password123",
            full_name="Test Tutor",
        )

        assert user.id is not None
        assert user.email == "tutor@example.com"
        assert user.full_name == "Test Tutor"
        assert user.is_active is True
        assert user.password_hash != "Password123"  # Password should be hashed

    async def test_create_user_duplicate_email(self, db_session: AsyncSession):
        """Test that duplicate email raises error."""
        auth_service = AuthService(db_session)

        await auth_service.create_user(
            email="tutor@example.com", password="Password123", full_name="Test Tutor"
        )

        with pytest.raises(DuplicateError) as exc_info:
            await auth_service.create_user(
                email="tutor@example.com", password="AnotherPass123", full_name="Other"
            )

        assert "already exists" in str(exc_info.value)

    async def test_authenticate_success(self, db_session: AsyncSession):
        auth_service = AuthService(db_session)
        await auth_service.create_user(
            email="tutor@example.com", password="Password123", full_name="Test Tutor"
        )

        user, access_token, refresh_token = await auth_service.authenticate(
            email="tutor@example.com",
            password="Password123",
        )

        assert user.email == "tutor@example.com"
        assert user.last_login_at is not None
        assert decode_token(access_token, "access")["sub"] == str(user.id)
        assert decode_token(refresh_token, "refresh")["sub"] == str(user.id)

    async def test_authenticate_wrong_password(self, db_session: AsyncSession):
        auth_service = AuthService(db_session)
        await auth_service.create_user(
            email="tutor@example.com", password="Password123", full_name="Test Tutor"
        )

        with pytest.raises(AuthenticationError):
            await auth_service.authenticate(email="tutor@example.com", password="WrongPassword")

    async def test_authenticate_inactive_user(self, db_session: AsyncSession):
        auth_service = AuthService(db_session)
        user = await auth_service.create_user(
            email="tutor@example.com", password="Password123", full_name="Test Tutor"
        )
        user.is_active = False
        await db_session.flush()

        with pytest.raises(AuthenticationError) as exc_info:
            await auth_service.authenticate(email="tutor@example.com", password="Password123")

        assert "deactivated" in str(exc_info.value)

    async def test_refresh_tokens(self, db_session: AsyncSession):
        auth_service = AuthService(db_session)
        user = await auth_service.create_user(
            email="tutor@example.com", password="Password123", full_name="Test Tutor"
        )

        access_token, refresh_token = await auth_service.refresh_tokens(
            create_refresh_token(user.id)
        )
        assert decode_token(access_token, "access")["sub"] == str(user.id)
        assert refresh_token

    def test_access_token_rejected_as_refresh(self):
        from src.core.auth.jwt import create_access_token

        with pytest.raises(AuthenticationError):
            decode_token(create_access_token(1), token_type="refresh")


class TestAuthEndpoints:
    """Tests for auth API endpoints."""

    async def test_register_and_login(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "email": "new@example.com",
                "password": "Password123",
                "full_name": "New Tutor",
            },
        )
        assert response.status_code == 201
        assert response.json()["data"]["email"] == "new@example.com"

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "new@example.com", "password": "Password123"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert "access_token" in data["data"]
        assert "refresh_token" in data["data"]
        assert data["data"]["user"]["email"] == "new@example.com"

    async def test_register_short_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": "new@example.com", "password": "short", "full_name": "New"},
        )
        assert response.status_code == 422

    async def test_register_duplicate(self, client: AsyncClient, owner: dict):
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "email": "owner@example.com",
                "password": "Password123",
                "full_name": "Again",
            },
        )
        assert response.status_code == 409

    async def test_login_wrong_credentials(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "wrong@example.com", "password": "WrongPass"},
        )

        assert response.status_code == 401

    async def test_get_me_unauthorized(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == 401

    async def test_get_me_authorized(self, client: AsyncClient, owner: dict):
        response = await client.get("/api/v1/auth/me", headers=owner["headers"])

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "owner@example.com"

    async def test_refresh_endpoint(self, client: AsyncClient, owner: dict):
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": create_refresh_token(owner["user_id"])},
        )
        assert response.status_code == 200
        assert response.json()["data"]["token_type"] == "bearer"

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
