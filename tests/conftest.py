from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from src.core.auth.service import AuthService
from src.core.database import get_db
from src.core.database.base import Base
from src.core.tenants.schemas import TenantCreate
from src.core.tenants.service import TenantService
from src.main import app

DEFAULT_PASSWORD = "Password123"


@pytest.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    File-backed SQLite per test.

    The dashboard runs its queries concurrently on separate sessions, so the
    data must be visible across connections (an in-memory database is not).
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Get test database session."""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Get test HTTP client with overridden database dependency."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_owner(db_session: AsyncSession):
    """Factory: user + tenant owned by that user. Returns ids, token and auth headers."""

    async def _make_owner(
        email: str = "owner@example.com",
        tenant_name: str = "Les Privat Cerdas",
    ) -> dict:
        auth = AuthService(db_session)
        user = await auth.create_user(
            email=email, password=DEFAULT_PASSWORD, full_name="Budi Santoso"
        )
        await db_session.commit()
        tenant = await TenantService(db_session).create_tenant(
            TenantCreate(name=tenant_name), owner_id=user.id
        )
        _, token, _ = await auth.authenticate(email, DEFAULT_PASSWORD)
        await db_session.commit()
        return {
            "user_id": user.id,
            "tenant_id": tenant.id,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _make_owner


@pytest.fixture
async def owner(make_owner) -> dict:
    return await make_owner()


@pytest.fixture
async def loner(db_session: AsyncSession) -> dict:
    """Authenticated user without any tenant membership."""
    auth = AuthService(db_session)
    user = await auth.create_user(
        email="loner@example.com", password=DEFAULT_PASSWORD, full_name="Sari Dewi"
    )
    _, token, _ = await auth.authenticate("loner@example.com", DEFAULT_PASSWORD)
    await db_session.commit()
    return {"user_id": user.id, "token": token, "headers": {"Authorization": f"Bearer {token}"}}
