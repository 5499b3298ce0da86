"""Fixtures de test / Test fixtures.

Base SQLite temporaire, recreee a chaque test / Temporary SQLite database, recreated per test.
"""

import os
import tempfile

# Avant tout import de app.* / Before any app.* import
_DB_DIR = tempfile.mkdtemp(prefix="schedule_poll_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["DEBUG"] = "true"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

import app.models  # noqa: E402, F401
from app.config import settings  # noqa: E402
from app.database import Base, async_session, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.auth import SessionUser  # noqa: E402
from app.services.user_service import upsert_user  # noqa: E402
from app.utils.auth import create_session_token  # noqa: E402

TEST_USER = SessionUser(user_id=0, username="testuser")


@pytest.fixture(autouse=True)
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def db():
    async with async_session() as session:
        yield session


@pytest.fixture
async def test_user(db) -> SessionUser:
    # Equivalent de l'upsert fait a la connexion / Same upsert as done on login
    await upsert_user(db, TEST_USER.user_id, TEST_USER.username)
    return TEST_USER


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def auth_client(client, test_user):
    client.cookies.set(
        settings.SESSION_COOKIE_NAME,
        create_session_token(test_user.user_id, test_user.username),
    )
    return client
