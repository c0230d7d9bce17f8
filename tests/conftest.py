"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import asyncio
import os

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Keep tests off any real database and keep bcrypt fast
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"

from easyalert.config import Settings, get_settings  # noqa: E402
from easyalert.context import AppContext  # noqa: E402
from easyalert.db.database import create_engine, create_session_factory, init_db  # noqa: E402
from easyalert.main import create_app  # noqa: E402
from easyalert.models import User  # noqa: E402
from easyalert.repositories import SqlAlertRepository, SqlUserRepository  # noqa: E402
from easyalert.security import hash_password  # noqa: E402
from tests.fakes import InMemoryAlertRepository, InMemoryUserRepository  # noqa: E402
from tests.test_constants import TEST_EMAIL, TEST_PASSWORD, TEST_TOKEN  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(bcrypt_rounds=4, token_length=32, create_tables=False)


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def alert_repo() -> InMemoryAlertRepository:
    return InMemoryAlertRepository()


@pytest.fixture
def client(settings, user_repo, alert_repo) -> TestClient:
    """TestClient over an app wired to in-memory repositories."""
    app = create_app(AppContext(settings=settings, users=user_repo, alerts=alert_repo))
    return TestClient(app)


@pytest.fixture
def registered_user(user_repo) -> User:
    """A user stored in the in-memory repository with known credentials."""
    user = User(
        email=TEST_EMAIL,
        password_digest=hash_password(TEST_PASSWORD, rounds=4),
        token=TEST_TOKEN,
        admin=False,
    )
    return asyncio.run(user_repo.create_user(user))


@pytest.fixture
def auth_headers(registered_user) -> dict[str, str]:
    return {"Authorization": f"Bearer {registered_user.token}"}


# ---------------------------------------------------------------------------
# SQL repositories over a throwaway SQLite database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'easyalert.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_users(engine) -> SqlUserRepository:
    return SqlUserRepository(create_session_factory(engine))


@pytest.fixture
def sql_alerts(engine) -> SqlAlertRepository:
    return SqlAlertRepository(create_session_factory(engine))
