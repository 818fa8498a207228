import os
from typing import AsyncGenerator

# Settings are cached on first use, so the test environment must be in place
# before any application module is imported.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from libs.auth.dependencies import get_current_user
from libs.auth.directory import get_user_directory
from libs.common.config import get_settings
from libs.db.base import Base
from services.attendance_service.repository import get_attendance_store
from services.dashboard_service.repository import get_dashboard_store
from services.gateway_service.app.main import app
from services.sidebar_service.repository import get_sidebar_store
from services.users_service.repository import get_organization_store

# Import all models so metadata includes every table
from services.attendance_service import models as _attendance_models  # noqa: F401
from services.sidebar_service import models as _sidebar_models  # noqa: F401
from services.users_service import models as _users_models  # noqa: F401
from tests.factories import AccessControlFactory, OfficeHoursFactory
from tests.fakes import (
    FakeUserDirectory,
    InMemoryAttendanceStore,
    InMemoryDashboardStore,
    InMemoryOrganizationStore,
    InMemorySidebarStore,
)


@pytest.fixture
def attendance_store() -> InMemoryAttendanceStore:
    """Store seeded with the default access policy and 09:00-17:00 office hours."""
    return InMemoryAttendanceStore(
        policies=AccessControlFactory.default_policy(),
        office_hours=[OfficeHoursFactory.create()],
    )


@pytest.fixture
def user_directory() -> FakeUserDirectory:
    return FakeUserDirectory()


@pytest.fixture
def organization_store() -> InMemoryOrganizationStore:
    return InMemoryOrganizationStore()


@pytest.fixture
def dashboard_store() -> InMemoryDashboardStore:
    return InMemoryDashboardStore()


@pytest.fixture
def sidebar_store() -> InMemorySidebarStore:
    return InMemorySidebarStore()


@pytest_asyncio.fixture
async def client(
    attendance_store,
    user_directory,
    organization_store,
    dashboard_store,
    sidebar_store,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient for the gateway app with storage and identity
    dependencies replaced by in-memory fakes.

    Authentication is left in place; use ``login_as`` to bypass it.
    """
    app.dependency_overrides[get_attendance_store] = lambda: attendance_store
    app.dependency_overrides[get_user_directory] = lambda: user_directory
    app.dependency_overrides[get_organization_store] = lambda: organization_store
    app.dependency_overrides[get_dashboard_store] = lambda: dashboard_store
    app.dependency_overrides[get_sidebar_store] = lambda: sidebar_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def login_as():
    """Return a function that authenticates subsequent requests as ``user``."""

    def _login(user):
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    yield _login
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def auth_headers() -> dict:
    """
    Headers for requests whose auth dependency is overridden by ``login_as``.
    """
    return {"Authorization": "Bearer mock-token"}


@pytest_asyncio.fixture
async def test_engine():
    """
    Engine bound to DATABASE_URL with every table created.

    Tests using it are skipped when the database is not reachable.
    """
    settings = get_settings()
    db_url = settings.DATABASE_URL.replace("host.docker.internal", "localhost")
    engine = create_async_engine(db_url, future=True)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OperationalError, OSError):
        await engine.dispose()
        pytest.skip("Database not available for tests")

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session inside an outer transaction that is rolled back after
    the test; commits made by the code under test become savepoints.
    """
    connection = await test_engine.connect()
    transaction = await connection.begin()

    session_factory = async_sessionmaker(
        bind=connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = session_factory()

    try:
        yield session
    finally:
        await session.close()
        await transaction.rollback()
        await connection.close()
