from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel import SQLModel

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.adapter.services.mail_service import LoggingMailService
from src.depends import create_engine, create_session_factory, get_mail_service, get_session


def make_test_config(db_uri: str, **overrides) -> SimpleNamespace:
    values = dict(
        DB_URI=db_uri,
        DB_ECHO=False,
        API_PREFIX="/api",
        CORS_ORIGINS=[],
        CORS_ALLOW_CREDENTIALS=False,
        LOG_LEVEL="WARNING",
        AUTH_DISABLED=False,
        ENABLE_LOGGING_MIDDLEWARE=False,
        ENABLE_SENTRY=0,
        DSN_SENTRY="",
        SENTRY_ENVIRONMENT="test",
        NUMBER_RETRY_ATTEMPTS=5,
        EMAIL_HOST="",
        DB_AUTO_CREATE=False,
        DEFAULT_SETTINGS=dict(
            resort_name="Test Resort",
            resort_gstin="29AAAAA0000A1Z5",
            kitchen_gstin="29AAAAA0000A2Z4",
            resort_address="1 Lake Road",
            resort_contact="+91 9000000000",
            resort_email="desk@testresort.example",
            tax_rate="18.00",
        ),
        RECONCILIATION_ENABLED=True,
        RECONCILIATION_LOOKBACK_DAYS=31,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def test_config(tmp_path):
    return make_test_config(f"sqlite+aiosqlite:///{tmp_path / 'billing_test.db'}")


@pytest_asyncio.fixture(scope="function")
async def engine(test_config):
    """Create a throwaway SQLite database file with the full schema"""
    engine = create_engine(test_config)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def mail_service():
    return LoggingMailService()


@pytest_asyncio.fixture
async def client(test_config, session_factory, mail_service):
    """Create test client; every request gets its own session like in production"""
    from src.api.app import create_app

    app = create_app(test_config)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_mail_service] = lambda: mail_service

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
