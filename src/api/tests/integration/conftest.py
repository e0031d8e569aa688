"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Connection settings
come from the same SHIFTDESK_DB_* variables the application uses.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

import workforce.infrastructure.models  # noqa: F401
from infrastructure.database.engines import create_write_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        SHIFTDESK_DB_HOST, SHIFTDESK_DB_PORT, etc.
    """
    return DatabaseSettings()


@pytest_asyncio.fixture
async def clean_engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine on a freshly created schema.

    All Workforce tables are dropped and recreated before each test and
    dropped again afterwards.
    """
    engine = create_write_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
