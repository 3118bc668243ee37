# tests/integration/conftest.py
import psycopg
import pytest
import pytest_asyncio
from psycopg_pool import AsyncConnectionPool

from passwords.infrastructure.db.migrate import upgrade
from passwords.settings import get_settings


@pytest.fixture(scope="session")
def database_url() -> str:
    """
    Postgres from DATABASE_URL with migrations applied.
    Skips the integration tests when the database cannot be reached.
    """
    url = get_settings().database_url
    try:
        with psycopg.connect(url, connect_timeout=2):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"postgres not reachable: {e}")
    upgrade(url)
    return url


@pytest_asyncio.fixture
async def pool(database_url: str):
    p = AsyncConnectionPool(database_url, min_size=1, max_size=4, open=False)
    await p.open(wait=True, timeout=10)
    async with p.connection() as conn:
        await conn.execute("TRUNCATE passwords RESTART IDENTITY;")
    try:
        yield p
    finally:
        await p.close()
