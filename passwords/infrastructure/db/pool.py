from __future__ import annotations

from typing import Optional

from psycopg.conninfo import conninfo_to_dict, make_conninfo
from psycopg_pool import AsyncConnectionPool

from passwords.settings import get_settings

CONNECT_TIMEOUT_SECONDS = 3

_pool: Optional[AsyncConnectionPool] = None


def get_pool() -> AsyncConnectionPool:
    """
    Process-wide pool, created on first use but left closed.
    `open_pool` (called from the app lifespan) opens it.
    """
    global _pool
    if _pool is None:
        dsn = get_settings().database_url
        if "connect_timeout" not in conninfo_to_dict(dsn):
            dsn = make_conninfo(dsn, connect_timeout=CONNECT_TIMEOUT_SECONDS)
        _pool = AsyncConnectionPool(dsn, min_size=1, max_size=10, timeout=5, open=False)
    return _pool


async def open_pool() -> AsyncConnectionPool:
    pool = get_pool()
    if pool.closed:
        await pool.open()
    return pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
