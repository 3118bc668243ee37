from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from psycopg_pool import AsyncConnectionPool

from passwords.domain.entities import Credential
from passwords.domain.errors import CredentialNotFound
from passwords.domain.ports.credential_repository import CredentialRepositoryPort

_COLUMNS = (
    "uuid, login, password_hash, disabled, one_time, "
    "created_at, updated_at, valid_until"
)


def _to_credential(row: Sequence[Any]) -> Credential:
    (
        id_,
        login,
        password_hash,
        disabled,
        one_time,
        created_at,
        updated_at,
        valid_until,
    ) = row
    return Credential(
        id=id_,
        login=login,
        password_hash=str(password_hash),
        disabled=bool(disabled),
        one_time=bool(one_time),
        created_at=created_at,
        updated_at=updated_at,
        valid_until=valid_until,
    )


class PgCredentialRepository(CredentialRepositoryPort):
    """
    Postgres implementation of CredentialRepositoryPort.

    Every method borrows its own connection from the pool and runs in its
    own transaction; nothing is held between calls.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def find_all_by_login(self, login: UUID) -> list[Credential]:
        sql = f"""
        SELECT {_COLUMNS}
        FROM passwords
        WHERE login = %s
        ORDER BY created_at, id
        """
        return await self._find(sql, (login,))

    async def find_active_by_login(self, login: UUID) -> list[Credential]:
        sql = f"""
        SELECT {_COLUMNS}
        FROM passwords
        WHERE login = %s AND disabled = false
        ORDER BY created_at, id
        """
        return await self._find(sql, (login,))

    async def _find(self, sql: str, params: tuple) -> list[Credential]:
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, params)
                rows = await cur.fetchall()

        if not rows:
            raise CredentialNotFound()
        return [_to_credential(row) for row in rows]

    async def insert(self, credential: Credential) -> Credential:
        sql = f"""
        INSERT INTO passwords (login, password_hash, disabled, one_time, valid_until)
        VALUES (%s, %s, %s, %s, %s)
        RETURNING {_COLUMNS}
        """
        async with self._pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(
                        sql,
                        (
                            credential.login,
                            credential.password_hash,
                            credential.disabled,
                            credential.one_time,
                            credential.valid_until,
                        ),
                    )
                    row = await cur.fetchone()

        if not row:
            raise RuntimeError("insert returned no row")
        return _to_credential(row)

    async def disable_by_ids(self, *ids: UUID) -> bool:
        """
        Only rows still enabled are touched, so updated_at marks the one
        false -> true transition. Ids that are unknown or already disabled
        are ignored as long as at least one row changes.
        """
        if not ids:
            raise CredentialNotFound()

        sql = """
        UPDATE passwords
        SET disabled = true,
            updated_at = now()
        WHERE uuid = ANY(%s) AND disabled = false
        """
        async with self._pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor() as cur:
                    await cur.execute(sql, (list(ids),))
                    changed = cur.rowcount

        if changed == 0:
            raise CredentialNotFound()
        return True

    async def count(self, login: UUID) -> int:
        sql = "SELECT count(*) FROM passwords WHERE login = %s"
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (login,))
                row = await cur.fetchone()
        return int(row[0]) if row else 0

    async def page(self, login: UUID, page: int, limit: int) -> list[Credential]:
        sql = f"""
        SELECT {_COLUMNS}
        FROM passwords
        WHERE login = %s
        ORDER BY created_at DESC, id DESC
        OFFSET %s
        LIMIT %s
        """
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, (login, page * limit, limit))
                rows = await cur.fetchall()
        return [_to_credential(row) for row in rows]
