from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import psycopg

from passwords.settings import get_settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(
    os.environ.get(
        "MIGRATIONS_DIR", Path(__file__).resolve().parents[3] / "migrations"
    )
)
SCHEMA_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
  version    text PRIMARY KEY,
  applied_at timestamptz NOT NULL DEFAULT now()
);
"""


def list_migrations(directory: Path = MIGRATIONS_DIR) -> list[Path]:
    if not directory.exists():
        raise FileNotFoundError(f"migrations dir not found: {directory}")
    return sorted(directory.glob("*.sql"))


def applied_versions(conn: psycopg.Connection) -> set[str]:
    with conn.cursor() as cur:
        cur.execute(SCHEMA_TABLE_SQL)
        cur.execute("SELECT version FROM schema_migrations ORDER BY version;")
        rows = cur.fetchall()
    conn.commit()
    return {r[0] for r in rows}


def apply_one(conn: psycopg.Connection, path: Path) -> None:
    version = path.stem
    sql = path.read_text(encoding="utf-8")
    logger.info("applying migration", extra={"version": version})
    with conn.cursor() as cur:
        cur.execute(sql)
        cur.execute(
            "INSERT INTO schema_migrations (version, applied_at) VALUES (%s, now());",
            (version,),
        )
    conn.commit()


def upgrade(dsn: str, directory: Path = MIGRATIONS_DIR) -> list[str]:
    """
    Apply every pending migration in version order, one transaction each.
    Returns the versions applied; a failing migration is rolled back and
    its error re-raised.
    """
    applied: list[str] = []
    with psycopg.connect(dsn, autocommit=False) as conn:
        done = applied_versions(conn)
        for path in list_migrations(directory):
            if path.stem in done:
                continue
            try:
                apply_one(conn, path)
            except Exception:
                conn.rollback()
                raise
            applied.append(path.stem)
    return applied


def pending(dsn: str, directory: Path = MIGRATIONS_DIR) -> list[str]:
    with psycopg.connect(dsn) as conn:
        done = applied_versions(conn)
    return [p.stem for p in list_migrations(directory) if p.stem not in done]


def main(argv: list[str]) -> int:
    """`python -m passwords.infrastructure.db.migrate [up|status]`"""
    cmd = argv[1] if len(argv) > 1 else "up"
    dsn = get_settings().database_url

    if cmd == "status":
        for version in pending(dsn):
            print(f"pending {version}")
        return 0

    if cmd != "up":
        print(f"unknown command: {cmd}", file=sys.stderr)
        return 2

    try:
        applied = upgrade(dsn)
    except (psycopg.Error, FileNotFoundError) as e:
        print(f"migration failed: {e}", file=sys.stderr)
        return 1
    for version in applied:
        print(f"applied {version}")
    if not applied:
        print("nothing to apply")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
