"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` (a local SQLite file `app.db` by default) and
provides the versioned migration runner and the per-request session
dependency used by the application and tests.

Schema changes live in `app/migrations/NNNN_<name>.sql`. Each file is
applied once, in version order, and recorded in `schema_migrations`.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Tuple

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from .config import settings

logger = logging.getLogger("app.database")

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"
MIGRATION_NAME_RE = re.compile(r"^(\d+)_(\w+)\.sql$")


def make_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections are shared across the threadpool.

    For SQLite the driver's own transaction handling is switched off and
    SQLAlchemy emits BEGIN itself, so DDL inside `engine.begin()` is
    rolled back together with everything else on failure.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo)
    eng = create_engine(url, echo=echo, connect_args={"check_same_thread": False})

    @event.listens_for(eng, "connect")
    def _disable_driver_transactions(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return eng


engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> List[Tuple[int, str, Path]]:
    """Return `(version, name, path)` for every migration file, oldest first.

    Raises ValueError for a file that does not follow the naming scheme
    or for two files sharing a version number.
    """
    found = []
    for path in directory.glob("*.sql"):
        m = MIGRATION_NAME_RE.match(path.name)
        if not m:
            raise ValueError(f"invalid migration filename: {path.name}")
        found.append((int(m.group(1)), m.group(2), path))
    found.sort(key=lambda item: item[0])
    versions = [v for v, _, _ in found]
    if len(versions) != len(set(versions)):
        raise ValueError("duplicate migration version in " + str(directory))
    return found


def _split_statements(sql: str) -> List[str]:
    # migrations hold plain DDL only; no semicolons inside literals
    lines = [line for line in sql.splitlines() if not line.strip().startswith("--")]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def run_migrations(bind: Engine = None, directory: Path = MIGRATIONS_DIR) -> List[str]:
    """Apply pending migrations and return the names applied by this call.

    Each migration runs in its own transaction together with its
    `schema_migrations` row. A failing file is rolled back completely;
    the versions before it stay applied and recorded, and the error
    propagates.
    """
    bind = bind if bind is not None else engine
    applied = []
    with bind.begin() as conn:
        conn.execute(text(
            "CREATE TABLE IF NOT EXISTS schema_migrations ("
            "version INTEGER PRIMARY KEY, name TEXT NOT NULL, applied_at TEXT NOT NULL)"
        ))
        done = {row[0] for row in conn.execute(text("SELECT version FROM schema_migrations"))}
    for version, name, path in discover_migrations(directory):
        if version in done:
            continue
        statements = _split_statements(path.read_text(encoding="utf-8"))
        with bind.begin() as conn:
            for stmt in statements:
                conn.exec_driver_sql(stmt)
            conn.execute(
                text("INSERT INTO schema_migrations (version, name, applied_at) VALUES (:version, :name, :applied_at)"),
                {"version": version, "name": name, "applied_at": datetime.now(timezone.utc).isoformat()},
            )
        logger.info("migration applied: %04d_%s", version, name)
        applied.append(path.name)
    return applied


def create_db_and_tables():
    """Bring the configured database up to the latest schema version.

    Called once from the application lifespan before requests are served.
    """
    applied = run_migrations(engine)
    if not applied:
        logger.info("database schema up to date")


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
