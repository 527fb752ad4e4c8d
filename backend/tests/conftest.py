import os
import tempfile
from pathlib import Path

# Point the app at a scratch database before `app.config` is imported;
# an exported DATABASE_URL must never receive test rows.
_scratch_dir = tempfile.TemporaryDirectory(prefix="student-registry-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_scratch_dir.name) / 'app.db'}"
os.environ["FRONTEND_ORIGIN"] = "http://localhost:3000"
os.environ["ALLOW_DEV_CORS"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app import database
from app.database import get_session, make_engine, run_migrations
from app.main import app


@pytest.fixture(scope="session", autouse=True)
def scratch_database():
    """Remove the configured scratch database once the run is over."""
    yield Path(_scratch_dir.name)
    database.engine.dispose()
    _scratch_dir.cleanup()


@pytest.fixture()
def engine(tmp_path):
    """A freshly migrated SQLite database per test."""
    eng = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    run_migrations(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def client(engine):
    def _session_override():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()
