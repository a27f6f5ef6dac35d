import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so tests can import local modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# The module-level engine points at an in-memory database; every test gets its own file
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient

from dosetrack.core.clock import FixedClock
from dosetrack.core.database import build_engine, build_sessionmaker, create_tables, get_db
from dosetrack.core.dependencies import get_clock
from dosetrack.main import app
from dosetrack.services.tracking_service import TrackingService

# 2025-03-10 23:00 UTC; "today" is 2025-03-10 in the UTC reference timezone
NOW = datetime(2025, 3, 10, 23, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine(tmp_path):
    test_engine = build_engine(f"sqlite:///{tmp_path / 'dosetrack.db'}")
    create_tables(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def service(db, clock):
    return TrackingService(db, clock)


@pytest.fixture
def client(session_factory, clock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
