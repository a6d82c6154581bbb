import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

# Settings are read at import time, point them at a throwaway location first
_TMP = Path(tempfile.mkdtemp(prefix="inventory-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'app.db'}"
os.environ["UPLOAD_DIR"] = str(_TMP / "uploads")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database import get_db, init_db, make_engine
from services.containment import ContainmentManager
from services.queries import QueryService
from services.stock_ledger import StockLedger
from utils.blob_store import LocalBlobStore

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def naive(dt: datetime) -> datetime:
    """SQLite hands timestamps back without tzinfo; compare on UTC wall time."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.replace(tzinfo=None)


@pytest.fixture
def engine(tmp_path):
    # File-backed so that several threads can open their own connections
    eng = make_engine(f"sqlite:///{tmp_path / 'inventory.db'}")
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def manager(db):
    return ContainmentManager(db)


@pytest.fixture
def ledger(db):
    return StockLedger(db, clock=lambda: FIXED_NOW)


@pytest.fixture
def queries(db):
    return QueryService(db)


@pytest.fixture
def store(manager):
    return manager.create_store("Main Street")


@pytest.fixture
def folder(manager, store):
    return manager.create_folder("Beverages", store.id)


@pytest.fixture
def product(manager, folder):
    return manager.create_product("Coffee", 10, folder.id, "Roastery")


@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(tmp_path / "blobs", "/uploads")


@pytest.fixture
def client(session_factory, blob_store):
    from main import app
    from routes.deps import get_blob_store, get_clock

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
