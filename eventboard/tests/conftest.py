import os
import shutil
import tempfile

# Point the application at throwaway storage before it is imported.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["STORAGE_ROOT"] = STORAGE_ROOT = tempfile.mkdtemp(prefix="eventboard-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session

from eventboard.database.db import Base, get_db
from eventboard.main import app
from eventboard.services.file_store import LocalFileStore, get_file_store

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine: Engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Minimal valid 1x1 pixel PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


class FakeFileStore:
    """In-memory File Store."""

    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.counter = 0
        self.fail_writes = False

    def store(self, data: bytes, suggested_ext: str) -> str:
        if self.fail_writes:
            raise OSError("disk full")
        self.counter += 1
        path = f"event-image/fake_{self.counter}.{suggested_ext}" if suggested_ext else f"event-image/fake_{self.counter}"
        self.files[path] = data
        return path

    def remove(self, path: str) -> bool:
        return self.files.pop(path, None) is not None


@pytest.fixture
def db_session():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def file_store():
    """The store whose directory the app serves at /event-image, emptied around each test."""
    store = LocalFileStore(STORAGE_ROOT)
    shutil.rmtree(store.directory, ignore_errors=True)
    store.directory.mkdir(parents=True)
    yield store
    shutil.rmtree(store.directory, ignore_errors=True)
    store.directory.mkdir(parents=True)


@pytest.fixture
def fake_store() -> FakeFileStore:
    return FakeFileStore()


@pytest.fixture
def client(db_session: Session, file_store: LocalFileStore):
    # Override the database and file store dependencies
    def override_get_db():
        db: Session = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: file_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def png_upload():
    return {"image": ("photo.png", PNG_BYTES, "image/png")}
