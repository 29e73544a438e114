import os
import tempfile

# Settings are read at import time
_fd, _DB_PATH = tempfile.mkstemp(suffix=".db")
os.close(_fd)
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-bytes!")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from evalhub.main import app
from evalhub.core.database import Base, get_db
from evalhub.core.security import create_access_token

from tests.helpers import make_user


@pytest.fixture(scope="session")
def test_engine():
    engine = create_engine(os.environ["DATABASE_URL"], connect_args={"check_same_thread": False})

    # SQLite force foreign key constraints
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()
    os.remove(_DB_PATH)


@pytest.fixture(scope="session")
def TestingSessionLocal(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="session", autouse=True)
def override_di(TestingSessionLocal):
    def _get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clean_tables(test_engine):
    yield
    with test_engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db_session(TestingSessionLocal):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def people(db_session):
    """A creator plus four colleagues."""
    return {
        "owner": make_user(db_session, "Olivia Owner", "owner@company.com", "HR", "HR Director"),
        "ana": make_user(db_session, "Ana Subject", "ana@company.com"),
        "ben": make_user(db_session, "Ben Peer", "ben@company.com"),
        "cara": make_user(db_session, "Cara Lead", "cara@company.com"),
        "dan": make_user(db_session, "Dan Other", "dan@company.com", "Sales", "Account Manager"),
    }


@pytest.fixture
def auth_headers(people):
    token = create_access_token({"sub": people["owner"].id, "email": people["owner"].email})
    return {"Authorization": f"Bearer {token}"}
