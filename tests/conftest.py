"""
- Spins up temp test DB
- Create tables before tests run
- Provide a db_session fixture and override FastAPI's get_db so routes use the test session.
- Give every test a fresh in-memory GameStore with a small known word list.
- Provide a client fixture (TestClient(app)) that already has the overrides applied.
"""
import os
import pytest
from typing import Generator

# Set before the app is imported: no dev startup hooks, no real DB file
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("CHEAT_POLICY", "fewest_hits")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wordle_api.db import Base, get_db
from wordle_api.main import app
from wordle_api.store import GameStore
from wordle_api.words import Dictionary
from wordle_api import models  # noqa: F401

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"

# Small, known lists so tests can reason about answers
TEST_ANSWERS = ("crane", "slate", "plant", "clang", "glare", "grace")
TEST_ALLOWED = frozenset({"bolts", "paper", "alley", "apple", "xylyl"})


@pytest.fixture(scope="session")
def engine():
    # StaticPool + check_same_thread=False lets Starlette's TestClient and SQLAlchemy
    # share ONE in-memory SQLite database across threads.
    engine = create_engine(
        TEST_DATABASE_URL,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine) -> Generator:
    """Provide a clean session per test with rollback."""
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    db = TestingSessionLocal()
    try:
        yield db
        db.rollback()
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _clean_db(engine):
    """The repository commits inside requests, so wipe rows before each test."""
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM daily_results"))
    yield


@pytest.fixture
def dictionary() -> Dictionary:
    return Dictionary(answers=TEST_ANSWERS, allowed=TEST_ALLOWED)


@pytest.fixture
def store(dictionary) -> GameStore:
    return GameStore(dictionary)


@pytest.fixture(autouse=True)
def override_dep(db_session, store):
    """Force the app to use our test session and a fresh store for every request."""
    def _get_db_for_tests():
        try:
            yield db_session
        finally:
            pass

    previous_store = app.state.store
    app.dependency_overrides[get_db] = _get_db_for_tests
    app.state.store = store
    yield
    app.dependency_overrides.clear()
    app.state.store = previous_store


@pytest.fixture
def client():
    return TestClient(app)
