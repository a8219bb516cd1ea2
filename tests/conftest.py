"""Shared fixtures: a throwaway database and an API client bound to it."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import foodkeeper.api.recipes as recipes_api
from foodkeeper import models  # noqa: F401
from foodkeeper.database import Base, get_db
from foodkeeper.main import app

TEST_DATABASE_URL = os.getenv("DATABASE_URL_TEST", "sqlite:///./test_foodkeeper.db")

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if TEST_DATABASE_URL.startswith("sqlite") else {},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def schema():
    """Build every table once; drop them when the run ends."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def db():
    """Session for one test. Tables are emptied afterwards, children first."""
    session = TestingSessionLocal()
    yield session
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def session_factory():
    """For code that opens its own sessions (Celery tasks, the AI quota counter)."""
    return TestingSessionLocal


@pytest.fixture(autouse=True)
def fresh_assistant():
    """Never carry the process-wide recipe assistant over between tests."""
    recipes_api._assistant = None
    yield
    recipes_api._assistant = None


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
