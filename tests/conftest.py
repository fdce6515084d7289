"""
Shared test fixtures.

Every test gets its own in-memory database, so no state leaks
between tests and nothing touches the application's store.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from bank_api.main import app
from bank_api.models import Base
from bank_api.models.base import engine_options, get_db
from bank_api.seed import seed_demo_data, DEMO_PASSWORD


TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def engine():
    """A fresh in-memory database with all tables created."""
    engine = create_engine(TEST_DATABASE_URL, **engine_options(TEST_DATABASE_URL))
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Provide a database session for direct service testing."""
    TestSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def file_sessions(tmp_path):
    """
    Session factory over a database in a temporary file.

    Each session gets its own connection, so tests can run
    sessions side by side from several threads.
    """
    url = f"sqlite:///{tmp_path / 'bank.db'}"
    engine = create_engine(url, **engine_options(url))
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def seeded_session(db_session):
    """Session over a store holding the two demo accounts."""
    seed_demo_data(db_session)
    return db_session


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    We override the get_db dependency so the FastAPI app
    uses our test session instead of the real database.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(client, db_session):
    seed_demo_data(db_session)
    return client


@pytest.fixture
def login(client):
    """Return a function that logs in and gives back auth headers."""
    def _login(username, password=DEMO_PASSWORD):
        response = client.post("/auth/login", json={
            "username": username,
            "password": password,
        })
        assert response.status_code == 200, response.json()
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login
