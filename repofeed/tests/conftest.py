import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from repofeed.api.main import app
from repofeed.api.routes.events import get_detail_enricher
from repofeed.config.db import build_engine, get_session
from repofeed.integrations.github.detail_enricher import DetailEnricher
from repofeed.integrations.github.github import GitHubApiClient
from repofeed.models.event import Event  # noqa: F401
from repofeed.models.repo import Repo  # noqa: F401


@pytest.fixture
def engine():
    """In-memory SQLite with the real tables and unique constraints."""
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def github_client():
    return GitHubApiClient("test-token", api_url="https://api.github.test", timeout=5)


@pytest.fixture
def client(engine, github_client):
    """
    TestClient wired to the in-memory engine.

    The lifespan is not entered, so no engine is built from DATABASE_URL;
    the session and enricher dependencies are overridden instead.
    """

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_detail_enricher] = lambda: DetailEnricher(github_client)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
