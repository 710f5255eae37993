"""
Pytest configuration and fixtures for Blog API tests
"""

import os

# Point the module-level engine at SQLite before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from blog_api.database import build_engine, build_session_factory, init_models  # noqa: E402
from blog_api.main import create_app  # noqa: E402
from blog_api.repositories import (  # noqa: E402
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryTagRepository,
    SQLAlchemyPostRepository,
    SQLAlchemyTagRepository,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """Fresh in-memory SQLite database with all tables, per test."""
    engine = build_engine(TEST_DATABASE_URL)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture(scope="function")
def sql_post_repository(session_factory):
    return SQLAlchemyPostRepository(session_factory)


@pytest.fixture(scope="function")
def sql_tag_repository(session_factory):
    return SQLAlchemyTagRepository(session_factory)


@pytest.fixture(scope="function")
def memory_store():
    return InMemoryStore()


@pytest.fixture(scope="function")
def memory_post_repository(memory_store):
    return InMemoryPostRepository(memory_store)


@pytest.fixture(scope="function")
def memory_tag_repository(memory_store):
    return InMemoryTagRepository(memory_store)


@pytest.fixture(scope="function", params=["database", "memory"])
def repositories(request, session_factory):
    """
    (post_repository, tag_repository) for each implementation, so contract
    tests run once against SQLAlchemy and once against the in-memory store.
    """
    if request.param == "database":
        return SQLAlchemyPostRepository(session_factory), SQLAlchemyTagRepository(session_factory)
    store = InMemoryStore()
    return InMemoryPostRepository(store), InMemoryTagRepository(store)


@pytest.fixture(scope="function")
def post_repository(repositories):
    return repositories[0]


@pytest.fixture(scope="function")
def tag_repository(repositories):
    return repositories[1]


@pytest.fixture(scope="function")
async def client(memory_post_repository, memory_tag_repository):
    """HTTP client for an app wired to the in-memory repositories."""
    app = create_app(memory_post_repository, memory_tag_repository)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="function")
async def sql_client(sql_post_repository, sql_tag_repository):
    """HTTP client for an app wired to the SQLAlchemy repositories."""
    app = create_app(sql_post_repository, sql_tag_repository)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
