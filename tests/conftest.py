"""Shared fixtures for catalog tests."""
import pytest
import pytest_asyncio

from core.database import close_db, create_engine, create_session_factory, init_db
from patterns.domain_config import DatabaseConfig
from verticals.catalog.store import InMemoryBookStore, SqlBookStore


CLEAN_CODE = {
    "title": "Clean Code",
    "author": "Robert C. Martin",
    "genre": "Programming",
    "price": 300,
    "publicationYear": 2008,
    "ISBN": "978-0132350884",
}


@pytest.fixture
def sample_book() -> dict:
    return dict(CLEAN_CODE)


@pytest.fixture
def memory_store() -> InMemoryBookStore:
    return InMemoryBookStore()


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    engine = create_engine(DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"))
    await init_db(engine)
    try:
        yield SqlBookStore(create_session_factory(engine))
    finally:
        await close_db(engine)
