"""
Shared fixtures: a file-backed SQLite rate store per test.
"""

import pytest_asyncio

from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.rates import RateSnapshotRepository


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'rates.db'}")
    await db.create_tables()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def repository(db_session):
    return RateSnapshotRepository(db_session=db_session)
