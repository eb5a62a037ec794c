"""Database fixtures shared by the unit test suites."""

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel.pool import StaticPool

from verifydesk.core.database.entities import Employee, Verifier
from verifydesk.core.database.utils import create_all, create_engine, create_sessionmaker

# Use in-memory SQLite for testing
# Note: We use check_same_thread=False for SQLite with async
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh database with all tables for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest_asyncio.fixture
async def employee(session: AsyncSession) -> Employee:
    """An active employee allowed to open requests."""
    row = Employee(first_name="Morgan", last_name="Reyes", email="morgan.reyes@example.com", department="HR")
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row


@pytest_asyncio.fixture
async def verifier(session: AsyncSession) -> Verifier:
    """An active verifier."""
    row = Verifier(name="Pat Lindqvist", email="pat.lindqvist@example.com", phone="555-0100")
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row
