"""Test fixtures and configuration."""

import logging
import os
import sys

# Settings are read at import time; pin the test environment before any userhub import
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REPOSITORY_BACKEND"] = "memory"
os.environ["SEED_DEMO_USERS"] = "false"
os.environ.pop("OTEL_EXPORTER_OTLP_ENDPOINT", None)

import pytest
import pytest_asyncio
import structlog
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from userhub.database import Base
from userhub.repositories import InMemoryUserRepository, SqlUserRepository


TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- Structlog Configuration for Tests ---
@pytest.fixture(autouse=True, scope="session")
def configure_structlog_for_tests():
    """Configure structlog for proper capsys capture in tests."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=processors[:-1],
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    yield

    structlog.reset_defaults()


# --- In-memory store ---
@pytest.fixture
def memory_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


# --- SQL store (SQLite in memory, one database per test) ---
@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh schema on a private in-memory SQLite database.

    StaticPool keeps the single connection alive so every session sees the
    same database for the lifetime of the test.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db(db_engine):
    """Session bound to the test engine."""
    session = AsyncSession(db_engine, expire_on_commit=False)
    yield session
    await session.close()


@pytest.fixture
def sql_repository(db) -> SqlUserRepository:
    return SqlUserRepository(db)


@pytest.fixture
def test_session_maker(db_engine):
    """Route userhub.database sessions to the test engine for the duration of a test."""
    from userhub import database

    maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    previous = database.set_test_session_maker(maker)
    yield maker
    database.set_test_session_maker(previous)


# --- HTTP ---
@pytest.fixture
def app(memory_repository):
    from userhub.main import create_app

    return create_app(user_repository=memory_repository)


@pytest_asyncio.fixture
async def client(app):
    """Async test client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client_instance:
        yield client_instance
