"""
Test configuration and fixtures.

Required settings are provided through the environment before the
application modules are imported.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("MAIL_USERNAME", "mailer@example.com")
os.environ.setdefault("MAIL_PASSWORD", "test-password")
os.environ.setdefault("MAIL_FROM", "mailer@example.com")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database.database import Base
import app.models  # noqa: F401
from app.repositories.verification_code_repository import VerificationCodeRepository
from tests.fakes import FakeIdentityProvider, FakeNotifier, InMemoryCodeStore


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def code_repository(db_session):
    return VerificationCodeRepository(db_session)


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def code_store():
    return InMemoryCodeStore()
