"""Test fixtures and configuration."""

import logging
import os
import sys
from uuid import uuid4

# Settings are read at import time; pin the test environment first.
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./lifeboard_test.db"
os.environ["TIMEZONE"] = "UTC"
os.environ["AI_API_KEY"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
import structlog  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from lifeboard.services.errors import DependencyError  # noqa: E402
from tests.factories import auth_headers  # noqa: E402


class StubGenerator:
    """In-memory TextGenerator: returns ``reply`` or raises ``error``, recording prompts."""

    def __init__(self, reply: str = "", error: DependencyError | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str, *, max_tokens: int = 500) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


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


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Fresh SQLite database per test, schema created from the models."""
    from lifeboard.database import Base
    import lifeboard.models  # noqa: F401

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_database_connection(db_engine):
    """Override global database session maker to use test engine."""
    from lifeboard import database

    test_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    database.set_test_session_maker(test_maker)
    yield
    database.set_test_session_maker(None)


@pytest_asyncio.fixture(scope="function")
async def db(db_engine):
    """Session for calling services directly."""
    async with AsyncSession(db_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_user(db_engine):
    """Create a test user for authenticated requests."""
    from lifeboard.models import User

    async with AsyncSession(db_engine, expire_on_commit=False) as user_session:
        user = User(email=f"test-{uuid4()}@example.com", name="Test User")
        user_session.add(user)
        await user_session.commit()
        await user_session.refresh(user)
    return user


@pytest.fixture
def ai_stub():
    """Replace the AI text generator on the app with a controllable stub."""
    from lifeboard.main import app
    from lifeboard.services.ai_client import get_text_generator

    stub = StubGenerator()
    app.dependency_overrides[get_text_generator] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_text_generator, None)


@pytest_asyncio.fixture(scope="function")
async def client(test_user):
    """Create async test client authenticated as ``test_user``."""
    from lifeboard.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers=auth_headers(test_user.id),
    ) as client_instance:
        yield client_instance


@pytest_asyncio.fixture(scope="function")
async def public_client():
    """Create async test client without auth headers."""
    from lifeboard.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client_instance:
        yield client_instance
