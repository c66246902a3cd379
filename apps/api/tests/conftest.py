"""Shared fixtures: in-memory SQLite database, fake chat provider, API client."""

import uuid

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from brandbook.db import models  # noqa: F401
from brandbook.db.session import Base
from brandbook.providers import ChatProvider
from brandbook.schemas import ClientCreate
from brandbook.services.clients import create_client


class FakeChat(ChatProvider):
    """Chat provider that returns a canned reply (or raises) and records prompts."""

    model = "fake-model"

    def __init__(self, reply: str = "{}", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []
        self.max_tokens: list[int] = []

    async def _chat(self, messages, max_tokens, temperature=None):
        self.prompts.append(messages[-1]["content"])
        self.max_tokens.append(max_tokens)
        if self.error is not None:
            raise self.error
        return self.reply


def missing_id() -> str:
    """A well-formed id that matches no row."""
    return str(uuid.uuid4())


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client_row(db):
    """A freshly created client with the empty template record."""
    return await create_client(db, ClientCreate(client_name="Bright Smiles Dental", industry="Dental"))


@pytest.fixture
def chat():
    return FakeChat()


@pytest_asyncio.fixture
async def api(session_factory, chat):
    """httpx client bound to the ASGI app, with the database and chat provider overridden."""
    from brandbook.core import limiter
    from brandbook.dependencies import get_chat, get_db
    from brandbook.main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chat] = lambda: chat
    limiter.enabled = False
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    limiter.enabled = True
    app.dependency_overrides.clear()
