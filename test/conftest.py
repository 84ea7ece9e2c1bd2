from __future__ import annotations

import json
import os
from typing import Any, AsyncGenerator, Dict, Iterable, List, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Set test environment before importing the app
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["DATABASE_AUTO_CREATE"] = "false"
os.environ["AEROTRAVEL_LOG_FILE_ENABLED"] = "false"
os.environ["LOGFIRE_ENABLED"] = "false"

from aerotravel.ai.base import AIAgentBase, AIAgentConfig, AIAgentResponse  # noqa: E402
from aerotravel.core.database.utils import create_all, create_sessionmaker  # noqa: E402
from aerotravel.events.bus import EventBus  # noqa: E402


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://0.0.0.0",
        "http://test",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)


class ScriptedAgent(AIAgentBase):
    """Agent double returning a canned reply instead of calling an LLM."""

    def __init__(
        self,
        config: AIAgentConfig,
        reply: Any = None,
        error: Optional[str] = None,
        fail_init: bool = False,
        prompts: Optional[List[str]] = None,
    ) -> None:
        super().__init__(config)
        self._reply = reply
        self._error = error
        self._fail_init = fail_init
        self._prompts = prompts if prompts is not None else []

    async def initialize(self) -> None:
        if self._fail_init:
            raise RuntimeError("no credentials for model")
        self._initialized = True

    async def invoke(self, input_text: str, context: Optional[Dict[str, Any]] = None, **kwargs: Any) -> AIAgentResponse:
        self._prompts.append(input_text)
        if self._error is not None:
            return AIAgentResponse(content=None, error=self._error, success=False)
        return AIAgentResponse(content=self._reply, success=True)

    async def cleanup(self) -> None:
        self._initialized = False


SAMPLE_ARTICLE = {
    "title": "Pesona Labuan Bajo",
    "meta_description": "Jelajahi Labuan Bajo bersama kami.",
    "content": "# Pesona Labuan Bajo\n\nLabuan Bajo adalah surga di timur Indonesia.",
    "keywords": ["labuan bajo", "open trip"],
}


@pytest.fixture
def scripted_agent_factory():
    """Build agent factories for :class:`ContentSpinner` that never reach a real model.

    Usage: ``spinner = ContentSpinner(agent_factory=scripted_agent_factory(reply=...))``.
    The returned factory records every prompt on its ``prompts`` attribute.
    """

    def _build(
        reply: Any = json.dumps(SAMPLE_ARTICLE),
        error: Optional[str] = None,
        fail_init: bool = False,
    ):
        prompts: List[str] = []

        def factory(config: AIAgentConfig) -> ScriptedAgent:
            return ScriptedAgent(config, reply=reply, error=error, fail_init=fail_init, prompts=prompts)

        factory.prompts = prompts  # type: ignore[attr-defined]
        return factory

    return _build


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_sessionmaker(test_engine)


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def event_bus(session_factory) -> EventBus:
    """Event bus auditing into the test database, with no handlers subscribed."""
    return EventBus(session_factory)


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, session_factory, event_bus, scripted_agent_factory):
    """Create an async HTTP client with overridden dependencies.

    The bus carries the default handlers, writing notifications through the
    test session factory.
    """
    from aerotravel.content.spinner import ContentSpinner
    from aerotravel.core.database import get_session
    from aerotravel.events.handlers import initialize_event_handlers
    from aerotravel.notifications.service import NotificationDispatcher
    from aerotravel.server.main import app
    from aerotravel.server.services.content import get_content_spinner
    from aerotravel.server.services.events import get_event_bus

    initialize_event_handlers(event_bus, NotificationDispatcher(session_factory))
    spinner = ContentSpinner(agent_factory=scripted_agent_factory())

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_event_bus] = lambda: event_bus
    app.dependency_overrides[get_content_spinner] = lambda: spinner

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
