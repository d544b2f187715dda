"""Pytest fixtures and shared test configuration.

Fixtures:
    - auth_config / session_resolver: Test credentials and cookie signer
    - fake_agent: Scripted stand-in for the agent service
    - app: FastAPI app with session and agent dependencies overridden
    - async_client: HTTPX client for API testing (signed out)
    - signed_in_client: HTTPX client carrying a valid session cookie
"""

from collections.abc import AsyncGenerator, Iterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from deepsearch.agent.chat_agent import get_agent_service
from deepsearch.api.app import app as api_app
from deepsearch.api.dependencies import get_session_resolver
from deepsearch.auth.config import AuthConfig
from deepsearch.auth.sessions import SESSION_COOKIE, SessionResolver
from deepsearch.models.schemas import Message, StreamEvent, StreamEventType

TEST_PASSWORD = "correct-horse"


class FakeAgentService:
    """Agent service that replays scripted events and records its calls.

    Attributes:
        events: Events yielded, in order, for every chat turn.
        error: Raised after the scripted events when set.
        calls: Message histories received, one entry per chat turn.
    """

    def __init__(self) -> None:
        self.events: list[StreamEvent] = [
            StreamEvent(type=StreamEventType.TEXT, content="Hello"),
            StreamEvent(type=StreamEventType.TEXT, content=" there"),
        ]
        self.error: Exception | None = None
        self.calls: list[list[Message]] = []

    async def stream_chat(self, messages: list[Message]) -> AsyncGenerator[StreamEvent]:
        self.calls.append(messages)
        for event in self.events:
            yield event
        if self.error is not None:
            raise self.error


@pytest.fixture
def auth_config() -> AuthConfig:
    """Return auth configuration with fixed test secrets."""
    return AuthConfig(secret="test-signing-secret", password=TEST_PASSWORD)


@pytest.fixture
def session_resolver(auth_config: AuthConfig) -> SessionResolver:
    """Return a session resolver using the test secrets."""
    return SessionResolver(auth_config)


@pytest.fixture
def fake_agent() -> FakeAgentService:
    """Return a scripted agent service."""
    return FakeAgentService()


@pytest.fixture
def app(session_resolver: SessionResolver, fake_agent: FakeAgentService) -> Iterator[FastAPI]:
    """Yield the API app with external collaborators overridden.

    Overrides are removed after each test.
    """
    api_app.dependency_overrides[get_session_resolver] = lambda: session_resolver
    api_app.dependency_overrides[get_agent_service] = lambda: fake_agent
    yield api_app
    api_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient without a session cookie.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def signed_in_client(
    app: FastAPI, session_resolver: SessionResolver
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with a valid session cookie for "Ada".

    Yields:
        Configured AsyncClient carrying the session cookie.
    """
    token, _ = session_resolver.issue("Ada")
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={SESSION_COOKIE: token},
    ) as client:
        yield client
