"""Test configuration."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

import textstore.db.models  # noqa: F401
from textstore.client.http import TextStoreClient
from textstore.client.models import Session
from textstore.client.screen import EntriesScreen
from textstore.core.db import get_db
from textstore.db.base import Base
from textstore.main import app
from tests.fakes import FakeSessionFeed, InMemoryRemoteStore, RecordingSink, make_session


@pytest.fixture
def alice() -> Session:
    return make_session("alice@example.com")


@pytest.fixture
def bob() -> Session:
    return make_session("bob@example.com")


@pytest.fixture
def feed(alice: Session) -> FakeSessionFeed:
    return FakeSessionFeed(alice)


@pytest.fixture
def store(feed: FakeSessionFeed) -> InMemoryRemoteStore:
    return InMemoryRemoteStore(feed)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


class ScreenHarness:
    """Entries screen wired to fakes, with recorded redirects and prompts."""

    def __init__(self, feed: FakeSessionFeed, store: InMemoryRemoteStore, sink: RecordingSink) -> None:
        self.feed = feed
        self.store = store
        self.sink = sink
        self.redirects = []
        self.prompts = []
        self.answer = True
        self.screen = EntriesScreen(
            feed=feed,
            store=store,
            notifier=sink,
            confirm=self._confirm,
            redirect=self.redirects.append,
            auth_path="/auth",
        )

    def _confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer


@pytest.fixture
def harness(feed: FakeSessionFeed, store: InMemoryRemoteStore, sink: RecordingSink) -> ScreenHarness:
    harness = ScreenHarness(feed, store, sink)
    yield harness
    harness.screen.stop()


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    # One connection per request session
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def api_client(db_engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    session_factory = sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def text_client(api_client: AsyncClient, tmp_path) -> AsyncGenerator[TextStoreClient, None]:
    client = TextStoreClient(
        base_url="http://test",
        session_file=str(tmp_path / "session.json"),
        transport=ASGITransport(app=app),
    )
    yield client
    await client.aclose()

