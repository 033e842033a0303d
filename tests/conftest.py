from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from dictations.config import Settings
from dictations.services.ingestion import IngestionService
from dictations.services.llm import LLMService
from dictations.services.retrieval import RetrievalService

TASK_REPLY = '{"category": "task", "confidence": 0.92}'


class FakeStore:
    """In-memory stand-in for KeyValueStore."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.puts: list[str] = []
        self.gets: list[str] = []

    async def put(self, key: str, value: str) -> None:
        self.puts.append(key)
        self.data[key] = value

    async def get(self, key: str) -> str | None:
        self.gets.append(key)
        return self.data.get(key)

    async def list_keys(self, prefix: str, limit: int) -> list[str]:
        return sorted(k for k in self.data if k.startswith(prefix))[:limit]


class FakeLLM(LLMService):
    """LLMService whose chat call returns a canned reply (or raises it)."""

    def __init__(self, settings: Settings, reply=TASK_REPLY):
        super().__init__(settings)
        self.reply = reply
        self.calls: list[list[dict]] = []

    async def chat(self, messages, **kwargs):
        self.calls.append(messages)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        timezone_offset_hours=0,
        list_cap=50,
        default_limit=50,
        default_source="api",
    )


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def llm(settings):
    return FakeLLM(settings)


@pytest.fixture
def clock():
    return FrozenClock(datetime(2024, 3, 9, 8, 5, 7, tzinfo=timezone.utc))


@pytest.fixture
def ingestion(llm, store, settings, clock):
    return IngestionService(llm, store, settings=settings, clock=clock)


@pytest.fixture
def retrieval(store, settings):
    return RetrievalService(store, settings=settings)


@pytest.fixture
def client(ingestion, retrieval):
    from dictations.main import app

    app.state.ingestion = ingestion
    app.state.retrieval = retrieval
    # Not entered as a context manager, so the lifespan (Redis, httpx) never runs.
    yield TestClient(app)
    del app.state.ingestion
    del app.state.retrieval
