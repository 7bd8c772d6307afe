"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Dict, List, Optional, Set

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Set testing environment before importing app
os.environ["MEDIA_BUCKET"] = "test-media-bucket"
os.environ["RECORD_STORE_BACKEND"] = "redis"
os.environ["REDIS_URL"] = "redis://localhost:6379"
os.environ["LOG_LEVEL"] = "WARNING"

from prompt_history.core.exceptions import NotFoundError, StoreError  # noqa: E402
from prompt_history.services.storage.base import BlobStore, Item, RecordStore  # noqa: E402


# =============================================================================
# In-memory stores
# =============================================================================


class InMemoryRecordStore(RecordStore):
    """Dict-backed record store with failure injection."""

    def __init__(self):
        self.items: Dict[str, Item] = {}
        self.fail_on: Set[str] = set()
        self.error_message = "simulated record store failure"

    @property
    def name(self) -> str:
        return "memory"

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StoreError(self.name, operation, self.error_message)

    async def put(self, item: Item) -> None:
        self._maybe_fail("put")
        self.items[item["id"]] = dict(item)

    async def scan(self) -> List[Item]:
        self._maybe_fail("scan")
        return [dict(item) for item in self.items.values()]

    async def get(self, item_id: str) -> Optional[Item]:
        self._maybe_fail("get")
        item = self.items.get(item_id)
        return dict(item) if item else None

    async def update(self, item_id: str, fields: Item) -> Item:
        self._maybe_fail("update")
        if item_id not in self.items:
            raise NotFoundError("Prompt", item_id)
        self.items[item_id].update(fields)
        return dict(self.items[item_id])

    async def delete(self, item_id: str) -> None:
        self._maybe_fail("delete")
        self.items.pop(item_id, None)

    async def ping(self) -> bool:
        return "ping" not in self.fail_on


class InMemoryBlobStore(BlobStore):
    """Blob store recording deleted keys."""

    def __init__(self):
        self.deleted: List[str] = []
        self.fail_on: Set[str] = set()
        self.error_message = "simulated blob store failure"

    @property
    def name(self) -> str:
        return "memory-blob"

    async def delete(self, key: str) -> None:
        if "delete" in self.fail_on:
            raise StoreError(self.name, "delete", self.error_message)
        self.deleted.append(key)

    async def ping(self) -> bool:
        return "ping" not in self.fail_on


class StepClock:
    """Clock advancing one second per call, rendered like the real clock."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def __call__(self) -> str:
        value = self.current.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        self.current += timedelta(seconds=1)
        return value


# =============================================================================
# Service and App Fixtures
# =============================================================================


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def service(record_store, blob_store, clock):
    """PromptService wired to in-memory stores."""
    from prompt_history.services.prompt import PromptService

    return PromptService(record_store, blob_store, clock=clock)


@pytest_asyncio.fixture
async def app(service) -> AsyncGenerator[FastAPI, None]:
    """FastAPI app with the prompt service overridden."""
    from prompt_history.api.deps import get_prompt_service
    from prompt_history.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_prompt_service] = lambda: service
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def cat_prompt() -> dict:
    """Valid create request body."""
    return {
        "prompt": "a cat",
        "mediaUrl": "https://x/y/cat.png",
        "mediaType": "image",
    }


@pytest.fixture
def dog_prompt() -> dict:
    """Valid update request body."""
    return {
        "prompt": "a dog",
        "mediaUrl": "https://x/y/dog.png",
        "mediaType": "image",
    }


@pytest.fixture
def invalid_create_bodies() -> list[dict]:
    """Collection of create bodies that must be rejected."""
    return [
        # Missing prompt
        {"mediaUrl": "https://x/y/cat.png", "mediaType": "image"},
        # Empty prompt
        {"prompt": "", "mediaUrl": "https://x/y/cat.png", "mediaType": "image"},
        # Missing mediaUrl
        {"prompt": "a cat", "mediaType": "image"},
        # Empty mediaUrl
        {"prompt": "a cat", "mediaUrl": "", "mediaType": "image"},
        # Unknown mediaType
        {"prompt": "a cat", "mediaUrl": "https://x/y/cat.png", "mediaType": "text"},
        # Missing mediaType
        {"prompt": "a cat", "mediaUrl": "https://x/y/cat.png"},
    ]
