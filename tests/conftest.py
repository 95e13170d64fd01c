from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.main import create_app
from src.schemas.images import IMAGE_KEYS
from src.services.hash_store import HashStore

SOURCES = {key: f"http://x/{key}.png" for key in IMAGE_KEYS}
SOURCES["en"] = "http://x/a.png"


@pytest.fixture
def sources() -> dict[str, str]:
    return dict(SOURCES)


@pytest.fixture
def store(sources: dict[str, str]) -> HashStore:
    return HashStore(sources)


@pytest.fixture
def app(sources: dict[str, str], store: HashStore) -> FastAPI:
    return create_app(sources, store=store, refresh_interval=3600)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
