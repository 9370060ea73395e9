import os

# Settings are loaded at import time; give the required secrets dummy values.
os.environ.setdefault("GOOGLE_API_KEY", "test-google-key")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from sucoi.src.database.mongo import MongoDatabase
from sucoi.src.main import create_app


class FakeCompletion:
    """Records every prompt; returns ``reply`` or raises ``error``."""

    def __init__(self, reply: str | None = "I'm here for you.") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
async def database():
    db = MongoDatabase(AsyncMongoMockClient(), "sucoi_test")
    await db.ensure_indexes()
    return db


@pytest.fixture
def completion():
    return FakeCompletion()


@pytest.fixture
def app(database, completion):
    return create_app(database=database, completion=completion)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
