from typing import List, Tuple

import pytest
from fastapi.testclient import TestClient

from movie_rental_api.app.core.db import SqliteDocumentStore
from movie_rental_api.app.core.store import InMemoryDocumentStore
from movie_rental_api.app.main import create_app


class RecordingStore(InMemoryDocumentStore):
    """In-memory store that records which collections were accessed."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[Tuple[str, str]] = []

    async def add_document(self, collection, fields):
        self.calls.append(("add", collection))
        return await super().add_document(collection, fields)

    async def get_document(self, collection, doc_id):
        self.calls.append(("get", collection))
        return await super().get_document(collection, doc_id)

    async def update_document(self, collection, doc_id, fields):
        self.calls.append(("update", collection))
        return await super().update_document(collection, doc_id, fields)

    async def run_query(self, query):
        self.calls.append(("query", query.collection))
        return await super().run_query(query)

    def collections_touched(self) -> List[str]:
        return [collection for _, collection in self.calls]


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def client(store: RecordingStore) -> TestClient:
    return TestClient(create_app(store=store))


@pytest.fixture
def sqlite_client(tmp_path) -> TestClient:
    store = SqliteDocumentStore(str(tmp_path / "movie_rental.db"))
    return TestClient(create_app(store=store))
