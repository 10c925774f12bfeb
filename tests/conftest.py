"""
Pytest configuration and shared fixtures for gemini-rag-kb tests.

Provides an in-memory stand-in for the async surface of ``google.genai.Client``
(``client.aio.file_search_stores``, ``client.aio.operations`` and
``client.aio.models``) so the orchestration layer runs without network access.
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

# Ensure src is in path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gemini_rag.rag import GeminiRagClient


class FakeApiError(Exception):
    """Mimics google.genai.errors.APIError's ``code`` attribute."""

    def __init__(self, code: int, message: str):
        self.code = code
        super().__init__(f"{code} {message}")


class FakePager:
    """Async pager: ``page`` is the first page, iteration walks every page."""

    def __init__(self, items: List[Any], page_size: int):
        self._items = list(items)
        self.page = self._items[:page_size]

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for item in self._items:
            yield item


class FakeFileSearchStores:
    def __init__(self):
        self.stores: List[SimpleNamespace] = []
        self.list_calls: List[Dict[str, Any]] = []
        self.create_calls: List[Dict[str, Any]] = []
        self.upload_calls: List[Dict[str, Any]] = []
        # Operations returned by successive uploads; when empty a finished one is made
        self.upload_operations: List[Any] = []
        self.create_response: Optional[Any] = None

    def add_store(self, name: str, display_name: Optional[str] = None) -> SimpleNamespace:
        store = SimpleNamespace(name=name, display_name=display_name)
        self.stores.append(store)
        return store

    async def list(self, config: Optional[Dict[str, Any]] = None) -> FakePager:
        self.list_calls.append(config or {})
        page_size = (config or {}).get("page_size", 20)
        return FakePager(self.stores, page_size)

    async def get(self, name: str, config: Any = None) -> Any:
        for store in self.stores:
            if store.name == name:
                return store
        raise FakeApiError(404, f"{name} not found")

    async def create(self, config: Optional[Dict[str, Any]] = None) -> Any:
        self.create_calls.append(config or {})
        if self.create_response is not None:
            return self.create_response
        return self.add_store(
            f"fileSearchStores/store-{len(self.create_calls)}",
            (config or {}).get("display_name"),
        )

    async def upload_to_file_search_store(
        self, file_search_store_name: str, file: Any, config: Optional[Dict[str, Any]] = None
    ) -> Any:
        self.upload_calls.append(
            {
                "file_search_store_name": file_search_store_name,
                "data": file.read(),
                "config": config or {},
            }
        )
        if self.upload_operations:
            return self.upload_operations.pop(0)
        return {
            "name": f"{file_search_store_name}/upload/operations/op-{len(self.upload_calls)}",
            "done": True,
            "response": {
                "documentName": f"{file_search_store_name}/documents/doc-{len(self.upload_calls)}"
            },
        }


class FakeOperations:
    def __init__(self):
        # Snapshots returned by successive refreshes
        self.snapshots: List[Any] = []
        self.get_calls: List[Any] = []

    async def get(self, operation: Any, config: Any = None) -> Any:
        self.get_calls.append(operation)
        return self.snapshots.pop(0)


class FakeModels:
    def __init__(self):
        self.response: Any = {"candidates": []}
        self.calls: List[Dict[str, Any]] = []

    async def generate_content(self, model: str, contents: Any, config: Any = None) -> Any:
        self.calls.append({"model": model, "contents": contents, "config": config})
        return self.response


class FakeGenaiClient:
    def __init__(self):
        self.aio = SimpleNamespace(
            file_search_stores=FakeFileSearchStores(),
            operations=FakeOperations(),
            models=FakeModels(),
        )


@pytest.fixture
def genai_client() -> FakeGenaiClient:
    return FakeGenaiClient()


@pytest.fixture
def fake_sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def rag_client(genai_client, fake_sleep) -> GeminiRagClient:
    return GeminiRagClient(client=genai_client, poll_interval=0.5, sleep=fake_sleep)
