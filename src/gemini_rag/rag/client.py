"""
Gemini File Search client facade.

``GeminiRagClient`` is the single object callers use. It composes:

    StoreResolver      find-or-create stores by display name
    ContentIngestor    file and text uploads (long-running operations)
    OperationPoller    waits for those operations
    QueryExecutor      store-scoped generation with citations

over one ``google.genai.Client`` (its async ``aio`` surface). No store or
document state is cached between calls.

Example:
    >>> from gemini_rag.rag import GeminiRagClient
    >>>
    >>> client = GeminiRagClient(api_key="...")
    >>> store = await client.ensure_store("docs")
    >>> await client.upload_content(store.name, "hello world", "greeting.txt")
    >>> result = await client.query_store(store.name, "What does the greeting say?")
    >>> print(result.text, result.citations)
"""

import os
from typing import Any, Awaitable, Callable, List, Optional

from google import genai

from .ingestion import ContentIngestor
from .metadata import MetadataInput
from .operations import DEFAULT_POLL_INTERVAL, OperationPoller
from .query import DEFAULT_MODEL, QueryExecutor, QueryResult
from .stores import DEFAULT_PAGE_SIZE, Store, StoreResolver


class GeminiRagClient:
    """
    Knowledge-base operations backed by Gemini File Search.

    Attributes:
        model: Default model for ``query_store``
        poll_interval: Seconds between operation polls during uploads
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        client: Optional[Any] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Gemini API key (uses GOOGLE_API_KEY env var if not provided)
            model: Default query model (default: gemini-2.5-pro)
            poll_interval: Seconds between upload operation polls
            client: Pre-built ``genai.Client`` (or a test double with ``aio``)
            sleep: Override for the polling delay coroutine
        """
        if client is None:
            api_key = api_key or os.environ.get("GOOGLE_API_KEY")
            client = genai.Client(vertexai=False, api_key=api_key)

        self.model = model or DEFAULT_MODEL
        self.poll_interval = poll_interval
        self._client = client

        aio = client.aio
        poller_kwargs = {"poll_interval": poll_interval}
        if sleep is not None:
            poller_kwargs["sleep"] = sleep
        self._poller = OperationPoller(aio.operations.get, **poller_kwargs)
        self._stores = StoreResolver(aio.file_search_stores)
        self._ingestor = ContentIngestor(aio.file_search_stores, self._poller)
        self._query = QueryExecutor(aio.models)

    @classmethod
    def from_settings(cls, settings: Any) -> "GeminiRagClient":
        """
        Create a client from ``RagSettings``.

        Raises:
            ConfigurationError: If no API key is configured
        """
        settings.require_api_key()
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            poll_interval=settings.poll_interval,
        )

    # Stores

    async def ensure_store(self, display_name: str) -> Store:
        return await self._stores.ensure_store(display_name)

    async def find_store_by_display_name(self, display_name: str) -> Optional[Store]:
        return await self._stores.find_store_by_display_name(display_name)

    async def list_stores(self, page_size: int = DEFAULT_PAGE_SIZE) -> List[Store]:
        return await self._stores.list_stores(page_size)

    async def get_store(self, name: str) -> Store:
        return await self._stores.get_store(name)

    async def create_store(self, display_name: str) -> Store:
        return await self._stores.create_store(display_name)

    # Ingestion

    async def upload_file(
        self,
        store_name: str,
        file_path: str,
        mime_type: Optional[str] = None,
        display_name: Optional[str] = None,
        metadata: Optional[MetadataInput] = None,
    ) -> str:
        """Upload a file and return the backend document name."""
        return await self._ingestor.ingest_file(
            store_name,
            file_path,
            mime_type=mime_type,
            display_name=display_name,
            metadata=metadata,
        )

    async def upload_content(
        self,
        store_name: str,
        content: str,
        display_name: str,
        metadata: Optional[MetadataInput] = None,
    ) -> str:
        """Upload text content and return the backend document name."""
        return await self._ingestor.ingest_text(
            store_name, content, display_name, metadata=metadata
        )

    # Query

    async def query_store(
        self, store_name: str, query: str, model: Optional[str] = None
    ) -> QueryResult:
        return await self._query.query(store_name, query, model or self.model)
