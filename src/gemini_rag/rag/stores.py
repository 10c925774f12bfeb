"""
File Search store resolution.

Stores are identified by an opaque backend ``name`` (``fileSearchStores/...``)
and carry an optional, non-unique ``display_name``. Callers address stores by
display name; ``StoreResolver.ensure_store`` turns that into a backend name,
creating the store on first use.

Concurrency note: the backend has no atomic create-if-absent. Two concurrent
``ensure_store`` calls for a brand-new display name can both miss the scan and
both create a store, leaving duplicates with the same display name. Later calls
resolve to whichever duplicate the backend lists first. No local lock is taken
since it could not see other processes.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ..exceptions import NotFoundError, ProtocolError, api_status_code
from .fields import get_field

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class Store:
    """Handle to a backend File Search store."""

    name: str
    display_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "displayName": self.display_name}


def _to_store(raw: Any) -> Store:
    return Store(name=get_field(raw, "name", ""), display_name=get_field(raw, "display_name"))


class StoreResolver:
    """
    Lists, finds and creates stores through ``client.aio.file_search_stores``.

    Args:
        stores: The async ``file_search_stores`` module of a ``genai.Client``
    """

    def __init__(self, stores: Any):
        self._stores = stores

    async def list_stores(self, page_size: int = DEFAULT_PAGE_SIZE) -> List[Store]:
        """Return the first page of stores."""
        pager = await self._stores.list(config={"page_size": page_size})
        return [_to_store(raw) for raw in pager.page]

    async def list_all_stores(self, page_size: int = DEFAULT_PAGE_SIZE) -> List[Store]:
        """Return every store, following pagination to the end."""
        pager = await self._stores.list(config={"page_size": page_size})
        stores = []
        async for raw in pager:
            store = _to_store(raw)
            if not store.name:
                logger.warning(f"Skipping listed store without a name: {raw!r}")
                continue
            stores.append(store)
        return stores

    async def find_store_by_display_name(self, display_name: str) -> Optional[Store]:
        """Return the first store whose display name matches exactly, or None."""
        for store in await self.list_all_stores():
            if store.display_name == display_name:
                return store
        return None

    async def get_store(self, name: str) -> Store:
        """
        Fetch a store by its backend name.

        Raises:
            NotFoundError: If the backend has no such store
        """
        try:
            raw = await self._stores.get(name=name)
        except Exception as e:
            if api_status_code(e) == 404:
                raise NotFoundError(f"FileSearchStore not found: {name}") from e
            raise
        store = _to_store(raw)
        if not store.name:
            raise NotFoundError(f"FileSearchStore not found: {name}")
        return store

    async def create_store(self, display_name: str) -> Store:
        """
        Create a store with ``display_name``.

        Raises:
            ProtocolError: If the backend returns a store without a name
        """
        logger.info(f"Creating FileSearchStore with displayName: {display_name}")
        raw = await self._stores.create(config={"display_name": display_name})
        store = _to_store(raw)
        if not store.name:
            raise ProtocolError("Failed to create FileSearchStore: response has no name")
        logger.info(f"Created FileSearchStore: {store.name}")
        return store

    async def ensure_store(self, display_name: str) -> Store:
        """Find the store with ``display_name``, creating it when none exists."""
        logger.info(f"Searching for FileSearchStore with displayName: {display_name}")
        found = await self.find_store_by_display_name(display_name)
        if found is not None:
            logger.info(f"Found matching FileSearchStore: {found.name}")
            return found

        logger.info(
            f"No matching store found. Creating new FileSearchStore "
            f"with displayName: {display_name}"
        )
        return await self.create_store(display_name)
