"""
Store actions.

Actions:
    - ensure_store: Find the configured store by display name or create it
    - list_stores: List the first page of stores visible to the API key
"""

from typing import Any, Callable, Dict, Optional

from .results import ActionResult, structured_action, success

MAX_PAGE_SIZE = 100


def register_actions(registry: Dict[str, Callable], context: Any) -> None:
    """
    Register store actions into the provided registry.

    Args:
        registry: Dictionary to register actions into
        context: RagContext with the client and configured store
    """

    @structured_action("ensure_store")
    async def ensure_store() -> ActionResult:
        """Ensure the configured store exists, reporting whether it was created."""
        client = context.client
        existing = await client.find_store_by_display_name(context.store_display_name)
        if existing is not None:
            return success(
                f"FileSearchStore already exists: {existing.name}",
                {
                    "storeName": existing.name,
                    "displayName": existing.display_name,
                    "created": False,
                },
            )

        created = await client.create_store(context.store_display_name)
        return success(
            f"Created new FileSearchStore: {created.name}",
            {
                "storeName": created.name,
                "displayName": created.display_name,
                "created": True,
            },
        )

    @structured_action("list_stores")
    async def list_stores(page_size: Optional[int] = None) -> ActionResult:
        """List stores; page_size must be between 1 and 100."""
        if page_size is None:
            page_size = context.default_page_size
        if isinstance(page_size, bool) or not isinstance(page_size, int):
            raise ValueError(f"page_size must be an integer, got {page_size!r}")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")

        stores = await context.client.list_stores(page_size)
        return success(
            f"Found {len(stores)} FileSearchStore(s)",
            {"stores": [store.to_dict() for store in stores], "total": len(stores)},
        )

    registry["ensure_store"] = ensure_store
    registry["list_stores"] = list_stores
