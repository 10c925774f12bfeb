"""
Knowledge-base actions.

This package provides the action registry that callers (CLI, agent tool
adapters) use instead of talking to ``GeminiRagClient`` directly. Actions are
organized by domain:

- store_actions: ensure_store, list_stores
- upload_actions: upload_file, upload_content
- query_actions: query_store

Every action is an async callable (keyword or positional arguments) returning a
structured result dict (see ``results``); failures never raise.

Usage:
    >>> from gemini_rag.actions import RagContext, build_actions_registry
    >>>
    >>> context = RagContext.from_settings(settings)
    >>> registry = build_actions_registry(context)
    >>> result = await registry["query_store"](query="What is in the docs?")
    >>> result["data"]["citations"]

Custom Action Registration:
    Each module provides a ``register_actions(registry, context)`` function
    that adds actions to the registry.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict

from ..rag.client import GeminiRagClient
from ..rag.stores import DEFAULT_PAGE_SIZE
from .query_actions import register_actions as register_query
from .results import failure, success
from .store_actions import register_actions as register_stores
from .upload_actions import register_actions as register_uploads


@dataclass
class RagContext:
    """
    Shared resources for actions.

    Attributes:
        client: GeminiRagClient used for every backend call
        store_display_name: Display name of the store actions operate on
        model: Default query model
        default_page_size: Page size for list_stores when none is given
    """

    client: Any
    store_display_name: str
    model: str
    default_page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_settings(cls, settings: Any, client: Any = None) -> "RagContext":
        """
        Build a context from ``RagSettings``.

        Raises:
            ConfigurationError: If no client is given and no API key is configured
        """
        if client is None:
            client = GeminiRagClient.from_settings(settings)
        return cls(
            client=client,
            store_display_name=settings.store_display_name,
            model=settings.model,
            default_page_size=settings.default_page_size,
        )


def build_actions_registry(context: RagContext) -> Dict[str, Callable]:
    """
    Build the complete actions registry for a context.

    Args:
        context: RagContext the actions are bound to

    Returns:
        Dictionary mapping action names to async callables
    """
    registry: Dict[str, Callable] = {}
    register_stores(registry, context)
    register_uploads(registry, context)
    register_query(registry, context)
    return registry


__all__ = [
    "RagContext",
    "build_actions_registry",
    "success",
    "failure",
]
