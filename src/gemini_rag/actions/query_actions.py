"""
Query action.

Actions:
    - query_store: Answer a question from the configured store, with citations
"""

from typing import Any, Callable, Dict, Optional

from .results import ActionResult, structured_action, success


def register_actions(registry: Dict[str, Callable], context: Any) -> None:
    """
    Register query actions into the provided registry.

    Args:
        registry: Dictionary to register actions into
        context: RagContext with the client, configured store and model
    """

    @structured_action("query_store")
    async def query_store(query: str, model: Optional[str] = None) -> ActionResult:
        if not isinstance(query, str) or not query.strip():
            raise ValueError("query must be a non-empty string")
        model = model or context.model

        store = await context.client.ensure_store(context.store_display_name)
        result = await context.client.query_store(store.name, query, model=model)
        return success(
            f"Query completed successfully. Found {len(result.citations)} citation(s).",
            {
                "text": result.text,
                "citations": result.citations,
                "query": query,
                "model": model,
                "storeName": store.name,
            },
        )

    registry["query_store"] = query_store
