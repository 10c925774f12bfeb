"""
gemini-rag-kb: knowledge-base stores backed by Gemini File Search.

Documents are uploaded into named stores and natural-language queries are
answered from those stores with citations.

Usage:
    >>> from gemini_rag import GeminiRagClient
    >>> client = GeminiRagClient(api_key="...")
    >>> store = await client.ensure_store("docs")
    >>> await client.upload_file(store.name, "handbook.pdf")
    >>> result = await client.query_store(store.name, "What is the leave policy?")
"""

__version__ = "1.0.0"

from .exceptions import (
    ConfigurationError,
    GeminiRagError,
    NotFoundError,
    ProtocolError,
    RemoteOperationError,
    classify_error,
)
from .rag import GeminiRagClient, QueryResult, Store
from .settings import RagSettings, load_settings

__all__ = [
    "__version__",
    "ConfigurationError",
    "GeminiRagError",
    "NotFoundError",
    "ProtocolError",
    "RemoteOperationError",
    "classify_error",
    "GeminiRagClient",
    "QueryResult",
    "Store",
    "RagSettings",
    "load_settings",
]
