"""
Remote-operation orchestration over Gemini File Search.

Components:
    - operations: long-running operation variants and the poller
    - stores: store resolution (find-or-create by display name)
    - ingestion: file and text uploads
    - query: store-scoped queries and response extraction
    - client: GeminiRagClient facade composing the above

Usage:
    >>> from gemini_rag.rag import GeminiRagClient
    >>> client = GeminiRagClient(api_key="...")
    >>> store = await client.ensure_store("docs")
"""

from .client import GeminiRagClient
from .ingestion import ContentIngestor, UploadPayload, get_mime_type
from .metadata import (
    MAX_METADATA_ENTRIES,
    NumericMetadata,
    StringMetadata,
    convert_metadata_input,
)
from .operations import (
    CompletedOperation,
    FailedOperation,
    OperationPoller,
    PendingOperation,
    parse_operation,
)
from .query import QueryExecutor, QueryResult, extract_citations, extract_response_text
from .stores import Store, StoreResolver

__all__ = [
    "GeminiRagClient",
    "ContentIngestor",
    "UploadPayload",
    "get_mime_type",
    "MAX_METADATA_ENTRIES",
    "NumericMetadata",
    "StringMetadata",
    "convert_metadata_input",
    "CompletedOperation",
    "FailedOperation",
    "OperationPoller",
    "PendingOperation",
    "parse_operation",
    "QueryExecutor",
    "QueryResult",
    "extract_citations",
    "extract_response_text",
    "Store",
    "StoreResolver",
]
