"""
Store-scoped RAG queries.

A query is one ``generate_content`` call with a File Search tool restricted to a
single store. The response shape is only partially populated in practice, so
extraction treats every missing level as empty rather than as an error.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List

from google.genai import types

from .fields import get_field

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-pro"


@dataclass
class QueryResult:
    text: str = ""
    citations: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"text": self.text, "citations": list(self.citations)}


def _first_candidate(response: Any) -> Any:
    candidates = get_field(response, "candidates")
    if not candidates:
        return None
    return candidates[0]


def extract_response_text(response: Any) -> str:
    """Concatenate the text of every part of the first candidate."""
    content = get_field(_first_candidate(response), "content")
    parts = get_field(content, "parts")
    if not parts:
        return ""
    return "".join(get_field(part, "text", "") for part in parts)


def extract_citations(response: Any) -> List[str]:
    """Web URIs of the first candidate's grounding chunks, in backend order."""
    grounding = get_field(_first_candidate(response), "grounding_metadata")
    chunks = get_field(grounding, "grounding_chunks")
    if not chunks:
        return []

    citations = []
    for chunk in chunks:
        uri = get_field(get_field(chunk, "web"), "uri")
        if isinstance(uri, str):
            citations.append(uri)
    return citations


def build_file_search_config(store_name: str) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        tools=[
            types.Tool(
                file_search=types.FileSearch(file_search_store_names=[store_name])
            )
        ]
    )


class QueryExecutor:
    """
    Runs a query against one store.

    Args:
        models: The async ``models`` module of a ``genai.Client``
    """

    def __init__(self, models: Any):
        self._models = models

    async def query(self, store_name: str, query: str, model: str = DEFAULT_MODEL) -> QueryResult:
        logger.info(f"Querying store {store_name} with model {model}")
        response = await self._models.generate_content(
            model=model,
            contents=query,
            config=build_file_search_config(store_name),
        )
        return QueryResult(
            text=extract_response_text(response),
            citations=extract_citations(response),
        )
