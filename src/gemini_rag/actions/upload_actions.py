"""
Upload actions.

Actions:
    - upload_file: Upload a file (local path or fsspec URI) to the configured store
    - upload_content: Upload text content to the configured store

Both resolve the configured store with ensure_store before uploading, and
validate metadata (at most MAX_METADATA_ENTRIES string/number values) before
contacting the backend.

Example:
    >>> result = await registry["upload_content"](
    ...     content="hello world",
    ...     display_name="greeting.txt",
    ...     metadata={"lang": "en"},
    ... )
    >>> result["data"]["documentName"]
    'fileSearchStores/.../documents/...'
"""

from typing import Any, Callable, Dict, Optional

from ..rag.ingestion import default_display_name, get_mime_type
from ..rag.metadata import (
    MetadataInput,
    convert_metadata_input,
    metadata_to_dict,
    validate_metadata_count,
)
from .results import ActionResult, structured_action, success


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
    return value


def register_actions(registry: Dict[str, Callable], context: Any) -> None:
    """
    Register upload actions into the provided registry.

    Args:
        registry: Dictionary to register actions into
        context: RagContext with the client and configured store
    """

    @structured_action("upload_file")
    async def upload_file(
        file_path: str,
        mime_type: Optional[str] = None,
        display_name: Optional[str] = None,
        metadata: Optional[MetadataInput] = None,
    ) -> ActionResult:
        _require_text("file_path", file_path)
        entries = convert_metadata_input(metadata)
        validate_metadata_count(entries)

        display_name = display_name or default_display_name(file_path)
        mime_type = mime_type or get_mime_type(file_path)

        store = await context.client.ensure_store(context.store_display_name)
        document_name = await context.client.upload_file(
            store.name,
            file_path,
            mime_type=mime_type,
            display_name=display_name,
            metadata=entries,
        )
        return success(
            f"File uploaded successfully: {display_name}",
            {
                "documentName": document_name,
                "filePath": file_path,
                "displayName": display_name,
                "mimeType": mime_type,
                "metadata": metadata_to_dict(entries),
                "storeName": store.name,
            },
        )

    @structured_action("upload_content")
    async def upload_content(
        content: str,
        display_name: str,
        metadata: Optional[MetadataInput] = None,
    ) -> ActionResult:
        _require_text("content", content)
        _require_text("display_name", display_name)
        entries = convert_metadata_input(metadata)
        validate_metadata_count(entries)

        store = await context.client.ensure_store(context.store_display_name)
        document_name = await context.client.upload_content(
            store.name, content, display_name, metadata=entries
        )
        return success(
            f"Content uploaded successfully: {display_name}",
            {
                "documentName": document_name,
                "displayName": display_name,
                "metadata": metadata_to_dict(entries),
                "storeName": store.name,
                "contentLength": len(content.encode("utf-8")),
            },
        )

    registry["upload_file"] = upload_file
    registry["upload_content"] = upload_content
