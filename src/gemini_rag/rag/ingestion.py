"""
Content ingestion into File Search stores.

Two input shapes funnel into one upload primitive:

    ingest_file  bytes read from a path (local or fsspec URI), MIME type taken
                 from the extension when not given, display name defaulting to
                 the file's base name
    ingest_text  UTF-8 encoded string, always ``text/plain``, display name
                 required

``ingest`` submits the upload as a long-running operation and waits for it with
an ``OperationPoller``. If the finished operation carries no document name a
UUID is substituted: the upload itself succeeded.
"""

import io
import logging
import os
import uuid
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, List, Optional

import fsspec

from .fields import get_field
from .metadata import MetadataEntry, MetadataInput, convert_metadata_input
from .operations import OperationPoller

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
TEXT_MIME_TYPE = "text/plain"

MIME_TYPES = {
    ".pdf": "application/pdf",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".html": "text/html",
    ".htm": "text/html",
    ".json": "application/json",
    ".xml": "application/xml",
    ".csv": "text/csv",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def get_mime_type(file_path: str) -> str:
    """Get MIME type from file extension."""
    return MIME_TYPES.get(PurePosixPath(file_path).suffix.lower(), DEFAULT_MIME_TYPE)


def default_display_name(file_path: str) -> str:
    """Base name of a local path or URI."""
    return os.path.basename(file_path.rstrip("/\\")) or file_path


def read_file_bytes(file_path: str) -> bytes:
    """
    Read a file through fsspec.

    Unknown URI schemes and schemes whose filesystem package is not installed
    are reported the same way as missing files.

    Raises:
        IOError: If the file cannot be read; the message names the path
    """
    try:
        with fsspec.open(file_path, "rb") as f:
            return f.read()
    except (OSError, ValueError, ImportError) as e:
        raise IOError(f"Failed to read file '{file_path}': {e}") from e


@dataclass
class UploadPayload:
    """Normalized upload: bytes plus how the backend should label them."""

    data: bytes
    mime_type: str
    display_name: str
    metadata: List[MetadataEntry] = field(default_factory=list)


class ContentIngestor:
    """
    Uploads payloads into a store and waits for indexing to finish.

    Args:
        stores: The async ``file_search_stores`` module of a ``genai.Client``
        poller: OperationPoller bound to the client's operations API
    """

    def __init__(self, stores: Any, poller: OperationPoller):
        self._stores = stores
        self._poller = poller

    async def ingest(self, store_name: str, payload: UploadPayload) -> str:
        """
        Upload ``payload`` into ``store_name`` and return the document name.

        Raises:
            RemoteOperationError: The upload operation failed
            ProtocolError: The backend returned a malformed operation
        """
        logger.info(f"Uploading: {payload.display_name} ({payload.mime_type})")

        config = {
            "mime_type": payload.mime_type,
            "display_name": payload.display_name,
        }
        if payload.metadata:
            config["custom_metadata"] = [
                entry.to_custom_metadata() for entry in payload.metadata
            ]

        operation = await self._stores.upload_to_file_search_store(
            file_search_store_name=store_name,
            file=io.BytesIO(payload.data),
            config=config,
        )
        completed = await self._poller.wait(operation)

        document_name = get_field(completed.response, "document_name")
        if not document_name:
            document_name = str(uuid.uuid4())
            logger.warning(
                f"Upload of {payload.display_name} finished without a document "
                f"name; using generated id {document_name}"
            )
        logger.info(f"Upload complete: {document_name}")
        return document_name

    async def ingest_file(
        self,
        store_name: str,
        file_path: str,
        mime_type: Optional[str] = None,
        display_name: Optional[str] = None,
        metadata: Optional[MetadataInput] = None,
    ) -> str:
        payload = UploadPayload(
            data=read_file_bytes(file_path),
            mime_type=mime_type or get_mime_type(file_path),
            display_name=display_name or default_display_name(file_path),
            metadata=convert_metadata_input(metadata),
        )
        return await self.ingest(store_name, payload)

    async def ingest_text(
        self,
        store_name: str,
        content: str,
        display_name: str,
        metadata: Optional[MetadataInput] = None,
    ) -> str:
        if not display_name:
            raise ValueError("display_name is required for text uploads")
        payload = UploadPayload(
            data=content.encode("utf-8"),
            mime_type=TEXT_MIME_TYPE,
            display_name=display_name,
            metadata=convert_metadata_input(metadata),
        )
        return await self.ingest(store_name, payload)
