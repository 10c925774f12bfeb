"""
Core Exception Classes for gemini-rag-kb.

This module holds the error taxonomy shared by the orchestration layer
(``gemini_rag.rag``) and its callers (actions, CLI).

Taxonomy:
    GeminiRagError
        RemoteOperationError  backend reported a long-running job failure
        ProtocolError         backend returned a structurally invalid response
        NotFoundError         a store expected to exist is absent
        ConfigurationError    settings are invalid or incomplete

Local file read failures are reported with the built-in ``IOError``.
"""

import json
from typing import Any, Optional

from google.genai import errors as genai_errors


class GeminiRagError(Exception):
    """Base class for all gemini-rag-kb errors."""


class RemoteOperationError(GeminiRagError):
    """
    A long-running backend operation finished with an error.

    Attributes:
        error: The raw error payload reported by the backend.

    Example:
        >>> raise RemoteOperationError.from_payload({"code": 13, "message": "boom"})
        Traceback (most recent call last):
        ...
        gemini_rag.exceptions.RemoteOperationError: boom
    """

    def __init__(self, message: str, error: Any = None):
        self.error = error
        super().__init__(message)

    @classmethod
    def from_payload(cls, error: Any) -> "RemoteOperationError":
        """Build the error from a backend error payload (dict or SDK object)."""
        if isinstance(error, dict):
            message = error.get("message")
        else:
            message = getattr(error, "message", None)
        if not message:
            message = _dump_payload(error)
        return cls(message, error=error)


class ProtocolError(GeminiRagError):
    """The backend returned a value that violates the expected shape."""


class NotFoundError(GeminiRagError):
    """A store that the caller expected to exist could not be found."""


class ConfigurationError(GeminiRagError):
    """Settings are invalid or a required setting is missing."""


def _dump_payload(payload: Any) -> str:
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump(exclude_none=True)
    try:
        return json.dumps(payload, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return str(payload)


def classify_error(error: BaseException) -> str:
    """
    Map an exception to a stable ``error_type`` string.

    Used by the action layer to build structured failure results.

    Args:
        error: The exception to classify

    Returns:
        One of: remote_operation, protocol, not_found, configuration, io,
        validation, api_error, unknown
    """
    if isinstance(error, RemoteOperationError):
        return "remote_operation"
    if isinstance(error, ProtocolError):
        return "protocol"
    if isinstance(error, NotFoundError):
        return "not_found"
    if isinstance(error, ConfigurationError):
        return "configuration"
    if isinstance(error, OSError):
        return "io"
    if isinstance(error, (ValueError, TypeError)):
        return "validation"
    if isinstance(error, genai_errors.APIError):
        return "api_error"
    return "unknown"


def api_status_code(error: BaseException) -> Optional[int]:
    """Return the HTTP status code carried by a google-genai API error, if any."""
    code = getattr(error, "code", None)
    return code if isinstance(code, int) else None
