"""
Custom document metadata.

A metadata value is exactly one of a string or a number. Each branch is its own
type so that the conversion to the backend's ``CustomMetadata`` is decided once,
here, instead of by inspecting loosely typed maps downstream.

Example:
    >>> entries = convert_metadata_input({"author": "Ada", "year": 1843})
    >>> entries
    [StringMetadata(key='author', value='Ada'), NumericMetadata(key='year', value=1843.0)]
    >>> [e.to_custom_metadata().key for e in entries]
    ['author', 'year']
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from google.genai import types

# Backend limit on custom metadata entries per document
MAX_METADATA_ENTRIES = 20


@dataclass(frozen=True)
class StringMetadata:
    key: str
    value: str

    def to_custom_metadata(self) -> types.CustomMetadata:
        return types.CustomMetadata(key=self.key, string_value=self.value)


@dataclass(frozen=True)
class NumericMetadata:
    key: str
    value: float

    def to_custom_metadata(self) -> types.CustomMetadata:
        return types.CustomMetadata(key=self.key, numeric_value=self.value)


MetadataEntry = Union[StringMetadata, NumericMetadata]
MetadataInput = Union[Mapping[str, Union[str, int, float]], Iterable[MetadataEntry]]


def metadata_entry(key: str, value: Any) -> MetadataEntry:
    """
    Build the metadata branch matching ``value``'s type.

    Raises:
        ValueError: If the key is empty or the value is neither str nor number
    """
    if not isinstance(key, str) or not key:
        raise ValueError(f"Metadata key must be a non-empty string, got {key!r}")
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValueError(f"Metadata value for '{key}' must be a string or number, got bool")
    if isinstance(value, str):
        return StringMetadata(key, value)
    if isinstance(value, (int, float)):
        return NumericMetadata(key, float(value))
    raise ValueError(
        f"Metadata value for '{key}' must be a string or number, "
        f"got {type(value).__name__}"
    )


def convert_metadata_input(metadata: Optional[MetadataInput]) -> List[MetadataEntry]:
    """
    Normalize caller metadata into an ordered list of entries.

    Accepts a ``{key: str | number}`` mapping (insertion order kept) or an
    iterable of already-built entries. ``None`` yields an empty list.
    """
    if metadata is None:
        return []
    if isinstance(metadata, Mapping):
        return [metadata_entry(key, value) for key, value in metadata.items()]

    entries = []
    for entry in metadata:
        if not isinstance(entry, (StringMetadata, NumericMetadata)):
            raise ValueError(f"Unsupported metadata entry: {entry!r}")
        entries.append(entry)
    return entries


def validate_metadata_count(entries: List[MetadataEntry]) -> None:
    """Raise ValueError when more entries are given than the backend accepts."""
    if len(entries) > MAX_METADATA_ENTRIES:
        raise ValueError(
            f"Too many metadata entries: {len(entries)} "
            f"(maximum {MAX_METADATA_ENTRIES})"
        )


def metadata_to_dict(entries: Iterable[MetadataEntry]) -> Dict[str, Union[str, float]]:
    """Flatten entries back into a plain mapping for reporting."""
    return {entry.key: entry.value for entry in entries}
