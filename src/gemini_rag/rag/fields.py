"""
Field access over backend payloads.

The google-genai SDK returns pydantic models with snake_case attributes, while
raw REST payloads (and test doubles) are plain dicts keyed in camelCase. Both
shapes flow through the orchestration layer, so every read goes through
``get_field``.
"""

from typing import Any


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def get_field(obj: Any, name: str, default: Any = None) -> Any:
    """
    Read ``name`` (snake_case) from an SDK object or a dict.

    Dicts are looked up by the snake_case key first, then the camelCase one.
    A missing field or a ``None`` value returns ``default``.

    Example:
        >>> get_field({"displayName": "docs"}, "display_name")
        'docs'
    """
    if obj is None:
        return default
    if isinstance(obj, dict):
        value = obj.get(name)
        if value is None:
            value = obj.get(_camel(name))
    else:
        value = getattr(obj, name, None)
    return default if value is None else value
