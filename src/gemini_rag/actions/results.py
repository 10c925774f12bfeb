"""
Structured action results.

Every action returns a dict rather than raising:

    {"success": True, "message": "...", "data": {...}}
    {"success": False, "message": "...", "error": "...", "error_type": "..."}
"""

import functools
import logging
from typing import Any, Awaitable, Callable, Dict

from ..exceptions import classify_error

logger = logging.getLogger(__name__)

ActionResult = Dict[str, Any]


def success(message: str, data: Dict[str, Any]) -> ActionResult:
    return {"success": True, "message": message, "data": data}


def failure(error: BaseException, action: str) -> ActionResult:
    error_type = classify_error(error)
    return {
        "success": False,
        "message": f"{action} failed: {error}",
        "error": str(error),
        "error_type": error_type,
    }


def structured_action(name: str):
    """
    Decorate an async action so that any exception becomes a failure result.

    The exception is logged with its classification; the caller only sees the
    structured dict.
    """

    def decorator(func: Callable[..., Awaitable[ActionResult]]):
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> ActionResult:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                result = failure(e, name)
                logger.error(f"Action {name} failed ({result['error_type']}): {e}")
                return result

        return wrapper

    return decorator
