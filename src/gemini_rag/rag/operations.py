"""
Long-running operation (LRO) polling.

Uploads to a File Search store are asynchronous backend jobs. The backend hands
back an operation snapshot whose fields only appear in certain states, so every
snapshot is converted at the boundary into one of three variants:

    PendingOperation    done is false
    CompletedOperation  done is true, no error (carries the response payload)
    FailedOperation     done is true with an error (carries the error payload)

``OperationPoller.wait`` sleeps ``poll_interval`` seconds between refreshes and
has no retry cap or deadline. Callers bound total latency themselves, e.g.:

    >>> completed = await asyncio.wait_for(poller.wait(operation), timeout=600)
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from ..exceptions import ProtocolError, RemoteOperationError
from .fields import get_field

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0

_SCALAR_TYPES = (str, bytes, bytearray, int, float, bool)


@dataclass(frozen=True)
class PendingOperation:
    raw: Any


@dataclass(frozen=True)
class CompletedOperation:
    raw: Any
    response: Any


@dataclass(frozen=True)
class FailedOperation:
    raw: Any
    error: Any


OperationState = Union[PendingOperation, CompletedOperation, FailedOperation]


def parse_operation(raw: Any) -> OperationState:
    """
    Convert a raw operation snapshot into its tagged variant.

    Args:
        raw: SDK operation object or dict

    Returns:
        PendingOperation, CompletedOperation or FailedOperation

    Raises:
        ProtocolError: If ``raw`` is not an operation-shaped object
    """
    if raw is None or isinstance(raw, _SCALAR_TYPES) or isinstance(raw, (list, tuple)):
        raise ProtocolError(
            f"Invalid operation state received while polling: {raw!r}"
        )

    if get_field(raw, "done") is not True:
        return PendingOperation(raw)

    error = get_field(raw, "error")
    if error:
        return FailedOperation(raw, error)
    return CompletedOperation(raw, get_field(raw, "response"))


class OperationPoller:
    """
    Waits for a long-running operation to reach a terminal state.

    Attributes:
        fetch: Coroutine function returning a refreshed snapshot for a raw operation
        poll_interval: Seconds to sleep between refreshes
        sleep: Coroutine function used for the delay (``asyncio.sleep``)
    """

    def __init__(
        self,
        fetch: Callable[[Any], Awaitable[Any]],
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.fetch = fetch
        self.poll_interval = poll_interval
        self.sleep = sleep

    async def wait(
        self, operation: Any, poll_interval: Optional[float] = None
    ) -> CompletedOperation:
        """
        Poll ``operation`` until it is done.

        An operation that is already terminal returns (or raises) without
        sleeping or fetching.

        Args:
            operation: Raw operation snapshot as returned by the backend
            poll_interval: Override for the configured interval (seconds)

        Returns:
            The CompletedOperation

        Raises:
            RemoteOperationError: The operation finished with an error
            ProtocolError: A refresh returned a malformed snapshot
        """
        interval = self.poll_interval if poll_interval is None else poll_interval
        state = parse_operation(operation)
        polls = 0

        while True:
            if isinstance(state, CompletedOperation):
                return state
            if isinstance(state, FailedOperation):
                raise RemoteOperationError.from_payload(state.error)

            await self.sleep(interval)
            polls += 1
            name = get_field(state.raw, "name", "<unnamed>")
            logger.debug(f"Polling operation {name} (attempt {polls})")
            state = parse_operation(await self.fetch(state.raw))
