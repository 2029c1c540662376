"""In-process transport.

`InMemoryTransport` records every outbound envelope and lets the host side
push inbound envelopes (responses and events) to an attached listener,
synchronously. It stands in for the postMessage channel wherever no real host
exists: embedding tests, simulations, and local tooling.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


class InMemoryTransport:
    """Minimal transport keeping outbound messages in a list.

    - post_message(message): record a deep copy of the envelope
    - attach(listener): route inbound envelopes to `listener`
    - respond(id, *args) / emit(func, *args): deliver host-side envelopes

    Usage guidelines:
    - Attach `HostSession.handle_message` (done automatically by `HostSession`).
    - Use `find_message_by_func` to locate the request to answer.
    """

    def __init__(self, *, fail_with: Optional[Exception] = None) -> None:
        self.messages: List[dict[str, Any]] = []
        self._listener: Optional[Callable[[dict[str, Any]], None]] = None
        self._fail_with = fail_with

    def post_message(self, message: dict[str, Any]) -> None:
        if self._fail_with is not None:
            raise self._fail_with
        logger.debug("in-memory post: func=%s id=%s", message.get("func"), message.get("id"))
        self.messages.append(copy.deepcopy(message))

    def attach(self, listener: Callable[[dict[str, Any]], None]) -> None:
        self._listener = listener

    def detach(self) -> None:
        self._listener = None

    def deliver(self, data: dict[str, Any]) -> None:
        """Push an inbound envelope to the attached listener.

        Raises:
            RuntimeError: If no listener is attached.
        """
        if self._listener is None:
            raise RuntimeError("No inbound listener attached to transport")
        self._listener(data)

    def respond(self, message_id: int, *args: Any) -> None:
        """Answer a request: ``args`` is ``(error_or_None, *values)``."""
        self.deliver({"id": message_id, "args": list(args)})

    def emit(self, func: str, *args: Any) -> None:
        """Deliver an unsolicited host event."""
        self.deliver({"func": func, "args": list(args)})

    def find_message_by_func(self, func: str) -> Optional[dict[str, Any]]:
        """Return the most recent outbound message for `func`, or None."""
        for message in reversed(self.messages):
            if message.get("func") == func:
                return message
        return None

    def find_messages_by_func(self, func: str) -> List[dict[str, Any]]:
        return [m for m in self.messages if m.get("func") == func]

    def clear(self) -> None:
        self.messages.clear()
