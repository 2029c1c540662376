"""Transport interfaces for host communication.

Defines the Protocol the correlation engine uses to hand outbound envelopes
to the host. Concrete transports (framed postMessage channels, frameless
bridges) live outside this package; `memory.py` provides an in-process
implementation for embedding and tests.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from .memory import InMemoryTransport

InboundListener = Callable[[dict[str, Any]], None]


@runtime_checkable
class MessageTransport(Protocol):
    """Protocol for fire-and-forget outbound message delivery.

    Purpose:
    - Carry one envelope to the host per call, in call order.
    - Never wait for a reply: responses come back through whatever listener
      the owner of the transport wires to `CorrelationEngine.handle_message`.

    Examples:
        >>> transport.post_message({"id": 0, "func": "tasks.startTask", "args": [info]})
    """

    def post_message(self, message: dict[str, Any]) -> None:
        """Send an envelope to the host.

        Args:
            message: JSON-compatible envelope with ``func``, ``args`` and an
                optional ``id``.

        Raises:
            Exception: Implementations may raise transport-specific errors; the
                caller's request is then abandoned and the error propagates.
        """
        ...


__all__ = ["InboundListener", "MessageTransport", "InMemoryTransport"]
