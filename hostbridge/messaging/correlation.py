"""Request/response correlation over a fire-and-forget transport.

`CorrelationEngine` turns an asynchronous, id-tagged transport into:

- correlated calls: each request gets a fresh integer id and a pending entry;
  the first response carrying that id settles it, later ones are ignored;
- persistent named handlers for host-initiated events;
- one-shot posts with no id and no waiter.

Usage:
- `send_request` is the single call-and-resolve primitive. `call` (future) and
  `call_with_callback` (error-first callback) are thin adapters on top of it.
- The owner wires the transport's inbound side to `handle_message`.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Sequence

from pydantic import ValidationError

from ..errors import HostBridgeError, HostReportedError, NotInitializedError, TornDownError
from ..schemas.messages import MessageRequest, MessageResponse
from ..transport import MessageTransport

logger = logging.getLogger(__name__)

Resolve = Callable[..., None]
Reject = Callable[[Any], None]
EventHandler = Callable[..., Any]
ResponseCallback = Callable[..., Any]

REGISTER_HANDLER_FUNC = "registerHandler"


@dataclass
class PendingRequest:
    """A request awaiting its response.

    Attributes
    ----------
    correlation_id:
        Identifier carried by the outbound envelope and expected on the response.
    func:
        Host function name, kept for diagnostics.
    resolve:
        Continuation called with the success values.
    reject:
        Continuation called with the error payload.
    created_at:
        Monotonic timestamp of the send.
    """

    correlation_id: int
    func: str
    resolve: Resolve
    reject: Reject
    created_at: float = field(default_factory=time.monotonic)


def _collapse(values: Sequence[Any]) -> Any:
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return tuple(values)


class CorrelationEngine:
    """
    Correlates outbound requests with inbound responses and dispatches host events.

    The engine is inert until `start()`; every send or handler registration
    while inert raises `NotInitializedError`. `teardown()` returns it to the
    inert state and leaves nothing behind: pending requests are rejected with
    `TornDownError` (or discarded when `reject_pending_on_teardown` is False),
    handlers are cleared and the id counter restarts at 0.
    """

    def __init__(self, transport: MessageTransport, *, reject_pending_on_teardown: bool = True) -> None:
        if not isinstance(transport, MessageTransport):
            raise TypeError(f"Transport {type(transport).__name__} does not conform to MessageTransport protocol")
        self._transport = transport
        self._reject_pending_on_teardown = reject_pending_on_teardown
        self._pending: Dict[int, PendingRequest] = {}
        self._handlers: Dict[str, EventHandler] = {}
        self._next_id = 0
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def pending_ids(self) -> List[int]:
        return sorted(self._pending)

    def start(self) -> None:
        self._active = True

    def teardown(self, reason: str = "Session was uninitialized while the request was pending") -> None:
        """Deactivate the engine and drop all per-session state.

        Args:
            reason: Message attached to the `TornDownError` given to pending requests.
        """
        pending = list(self._pending.values())
        self._pending.clear()
        self._handlers.clear()
        self._next_id = 0
        self._active = False
        if pending:
            logger.info(
                "CorrelationEngine.teardown: %s %d pending request(s)",
                "rejecting" if self._reject_pending_on_teardown else "discarding",
                len(pending),
            )
        if not self._reject_pending_on_teardown:
            return
        for request in pending:
            try:
                request.reject(TornDownError(message=reason))
            except Exception:
                # Teardown must finish for every request even if one continuation fails.
                logger.exception("Reject continuation failed for request id=%s", request.correlation_id)

    def _ensure_active(self) -> None:
        if not self._active:
            raise NotInitializedError()

    def send_request(self, func: str, args: Sequence[Any], *, resolve: Resolve, reject: Reject) -> int:
        """
        Send a correlated request.

        Args:
            func: Host function name.
            args: Ordered call arguments (JSON-compatible).
            resolve: Called with ``*values`` when a success response arrives.
            reject: Called with the error payload when an error response arrives.

        Returns:
            The correlation id assigned to the request.

        Raises:
            NotInitializedError: If the engine is not started.
            Exception: Whatever the transport raises; the request is abandoned.
        """
        self._ensure_active()
        correlation_id = self._next_id
        self._next_id += 1
        request = MessageRequest(id=correlation_id, func=func, args=list(args))
        self._pending[correlation_id] = PendingRequest(correlation_id, func, resolve, reject)
        logger.debug("CorrelationEngine.send_request: id=%s func=%s", correlation_id, func)
        try:
            self._transport.post_message(request.to_wire())
        except Exception:
            self._pending.pop(correlation_id, None)
            raise
        return correlation_id

    def call(self, func: str, *args: Any) -> asyncio.Future:
        """
        Send a correlated request and return a future for its response.

        The future resolves to ``None`` for no success values, the value itself
        for one, or a tuple for several. An error response sets
        `HostReportedError` wrapping the host payload verbatim.

        Raises:
            NotInitializedError: If the engine is not started.
            RuntimeError: If called without a running event loop.
        """
        self._ensure_active()
        future = asyncio.get_running_loop().create_future()

        def _resolve(*values: Any) -> None:
            if not future.done():
                future.set_result(_collapse(values))

        def _reject(error: Any) -> None:
            if future.done():
                return
            future.set_exception(error if isinstance(error, HostBridgeError) else HostReportedError(error))

        self.send_request(func, args, resolve=_resolve, reject=_reject)
        return future

    def call_with_callback(self, func: str, args: Sequence[Any], callback: ResponseCallback) -> int:
        """
        Send a correlated request whose response is passed to an error-first callback.

        The callback receives the response arguments verbatim:
        ``callback(error_or_None, *values)``. On teardown it receives a
        `TornDownError` as the error.
        """

        def _resolve(*values: Any) -> None:
            callback(None, *values)

        def _reject(error: Any) -> None:
            callback(error)

        return self.send_request(func, args, resolve=_resolve, reject=_reject)

    def post(self, func: str, *args: Any) -> None:
        """Send a one-shot message with no correlation id and no waiter."""
        self._ensure_active()
        logger.debug("CorrelationEngine.post: func=%s", func)
        self._transport.post_message(MessageRequest(func=func, args=list(args)).to_wire())

    def register_handler(self, name: str, handler: EventHandler, *, notify_host: bool = True) -> None:
        """
        Register the handler for host events named `name`, replacing any previous one.

        Args:
            name: Event name, matched against the ``func`` of inbound envelopes.
            handler: Called with the event's ``*args`` for every delivery.
            notify_host: Also tell the host a handler exists for `name`.
        """
        self._ensure_active()
        replaced = name in self._handlers
        self._handlers[name] = handler
        logger.debug("CorrelationEngine.register_handler: name=%s replaced=%s", name, replaced)
        if notify_host:
            self.post(REGISTER_HANDLER_FUNC, name)

    def remove_handler(self, name: str) -> None:
        self._handlers.pop(name, None)

    def has_handler(self, name: str) -> bool:
        return name in self._handlers

    def handle_message(self, data: Mapping[str, Any]) -> None:
        """
        Route an inbound envelope.

        A known integer ``id`` settles the matching pending request, at most
        once. Otherwise a string ``func`` is dispatched to its registered
        handler. Anything else is logged and dropped. Exceptions raised by a
        continuation or handler are logged and do not reach the transport.
        """
        if not self._active:
            logger.debug("CorrelationEngine.handle_message: dropped while inactive: %r", data)
            return
        if not isinstance(data, Mapping):
            logger.warning("CorrelationEngine.handle_message: ignoring non-mapping envelope %r", data)
            return

        msg_id = data.get("id")
        has_id = isinstance(msg_id, int) and not isinstance(msg_id, bool)
        if has_id and msg_id in self._pending:
            self._dispatch_response(data)
            return

        func = data.get("func")
        if isinstance(func, str):
            self._dispatch_event(data)
            return

        if has_id:
            logger.debug("CorrelationEngine.handle_message: no pending request for id=%s; ignored", msg_id)
            return
        logger.warning("CorrelationEngine.handle_message: envelope has neither id nor func: %r", data)

    def _dispatch_response(self, data: Mapping[str, Any]) -> None:
        try:
            response = MessageResponse.model_validate(data)
        except ValidationError as e:
            logger.warning("CorrelationEngine: malformed response envelope dropped: %s", e)
            return
        request = self._pending.pop(response.id, None)
        if request is None:
            return
        elapsed = time.monotonic() - request.created_at
        try:
            if response.error is not None:
                logger.debug("CorrelationEngine: id=%s func=%s rejected after %.3fs", response.id, request.func, elapsed)
                request.reject(response.error)
            else:
                logger.debug("CorrelationEngine: id=%s func=%s resolved after %.3fs", response.id, request.func, elapsed)
                request.resolve(*response.values)
        except Exception:
            logger.exception("Response continuation failed for request id=%s func=%s", response.id, request.func)

    def _dispatch_event(self, data: Mapping[str, Any]) -> None:
        try:
            event = MessageRequest.model_validate(dict(data))
        except ValidationError as e:
            logger.warning("CorrelationEngine: malformed event envelope dropped: %s", e)
            return
        handler = self._handlers.get(event.func)
        if handler is None:
            logger.debug("CorrelationEngine: no handler registered for event %s", event.func)
            return
        try:
            handler(*event.args)
        except Exception:
            logger.exception("Handler for event %s failed", event.func)
