"""Message correlation between the embedded application and its host.

This package exports:

- ``CorrelationEngine``: correlated requests, host event handlers and one-shot posts.
- ``PendingRequest``: bookkeeping record for a request awaiting its response.
"""

from .correlation import REGISTER_HANDLER_FUNC, CorrelationEngine, PendingRequest

__all__ = [
    "CorrelationEngine",
    "PendingRequest",
    "REGISTER_HANDLER_FUNC",
]
