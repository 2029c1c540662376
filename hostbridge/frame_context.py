"""Frame-context access control for capability entry points.

Every context-restricted capability call names the frame contexts it may run
in. ``ensure_context`` enforces that allow-list against the context the session
was initialized with. It runs after the initialization check and before any
capability-support check, argument validation or message send.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .errors import FrameContextError
from .schemas.core import FrameContext


def ensure_context(current_context: Optional[FrameContext], allowed_contexts: Sequence[FrameContext]) -> None:
    """Raise `FrameContextError` if `current_context` is not in `allowed_contexts`.

    Args:
        current_context: Context the calling code runs in.
        allowed_contexts: Contexts permitted for the call. Order is kept in the
            error message.

    Returns:
        None. This function either returns normally or raises an error.

    Raises:
        FrameContextError: If the context is not allowed.
    """
    if current_context is None or current_context not in allowed_contexts:
        raise FrameContextError(allowed_contexts, current_context)
