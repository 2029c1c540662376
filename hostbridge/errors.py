"""Error taxonomy for the hostbridge runtime.

Purpose:
- Give every failure surfaced by this layer an explicit `ErrorKind`, so the
  same taxonomy applies whether the failure is raised at the call boundary or
  delivered later through a future's exception or a callback argument.
- Keep host-reported payloads intact: `HostReportedError` wraps whatever the
  host sent without reinterpreting it.

Usage:
- Catch `HostBridgeError` for any failure and inspect `kind`.
- Catch `SdkError` for structured errors carrying an `ErrorCode`.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from .schemas.core import ErrorCode, FrameContext


class ErrorKind(str, Enum):
    lifecycle = "lifecycle"
    context = "context"
    unsupported = "unsupported"
    invalid_argument = "invalid_argument"
    host_reported = "host_reported"
    torn_down = "torn_down"


class HostBridgeError(Exception):
    """Base error for all hostbridge failures.

    Args:
        message: Human-readable error description.
        kind: Taxonomy bucket of the failure.
    """

    kind: ErrorKind = ErrorKind.lifecycle

    def __init__(self, message: str, *, kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class NotInitializedError(HostBridgeError):
    """Raised by every entry point used before the session is initialized."""

    MESSAGE = "The library has not yet been initialized"

    def __init__(self) -> None:
        super().__init__(self.MESSAGE, kind=ErrorKind.lifecycle)


def _context_value(context: Any) -> str:
    return context.value if isinstance(context, FrameContext) else str(context)


class FrameContextError(HostBridgeError):
    """Raised when a call is made from a frame context outside its allow-list.

    The message renders both the allow-list and the observed context as JSON,
    preserving the allow-list order.
    """

    def __init__(self, allowed_contexts: Iterable[Any], current_context: Any) -> None:
        self.allowed_contexts: Tuple[Any, ...] = tuple(allowed_contexts)
        self.current_context = current_context
        rendered_allowed = json.dumps([_context_value(c) for c in self.allowed_contexts], separators=(",", ":"))
        rendered_current = json.dumps(None if current_context is None else _context_value(current_context))
        super().__init__(
            f"This call is only allowed in following contexts: {rendered_allowed}. "
            f"Current context: {rendered_current}.",
            kind=ErrorKind.context,
        )


class SdkError(HostBridgeError):
    """Structured error with a stable `ErrorCode`.

    Two `SdkError`s compare equal when they have the same class, code and
    message, so tests and capability code can assert on them as values.
    """

    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_kind: ErrorKind = ErrorKind.unsupported

    def __init__(self, error_code: Optional[ErrorCode] = None, message: Optional[str] = None) -> None:
        self.error_code = ErrorCode(error_code) if error_code is not None else self.default_code
        super().__init__(message or self.error_code.name, kind=self.default_kind)
        self.detail = message

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"errorCode": int(self.error_code)}
        if self.detail:
            payload["message"] = self.detail
        return payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SdkError):
            return NotImplemented
        return type(self) is type(other) and self.error_code == other.error_code and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((type(self), self.error_code, self.detail))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error_code={self.error_code.name}, message={self.detail!r})"


class UnsupportedCapabilityError(SdkError):
    default_code = ErrorCode.NOT_SUPPORTED_ON_PLATFORM
    default_kind = ErrorKind.unsupported


class OldPlatformError(SdkError):
    default_code = ErrorCode.OLD_PLATFORM
    default_kind = ErrorKind.unsupported


class InvalidArgumentsError(SdkError):
    default_code = ErrorCode.INVALID_ARGUMENTS
    default_kind = ErrorKind.invalid_argument


class TornDownError(SdkError):
    """Settles requests that were still pending when the session was torn down."""

    default_code = ErrorCode.INTERNAL_ERROR
    default_kind = ErrorKind.torn_down


class HostReportedError(HostBridgeError):
    """Carries the error payload returned by the host, unmodified.

    Args:
        payload: The first argument of the response envelope, exactly as received.
    """

    def __init__(self, payload: Any) -> None:
        self.payload = payload
        super().__init__(f"Host reported an error: {payload!r}", kind=ErrorKind.host_reported)

    @property
    def error_code(self) -> Optional[int]:
        if isinstance(self.payload, dict):
            code = self.payload.get("errorCode")
            if isinstance(code, int):
                try:
                    return ErrorCode(code)
                except ValueError:
                    return code
        return None
