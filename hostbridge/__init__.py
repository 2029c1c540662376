"""hostbridge.

This package is the client-side runtime layer an embedded application uses to
talk to the host that embeds it. It decides which capabilities the host
supports, guards APIs by frame context, correlates request/response messages
and drives the initialization lifecycle.

High-level architecture
-----------------------

- **Runtime model**: an immutable ``Runtime`` whose ``supports`` tree declares
  host capabilities. Hosts that predate runtime declarations get a runtime
  synthesized from their reported SDK version and platform.
- **Messaging**: a ``CorrelationEngine`` assigns monotonic ids to outbound
  requests and routes inbound messages either to the waiting request or to a
  registered event handler.

Core subpackages
----------------

- ``hostbridge.runtime``: ``Runtime``, ``RuntimeRegistry``, back-compat
  synthesis and SDK version comparison.
- ``hostbridge.messaging``: the correlation engine.
- ``hostbridge.transport``: the ``MessageTransport`` protocol and an in-memory
  transport.
- ``hostbridge.capabilities``: dialog and location APIs.
- ``hostbridge.core``: settings and logging configuration.

Typical workflow
----------------

1. Create a ``HostSession`` over a transport.
2. ``initialize`` it with the frame context (and the host's runtime, if any).
3. Call capability APIs; await the returned futures.
4. ``uninitialize`` when the surface goes away.
"""

from .errors import (
    FrameContextError,
    HostBridgeError,
    HostReportedError,
    InvalidArgumentsError,
    NotInitializedError,
    OldPlatformError,
    SdkError,
    TornDownError,
    UnsupportedCapabilityError,
)
from .runtime import Runtime, RuntimeRegistry, compare_sdk_versions, generate_back_compat_runtime_config
from .schemas.core import FrameContext, HostClientType
from .session import HostSession
from .transport import InMemoryTransport, MessageTransport

__all__ = [
    "FrameContext",
    "FrameContextError",
    "HostBridgeError",
    "HostClientType",
    "HostReportedError",
    "HostSession",
    "InMemoryTransport",
    "InvalidArgumentsError",
    "MessageTransport",
    "NotInitializedError",
    "OldPlatformError",
    "Runtime",
    "RuntimeRegistry",
    "SdkError",
    "TornDownError",
    "UnsupportedCapabilityError",
    "compare_sdk_versions",
    "generate_back_compat_runtime_config",
]
