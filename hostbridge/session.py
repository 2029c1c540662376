"""Initialization lifecycle of a host session.

A ``HostSession`` owns every piece of per-session state: the frame context,
the host client type, the client SDK version reported by the host, the
``RuntimeRegistry`` and the ``CorrelationEngine``. Nothing is module-global,
so several isolated sessions can coexist (one per embedded surface, one per
test).

Lifecycle
---------

``uninitialized -> initializing -> initialized -> uninitialized``

- Before initialization every capability call, handler registration and send
  fails fast with ``NotInitializedError``.
- ``initialize`` records the frame context and publishes either the runtime
  declared by the host or one synthesized from the reported SDK version.
- ``uninitialize`` tears everything down so that a later ``initialize`` sees no
  trace of the previous one.

Every public capability call validates in this order: (1) initialized,
(2) frame context allowed, (3) capability supported, (4) arguments, (5) send.
Steps (1) and (2) are ``ensure_initialized``; (3) is ``ensure_supported``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

from .core.config import Settings, get_settings
from .errors import HostBridgeError, NotInitializedError, UnsupportedCapabilityError
from .frame_context import ensure_context
from .messaging.correlation import CorrelationEngine, EventHandler, ResponseCallback
from .runtime.back_compat import generate_back_compat_runtime_config
from .runtime.models import Runtime
from .runtime.registry import CapabilityPath, RuntimeRegistry, RuntimeSource
from .runtime.version import compare_sdk_versions, is_version_at_least
from .schemas.core import FrameContext, HostClientType, LifecycleState
from .transport import MessageTransport

logger = logging.getLogger(__name__)


class HostSession:
    """
    Runtime session binding an embedded application to its host.

    Usage:
        transport = InMemoryTransport()
        session = HostSession(transport)
        session.initialize(FrameContext.content, runtime_config={"apiVersion": 1, "supports": {"dialog": {}}})
        future = session.call("location.getLocation", {"allowChooseLocation": False, "showMap": False})

    Transports exposing ``attach(listener)`` (such as ``InMemoryTransport``) are
    wired to ``handle_message`` automatically.
    """

    def __init__(self, transport: MessageTransport, *, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._transport = transport
        self._engine = CorrelationEngine(
            transport,
            reject_pending_on_teardown=self._settings.reject_pending_on_teardown,
        )
        self._registry = RuntimeRegistry()
        self._state = LifecycleState.uninitialized
        self._frame_context: Optional[FrameContext] = None
        self._host_client_type: Optional[HostClientType] = None
        self._client_supported_sdk_version: Optional[str] = None
        attach = getattr(transport, "attach", None)
        if callable(attach):
            attach(self.handle_message)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def initialized(self) -> bool:
        return self._state is LifecycleState.initialized

    @property
    def frame_context(self) -> Optional[FrameContext]:
        return self._frame_context

    @property
    def host_client_type(self) -> Optional[HostClientType]:
        return self._host_client_type

    @property
    def client_supported_sdk_version(self) -> str:
        return self._client_supported_sdk_version or self._settings.default_sdk_version

    @property
    def runtime(self) -> Runtime:
        return self._registry.runtime

    @property
    def engine(self) -> CorrelationEngine:
        return self._engine

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(
        self,
        frame_context: FrameContext | str,
        *,
        host_client_type: HostClientType | str | None = None,
        runtime_config: Optional[RuntimeSource] = None,
        client_supported_sdk_version: Optional[str] = None,
    ) -> Runtime:
        """
        Initialize the session.

        Args:
            frame_context: Context the application runs in.
            host_client_type: Platform of the host; defaults to the configured one.
            runtime_config: Runtime declared by the host (``Runtime``, mapping or
                JSON). When omitted, a runtime is synthesized from
                ``client_supported_sdk_version`` and ``host_client_type``.
            client_supported_sdk_version: Highest client SDK version the host
                supports; defaults to the configured one.

        Returns:
            The published ``Runtime``.

        Raises:
            HostBridgeError: If the session is already initialized or initializing.
            ValueError: If the context, host client type or version is invalid,
                or the runtime declaration does not validate. The session is
                left uninitialized.
        """
        if self._state is not LifecycleState.uninitialized:
            raise HostBridgeError(f"Session cannot be initialized while {self._state.value}")

        self._state = LifecycleState.initializing
        try:
            self._frame_context = FrameContext(frame_context)
            self._host_client_type = HostClientType(host_client_type or self._settings.default_host_client_type)
            self._client_supported_sdk_version = client_supported_sdk_version or self._settings.default_sdk_version
            if runtime_config is not None:
                runtime = self._registry.apply_runtime_config(runtime_config)
            else:
                runtime = self._registry.apply_runtime_config(
                    generate_back_compat_runtime_config(self._client_supported_sdk_version, self._host_client_type)
                )
        except Exception:
            logger.warning("HostSession.initialize failed; session left uninitialized", exc_info=True)
            self._reset_state()
            raise

        self._engine.start()
        self._state = LifecycleState.initialized
        logger.info(
            "HostSession initialized: context=%s host=%s sdk=%s legacy=%s",
            self._frame_context.value,
            self._host_client_type.value,
            self._client_supported_sdk_version,
            runtime.is_legacy_teams,
        )
        return runtime

    def uninitialize(self) -> None:
        """Tear the session down; safe to call in any state."""
        was = self._state
        self._engine.teardown()
        self._reset_state()
        if was is not LifecycleState.uninitialized:
            logger.info("HostSession uninitialized")

    def _reset_state(self) -> None:
        self._registry.reset()
        self._frame_context = None
        self._host_client_type = None
        self._client_supported_sdk_version = None
        self._state = LifecycleState.uninitialized

    def __enter__(self) -> "HostSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.uninitialize()

    # ------------------------------------------------------------------
    # Validation chain
    # ------------------------------------------------------------------

    def ensure_initialized(self, *allowed_contexts: FrameContext) -> None:
        """
        Check steps (1) and (2) of the validation chain.

        Args:
            *allowed_contexts: Frame contexts the caller may run in. No contexts
                means no context restriction.

        Raises:
            NotInitializedError: If the session is not initialized.
            FrameContextError: If the current frame context is not allowed.
        """
        if self._state is not LifecycleState.initialized:
            raise NotInitializedError()
        if allowed_contexts:
            ensure_context(self._frame_context, allowed_contexts)

    def ensure_supported(self, path: CapabilityPath) -> None:
        """Raise `UnsupportedCapabilityError` unless `path` is supported by the current runtime."""
        if not self._registry.is_supported(path):
            raise UnsupportedCapabilityError()

    def is_supported(self, path: CapabilityPath) -> bool:
        return self._registry.is_supported(path)

    def apply_runtime_config(self, config: RuntimeSource) -> Runtime:
        return self._registry.apply_runtime_config(config)

    def set_client_supported_sdk_version(self, version: str) -> None:
        """
        Record a newer client SDK version reported by the host after initialization.

        Only version-gated APIs read it; the published runtime is not regenerated.

        Raises:
            NotInitializedError: If the session is not initialized.
            ValueError: If ``version`` is not dotted-numeric.
        """
        self.ensure_initialized()
        compare_sdk_versions(version, "0")
        self._client_supported_sdk_version = version
        logger.debug("HostSession: client SDK version set to %s", version)

    def is_current_sdk_version_at_least(self, required_version: str) -> bool:
        return is_version_at_least(self.client_supported_sdk_version, required_version)

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------

    def call(self, func: str, *args: Any) -> asyncio.Future:
        self.ensure_initialized()
        return self._engine.call(func, *args)

    def call_with_callback(self, func: str, args: list[Any], callback: ResponseCallback) -> int:
        self.ensure_initialized()
        return self._engine.call_with_callback(func, args, callback)

    def post(self, func: str, *args: Any) -> None:
        self.ensure_initialized()
        self._engine.post(func, *args)

    def register_handler(self, name: str, handler: EventHandler, *, notify_host: bool = True) -> None:
        self.ensure_initialized()
        self._engine.register_handler(name, handler, notify_host=notify_host)

    def handle_message(self, data: Mapping[str, Any]) -> None:
        self._engine.handle_message(data)
