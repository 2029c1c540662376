import copy
from typing import Any, Callable, Iterator

import pytest

from hostbridge.core.config import Settings
from hostbridge.schemas.core import FrameContext
from hostbridge.session import HostSession
from hostbridge.transport import InMemoryTransport

# Runtime declared by a host supporting every capability the package exposes.
FULL_RUNTIME_CONFIG: dict[str, Any] = {
    "apiVersion": 1,
    "supports": {
        "dialog": {"update": {}, "bot": {}},
        "location": {},
    },
}


@pytest.fixture
def settings() -> Settings:
    """Settings built from defaults only, ignoring any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture
def session(transport: InMemoryTransport, settings: Settings) -> Iterator[HostSession]:
    s = HostSession(transport, settings=settings)
    yield s
    s.uninitialize()


@pytest.fixture
def runtime_config() -> dict[str, Any]:
    return copy.deepcopy(FULL_RUNTIME_CONFIG)


@pytest.fixture
def init_session(session: HostSession, runtime_config: dict[str, Any]) -> Callable[..., HostSession]:
    """Factory initializing the shared session in a given frame context.

    Keyword arguments are passed to ``HostSession.initialize``; the full
    runtime is used unless ``runtime_config`` is given (``None`` selects the
    back-compat runtime).
    """

    def _init(frame_context: FrameContext = FrameContext.content, **kwargs: Any) -> HostSession:
        kwargs.setdefault("runtime_config", runtime_config)
        session.initialize(frame_context, **kwargs)
        return session

    return _init
