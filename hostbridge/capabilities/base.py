"""Shared plumbing for capability APIs.

A capability API is a thin facade over ``HostSession``. Each public method:

1. calls ``session.ensure_initialized(*allowed_contexts)``,
2. calls ``session.ensure_supported(path)``,
3. validates its arguments (``validate_model``),
4. sends through the session (``call``/``call_with_callback``/``post``).

Methods are synchronous and return ``asyncio.Future`` objects, so every
validation failure is raised at the call site before anything is sent.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Callable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import InvalidArgumentsError

if TYPE_CHECKING:
    from ..session import HostSession

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_model(model: Type[ModelT], value: Any) -> ModelT:
    """Coerce ``value`` into ``model``.

    Raises:
        InvalidArgumentsError: If ``value`` is missing or does not validate.
    """
    if value is None:
        raise InvalidArgumentsError(message=f"{model.__name__} is required")
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise InvalidArgumentsError(message=f"Invalid {model.__name__}: {e.error_count()} validation error(s)") from e


def chain_future(source: asyncio.Future, transform: Callable[[Any], Any]) -> asyncio.Future:
    """Return a future settled with ``transform(source.result())``.

    Exceptions and cancellation of ``source`` propagate unchanged; an exception
    raised by ``transform`` fails the returned future.
    """
    target = source.get_loop().create_future()

    def _copy(done: asyncio.Future) -> None:
        if target.done():
            return
        if done.cancelled():
            target.cancel()
            return
        exc = done.exception()
        if exc is not None:
            target.set_exception(exc)
            return
        try:
            target.set_result(transform(done.result()))
        except Exception as e:
            target.set_exception(e)

    source.add_done_callback(_copy)
    return target


class CapabilityBase:
    """Base class binding a capability facade to a session."""

    #: Dotted runtime path checked by ``is_supported``.
    capability_path: str = ""

    def __init__(self, session: "HostSession") -> None:
        self._session = session

    def is_supported(self) -> bool:
        return self._session.is_supported(self.capability_path)

    def _call(self, func: str, *args: Any, parse: Optional[Callable[[Any], Any]] = None) -> asyncio.Future:
        future = self._session.call(func, *args)
        return chain_future(future, parse) if parse is not None else future
