"""Wire envelopes exchanged with the host.

Requests carry an optional correlation ``id``, the host ``func`` name and
ordered ``args``. Responses carry the ``id`` they answer and ``args`` whose
first element is the error (``None`` on success) followed by success values.
Unsolicited host events reuse the request shape without an ``id``.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import ConfigDict, Field

from .base import BaseSchema


class MessageRequest(BaseSchema):
    # Inbound host events may carry fields this layer does not consume.
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = Field(
        None,
        description="Correlation identifier. Absent for fire-and-forget posts and host events.",
        ge=0,
    )
    func: str = Field(..., description="Host function or event name.", min_length=1)
    args: List[Any] = Field(default_factory=list, description="Ordered call arguments.")

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"func": self.func, "args": list(self.args)}
        if self.id is not None:
            wire["id"] = self.id
        return wire


class MessageResponse(BaseSchema):
    # Hosts may attach extra bookkeeping fields to responses.
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Correlation identifier of the request being answered.", ge=0)
    args: List[Any] = Field(default_factory=list, description="[error_or_None, *success_values]")

    @property
    def error(self) -> Any:
        return self.args[0] if self.args else None

    @property
    def values(self) -> List[Any]:
        return self.args[1:]
