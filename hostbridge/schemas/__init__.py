from .base import BaseSchema
from .core import ErrorCode, FrameContext, HostClientType, LifecycleState
from .messages import MessageRequest, MessageResponse

__all__ = [
    "BaseSchema",
    "ErrorCode",
    "FrameContext",
    "HostClientType",
    "LifecycleState",
    "MessageRequest",
    "MessageResponse",
]
