from __future__ import annotations

from enum import Enum, IntEnum


class FrameContext(str, Enum):
    """Surface the embedded application is currently running in.

    Declaration order is significant: it is the order used when iterating over
    every context, e.g. when checking allow-lists exhaustively in tests.
    """

    settings = "settings"
    content = "content"
    authentication = "authentication"
    remove = "remove"
    task = "task"
    side_panel = "sidePanel"
    stage = "stage"
    meeting_stage = "meetingStage"


class HostClientType(str, Enum):
    desktop = "desktop"
    web = "web"
    android = "android"
    ios = "ios"
    ipados = "ipados"
    rigel = "rigel"
    surface_hub = "surfaceHub"
    teams_rooms_windows = "teamsRoomsWindows"
    teams_rooms_android = "teamsRoomsAndroid"
    teams_phones = "teamsPhones"
    teams_displays = "teamsDisplays"


class ErrorCode(IntEnum):
    """Error codes shared with the host for structured SDK errors."""

    NOT_SUPPORTED_ON_PLATFORM = 100
    INTERNAL_ERROR = 500
    NOT_SUPPORTED_IN_CURRENT_CONTEXT = 501
    PERMISSION_DENIED = 1000
    NETWORK_ERROR = 2000
    NO_HW_SUPPORT = 3000
    INVALID_ARGUMENTS = 4000
    UNAUTHORIZED_USER_OPERATION = 5000
    INSUFFICIENT_RESOURCES = 6000
    THROTTLE = 7000
    USER_ABORT = 8000
    OPERATION_TIMED_OUT = 8001
    OLD_PLATFORM = 9000
    FILE_NOT_FOUND = 404
    SIZE_EXCEEDED = 10000


class LifecycleState(str, Enum):
    uninitialized = "uninitialized"
    initializing = "initializing"
    initialized = "initialized"
