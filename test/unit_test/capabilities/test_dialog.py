"""Unit tests for the dialog capability.

Each API is checked for what it sends to the host and for the validation
order: initialization, frame context, capability support, then arguments.
"""

from typing import Any, Callable, List

import pytest

from hostbridge.capabilities.dialog import (
    COMPLETE_TASK,
    MESSAGE_FOR_CHILD,
    MESSAGE_FOR_PARENT,
    START_TASK,
    UPDATE_TASK,
    DialogCapability,
)
from hostbridge.errors import (
    FrameContextError,
    InvalidArgumentsError,
    NotInitializedError,
    TornDownError,
    UnsupportedCapabilityError,
)
from hostbridge.messaging.correlation import REGISTER_HANDLER_FUNC
from hostbridge.schemas.core import FrameContext
from hostbridge.schemas.dialog import DialogDimension, DialogSize, DialogSubmitResult, UrlDialogInfo
from hostbridge.session import HostSession
from hostbridge.transport import InMemoryTransport

DIALOG_INFO = {"url": "https://app.example/dialog", "size": {"height": "large", "width": 400}, "title": "Pick"}


@pytest.fixture
def dialog(session: HostSession) -> DialogCapability:
    return DialogCapability(session)


class TestOpen:
    def test_sends_start_task(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session(FrameContext.content)

        dialog.open(DIALOG_INFO)

        assert transport.messages == [
            {
                "id": 0,
                "func": START_TASK,
                "args": [{"url": "https://app.example/dialog", "size": {"height": "large", "width": 400}, "title": "Pick"}],
            }
        ]

    def test_accepts_model_instance(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session(FrameContext.side_panel)
        info = UrlDialogInfo(
            url="https://app.example/d",
            size=DialogSize(height=DialogDimension.small, width=DialogDimension.medium),
            fallback_url="https://app.example/fallback",
        )

        dialog.open(info)

        sent = transport.find_message_by_func(START_TASK)
        assert sent is not None
        assert sent["args"][0] == {
            "url": "https://app.example/d",
            "size": {"height": "small", "width": "medium"},
            "fallbackUrl": "https://app.example/fallback",
        }

    def test_submit_handler_receives_result(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session()
        results: List[DialogSubmitResult] = []
        dialog.open(DIALOG_INFO, submit_handler=results.append)

        transport.respond(0, None, {"choice": 2})

        assert results == [DialogSubmitResult(err=None, result={"choice": 2})]

    def test_submit_handler_receives_host_error(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session()
        results: List[DialogSubmitResult] = []
        dialog.open(DIALOG_INFO, submit_handler=results.append)

        transport.respond(0, "CancelledByUser")

        assert results == [DialogSubmitResult(err="CancelledByUser", result=None)]

    def test_submit_handler_receives_teardown(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability
    ) -> None:
        session = init_session()
        results: List[DialogSubmitResult] = []
        dialog.open(DIALOG_INFO, submit_handler=results.append)

        session.uninitialize()

        assert len(results) == 1
        assert isinstance(results[0].err, TornDownError)

    def test_message_from_child_handler(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session()
        received: List[Any] = []

        dialog.open(DIALOG_INFO, message_from_child_handler=received.append)
        transport.emit(MESSAGE_FOR_PARENT, {"progress": 50})

        assert {"func": REGISTER_HANDLER_FUNC, "args": [MESSAGE_FOR_PARENT]} in transport.messages
        assert received == [{"progress": 50}]

    def test_returned_function_messages_dialog(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session()
        send = dialog.open(DIALOG_INFO)

        send({"hello": "child"})

        assert transport.messages[-1] == {"func": MESSAGE_FOR_CHILD, "args": [{"hello": "child"}]}

    def test_returned_function_rechecks_support(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        session = init_session()
        send = dialog.open(DIALOG_INFO)
        session.apply_runtime_config({"apiVersion": 1, "supports": {}})

        with pytest.raises(UnsupportedCapabilityError):
            send("hi")
        assert transport.find_message_by_func(MESSAGE_FOR_CHILD) is None

    def test_returned_function_after_uninitialize(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability
    ) -> None:
        session = init_session()
        send = dialog.open(DIALOG_INFO)
        session.uninitialize()

        with pytest.raises(NotInitializedError):
            send("hi")

    def test_not_supported_before_initialization(self, dialog: DialogCapability) -> None:
        assert not dialog.is_supported()
        assert not dialog.update.is_supported()
        assert not dialog.bot.is_supported()

    def test_not_initialized(self, dialog: DialogCapability, transport: InMemoryTransport) -> None:
        with pytest.raises(NotInitializedError):
            dialog.open(DIALOG_INFO)
        assert transport.messages == []

    @pytest.mark.parametrize(
        "context", [FrameContext.settings, FrameContext.task, FrameContext.remove, FrameContext.authentication]
    )
    def test_wrong_context(
        self,
        init_session: Callable[..., HostSession],
        dialog: DialogCapability,
        transport: InMemoryTransport,
        context: FrameContext,
    ) -> None:
        init_session(context)

        with pytest.raises(FrameContextError):
            dialog.open(DIALOG_INFO)
        assert transport.messages == []

    def test_context_checked_before_support(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability
    ) -> None:
        init_session(FrameContext.remove, runtime_config={"apiVersion": 1, "supports": {}})

        with pytest.raises(FrameContextError):
            dialog.open(DIALOG_INFO)

    def test_unsupported(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session(runtime_config={"apiVersion": 1, "supports": {"location": {}}})

        assert not dialog.is_supported()
        with pytest.raises(UnsupportedCapabilityError):
            dialog.open(DIALOG_INFO)
        assert transport.messages == []

    def test_support_checked_before_arguments(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability
    ) -> None:
        init_session(runtime_config={"apiVersion": 1, "supports": {}})

        with pytest.raises(UnsupportedCapabilityError):
            dialog.open(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "info",
        [
            None,
            {"url": "https://app.example"},
            {"url": "", "size": {"height": 1, "width": 1}},
            {"url": "https://app.example", "size": {"height": "huge", "width": 1}},
            {"url": "https://app.example", "size": {"height": 1, "width": 1}, "unexpected": True},
        ],
    )
    def test_invalid_info(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport, info
    ) -> None:
        init_session()

        with pytest.raises(InvalidArgumentsError):
            dialog.open(info)
        assert transport.messages == []


class TestSubmit:
    @pytest.mark.parametrize(
        "app_ids,expected",
        [
            (None, []),
            ("app-1", ["app-1"]),
            (["app-1", "app-2"], ["app-1", "app-2"]),
        ],
    )
    def test_posts_complete_task(
        self,
        init_session: Callable[..., HostSession],
        dialog: DialogCapability,
        transport: InMemoryTransport,
        app_ids,
        expected: list,
    ) -> None:
        init_session(FrameContext.task)

        dialog.submit({"answer": 42}, app_ids)

        assert transport.messages == [{"func": COMPLETE_TASK, "args": [{"answer": 42}, expected]}]

    def test_non_string_app_ids_rejected(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session(FrameContext.task)

        with pytest.raises(InvalidArgumentsError):
            dialog.submit("x", ["ok", 3])  # type: ignore[list-item]
        assert transport.messages == []

    def test_wrong_context(self, init_session: Callable[..., HostSession], dialog: DialogCapability) -> None:
        init_session(FrameContext.settings)

        with pytest.raises(FrameContextError):
            dialog.submit("x")


class TestParentChildMessages:
    def test_send_message_to_parent(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session(FrameContext.task)

        dialog.send_message_to_parent_from_dialog("ping")

        assert transport.messages == [{"func": MESSAGE_FOR_PARENT, "args": ["ping"]}]

    def test_send_message_to_parent_outside_dialog(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability
    ) -> None:
        init_session(FrameContext.content)

        with pytest.raises(FrameContextError):
            dialog.send_message_to_parent_from_dialog("ping")

    def test_register_on_message_from_parent(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session(FrameContext.task)
        received: List[Any] = []

        dialog.register_on_message_from_parent(received.append)
        transport.emit(MESSAGE_FOR_CHILD, "from parent")

        assert transport.messages == [{"func": REGISTER_HANDLER_FUNC, "args": [MESSAGE_FOR_CHILD]}]
        assert received == ["from parent"]


class TestUpdate:
    def test_resize(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session(FrameContext.task)

        dialog.update.resize({"height": 300, "width": "small"})

        assert transport.messages == [{"func": UPDATE_TASK, "args": [{"height": 300, "width": "small"}]}]

    def test_requires_update_sub_capability(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability
    ) -> None:
        init_session(FrameContext.task, runtime_config={"apiVersion": 1, "supports": {"dialog": {}}})

        assert dialog.is_supported()
        assert not dialog.update.is_supported()
        with pytest.raises(UnsupportedCapabilityError):
            dialog.update.resize({"height": 300, "width": 300})

    def test_invalid_dimensions(self, init_session: Callable[..., HostSession], dialog: DialogCapability) -> None:
        init_session(FrameContext.task)

        with pytest.raises(InvalidArgumentsError):
            dialog.update.resize({"height": 300})


class TestBot:
    def test_open_includes_completion_bot(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability, transport: InMemoryTransport
    ) -> None:
        init_session(FrameContext.meeting_stage)
        results: List[DialogSubmitResult] = []

        dialog.bot.open({**DIALOG_INFO, "completionBotId": "bot-1"}, submit_handler=results.append)
        transport.respond(0, None, "ok")

        sent = transport.find_message_by_func(START_TASK)
        assert sent is not None
        assert sent["args"][0]["completionBotId"] == "bot-1"
        assert results == [DialogSubmitResult(result="ok")]

    def test_requires_bot_id(self, init_session: Callable[..., HostSession], dialog: DialogCapability) -> None:
        init_session()

        with pytest.raises(InvalidArgumentsError):
            dialog.bot.open(DIALOG_INFO)

    def test_requires_bot_sub_capability(
        self, init_session: Callable[..., HostSession], dialog: DialogCapability
    ) -> None:
        init_session(runtime_config={"apiVersion": 1, "supports": {"dialog": {"bot": None}}})

        with pytest.raises(UnsupportedCapabilityError):
            dialog.bot.open({**DIALOG_INFO, "completionBotId": "bot-1"})
