"""Dialog capability.

Opens URL-based dialogs (optionally completed by a bot), lets the opened
dialog submit a result or resize itself, and carries messages between the
parent surface and the dialog.

Host functions used:

- ``tasks.startTask``: open a dialog; the response carries ``(err, result)``.
- ``tasks.completeTask``: submit from inside a dialog.
- ``tasks.updateTask``: resize the current dialog.
- ``messageForChild`` / ``messageForParent``: parent <-> dialog messages.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence, Union

from ..errors import InvalidArgumentsError
from ..schemas.core import FrameContext
from ..schemas.dialog import BotUrlDialogInfo, DialogSize, DialogSubmitResult, UrlDialogInfo
from .base import CapabilityBase, validate_model

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[DialogSubmitResult], Any]
MessageHandler = Callable[[Any], Any]
SendToDialog = Callable[[Any], None]

OPEN_CONTEXTS = (FrameContext.content, FrameContext.side_panel, FrameContext.meeting_stage)
IN_DIALOG_CONTEXTS = (
    FrameContext.content,
    FrameContext.side_panel,
    FrameContext.task,
    FrameContext.meeting_stage,
)
CHILD_CONTEXTS = (FrameContext.task,)

START_TASK = "tasks.startTask"
COMPLETE_TASK = "tasks.completeTask"
UPDATE_TASK = "tasks.updateTask"
MESSAGE_FOR_CHILD = "messageForChild"
MESSAGE_FOR_PARENT = "messageForParent"


def _normalize_app_ids(app_ids: Union[str, Sequence[str], None]) -> list[str]:
    if app_ids is None:
        return []
    if isinstance(app_ids, str):
        return [app_ids]
    ids = list(app_ids)
    if not all(isinstance(i, str) for i in ids):
        raise InvalidArgumentsError(message="app_ids must be strings")
    return ids


class DialogCapability(CapabilityBase):
    """Dialog APIs bound to a session.

    ``update`` and ``bot`` expose the ``dialog.update`` and ``dialog.bot``
    sub-capabilities.
    """

    capability_path = "dialog"

    def __init__(self, session) -> None:
        super().__init__(session)
        self.update = DialogUpdate(session)
        self.bot = DialogBot(session, self)

    def open(
        self,
        info: UrlDialogInfo | dict,
        submit_handler: Optional[SubmitHandler] = None,
        message_from_child_handler: Optional[MessageHandler] = None,
    ) -> SendToDialog:
        """
        Open a dialog showing ``info.url``.

        Args:
            info: Dialog URL, size and optional title/fallback URL.
            submit_handler: Called once with the dialog's outcome.
            message_from_child_handler: Called for every message the dialog
                sends to its parent.

        Returns:
            A function posting a message to the opened dialog.

        Raises:
            NotInitializedError: If the session is not initialized.
            FrameContextError: Outside content, sidePanel or meetingStage.
            UnsupportedCapabilityError: If the runtime lacks ``dialog``.
            InvalidArgumentsError: If ``info`` is missing or malformed.
        """
        self._session.ensure_initialized(*OPEN_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        dialog_info = validate_model(UrlDialogInfo, info)
        return self._start(dialog_info, submit_handler, message_from_child_handler)

    def _start(
        self,
        info: UrlDialogInfo,
        submit_handler: Optional[SubmitHandler],
        message_from_child_handler: Optional[MessageHandler],
    ) -> SendToDialog:
        def _on_result(err: Any = None, result: Any = None, *_: Any) -> None:
            if submit_handler is not None:
                submit_handler(DialogSubmitResult(err=err, result=result))

        self._session.call_with_callback(START_TASK, [info.to_wire()], _on_result)
        if message_from_child_handler is not None:
            self._session.register_handler(MESSAGE_FOR_PARENT, message_from_child_handler)
        logger.debug("dialog opened: url=%s", info.url)
        return self._send_message_to_dialog

    def _send_message_to_dialog(self, message: Any) -> None:
        self._session.ensure_initialized(*OPEN_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        self._session.post(MESSAGE_FOR_CHILD, message)

    def submit(self, result: Any = None, app_ids: Union[str, Sequence[str], None] = None) -> None:
        """
        Submit a result from the current dialog and close it.

        Args:
            result: Value handed to the opener's submit handler.
            app_ids: App id(s) allowed to receive the result; a single string
                is sent as a one-element list.
        """
        self._session.ensure_initialized(*IN_DIALOG_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        self._session.post(COMPLETE_TASK, result, _normalize_app_ids(app_ids))

    def send_message_to_parent_from_dialog(self, message: Any) -> None:
        self._session.ensure_initialized(*CHILD_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        self._session.post(MESSAGE_FOR_PARENT, message)

    def register_on_message_from_parent(self, handler: MessageHandler) -> None:
        """Receive messages the parent posts to this dialog."""
        self._session.ensure_initialized(*CHILD_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        self._session.register_handler(MESSAGE_FOR_CHILD, handler)


class DialogUpdate(CapabilityBase):
    capability_path = "dialog.update"

    def resize(self, dimensions: DialogSize | dict) -> None:
        """Request a new size for the current dialog."""
        self._session.ensure_initialized(*IN_DIALOG_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        size = validate_model(DialogSize, dimensions)
        self._session.post(UPDATE_TASK, size.model_dump(by_alias=True, mode="json"))


class DialogBot(CapabilityBase):
    capability_path = "dialog.bot"

    def __init__(self, session, dialog: DialogCapability) -> None:
        super().__init__(session)
        self._dialog = dialog

    def open(
        self,
        info: BotUrlDialogInfo | dict,
        submit_handler: Optional[SubmitHandler] = None,
        message_from_child_handler: Optional[MessageHandler] = None,
    ) -> SendToDialog:
        """Open a dialog whose result is delivered to ``info.completion_bot_id``."""
        self._session.ensure_initialized(*OPEN_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        dialog_info = validate_model(BotUrlDialogInfo, info)
        return self._dialog._start(dialog_info, submit_handler, message_from_child_handler)
