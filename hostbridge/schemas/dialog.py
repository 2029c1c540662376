from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import Field

from .base import BaseSchema


class DialogDimension(str, Enum):
    large = "large"
    medium = "medium"
    small = "small"


DimensionValue = Union[DialogDimension, int]


class DialogSize(BaseSchema):
    height: DimensionValue = Field(..., description="Height in pixels or a predefined dimension.")
    width: DimensionValue = Field(..., description="Width in pixels or a predefined dimension.")


class UrlDialogInfo(BaseSchema):
    url: str = Field(..., description="URL of the page shown in the dialog.", min_length=1)
    size: DialogSize = Field(..., description="Requested dialog size.")
    title: Optional[str] = Field(None, description="Title shown above the dialog.")
    fallback_url: Optional[str] = Field(None, description="URL opened when the host cannot show dialogs.")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class BotUrlDialogInfo(UrlDialogInfo):
    completion_bot_id: str = Field(..., description="Bot that receives the dialog result.", min_length=1)


class DialogSubmitResult(BaseSchema):
    """Outcome delivered to the submit handler of an opened dialog."""

    err: Optional[Any] = Field(None, description="Error reported by the host, verbatim.")
    result: Optional[Any] = Field(None, description="Value submitted by the dialog.")
