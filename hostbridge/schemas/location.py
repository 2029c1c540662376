from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import ConfigDict, Field

from .base import BaseSchema


class DevicePermission(str, Enum):
    geo_location = "geolocation"
    media = "media"


class LocationProps(BaseSchema):
    allow_choose_location: bool = Field(False, description="Let the user pick a location instead of the current one.")
    show_map: bool = Field(False, description="Show the map to the user.")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class Location(BaseSchema):
    # Hosts may add platform-specific fields.
    model_config = ConfigDict(extra="ignore")

    latitude: float = Field(..., description="Latitude in degrees.")
    longitude: float = Field(..., description="Longitude in degrees.")
    accuracy: Optional[float] = Field(None, description="Accuracy radius in meters; negative when unknown.")
    timestamp: Optional[float] = Field(None, description="Time the location was captured.")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
