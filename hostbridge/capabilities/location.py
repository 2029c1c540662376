"""Location capability.

Future-returning APIs (``get_current_location``, ``has_permission``,
``request_permission``, ``map.choose_location``, ``map.show_location``) are
gated on the ``location`` runtime capability. The older callback APIs
(``get_location``, ``show_location``) are gated on the client SDK version the
host reported instead, and hand the host's response to the callback verbatim.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from ..errors import OldPlatformError
from ..schemas.core import FrameContext
from ..schemas.location import DevicePermission, Location, LocationProps
from .base import CapabilityBase, validate_model

LOCATION_CONTEXTS = (FrameContext.content, FrameContext.task)
LOCATION_APIS_REQUIRED_VERSION = "1.9.0"

GET_LOCATION = "location.getLocation"
SHOW_LOCATION = "location.showLocation"
PERMISSIONS_HAS = "permissions.has"
PERMISSIONS_REQUEST = "permissions.request"

LocationCallback = Callable[..., Any]


class LocationCapability(CapabilityBase):
    capability_path = "location"

    def __init__(self, session) -> None:
        super().__init__(session)
        self.map = LocationMap(session)

    def _ensure_ready(self) -> None:
        self._session.ensure_initialized(*LOCATION_CONTEXTS)
        self._session.ensure_supported(self.capability_path)

    def get_current_location(self) -> asyncio.Future:
        """Return a future resolving to the device's current ``Location``."""
        self._ensure_ready()
        props = LocationProps(allow_choose_location=False, show_map=False)
        return self._call(GET_LOCATION, props.to_wire(), parse=Location.model_validate)

    def has_permission(self) -> asyncio.Future:
        """Return a future resolving to whether location permission is granted."""
        self._ensure_ready()
        return self._call(PERMISSIONS_HAS, DevicePermission.geo_location.value)

    def request_permission(self) -> asyncio.Future:
        """Ask the user for location permission; resolves to the decision."""
        self._ensure_ready()
        return self._call(PERMISSIONS_REQUEST, DevicePermission.geo_location.value)

    def _ensure_legacy_ready(self) -> None:
        self._session.ensure_initialized(*LOCATION_CONTEXTS)
        if not self._session.is_current_sdk_version_at_least(LOCATION_APIS_REQUIRED_VERSION):
            raise OldPlatformError()
        self._session.ensure_supported(self.capability_path)

    def get_location(self, props: LocationProps | dict, callback: LocationCallback) -> int:
        """
        Callback form of location retrieval.

        Args:
            props: Whether to let the user choose a location and show a map.
            callback: Called as ``callback(error, location)`` with the host's
                response arguments, unmodified.

        Returns:
            The correlation id of the request.

        Raises:
            OldPlatformError: If the host's SDK version predates location APIs.
            InvalidArgumentsError: If ``props`` is missing or malformed.
        """
        self._ensure_legacy_ready()
        location_props = validate_model(LocationProps, props)
        return self._session.call_with_callback(GET_LOCATION, [location_props.to_wire()], callback)

    def show_location(self, location: Location | dict, callback: LocationCallback) -> int:
        """Callback form of ``map.show_location``; ``callback(error, shown)``."""
        self._ensure_legacy_ready()
        loc = validate_model(Location, location)
        return self._session.call_with_callback(SHOW_LOCATION, [loc.to_wire()], callback)


class LocationMap(CapabilityBase):
    """Map-based location APIs, gated on the ``location`` capability."""

    capability_path = "location"

    def choose_location(self) -> asyncio.Future:
        """Let the user pick a location on a map; resolves to the chosen ``Location``."""
        self._session.ensure_initialized(*LOCATION_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        props = LocationProps(allow_choose_location=True, show_map=True)
        return self._call(GET_LOCATION, props.to_wire(), parse=Location.model_validate)

    def show_location(self, location: Location | dict) -> asyncio.Future:
        """Show ``location`` on a map; resolves once the host has shown it."""
        self._session.ensure_initialized(*LOCATION_CONTEXTS)
        self._session.ensure_supported(self.capability_path)
        loc = validate_model(Location, location)
        return self._call(SHOW_LOCATION, loc.to_wire())
