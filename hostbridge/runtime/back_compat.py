"""Runtime synthesis for hosts that do not describe their own capabilities.

Older hosts only report the highest client SDK version they can serve. For
those hosts a ``Runtime`` is derived from a fixed legacy baseline plus a
version threshold table: each table key is a version, and each entry under it
unlocks a capability fragment for a set of host client types.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Sequence

from ..schemas.core import HostClientType
from .models import CapabilityRequirement, Runtime, merge_supports
from .version import compare_sdk_versions

logger = logging.getLogger(__name__)

VersionTable = Mapping[str, Sequence[CapabilityRequirement]]

# Published before any initialization and after teardown: every capability unsupported.
UNINITIALIZED_RUNTIME = Runtime(
    api_version=1,
    supports={
        "appInstallDialog": None,
        "calendar": None,
        "call": None,
        "chat": None,
        "dialog": None,
        "location": None,
        "logs": None,
        "mail": None,
        "media": None,
        "meeting": None,
        "meetingRoom": None,
        "menus": None,
        "monetization": None,
        "notifications": None,
        "pages": None,
        "people": None,
        "remoteCamera": None,
        "sharing": None,
        "teams": None,
        "teamsCore": None,
        "video": None,
    },
)

TEAMS_RUNTIME_CONFIG = Runtime(
    api_version=1,
    is_legacy_teams=True,
    supports={
        "appInstallDialog": {},
        "appEntity": {},
        "call": {},
        "chat": {"conversation": {}},
        "dialog": {"bot": {}, "update": {}},
        "files": {},
        "logs": {},
        "media": {},
        "meeting": {},
        "meetingRoom": {},
        "menus": {},
        "monetization": {},
        "notifications": {},
        "pages": {
            "appButton": {},
            "tabs": {},
            "config": {},
            "backStack": {},
            "fullTrust": {},
        },
        "remoteCamera": {},
        "sharing": {},
        "teams": {"fullTrust": {}},
        "teamsCore": {},
        "video": {},
    },
)

V1_HOST_CLIENT_TYPES = frozenset(
    {
        HostClientType.desktop,
        HostClientType.web,
        HostClientType.android,
        HostClientType.ios,
        HostClientType.rigel,
        HostClientType.surface_hub,
        HostClientType.teams_rooms_windows,
        HostClientType.teams_rooms_android,
        HostClientType.teams_phones,
        HostClientType.teams_displays,
    }
)

VERSION_CONSTANTS: VersionTable = MappingProxyType(
    {
        "1.9.0": (
            CapabilityRequirement(capability={"location": {}}, host_client_types=V1_HOST_CLIENT_TYPES),
        ),
        "2.0.0": (
            CapabilityRequirement(capability={"people": {}}, host_client_types=V1_HOST_CLIENT_TYPES),
        ),
        "2.0.1": (
            CapabilityRequirement(
                capability={"teams": {"fullTrust": {"joinedTeams": {}}}},
                host_client_types=frozenset(
                    {
                        HostClientType.android,
                        HostClientType.teams_rooms_android,
                        HostClientType.teams_phones,
                        HostClientType.teams_displays,
                    }
                ),
            ),
        ),
    }
)


def generate_back_compat_runtime_config(
    highest_supported_version: str,
    host_client_type: HostClientType | str,
    *,
    version_table: VersionTable = VERSION_CONSTANTS,
    baseline: Runtime = TEAMS_RUNTIME_CONFIG,
) -> Runtime:
    """Build a ``Runtime`` for a host that did not provide one.

    Every entry of ``version_table`` is evaluated; entries are not assumed to be
    in version order. A fragment is merged when the declared version is at or
    above the entry's key and the host client type is eligible. Merges only add
    or replace top-level capabilities, so a lower threshold processed after a
    higher one never removes what the higher one granted.

    Args:
        highest_supported_version: Highest client SDK version the host supports.
        host_client_type: Platform of the host client.
        version_table: Version -> capability requirements table.
        baseline: Capabilities every legacy host supports.

    Returns:
        A frozen ``Runtime`` with ``is_legacy_teams=True`` and ``api_version=1``.

    Raises:
        ValueError: If a version string is not dotted-numeric, or the host
            client type is unknown.
    """
    client_type = HostClientType(host_client_type)
    new_supports = dict(baseline.supports)

    for version_number, requirements in version_table.items():
        if compare_sdk_versions(highest_supported_version, version_number) < 0:
            continue
        for requirement in requirements:
            if client_type in requirement.host_client_types:
                new_supports = merge_supports(new_supports, requirement.capability)
                logger.debug(
                    "back-compat: %s unlocked at %s for host=%s",
                    sorted(requirement.capability),
                    version_number,
                    client_type.value,
                )

    return Runtime(api_version=1, is_legacy_teams=True, supports=new_supports)
