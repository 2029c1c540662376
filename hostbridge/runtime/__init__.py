"""Runtime capability model.

This package exports:

- ``Runtime``: the frozen description of what the host supports.
- ``RuntimeRegistry``: holder of the live runtime with ``is_supported`` queries.
- ``generate_back_compat_runtime_config``: runtime synthesis for legacy hosts.
- ``compare_sdk_versions``: dotted numeric version comparison.
"""

from .back_compat import (
    TEAMS_RUNTIME_CONFIG,
    UNINITIALIZED_RUNTIME,
    V1_HOST_CLIENT_TYPES,
    VERSION_CONSTANTS,
    generate_back_compat_runtime_config,
)
from .models import CapabilityRequirement, Runtime
from .registry import RuntimeRegistry, parse_runtime_config
from .version import compare_sdk_versions, is_version_at_least

__all__ = [
    "CapabilityRequirement",
    "Runtime",
    "RuntimeRegistry",
    "TEAMS_RUNTIME_CONFIG",
    "UNINITIALIZED_RUNTIME",
    "V1_HOST_CLIENT_TYPES",
    "VERSION_CONSTANTS",
    "compare_sdk_versions",
    "generate_back_compat_runtime_config",
    "is_version_at_least",
    "parse_runtime_config",
]
