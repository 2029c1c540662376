"""Runtime capability model.

A ``Runtime`` describes which capabilities, and which sub-capabilities, the
current host supports. The ``supports`` tree maps a capability name either to
``None`` (unsupported) or to a mapping of its sub-capabilities. An empty mapping
means "supported, with no declared sub-capabilities"; it is not the same as a
missing key.

Every ``Runtime`` is immutable all the way down: the ``supports`` tree is deep
copied into read-only mappings at construction time, so the dict a caller
passed in can be mutated afterwards without affecting the published model.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional

from pydantic import ConfigDict, Field, field_serializer, field_validator

from ..schemas.base import BaseSchema
from ..schemas.core import HostClientType

SupportsTree = Mapping[str, Optional[Mapping[str, Any]]]


def deep_freeze(tree: Mapping[str, Any], *, _path: str = "") -> Mapping[str, Any]:
    """Copy a supports tree into nested read-only mappings.

    Raises:
        TypeError: If a node is neither ``None`` nor a mapping.
    """
    frozen: dict[str, Any] = {}
    for key, value in tree.items():
        where = f"{_path}.{key}" if _path else str(key)
        if value is None:
            frozen[str(key)] = None
        elif isinstance(value, Mapping):
            frozen[str(key)] = deep_freeze(value, _path=where)
        else:
            raise TypeError(f"Capability '{where}' must be a mapping or None, got {type(value).__name__}")
    return MappingProxyType(frozen)


def thaw(tree: Mapping[str, Any]) -> dict[str, Any]:
    """Return a plain, mutable ``dict`` copy of a (possibly frozen) supports tree."""
    return {k: (thaw(v) if isinstance(v, Mapping) else v) for k, v in tree.items()}


def merge_supports(base: Mapping[str, Any], fragment: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow merge: top-level keys of ``fragment`` replace those of ``base``."""
    return {**base, **fragment}


class Runtime(BaseSchema):
    # Hosts may declare fields this layer does not consume.
    model_config = ConfigDict(frozen=True, extra="ignore")

    api_version: int = Field(..., description="Runtime protocol version declared by the host.", ge=1)
    is_legacy_teams: bool = Field(
        False,
        description="True when the runtime was synthesized for a host that predates self-describing runtimes.",
    )
    supports: SupportsTree = Field(
        default_factory=dict,
        validate_default=True,
        description="Capability name -> None (unsupported) or a mapping of supported sub-capabilities.",
    )

    @field_validator("supports", mode="before")
    @classmethod
    def _freeze_supports(cls, value: Any) -> Mapping[str, Any]:
        if value is None:
            return MappingProxyType({})
        if not isinstance(value, Mapping):
            raise ValueError("supports must be a mapping")
        try:
            return deep_freeze(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @field_validator("supports", mode="after")
    @classmethod
    def _keep_frozen(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        # Mapping validation may hand back plain dicts; re-freeze the result.
        return deep_freeze(value)

    @field_serializer("supports")
    def _serialize_supports(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return thaw(value)


class CapabilityRequirement(BaseSchema):
    """A capability fragment unlocked for a set of host client types."""

    model_config = ConfigDict(frozen=True)

    capability: Mapping[str, Any] = Field(..., description="Partial supports tree merged when the requirement is met.")
    host_client_types: FrozenSet[HostClientType] = Field(
        ...,
        description="Host client types eligible for this capability.",
    )

    @field_validator("capability", mode="before")
    @classmethod
    def _freeze_capability(cls, value: Any) -> Mapping[str, Any]:
        if not isinstance(value, Mapping):
            raise ValueError("capability must be a mapping")
        try:
            return deep_freeze(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @field_validator("capability", mode="after")
    @classmethod
    def _keep_frozen(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return deep_freeze(value)
