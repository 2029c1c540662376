from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Sequence, Union

from .back_compat import UNINITIALIZED_RUNTIME
from .models import Runtime

logger = logging.getLogger(__name__)

RuntimeSource = Union[Runtime, Mapping[str, Any], str]
CapabilityPath = Union[str, Sequence[str]]


def parse_runtime_config(config: RuntimeSource) -> Runtime:
    """Validate a runtime declared as a ``Runtime``, a mapping or a JSON string.

    Raises:
        pydantic.ValidationError: If the declaration is malformed.
        json.JSONDecodeError: If a string is not valid JSON.
    """
    if isinstance(config, Runtime):
        return config
    if isinstance(config, str):
        return Runtime.model_validate(json.loads(config))
    return Runtime.model_validate(dict(config))


class RuntimeRegistry:
    """
    Holder of the live capability ``Runtime``.

    The registry exposes a single mutator, ``apply_runtime_config``, which swaps
    the whole ``Runtime`` reference. Published runtimes are immutable, so a
    reader holding an earlier snapshot keeps a consistent view after a swap.

    Notes:
        - ``is_supported`` never raises; unknown or malformed paths are False.
        - ``reset`` restores the all-unsupported sentinel used before initialization.
    """

    def __init__(self, runtime: Runtime = UNINITIALIZED_RUNTIME) -> None:
        self._runtime = runtime

    @property
    def runtime(self) -> Runtime:
        return self._runtime

    def apply_runtime_config(self, config: RuntimeSource) -> Runtime:
        """
        Publish a new runtime, replacing the current one wholesale.

        Args:
            config: A ``Runtime``, a mapping, or a JSON document as sent by the host.

        Returns:
            The published, frozen ``Runtime``.
        """
        runtime = parse_runtime_config(config)
        self._runtime = runtime
        logger.debug(
            "Runtime published: apiVersion=%s legacy=%s capabilities=%s",
            runtime.api_version,
            runtime.is_legacy_teams,
            sorted(k for k, v in runtime.supports.items() if v is not None),
        )
        return runtime

    def reset(self) -> None:
        self._runtime = UNINITIALIZED_RUNTIME

    def is_supported(self, path: CapabilityPath) -> bool:
        """
        Check whether a capability, or a sub-capability, is supported.

        Args:
            path: Dotted path such as ``"dialog.update"`` or a sequence of names.

        Returns:
            True only if every segment resolves to a mapping.
        """
        if isinstance(path, str):
            parts = path.split(".")
        elif isinstance(path, Sequence):
            parts = list(path)
        else:
            return False
        if not parts or any(not isinstance(p, str) or not p for p in parts):
            return False
        node: Any = self._runtime.supports
        for part in parts:
            if not isinstance(node, Mapping):
                return False
            node = node.get(part)
        return isinstance(node, Mapping)
