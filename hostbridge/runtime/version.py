from __future__ import annotations

from typing import List


def _split_version(version: str) -> List[int]:
    parts = version.split(".")
    if not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid SDK version string: {version!r}")
    return [int(p) for p in parts]


def compare_sdk_versions(v1: str, v2: str) -> int:
    """Compare two dotted numeric version strings.

    Missing trailing segments count as ``0``, so ``"2"`` equals ``"2.0.0"``.

    Args:
        v1: First version, e.g. ``"1.9.0"``.
        v2: Second version.

    Returns:
        -1 if ``v1 < v2``, 0 if equal, 1 if ``v1 > v2``.

    Raises:
        ValueError: If either version contains a non-numeric segment.
    """
    a = _split_version(v1)
    b = _split_version(v2)
    width = max(len(a), len(b))
    a += [0] * (width - len(a))
    b += [0] * (width - len(b))
    for x, y in zip(a, b):
        if x == y:
            continue
        return 1 if x > y else -1
    return 0


def is_version_at_least(version: str, required: str) -> bool:
    return compare_sdk_versions(version, required) >= 0
