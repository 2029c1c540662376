"""Capability APIs built on a ``HostSession``.

The APIs here are thin facades: they run the session's validation chain and
send host messages. They are the call sites through which the runtime model,
frame-context guard and correlation engine are exercised.

This package exports:

- ``DialogCapability``: open/submit/resize dialogs and exchange dialog messages.
- ``LocationCapability``: current location, permissions and map APIs.
"""

from .dialog import DialogCapability
from .location import LocationCapability

__all__ = [
    "DialogCapability",
    "LocationCapability",
]
