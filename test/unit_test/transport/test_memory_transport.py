from typing import Any, List

import pytest

from hostbridge.transport import InMemoryTransport, MessageTransport


def test_conforms_to_protocol() -> None:
    assert isinstance(InMemoryTransport(), MessageTransport)


def test_post_records_a_copy() -> None:
    transport = InMemoryTransport()
    envelope = {"id": 0, "func": "f", "args": [{"nested": 1}]}

    transport.post_message(envelope)
    envelope["args"][0]["nested"] = 2

    assert transport.messages == [{"id": 0, "func": "f", "args": [{"nested": 1}]}]


def test_fail_with_raises_and_records_nothing() -> None:
    transport = InMemoryTransport(fail_with=OSError("closed"))

    with pytest.raises(OSError, match="closed"):
        transport.post_message({"func": "f", "args": []})
    assert transport.messages == []


def test_deliver_without_listener_raises() -> None:
    with pytest.raises(RuntimeError):
        InMemoryTransport().deliver({"func": "f"})


def test_respond_and_emit_envelopes() -> None:
    transport = InMemoryTransport()
    inbound: List[dict[str, Any]] = []
    transport.attach(inbound.append)

    transport.respond(3, None, "value")
    transport.emit("themeChange", "dark")

    assert inbound == [
        {"id": 3, "args": [None, "value"]},
        {"func": "themeChange", "args": ["dark"]},
    ]

    transport.detach()
    with pytest.raises(RuntimeError):
        transport.emit("themeChange", "light")


def test_find_messages() -> None:
    transport = InMemoryTransport()
    transport.post_message({"id": 0, "func": "a", "args": [1]})
    transport.post_message({"func": "b", "args": []})
    transport.post_message({"id": 1, "func": "a", "args": [2]})

    assert transport.find_message_by_func("a") == {"id": 1, "func": "a", "args": [2]}
    assert transport.find_message_by_func("missing") is None
    assert [m["args"] for m in transport.find_messages_by_func("a")] == [[1], [2]]

    transport.clear()
    assert transport.messages == []
