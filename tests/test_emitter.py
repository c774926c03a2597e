"""Tests for building and sending UPB commands."""

from __future__ import annotations

from custom_components.upbeat.emitter import CommandEmitter
from custom_components.upbeat.identity import DeviceIdentity, SceneIdentity

DEVICE = DeviceIdentity(network_id=1, device_id=5, channel_id=1)
SCENE = SceneIdentity(network_id=1, link_id=42)


def test_goto_builds_with_identity_and_sends(parent) -> None:
    """A goto is built from the identity triple and handed to the transport."""

    result = CommandEmitter(parent).goto(DEVICE, 66, rate=3, description="set level")

    assert result.success
    assert parent.built == [("goto", 1, 5, 66, 3, 1)]
    assert parent.sent == [result.data]


def test_scene_commands_use_network_and_link(parent) -> None:
    """Activate and deactivate address the scene link."""

    emitter = CommandEmitter(parent)

    assert emitter.activate_scene(SCENE).success
    assert emitter.deactivate_scene(SCENE).success
    assert parent.built == [("activate", 1, 42, 0), ("deactivate", 1, 42, 0)]


def test_state_request_and_blink(parent) -> None:
    """Refresh and flash map to their own builders."""

    emitter = CommandEmitter(parent)
    emitter.request_state(DEVICE)
    emitter.blink(DEVICE, 20)

    assert parent.built == [("state", 1, 5), ("blink", 1, 5, 20, 1)]


def test_rejected_send_reports_bytes(parent) -> None:
    """A False send becomes a failed result naming the command."""

    parent.send_result = False

    result = CommandEmitter(parent).goto(DEVICE, 100, description="on")

    assert not result.success
    assert result.error.startswith("Failed to issue on command [0x01, 0x01")


def test_transport_exception_is_captured(parent) -> None:
    """Exceptions from the transport never escape the emitter."""

    parent.send_error = OSError("serial port closed")

    result = CommandEmitter(parent).activate_scene(SCENE)

    assert not result.success
    assert result.error == "Activate command failed: serial port closed"
