"""Contract of the hub app that owns UPBeat devices and talks to the PIM."""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol, runtime_checkable


class SettingsResult(NamedTuple):
    """Outcome of asking the hub to apply updated device settings."""

    success: bool
    error: str | None = None


@runtime_checkable
class UPBeatParent(Protocol):
    """Command builders and transport exposed by the controlling app.

    Builders encode UPB messages and are expected to succeed for addresses
    that already passed identity validation. ``send`` hands the bytes to the
    powerline interface module and reports only success or failure.
    """

    name: str

    def build_goto_command(
        self, network_id: int, device_id: int, level: int, rate: int, channel_id: int
    ) -> bytes:
        """Encode a goto-level command for one device channel."""

    def build_scene_activate_command(
        self, network_id: int, link_id: int, rate: int
    ) -> bytes:
        """Encode a link activate command."""

    def build_scene_deactivate_command(
        self, network_id: int, link_id: int, rate: int
    ) -> bytes:
        """Encode a link deactivate command."""

    def build_device_state_request_command(
        self, network_id: int, device_id: int
    ) -> bytes:
        """Encode a report-state request for one device."""

    def build_blink_command(
        self, network_id: int, device_id: int, rate: int, channel_id: int
    ) -> bytes:
        """Encode a blink command for one device channel."""

    def send(self, data: bytes) -> bool:
        """Transmit ``data`` on the bus and return whether it was accepted."""

    def notify_link_event(
        self,
        source: str,
        event_type: str,
        network_id: int,
        source_id: int,
        link_id: int,
    ) -> None:
        """Route a locally initiated link event back through dispatch."""

    def update_device_settings(
        self, device: Any, settings: dict[str, Any]
    ) -> SettingsResult:
        """Apply changed settings on the hub side (device id renames)."""
