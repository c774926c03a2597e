"""Pytest configuration for the UPBeat engine tests."""

from __future__ import annotations

import datetime as dt
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from custom_components.upbeat import PARENT_APP_NAME  # noqa: E402
from custom_components.upbeat.device_types import (  # noqa: E402
    AddressableDevice,
    BaseDevice,
)
from custom_components.upbeat.settings import DeviceSettings  # noqa: E402
from custom_components.upbeat.state import AttributeEvent  # noqa: E402
from custom_components.upbeat.storage import BindingStore  # noqa: E402
from custom_components.upbeat.transport import SettingsResult  # noqa: E402


class FakeParent:
    """In-memory stand-in for the UPBeat app that records every call."""

    def __init__(self, name: str = PARENT_APP_NAME) -> None:
        """Set up call recorders and default outcomes."""

        self.name = name
        self.built: list[tuple[Any, ...]] = []
        self.sent: list[bytes] = []
        self.link_events: list[tuple[str, str, int, int, int]] = []
        self.settings_updates: list[dict[str, Any]] = []
        self.send_result = True
        self.send_error: Exception | None = None
        self.settings_result = SettingsResult(True)

    def _build(self, *call: Any) -> bytes:
        self.built.append(call)
        return bytes([len(self.built) & 0xFF, *(value & 0xFF for value in call[1:])])

    def build_goto_command(
        self, network_id: int, device_id: int, level: int, rate: int, channel_id: int
    ) -> bytes:
        """Record a goto build."""

        return self._build("goto", network_id, device_id, level, rate, channel_id)

    def build_scene_activate_command(
        self, network_id: int, link_id: int, rate: int
    ) -> bytes:
        """Record a link activate build."""

        return self._build("activate", network_id, link_id, rate)

    def build_scene_deactivate_command(
        self, network_id: int, link_id: int, rate: int
    ) -> bytes:
        """Record a link deactivate build."""

        return self._build("deactivate", network_id, link_id, rate)

    def build_device_state_request_command(
        self, network_id: int, device_id: int
    ) -> bytes:
        """Record a state request build."""

        return self._build("state", network_id, device_id)

    def build_blink_command(
        self, network_id: int, device_id: int, rate: int, channel_id: int
    ) -> bytes:
        """Record a blink build."""

        return self._build("blink", network_id, device_id, rate, channel_id)

    def send(self, data: bytes) -> bool:
        """Record the frame and return the configured outcome."""

        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)
        return self.send_result

    def notify_link_event(
        self,
        source: str,
        event_type: str,
        network_id: int,
        source_id: int,
        link_id: int,
    ) -> None:
        """Record a scene echo."""

        self.link_events.append((source, event_type, network_id, source_id, link_id))

    def update_device_settings(
        self, device: object, settings: Mapping[str, Any]
    ) -> SettingsResult:
        """Record the settings written back for ``device``."""

        self.settings_updates.append(dict(settings))
        return self.settings_result

    def commands(self, kind: str) -> list[tuple[Any, ...]]:
        """Return recorded builds of one kind."""

        return [call for call in self.built if call[0] == kind]


class EventRecorder:
    """Collect attribute events published by a device."""

    def __init__(self) -> None:
        """Set up event storage."""

        self.events: list[AttributeEvent] = []

    def __call__(self, event: AttributeEvent) -> None:
        """Record ``event``."""

        self.events.append(event)

    def named(self, name: str) -> list[AttributeEvent]:
        """Return the events for one attribute."""

        return [event for event in self.events if event.name == name]

    def clear(self) -> None:
        """Forget recorded events."""

        self.events.clear()


FIXED_NOW = dt.datetime(2024, 5, 17, 21, 4, 9)


@pytest.fixture
def parent() -> FakeParent:
    """Return an app stand-in owning the device under test."""

    return FakeParent()


@pytest.fixture
def recorder() -> EventRecorder:
    """Return an attribute event collector."""

    return EventRecorder()


@pytest.fixture
def store(tmp_path: Path) -> BindingStore:
    """Return a binding store backed by a temporary file."""

    return BindingStore(tmp_path / ".storage" / "upbeat_receive_components")


@pytest.fixture
def clock():
    """Return a clock pinned to a fixed instant."""

    return lambda: FIXED_NOW


DEVICE_DEFAULTS = {"network_id": 1, "device_id": 5, "channel_id": 1}
SCENE_DEFAULTS = {"network_id": 1, "link_id": 42}


@pytest.fixture
def make_device(parent: FakeParent, store: BindingStore, clock, recorder):
    """Return a factory building an owned device with recorded attributes.

    Addressable devices default to network 1, device 5, channel 1 and share
    the test binding store; scenes default to network 1, link 42.
    """

    def factory(device_type: type[BaseDevice], **values: Any) -> Any:
        addressable = issubclass(device_type, AddressableDevice)
        mapping: dict[str, Any] = dict(
            DEVICE_DEFAULTS if addressable else SCENE_DEFAULTS
        )
        mapping.update(values)
        kwargs: dict[str, Any] = {
            "settings": DeviceSettings.from_mapping(mapping),
            "clock": clock,
        }
        if addressable:
            kwargs["store"] = store
        device = device_type(parent, **kwargs)
        device.add_listener(recorder)
        return device

    return factory
