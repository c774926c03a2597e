"""Inbound bus events delivered to devices by the hub."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .const import EVENT_SOURCE_USER, UPB_ACTIVATE_LINK, UPB_DEACTIVATE_LINK


class LinkEventType(str, Enum):
    """Link commands that devices react to."""

    ACTIVATE = UPB_ACTIVATE_LINK
    DEACTIVATE = UPB_DEACTIVATE_LINK

    @property
    def verb(self) -> str:
        """Return the past-tense verb used in audit messages."""

        return "Activated" if self is LinkEventType.ACTIVATE else "Deactivated"


@dataclass(frozen=True, slots=True)
class LinkEvent:
    """A scene activate/deactivate broadcast observed on the bus."""

    source: str
    event_type: str
    network_id: int
    source_id: int
    link_id: int

    @property
    def by_user(self) -> bool:
        """Return True when the event was triggered from the hub itself."""

        return self.source == EVENT_SOURCE_USER

    @property
    def attribution(self) -> str:
        """Return who triggered the event: ``user`` or the bus source id."""

        return EVENT_SOURCE_USER if self.by_user else str(self.source_id)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> LinkEvent:
        """Normalise the hub's JSON link event payload."""

        return cls(
            source=str(payload.get("eventSource", payload.get("source", "pim"))),
            event_type=str(payload["eventType"]),
            network_id=int(payload["networkId"]),
            source_id=int(payload.get("sourceId", 0)),
            link_id=int(payload["linkId"]),
        )


def _target_device(source_id: int, destination_id: int) -> int:
    return source_id if destination_id == 0 else destination_id


@dataclass(frozen=True, slots=True)
class GotoReport:
    """A goto command addressed to a device, observed on the bus."""

    source: str
    network_id: int
    source_id: int
    destination_id: int
    level: int
    rate: int | None = None
    channel: int | None = None

    @property
    def device_id(self) -> int:
        """Return the device the report concerns."""

        return _target_device(self.source_id, self.destination_id)


@dataclass(frozen=True, slots=True)
class DeviceStateReport:
    """A device reporting its own per-channel output levels."""

    source: str
    network_id: int
    source_id: int
    destination_id: int
    levels: Sequence[int] = field(default_factory=tuple)

    @property
    def device_id(self) -> int:
        """Return the device the report concerns."""

        return _target_device(self.source_id, self.destination_id)

    def level_for(self, channel_index: int) -> int:
        """Return the level reported for ``channel_index``, capped at 100."""

        if channel_index >= len(self.levels):
            return 0
        return min(int(self.levels[channel_index]), 100)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> DeviceStateReport:
        """Normalise the hub's JSON device state payload."""

        return cls(
            source=str(payload.get("eventSource", payload.get("source", "pim"))),
            network_id=int(payload["networkId"]),
            source_id=int(payload.get("sourceId", 0)),
            destination_id=int(payload.get("destinationId", 0)),
            levels=tuple(int(value) for value in payload.get("args", ())),
        )
