"""Bus addressing for UPB devices and scenes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from .const import (
    CHANNEL_ID_RANGE,
    CONF_CHANNEL_ID,
    CONF_DEVICE_ID,
    CONF_LINK_ID,
    CONF_NETWORK_ID,
    DEVICE_ID_RANGE,
    LINK_ID_RANGE,
    NETWORK_ID_RANGE,
)
from .errors import ConfigurationError

_FIELDS: dict[str, tuple[str, tuple[int, int]]] = {
    CONF_NETWORK_ID: ("Network ID", NETWORK_ID_RANGE),
    CONF_DEVICE_ID: ("Device ID", DEVICE_ID_RANGE),
    CONF_CHANNEL_ID: ("Channel ID", CHANNEL_ID_RANGE),
    CONF_LINK_ID: ("Link ID", LINK_ID_RANGE),
}


def ranged_int(low: int, high: int) -> vol.All:
    """Return a voluptuous validator for an integer within ``low``..``high``."""

    return vol.All(vol.Coerce(int), vol.Range(min=low, max=high))


def validate_field(field: str, value: Any) -> int:
    """Validate one addressing field, raising ``ConfigurationError`` when invalid."""

    label, (low, high) = _FIELDS[field]
    if value is None:
        msg = f"{label} must be configured"
        raise ConfigurationError(msg, field=field)
    try:
        return ranged_int(low, high)(value)
    except vol.Invalid as exc:
        msg = f"{label} must be {low}-{high}, got: {value}"
        raise ConfigurationError(msg, field=field) from exc


@dataclass(frozen=True, slots=True)
class DeviceIdentity:
    """Network, device and channel triple of an addressable UPB device."""

    network_id: int
    device_id: int
    channel_id: int

    @property
    def device_network_id(self) -> str:
        """Return the hub-unique identifier used to key persisted data."""

        return f"UPBeat_{self.network_id:02X}{self.device_id:02X}{self.channel_id:02X}"

    @property
    def channel_index(self) -> int:
        """Return the zero-based index of this channel in state reports."""

        return max(self.channel_id - 1, 0)

    def addresses(self, network_id: int, device_id: int) -> bool:
        """Return True when ``network_id``/``device_id`` refer to this device."""

        return self.network_id == network_id and self.device_id == device_id


@dataclass(frozen=True, slots=True)
class SceneIdentity:
    """Network and link pair of a UPB scene."""

    network_id: int
    link_id: int

    @property
    def device_network_id(self) -> str:
        """Return the hub-unique identifier for the scene device."""

        return f"UPBeat_{self.network_id:02X}{self.link_id:02X}"

    def addresses(self, network_id: int, link_id: int) -> bool:
        """Return True when ``network_id``/``link_id`` name this scene."""

        return self.network_id == network_id and self.link_id == link_id


def resolve_device_identity(
    network_id: Any, device_id: Any, channel_id: Any
) -> DeviceIdentity | ConfigurationError:
    """Return a validated identity, or the error describing the first bad field."""

    try:
        return DeviceIdentity(
            network_id=validate_field(CONF_NETWORK_ID, network_id),
            device_id=validate_field(CONF_DEVICE_ID, device_id),
            channel_id=validate_field(CONF_CHANNEL_ID, channel_id),
        )
    except ConfigurationError as err:
        return err


def resolve_scene_identity(
    network_id: Any, link_id: Any
) -> SceneIdentity | ConfigurationError:
    """Return a validated scene identity, or the error for the first bad field."""

    try:
        return SceneIdentity(
            network_id=validate_field(CONF_NETWORK_ID, network_id),
            link_id=validate_field(CONF_LINK_ID, link_id),
        )
    except ConfigurationError as err:
        return err
