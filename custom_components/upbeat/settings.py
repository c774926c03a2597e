"""Configuration surface for UPBeat devices.

The hub stores device preferences as a flat mapping where each receive slot is
its own numbered key. This module is the only place that knows about that
layout: everything past :meth:`DeviceSettings.from_mapping` sees the receive
components as a single ordered tuple.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

import voluptuous as vol

from .const import (
    CONF_CHANNEL_ID,
    CONF_DEVICE_ID,
    CONF_FADE_RATE,
    CONF_LINK_ID,
    CONF_LOG_LEVEL,
    CONF_NETWORK_ID,
    CONF_RECEIVE_COMPONENT,
    LOG_LEVELS,
    RECEIVE_COMPONENT_SLOTS,
)
from .errors import ConfigurationError

_OPTIONAL_INT = vol.Any(None, vol.Coerce(int))
_OPTIONAL_TEXT = vol.Any(None, str)


def slot_key(slot: int) -> str:
    """Return the settings key for the 1-based receive ``slot``."""

    return CONF_RECEIVE_COMPONENT.format(slot=slot)


_SLOT_KEYS = tuple(slot_key(slot) for slot in range(1, RECEIVE_COMPONENT_SLOTS + 1))

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NETWORK_ID, default=None): _OPTIONAL_INT,
        vol.Optional(CONF_DEVICE_ID, default=None): _OPTIONAL_INT,
        vol.Optional(CONF_CHANNEL_ID, default=None): _OPTIONAL_INT,
        vol.Optional(CONF_LINK_ID, default=None): _OPTIONAL_INT,
        vol.Optional(CONF_LOG_LEVEL, default=None): vol.Any(
            None, vol.All(vol.Coerce(int), vol.In(LOG_LEVELS))
        ),
        vol.Optional(CONF_FADE_RATE, default=None): _OPTIONAL_TEXT,
        **{vol.Optional(key, default=None): _OPTIONAL_TEXT for key in _SLOT_KEYS},
    },
    extra=vol.ALLOW_EXTRA,
)

_KNOWN_KEYS = frozenset(
    (
        CONF_NETWORK_ID,
        CONF_DEVICE_ID,
        CONF_CHANNEL_ID,
        CONF_LINK_ID,
        CONF_LOG_LEVEL,
        CONF_FADE_RATE,
        *_SLOT_KEYS,
    )
)


@dataclass(frozen=True, slots=True)
class DeviceSettings:
    """Validated device preferences."""

    network_id: int | None = None
    device_id: int | None = None
    channel_id: int | None = None
    link_id: int | None = None
    log_level: int | None = None
    fade_rate: str | None = None
    receive_components: tuple[str | None, ...] = (None,) * RECEIVE_COMPONENT_SLOTS
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> DeviceSettings:
        """Validate the host's flat settings mapping."""

        try:
            data = SETTINGS_SCHEMA(dict(settings))
        except vol.Invalid as exc:
            path = getattr(exc, "path", None) or []
            name = str(path[0]) if path else None
            msg = f"Invalid setting {name}: {exc.msg}" if name else exc.msg
            raise ConfigurationError(msg, field=name) from exc
        return cls(
            network_id=data[CONF_NETWORK_ID],
            device_id=data[CONF_DEVICE_ID],
            channel_id=data[CONF_CHANNEL_ID],
            link_id=data[CONF_LINK_ID],
            log_level=data[CONF_LOG_LEVEL],
            fade_rate=data[CONF_FADE_RATE],
            receive_components=tuple(data[key] for key in _SLOT_KEYS),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def as_mapping(self) -> dict[str, Any]:
        """Return the flat mapping form written back to the host."""

        mapping: dict[str, Any] = dict(self.extra)
        mapping.update(
            {
                CONF_NETWORK_ID: self.network_id,
                CONF_DEVICE_ID: self.device_id,
                CONF_CHANNEL_ID: self.channel_id,
                CONF_LINK_ID: self.link_id,
                CONF_LOG_LEVEL: self.log_level,
                CONF_FADE_RATE: self.fade_rate,
            }
        )
        mapping.update(zip(_SLOT_KEYS, self.receive_components))
        return mapping

    def with_cleared_slots(self, slots: Iterable[int]) -> DeviceSettings:
        """Return a copy with the given 1-based receive slots blanked."""

        cleared = set(slots)
        if not cleared:
            return self
        components = tuple(
            None if index in cleared else value
            for index, value in enumerate(self.receive_components, start=1)
        )
        return replace(self, receive_components=components)

    def updated(self, **changes: Any) -> DeviceSettings:
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)
