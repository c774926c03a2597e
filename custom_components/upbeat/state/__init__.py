"""Attribute state helpers for UPBeat devices."""

from .device_state import AttributeEvent, DeviceState, FixedLengthHistory
from .states import (
    LastReceivedLinkState,
    LastTriggerState,
    LevelState,
    SpeedState,
    StatusState,
    SwitchState,
)

__all__ = [
    "AttributeEvent",
    "DeviceState",
    "FixedLengthHistory",
    "LastReceivedLinkState",
    "LastTriggerState",
    "LevelState",
    "SpeedState",
    "StatusState",
    "SwitchState",
]
