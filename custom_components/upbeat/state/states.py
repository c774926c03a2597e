"""Concrete attributes published by UPBeat devices."""

from __future__ import annotations

from ..const import STATUS_ERROR, STATUS_OK, SWITCH_OFF, SWITCH_ON
from .device_state import AttributeEvent, DeviceState


class StatusState(DeviceState[str | None]):
    """Outcome of the latest operation: ``ok`` or ``error`` with a reason."""

    def __init__(self, device: object) -> None:
        """Initialise the status attribute."""

        super().__init__(device=device, name="status", initial_value=None)

    def ok(self, description: str | None = None) -> AttributeEvent | None:
        """Publish ``ok``; only a transition from another status notifies."""

        return self.publish(STATUS_OK, description=description)

    def error(self, description: str) -> AttributeEvent | None:
        """Publish ``error``; always notifies so repeated failures are seen."""

        return self.publish(STATUS_ERROR, description=description, is_state_change=True)


class SwitchState(DeviceState[str | None]):
    """On/off output state."""

    def __init__(self, device: object) -> None:
        """Initialise the switch attribute."""

        super().__init__(device=device, name="switch", initial_value=None)

    @property
    def is_on(self) -> bool:
        """Return True when the output is on."""

        return self.value == SWITCH_ON

    def set_on(self, is_on: bool) -> AttributeEvent | None:
        """Publish ``on`` or ``off``."""

        return self.publish(SWITCH_ON if is_on else SWITCH_OFF, is_state_change=True)


class LevelState(DeviceState[int | None]):
    """Dimmer output level in percent."""

    def __init__(self, device: object) -> None:
        """Initialise the level attribute."""

        super().__init__(device=device, name="level", initial_value=None)


class SpeedState(DeviceState[str | None]):
    """Fan speed name."""

    def __init__(self, device: object) -> None:
        """Initialise the speed attribute."""

        super().__init__(device=device, name="speed", initial_value=None)


class LastTriggerState(DeviceState[str | None]):
    """Audit text describing who last activated or deactivated a scene."""

    def __init__(self, device: object) -> None:
        """Initialise the last trigger attribute."""

        super().__init__(device=device, name="lastTrigger", initial_value=None)


class LastReceivedLinkState(DeviceState[int | None]):
    """Link id of the most recent bound link event."""

    def __init__(self, device: object) -> None:
        """Initialise the last received link attribute."""

        super().__init__(device=device, name="lastReceivedLinkId", initial_value=None)
