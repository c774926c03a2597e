"""Virtual scene drivers bound to a single UPB link."""

from __future__ import annotations

from typing import ClassVar

from custom_components.upbeat.const import LAST_TRIGGER_INITIAL
from custom_components.upbeat.events import LinkEvent, LinkEventType
from custom_components.upbeat.logger import TRACE
from custom_components.upbeat.state import LastTriggerState, SwitchState

from .base import SceneDevice

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class SceneActuatorDevice(SceneDevice):
    """A momentary scene that records who last triggered it."""

    driver_name: ClassVar[str] = "UPB Scene Actuator"

    def __init__(self, *args, **kwargs) -> None:
        """Initialise the scene and its audit attribute."""

        super().__init__(*args, **kwargs)
        self.last_trigger: LastTriggerState = self.add_state(LastTriggerState(self))

    def _on_installed(self) -> None:
        self.last_trigger.publish(LAST_TRIGGER_INITIAL, is_state_change=True)

    def push(self) -> bool:
        """Activate the scene as a momentary button press."""

        self.logger.log(TRACE, "push()")
        return self.activate()

    def _on_link(self, event: LinkEvent, event_type: LinkEventType) -> None:
        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        self.last_trigger.publish(
            f"{event_type.verb} at {timestamp} by {event.attribution}",
            is_state_change=True,
        )


class SceneSwitchDevice(SceneDevice):
    """A scene presented as a switch: activate is on, deactivate is off."""

    driver_name: ClassVar[str] = "UPB Scene Switch"

    def __init__(self, *args, **kwargs) -> None:
        """Initialise the scene and its switch attribute."""

        super().__init__(*args, **kwargs)
        self.switch: SwitchState = self.add_state(SwitchState(self))

    def _on_installed(self) -> None:
        self.switch.set_on(False)

    def on(self) -> bool:
        """Activate the scene."""

        self.logger.log(TRACE, "on()")
        return self.activate()

    def off(self) -> bool:
        """Deactivate the scene."""

        self.logger.log(TRACE, "off()")
        return self.deactivate()

    def _on_link(self, event: LinkEvent, event_type: LinkEventType) -> None:
        self.switch.set_on(event_type is LinkEventType.ACTIVATE)
