"""UPB wall switch drivers."""

from __future__ import annotations

from typing import ClassVar

from custom_components.upbeat.const import (
    DEFAULT_FADE_RATE,
    DEVICE_DEFAULT_RATE,
    FADE_RATE_MAPPING,
    LEVEL_RANGE,
)
from custom_components.upbeat.logger import TRACE
from custom_components.upbeat.settings import DeviceSettings
from custom_components.upbeat.state import LevelState

from .base import AddressableDevice

INSTANT_FADE = "Snap"


class SwitchDevice(AddressableDevice):
    """Behaviour shared by dimming and non-dimming switches."""

    def _on_installed(self) -> None:
        super()._on_installed()
        self.switch.set_on(False)

    def flash(self, rate: int) -> bool:
        """Blink the load at the UPB ``rate``."""

        self.logger.log(TRACE, "flash(%s)", rate)
        identity = self._ready()
        if identity is None:
            return False
        result = self._emitter().blink(identity, int(rate))
        return self._complete(result, lambda: self.switch.set_on(True))

    def on(self) -> bool:
        """Turn the load on."""

        raise NotImplementedError

    def off(self) -> bool:
        """Turn the load off."""

        raise NotImplementedError


class NonDimmingSwitchDevice(SwitchDevice):
    """A relay switch that is either fully on or off."""

    driver_name: ClassVar[str] = "UPB Non-Dimming Switch"
    dimmable: ClassVar[bool] = False

    def _goto(self, is_on: bool) -> bool:
        identity = self._ready()
        if identity is None:
            return False
        description = "on" if is_on else "off"
        result = self._emitter().goto(
            identity, LEVEL_RANGE[1] if is_on else 0, description=description
        )
        return self._complete(result, lambda: self.switch.set_on(is_on))

    def on(self) -> bool:
        """Turn the relay on."""

        self.logger.log(TRACE, "on()")
        return self._goto(True)

    def off(self) -> bool:
        """Turn the relay off."""

        self.logger.log(TRACE, "off()")
        return self._goto(False)

    def _apply_level(self, level: int) -> bool:
        return self.on() if level > 0 else self.off()

    def _reflect_level(self, level: int) -> None:
        self.switch.set_on(level > 0)


class DimmingSwitchDevice(SwitchDevice):
    """A dimmer with a 0-100 output level and configurable fade."""

    driver_name: ClassVar[str] = "UPB Dimming Switch"
    dimmable: ClassVar[bool] = True

    def __init__(self, *args, **kwargs) -> None:
        """Initialise the dimmer and its level attribute."""

        super().__init__(*args, **kwargs)
        self.level: LevelState = self.add_state(LevelState(self))

    def _on_installed(self) -> None:
        super()._on_installed()
        self.level.publish(0, is_state_change=True)

    def _normalise_settings(self, settings: DeviceSettings) -> DeviceSettings:
        if settings.fade_rate is None:
            return settings.updated(fade_rate=DEFAULT_FADE_RATE)
        if settings.fade_rate not in FADE_RATE_MAPPING:
            self.logger.warning(
                "Unknown fade rate %s; resetting to %s",
                settings.fade_rate,
                DEFAULT_FADE_RATE,
            )
            return settings.updated(fade_rate=DEFAULT_FADE_RATE)
        return settings

    def fade_rate_for(self, duration: str | None = None) -> int:
        """Return the UPB rate code for ``duration`` or the configured fade."""

        if duration is not None:
            if duration in FADE_RATE_MAPPING:
                return FADE_RATE_MAPPING[duration]
            self.logger.warning(
                "Unknown fade duration %s; using configured rate", duration
            )
        configured = self._settings.fade_rate or DEFAULT_FADE_RATE
        return FADE_RATE_MAPPING.get(configured, DEVICE_DEFAULT_RATE)

    def set_level(self, value: int, duration: str | None = None) -> bool:
        """Drive the dimmer to ``value`` percent, clamped to 0-100."""

        self.logger.log(TRACE, "set_level(%s, %s)", value, duration)
        identity = self._ready()
        if identity is None:
            return False
        low, high = LEVEL_RANGE
        level = max(low, min(int(value), high))
        result = self._emitter().goto(
            identity, level, rate=self.fade_rate_for(duration), description="set level"
        )
        return self._complete(result, lambda: self._reflect_level(level))

    def on(self) -> bool:
        """Turn the dimmer fully on."""

        self.logger.log(TRACE, "on()")
        return self.set_level(LEVEL_RANGE[1])

    def off(self) -> bool:
        """Turn the dimmer off."""

        self.logger.log(TRACE, "off()")
        return self.set_level(0)

    def _apply_level(self, level: int) -> bool:
        return self.set_level(level, INSTANT_FADE)

    def _reflect_level(self, level: int) -> None:
        self.switch.set_on(level > 0)
        self.level.publish(level, is_state_change=True)
