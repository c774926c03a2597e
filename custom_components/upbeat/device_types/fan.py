"""UPB fan controller drivers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import ClassVar

from custom_components.upbeat.const import (
    LINK_SPEED_THRESHOLDS,
    MULTI_SPEED_LEVELS,
    REPORT_SPEED_THRESHOLDS,
    SINGLE_SPEED_LEVELS,
    SINGLE_SPEED_THRESHOLDS,
    SPEED_HIGH,
    SPEED_OFF,
)
from custom_components.upbeat.logger import TRACE
from custom_components.upbeat.state import SpeedState

from .base import AddressableDevice

SpeedThresholds = Sequence[tuple[int, str]]


def level_to_speed(level: int, thresholds: SpeedThresholds) -> str:
    """Return the first speed whose upper bound covers ``level``.

    Zero is always ``off``; levels above every bound run at the fastest speed.
    """

    if level <= 0:
        return SPEED_OFF
    for bound, speed in thresholds:
        if level <= bound:
            return speed
    return thresholds[-1][1]


class FanDevice(AddressableDevice):
    """A fan controller driven by named speeds.

    Bound links and bus reports map levels to speeds with separate thresholds.
    """

    speed_levels: ClassVar[Mapping[str, int]] = SINGLE_SPEED_LEVELS
    link_thresholds: ClassVar[SpeedThresholds] = SINGLE_SPEED_THRESHOLDS
    report_thresholds: ClassVar[SpeedThresholds] = SINGLE_SPEED_THRESHOLDS

    def __init__(self, *args, **kwargs) -> None:
        """Initialise the fan and its speed attribute."""

        super().__init__(*args, **kwargs)
        self.speed: SpeedState = self.add_state(SpeedState(self))

    @property
    def supported_speeds(self) -> list[str]:
        """Return the speed names this fan accepts."""

        return list(self.speed_levels)

    def _on_installed(self) -> None:
        super()._on_installed()
        self._reflect_speed(SPEED_OFF)

    def _reflect_speed(self, speed: str) -> None:
        self.switch.set_on(speed != SPEED_OFF)
        self.speed.publish(speed, is_state_change=True)

    def set_speed(self, speed: str) -> bool:
        """Run the fan at ``speed``."""

        self.logger.log(TRACE, "set_speed(%s)", speed)
        identity = self._ready()
        if identity is None:
            return False
        if speed not in self.speed_levels:
            self._fail(
                f"Invalid speed: {speed}. Supported speeds: "
                + ", ".join(self.supported_speeds)
            )
            return False
        result = self._emitter().goto(
            identity, self.speed_levels[speed], description=f"set speed {speed}"
        )
        return self._complete(result, lambda: self._reflect_speed(speed))

    def on(self) -> bool:
        """Run the fan at full speed."""

        self.logger.log(TRACE, "on()")
        return self.set_speed(SPEED_HIGH)

    def off(self) -> bool:
        """Stop the fan."""

        self.logger.log(TRACE, "off()")
        return self.set_speed(SPEED_OFF)

    def _apply_level(self, level: int) -> bool:
        return self.set_speed(level_to_speed(level, self.link_thresholds))

    def _reflect_level(self, level: int) -> None:
        self._reflect_speed(level_to_speed(level, self.report_thresholds))


class SingleSpeedFanDevice(FanDevice):
    """A fan that is either off or running."""

    driver_name: ClassVar[str] = "UPB Single-Speed Fan"


class MultiSpeedFanDevice(FanDevice):
    """A fan with low, medium and high speeds."""

    driver_name: ClassVar[str] = "UPB Multi-Speed Fan"
    speed_levels: ClassVar[Mapping[str, int]] = MULTI_SPEED_LEVELS
    link_thresholds: ClassVar[SpeedThresholds] = LINK_SPEED_THRESHOLDS
    report_thresholds: ClassVar[SpeedThresholds] = REPORT_SPEED_THRESHOLDS

    def cycle_speed(self) -> bool:
        """Advance to the next speed, wrapping from high back to off."""

        self.logger.log(TRACE, "cycle_speed()")
        speeds = self.supported_speeds
        current = self.speed.value if self.speed.value in speeds else SPEED_OFF
        return self.set_speed(speeds[(speeds.index(current) + 1) % len(speeds)])
