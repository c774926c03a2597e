"""Device type implementations for the UPBeat engine."""

from .base import AddressableDevice, BaseDevice, SceneDevice, check_parent
from .fan import MultiSpeedFanDevice, SingleSpeedFanDevice
from .scene import SceneActuatorDevice, SceneSwitchDevice
from .switch import DimmingSwitchDevice, NonDimmingSwitchDevice

DEVICE_TYPES: dict[str, type[BaseDevice]] = {
    device_type.driver_name: device_type
    for device_type in (
        NonDimmingSwitchDevice,
        DimmingSwitchDevice,
        SingleSpeedFanDevice,
        MultiSpeedFanDevice,
        SceneActuatorDevice,
        SceneSwitchDevice,
    )
}

__all__ = [
    "AddressableDevice",
    "BaseDevice",
    "DEVICE_TYPES",
    "DimmingSwitchDevice",
    "MultiSpeedFanDevice",
    "NonDimmingSwitchDevice",
    "SceneActuatorDevice",
    "SceneDevice",
    "SceneSwitchDevice",
    "SingleSpeedFanDevice",
    "check_parent",
]
