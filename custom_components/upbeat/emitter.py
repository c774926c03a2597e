"""Outbound command emission through the hub's encoder and transport."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .identity import DeviceIdentity, SceneIdentity
from .logger import TRACE, hex_bytes
from .transport import UPBeatParent

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one build-and-send round trip."""

    success: bool
    data: bytes | None = None
    error: str | None = None


class CommandEmitter:
    """Build UPB commands with the parent app and hand them to its transport.

    The emitter never raises for transport trouble: a rejected send or an
    exception from the builder or transport becomes a failed
    :class:`CommandResult` whose ``error`` names the command.
    """

    def __init__(
        self, parent: UPBeatParent, *, logger: logging.Logger | None = None
    ) -> None:
        """Bind the emitter to the hub collaborator."""

        self._parent = parent
        self._logger = logger or _LOGGER

    def _emit(self, description: str, build: Callable[[], bytes]) -> CommandResult:
        data: bytes | None = None
        try:
            data = build()
            self._logger.debug("UPB %s command [%s]", description, hex_bytes(data))
            sent = self._parent.send(data)
        except Exception as err:  # noqa: BLE001
            error = f"{description.capitalize()} command failed: {err}"
            self._logger.warning("%s", error)
            return CommandResult(success=False, data=data, error=error)
        if not sent:
            error = f"Failed to issue {description} command [{hex_bytes(data)}]"
            self._logger.debug("%s", error)
            return CommandResult(success=False, data=data, error=error)
        self._logger.log(TRACE, "%s command sent [%s]", description, hex_bytes(data))
        return CommandResult(success=True, data=data)

    def goto(
        self,
        identity: DeviceIdentity,
        level: int,
        *,
        rate: int = 0,
        description: str = "goto",
    ) -> CommandResult:
        """Drive the device channel to ``level`` percent."""

        return self._emit(
            description,
            lambda: self._parent.build_goto_command(
                identity.network_id,
                identity.device_id,
                level,
                rate,
                identity.channel_id,
            ),
        )

    def activate_scene(
        self, identity: SceneIdentity, *, rate: int = 0
    ) -> CommandResult:
        """Broadcast a link activate for the scene."""

        return self._emit(
            "activate",
            lambda: self._parent.build_scene_activate_command(
                identity.network_id, identity.link_id, rate
            ),
        )

    def deactivate_scene(
        self, identity: SceneIdentity, *, rate: int = 0
    ) -> CommandResult:
        """Broadcast a link deactivate for the scene."""

        return self._emit(
            "deactivate",
            lambda: self._parent.build_scene_deactivate_command(
                identity.network_id, identity.link_id, rate
            ),
        )

    def request_state(self, identity: DeviceIdentity) -> CommandResult:
        """Ask the device to report its current state."""

        return self._emit(
            "device state request",
            lambda: self._parent.build_device_state_request_command(
                identity.network_id, identity.device_id
            ),
        )

    def blink(self, identity: DeviceIdentity, rate: int) -> CommandResult:
        """Flash the device channel at ``rate``."""

        return self._emit(
            "flash",
            lambda: self._parent.build_blink_command(
                identity.network_id, identity.device_id, rate, identity.channel_id
            ),
        )
