"""Device model shared by every UPBeat driver."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from custom_components.upbeat import PARENT_APP_NAME
from custom_components.upbeat.bindings import (
    BindingEntry,
    BindingParseResult,
    BindingTable,
    describe_table,
    parse_receive_components,
)
from custom_components.upbeat.emitter import CommandEmitter, CommandResult
from custom_components.upbeat.errors import (
    ConfigurationError,
    OwnershipError,
    TransportError,
    UPBeatError,
)
from custom_components.upbeat.events import (
    DeviceStateReport,
    GotoReport,
    LinkEvent,
    LinkEventType,
)
from custom_components.upbeat.identity import (
    DeviceIdentity,
    SceneIdentity,
    resolve_device_identity,
    resolve_scene_identity,
)
from custom_components.upbeat.logger import TRACE, device_logger
from custom_components.upbeat.settings import DeviceSettings
from custom_components.upbeat.state import (
    AttributeEvent,
    DeviceState,
    LastReceivedLinkState,
    StatusState,
    SwitchState,
)
from custom_components.upbeat.state.device_state import AttributeListener
from custom_components.upbeat.storage import BindingStore
from custom_components.upbeat.transport import UPBeatParent


def check_parent(device: BaseDevice) -> OwnershipError | None:
    """Return an error unless ``device`` is owned by the UPBeat app."""

    parent = device.parent
    if parent is None or getattr(parent, "name", None) != PARENT_APP_NAME:
        msg = (
            f"{device.name or 'Device'} must be created by the {PARENT_APP_NAME}. "
            "Manual creation is not supported."
        )
        return OwnershipError(msg)
    return None


def _parse_event_type(value: str) -> LinkEventType | None:
    try:
        return LinkEventType(value)
    except ValueError:
        return None


class BaseDevice:
    """Attribute registry, ownership guard and status handling for a device."""

    driver_name: ClassVar[str] = "UPB Device"

    def __init__(
        self,
        parent: UPBeatParent | None,
        *,
        name: str | None = None,
        settings: DeviceSettings | None = None,
        clock: Callable[[], dt.datetime] | None = None,
    ) -> None:
        """Initialise the device with its owning app and current settings."""

        self.parent = parent
        self.name = name or self.driver_name
        self._settings = settings or DeviceSettings()
        self._clock = clock or dt.datetime.now
        self._states: dict[str, DeviceState[Any]] = {}
        self._listeners: list[AttributeListener] = []
        self.status = self.add_state(StatusState(self))

    def add_state(self, state: DeviceState[Any]) -> Any:
        """Register a published attribute and forward its events."""

        self._states[state.name] = state
        state.register_listener(self._notify)
        return state

    def add_listener(self, callback: AttributeListener) -> None:
        """Call ``callback`` for every attribute state change."""

        self._listeners.append(callback)

    def _notify(self, event: AttributeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    @property
    def states(self) -> Mapping[str, DeviceState[Any]]:
        """Return a read-only view of attribute name to state instance."""

        return MappingProxyType(self._states)

    @property
    def attributes(self) -> dict[str, Any]:
        """Return the current value of every published attribute."""

        return {name: state.value for name, state in self._states.items()}

    @property
    def settings(self) -> DeviceSettings:
        """Return the validated settings currently applied."""

        return self._settings

    @property
    def identity(self) -> Any:
        """Return the validated bus identity or the error describing why not."""

        raise NotImplementedError

    @property
    def device_network_id(self) -> str | None:
        """Return the hub-unique id, or None while the identity is invalid."""

        identity = self.identity
        if isinstance(identity, UPBeatError):
            return None
        return identity.device_network_id

    @property
    def logger(self) -> logging.Logger:
        """Return the device logger configured from the log level setting."""

        return device_logger(
            self.device_network_id or self.name.replace(" ", "_"),
            self._settings.log_level,
        )

    def _emitter(self) -> CommandEmitter:
        return CommandEmitter(self.parent, logger=self.logger)

    def _fail(self, error: UPBeatError | str) -> None:
        """Log ``error`` and publish it as the device status."""

        description = error.description if isinstance(error, UPBeatError) else error
        if isinstance(error, OwnershipError | ConfigurationError):
            self.logger.error("%s", description)
        else:
            self.logger.warning("%s", description)
        self.status.error(description)

    def _guard(self) -> bool:
        """Run the ownership check that opens every public entry point."""

        error = check_parent(self)
        if error is not None:
            self._fail(error)
            return False
        return True

    def _ready(self) -> Any:
        """Return the validated identity for a command, or None after failing."""

        if not self._guard():
            return None
        identity = self.identity
        if isinstance(identity, ConfigurationError):
            self._fail(identity)
            return None
        return identity

    def _complete(
        self, result: CommandResult, on_success: Callable[[], Any] | None = None
    ) -> bool:
        """Publish the outcome of a command; attributes change only on success."""

        if not result.success:
            self._fail(TransportError(result.error or "Command failed"))
            return False
        if on_success is not None:
            on_success()
        self.status.ok()
        return True

    def _apply_settings(self, settings: Mapping[str, Any]) -> DeviceSettings | None:
        """Validate and normalise the host settings mapping."""

        try:
            validated = self._normalise_settings(DeviceSettings.from_mapping(settings))
        except ConfigurationError as err:
            self._fail(err)
            return None
        return validated

    def _normalise_settings(self, settings: DeviceSettings) -> DeviceSettings:
        """Adjust freshly validated settings before they are applied."""

        return settings

    def _confirm_with_parent(self, settings: DeviceSettings) -> bool:
        try:
            result = self.parent.update_device_settings(self, settings.as_mapping())
        except Exception as err:  # noqa: BLE001
            self._fail(f"Failed to update device: {err}")
            return False
        if not result.success:
            self._fail(result.error or "Failed to update device")
            return False
        return True

    def _on_installed(self) -> None:
        """Publish the initial attribute values for a new device."""

    def installed(self) -> bool:
        """Initialise a device freshly created by the hub."""

        self.logger.log(TRACE, "installed()")
        if not self._guard():
            return False
        self.logger.debug("Installing %s", self.driver_name)
        self._on_installed()
        self.status.ok()
        return True

    def _update_setting(self, **changes: Any) -> bool:
        if not self._guard():
            return False
        self._settings = self._settings.updated(**changes)
        self.status.ok()
        return True

    def update_network_id(self, network_id: int) -> bool:
        """Store a new network id pushed by the hub."""

        self.logger.log(TRACE, "update_network_id(%s)", network_id)
        return self._update_setting(network_id=network_id)


class AddressableDevice(BaseDevice):
    """A device with its own bus address and a receive link table.

    Link events are matched against the table built from the receive slots;
    a bound link drives the output through the same command path as a local
    on/off request. Goto and state reports only mirror the level the device
    announced.
    """

    dimmable: ClassVar[bool] = False

    def __init__(
        self,
        parent: UPBeatParent | None,
        *,
        name: str | None = None,
        settings: DeviceSettings | None = None,
        store: BindingStore | None = None,
        clock: Callable[[], dt.datetime] | None = None,
    ) -> None:
        """Initialise the device and restore its persisted link table."""

        super().__init__(parent, name=name, settings=settings, clock=clock)
        self.store = store
        self.switch: SwitchState = self.add_state(SwitchState(self))
        self.last_received_link: LastReceivedLinkState = self.add_state(
            LastReceivedLinkState(self)
        )
        self._bindings: BindingTable = {}
        key = self.device_network_id
        if store is not None and key is not None:
            self._bindings = store.load(key)

    @property
    def identity(self) -> DeviceIdentity | ConfigurationError:
        """Return the validated network/device/channel triple."""

        return resolve_device_identity(
            self._settings.network_id,
            self._settings.device_id,
            self._settings.channel_id,
        )

    @property
    def bindings(self) -> Mapping[int, BindingEntry]:
        """Return a read-only view of the receive link table."""

        return MappingProxyType(self._bindings)

    def _persist(self) -> bool:
        key = self.device_network_id
        if self.store is None or key is None:
            return True
        try:
            self.store.save(key, self._bindings)
        except OSError as err:
            self._fail(f"Failed to store receive links: {err}")
            return False
        return True

    def _on_installed(self) -> None:
        self._bindings = {}
        self._persist()

    def update_device_id(self, device_id: int) -> bool:
        """Store a new device id pushed by the hub."""

        self.logger.log(TRACE, "update_device_id(%s)", device_id)
        return self._update_setting(device_id=device_id)

    def update_channel_id(self, channel_id: int) -> bool:
        """Store a new channel id pushed by the hub."""

        self.logger.log(TRACE, "update_channel_id(%s)", channel_id)
        return self._update_setting(channel_id=channel_id)

    def updated(self, settings: Mapping[str, Any]) -> BindingParseResult | None:
        """Apply changed preferences and rebuild the receive link table."""

        self.logger.log(TRACE, "updated()")
        if not self._guard():
            return None
        validated = self._apply_settings(settings)
        if validated is None:
            return None

        result = parse_receive_components(
            validated.receive_components, dimmable=self.dimmable
        )
        validated = validated.with_cleared_slots(result.rejected_slots)
        if not self._confirm_with_parent(validated):
            return None

        previous_key = self.device_network_id
        self._settings = validated
        self._bindings = dict(result.table)
        key = self.device_network_id
        if self.store is not None and previous_key not in (None, key):
            self.store.remove(previous_key)
        if not self._persist():
            return result
        self.logger.debug(
            "Stored UPB receive links for %s:\n%s",
            key or self.name,
            describe_table(self._bindings),
        )

        identity = self.identity
        if result.had_errors:
            messages = "; ".join(item.message for item in result.diagnostics)
            self.status.error(f"Invalid receive components detected: {messages}")
        elif isinstance(identity, ConfigurationError):
            self._fail(identity)
        else:
            self.status.ok("All receive components valid")
        return result

    def refresh(self) -> bool:
        """Ask the device to report its state."""

        self.logger.log(TRACE, "refresh()")
        identity = self._ready()
        if identity is None:
            return False
        return self._complete(self._emitter().request_state(identity))

    def _apply_level(self, level: int) -> bool:
        """Drive the output to ``level`` through the command emitter."""

        raise NotImplementedError

    def _reflect_level(self, level: int) -> None:
        """Mirror a level the device reported without sending anything."""

        raise NotImplementedError

    def handle_link_event(self, event: LinkEvent) -> None:
        """React to a link activate/deactivate seen on the bus."""

        self.logger.log(TRACE, "handle_link_event(%s)", event)
        identity = self._ready()
        if identity is None:
            return
        if event.network_id != identity.network_id:
            self.logger.debug(
                "Ignoring link event for Network ID %s (expected %s)",
                event.network_id,
                identity.network_id,
            )
            return
        event_type = _parse_event_type(event.event_type)
        if event_type is None:
            self._fail(f"Unknown Link Event type: {event.event_type}")
            return

        entry = self._bindings.get(event.link_id)
        if entry is None:
            self.logger.debug(
                "No action defined for Link ID %s on %s",
                event.link_id,
                identity.device_network_id,
            )
            self.status.ok()
            return

        self.logger.debug(
            "Executing action for Link ID %s (Slot %s): level=%s, rate=%s",
            entry.link_id,
            entry.slot,
            entry.level,
            entry.rate,
        )
        if entry.rate is not None:
            self.logger.debug("Rate %s is not enacted; applying instantly", entry.rate)
        level = entry.level if event_type is LinkEventType.ACTIVATE else 0
        if self._apply_level(level):
            self.last_received_link.publish(event.link_id, is_state_change=True)

    def _handle_report(self, network_id: int, device_id: int, level: int) -> None:
        identity = self._ready()
        if identity is None:
            return
        if not identity.addresses(network_id, device_id):
            self.logger.debug(
                "Ignoring report for Network ID %s, Device ID %s (expected %s, %s)",
                network_id,
                device_id,
                identity.network_id,
                identity.device_id,
            )
            return
        self._reflect_level(level)
        self.status.ok()

    def handle_goto_event(self, report: GotoReport) -> None:
        """Mirror a goto command addressed to this device."""

        self.logger.log(TRACE, "handle_goto_event(%s)", report)
        self._handle_report(report.network_id, report.device_id, report.level)

    def handle_device_state_report(self, report: DeviceStateReport) -> None:
        """Mirror the level this device reported for its channel."""

        self.logger.log(TRACE, "handle_device_state_report(%s)", report)
        identity = self.identity
        channel_index = (
            0 if isinstance(identity, ConfigurationError) else identity.channel_index
        )
        self._handle_report(
            report.network_id, report.device_id, report.level_for(channel_index)
        )


class SceneDevice(BaseDevice):
    """A device standing for one UPB link rather than a physical module."""

    @property
    def identity(self) -> SceneIdentity | ConfigurationError:
        """Return the validated network/link pair."""

        return resolve_scene_identity(self._settings.network_id, self._settings.link_id)

    def update_link_id(self, link_id: int) -> bool:
        """Store a new link id pushed by the hub."""

        self.logger.log(TRACE, "update_link_id(%s)", link_id)
        return self._update_setting(link_id=link_id)

    def updated(self, settings: Mapping[str, Any]) -> bool:
        """Validate and apply changed preferences."""

        self.logger.log(TRACE, "updated()")
        if not self._guard():
            return False
        validated = self._apply_settings(settings)
        if validated is None:
            return False
        identity = resolve_scene_identity(validated.network_id, validated.link_id)
        if isinstance(identity, ConfigurationError):
            self._fail(identity)
            return False
        if not self._confirm_with_parent(validated):
            return False
        self._settings = validated
        self.status.ok()
        return True

    def _trigger(self, event_type: LinkEventType) -> bool:
        identity = self._ready()
        if identity is None:
            return False
        emitter = self._emitter()
        if event_type is LinkEventType.ACTIVATE:
            result = emitter.activate_scene(identity)
        else:
            result = emitter.deactivate_scene(identity)
        if not result.success:
            self._fail(TransportError(result.error or "Command failed"))
            return False
        try:
            self.parent.notify_link_event(
                "user", event_type.value, identity.network_id, 0, identity.link_id
            )
        except Exception as err:  # noqa: BLE001
            self._fail(f"Scene {event_type.verb.lower()} echo failed: {err}")
            return False
        self.status.ok()
        return True

    def activate(self) -> bool:
        """Broadcast a link activate for this scene."""

        self.logger.log(TRACE, "activate()")
        return self._trigger(LinkEventType.ACTIVATE)

    def deactivate(self) -> bool:
        """Broadcast a link deactivate for this scene."""

        self.logger.log(TRACE, "deactivate()")
        return self._trigger(LinkEventType.DEACTIVATE)

    def _on_link(self, event: LinkEvent, event_type: LinkEventType) -> None:
        """Update scene attributes for a matching link event."""

        raise NotImplementedError

    def handle_link_event(self, event: LinkEvent) -> None:
        """React to activity on this scene's link."""

        self.logger.log(TRACE, "handle_link_event(%s)", event)
        identity = self._ready()
        if identity is None:
            return
        if not identity.addresses(event.network_id, event.link_id):
            self.logger.debug(
                "Ignoring link event for Network ID %s, Link ID %s (expected %s, %s)",
                event.network_id,
                event.link_id,
                identity.network_id,
                identity.link_id,
            )
            return
        event_type = _parse_event_type(event.event_type)
        if event_type is None:
            self._fail(f"Unknown Link Event type: {event.event_type}")
            return
        self.logger.debug(
            "%s scene [%s] due to link event", event_type.verb, event.link_id
        )
        self._on_link(event, event_type)
        self.status.ok()
