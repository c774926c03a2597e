"""Tests for the dimming and non-dimming switch drivers."""

from __future__ import annotations

from typing import Any

from custom_components.upbeat.device_types import (
    DimmingSwitchDevice,
    NonDimmingSwitchDevice,
)
from custom_components.upbeat.transport import SettingsResult

KEY = "UPBeat_010501"


def _settings(**values: Any) -> dict[str, Any]:
    mapping: dict[str, Any] = {"network_id": 1, "device_id": 5, "channel_id": 1}
    mapping.update(values)
    return mapping


def test_on_sends_full_level_and_updates_switch(make_device, parent, recorder) -> None:
    """A successful send turns the switch on and reports ok."""

    device = make_device(NonDimmingSwitchDevice)

    assert device.on()
    assert parent.commands("goto") == [("goto", 1, 5, 100, 0, 1)]
    assert device.switch.value == "on"
    assert [event.value for event in recorder.named("status")] == ["ok"]

    assert device.off()
    assert parent.commands("goto")[-1] == ("goto", 1, 5, 0, 0, 1)
    assert device.switch.value == "off"


def test_failed_send_leaves_switch_untouched(make_device, parent) -> None:
    """Transport failures publish an error and change nothing else."""

    device = make_device(NonDimmingSwitchDevice)
    parent.send_result = False

    assert not device.on()
    assert device.switch.value is None
    assert device.status.value == "error"
    assert device.status.description.startswith("Failed to issue on command")


def test_device_not_owned_by_app_is_rejected(make_device, parent, store) -> None:
    """Every entry point refuses to act for a foreign or missing parent."""

    device = make_device(NonDimmingSwitchDevice)
    parent.name = "Some Other App"

    assert not device.on()
    assert device.updated(_settings(receive_component_1="3:100")) is None
    assert parent.built == []
    assert store.load_all() == {}
    assert device.status.value == "error"
    assert device.status.description == (
        "UPB Non-Dimming Switch must be created by the UPBeat App. "
        "Manual creation is not supported."
    )
    assert not NonDimmingSwitchDevice(None).installed()


def test_missing_identity_blocks_commands(make_device, parent) -> None:
    """Commands are not built until the identity is complete."""

    device = make_device(NonDimmingSwitchDevice, device_id=None)

    assert not device.on()
    assert parent.built == []
    assert device.status.description == "Device ID must be configured"


def test_flash_and_refresh(make_device, parent) -> None:
    """Flash blinks the load; refresh requests a state report."""

    device = make_device(NonDimmingSwitchDevice)

    assert device.flash(20)
    assert device.refresh()
    assert parent.built == [("blink", 1, 5, 20, 1), ("state", 1, 5)]
    assert device.switch.value == "on"


def test_installed_persists_empty_table(make_device, store) -> None:
    """Installation starts from an empty stored table and an off switch."""

    device = make_device(DimmingSwitchDevice)

    assert device.installed()
    assert store.load_all() == {KEY: {}}
    assert device.switch.value == "off"
    assert device.level.value == 0
    assert device.status.value == "ok"


def test_dimmer_clamps_level_and_uses_fade_rate(make_device, parent) -> None:
    """Levels are clamped and durations map to UPB rate codes."""

    device = make_device(DimmingSwitchDevice)

    device.set_level(150)
    device.set_level(30, "2s")
    device.set_level(10, "7s")

    assert parent.commands("goto") == [
        ("goto", 1, 5, 100, 255, 1),
        ("goto", 1, 5, 30, 4, 1),
        ("goto", 1, 5, 10, 255, 1),
    ]
    assert device.level.value == 10
    assert device.switch.value == "on"


def test_dimmer_on_and_off_drive_level(make_device) -> None:
    """On and off are full and zero level."""

    device = make_device(DimmingSwitchDevice)

    device.on()
    assert device.level.value == 100
    device.off()
    assert device.level.value == 0
    assert device.switch.value == "off"


def test_dimmer_resets_unknown_fade_rate(make_device, parent) -> None:
    """An unknown configured fade rate falls back to the device default."""

    device = make_device(DimmingSwitchDevice)

    device.updated(_settings(fade_rate="3s"))

    assert device.settings.fade_rate == "Default"
    assert parent.settings_updates[-1]["fade_rate"] == "Default"

    device.updated(_settings(fade_rate="5s"))
    device.set_level(50)
    assert parent.commands("goto")[-1] == ("goto", 1, 5, 50, 5, 1)


def test_updated_builds_and_persists_bindings(make_device, parent, store) -> None:
    """Valid receive slots become the stored table and report ok."""

    device = make_device(DimmingSwitchDevice)

    result = device.updated(
        _settings(receive_component_1="10:40", receive_component_4="11:0:2")
    )

    assert result is not None
    assert not result.had_errors
    assert set(device.bindings) == {10, 11}
    assert store.load(KEY) == dict(device.bindings)
    assert parent.settings_updates[-1]["receive_component_1"] == "10:40"
    assert device.status.value == "ok"
    assert device.status.description == "All receive components valid"


def test_identity_change_moves_stored_table(make_device, store) -> None:
    """A new device id replaces the table stored under the old key."""

    device = make_device(NonDimmingSwitchDevice)
    device.updated(_settings(receive_component_1="3:100"))

    device.updated(_settings(device_id=6, receive_component_1="3:100"))

    assert set(store.load_all()) == {"UPBeat_010601"}


def test_hub_rejection_commits_nothing(make_device, parent) -> None:
    """A failed settings write leaves settings and bindings unchanged."""

    device = make_device(NonDimmingSwitchDevice)
    parent.settings_result = SettingsResult(False, "Settings are read only")

    assert device.updated(_settings(receive_component_1="3:100")) is None
    assert dict(device.bindings) == {}
    assert device.status.value == "error"
    assert device.status.description == "Settings are read only"


def test_schema_failure_is_reported(make_device, parent) -> None:
    """Unparseable settings publish an error without contacting the hub."""

    device = make_device(NonDimmingSwitchDevice)

    assert device.updated({"network_id": "north"}) is None
    assert parent.settings_updates == []
    assert device.status.value == "error"


def test_incomplete_identity_reported_after_update(make_device) -> None:
    """Settings without a device id are accepted but flagged."""

    device = make_device(NonDimmingSwitchDevice)

    device.updated({"network_id": 1})

    assert device.status.value == "error"
    assert device.status.description == "Device ID must be configured"


def test_bindings_restored_from_store(make_device) -> None:
    """A device picks up its persisted table on construction."""

    first = make_device(NonDimmingSwitchDevice)
    first.updated(_settings(receive_component_2="8:100"))

    second = make_device(NonDimmingSwitchDevice)

    assert dict(second.bindings) == dict(first.bindings)
    assert second.bindings[8].slot == 2


def test_identity_setters_store_values(make_device) -> None:
    """Hub pushes of identity fields update the settings."""

    device = make_device(NonDimmingSwitchDevice)

    assert device.update_network_id(2)
    assert device.update_device_id(7)
    assert device.update_channel_id(3)
    assert device.device_network_id == "UPBeat_020703"
    assert device.status.value == "ok"
