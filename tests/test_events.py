"""Tests for inbound event payload normalisation."""

from __future__ import annotations

from custom_components.upbeat.events import (
    DeviceStateReport,
    GotoReport,
    LinkEvent,
    LinkEventType,
)


def test_link_event_from_hub_payload() -> None:
    """Hub JSON payloads become typed link events."""

    event = LinkEvent.from_dict(
        {
            "eventSource": "pim",
            "eventType": "UPB_DEACTIVATE_LINK",
            "networkId": "1",
            "sourceId": 12,
            "linkId": 42,
        }
    )

    assert event == LinkEvent("pim", "UPB_DEACTIVATE_LINK", 1, 12, 42)
    assert not event.by_user
    assert event.attribution == "12"
    assert LinkEventType(event.event_type).verb == "Deactivated"


def test_user_events_are_attributed_to_user() -> None:
    """Echoed scene events name the user rather than a source id."""

    event = LinkEvent("user", "UPB_ACTIVATE_LINK", 1, 0, 42)

    assert event.by_user
    assert event.attribution == "user"


def test_reports_fall_back_to_source_device() -> None:
    """A zero destination means the source device reported on itself."""

    assert GotoReport("pim", 1, 5, 0, 50).device_id == 5
    assert GotoReport("pim", 1, 5, 9, 50).device_id == 9


def test_state_report_from_payload() -> None:
    """State report arguments are the per-channel levels."""

    report = DeviceStateReport.from_dict(
        {"networkId": 1, "sourceId": 5, "destinationId": 0, "args": [100, 30]}
    )

    assert report.levels == (100, 30)
    assert report.level_for(1) == 30
    assert report.level_for(4) == 0
