"""Receive link bindings: parsing free-text slots into a validated table."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .const import LEVEL_RANGE, LINK_ID_RANGE, RATE_RANGE, RECEIVE_COMPONENT_SLOTS

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BindingEntry:
    """Output this device adopts when ``link_id`` fires on the bus."""

    link_id: int
    level: int
    rate: int | None = None
    slot: int = 0

    def as_dict(self) -> dict[str, int | None]:
        """Return the JSON-friendly payload for persistence."""

        return {"level": self.level, "rate": self.rate, "slot": self.slot}

    @classmethod
    def from_dict(cls, link_id: int, payload: Mapping[str, Any]) -> BindingEntry:
        """Rebuild an entry from its persisted payload."""

        rate = payload.get("rate")
        return cls(
            link_id=int(link_id),
            level=int(payload["level"]),
            rate=None if rate is None else int(rate),
            slot=int(payload.get("slot") or 0),
        )


BindingTable = dict[int, BindingEntry]


class SlotErrorKind(str, Enum):
    """Reasons a receive slot is rejected."""

    FORMAT = "format"
    RANGE = "range"
    DUPLICATE = "duplicate"


@dataclass(frozen=True, slots=True)
class SlotDiagnostic:
    """A rejected receive slot and why it was dropped."""

    slot: int
    raw: str
    kind: SlotErrorKind
    message: str


@dataclass(slots=True)
class BindingParseResult:
    """Outcome of parsing every receive slot of a device."""

    table: BindingTable = field(default_factory=dict)
    diagnostics: list[SlotDiagnostic] = field(default_factory=list)

    @property
    def had_errors(self) -> bool:
        """Return True when at least one slot was rejected."""

        return bool(self.diagnostics)

    @property
    def rejected_slots(self) -> list[int]:
        """Return the 1-based slots whose raw value should be cleared."""

        return [diagnostic.slot for diagnostic in self.diagnostics]


class _SlotRejected(Exception):
    """Internal signal carrying the diagnostic for one bad slot."""

    def __init__(self, kind: SlotErrorKind, message: str) -> None:
        """Capture the rejection kind alongside the diagnostic text."""

        super().__init__(message)
        self.kind = kind
        self.message = message


def _parse_int(text: str, raw: str, slot: int) -> int:
    try:
        return int(text)
    except ValueError as exc:
        msg = (
            f"Slot {slot}: Invalid number format in {raw}. "
            "Ensure linkId and level are valid integers"
        )
        raise _SlotRejected(SlotErrorKind.FORMAT, msg) from exc


def _parse_rate(text: str, slot: int) -> int | None:
    """Return the optional rate, or None when it is not a usable rate code."""

    low, high = RATE_RANGE
    try:
        rate = int(text)
    except ValueError:
        rate = None
    if rate is None or not low <= rate <= high:
        _LOGGER.debug("Slot %s: ignoring rate %r", slot, text)
        return None
    return rate


def _parse_slot(
    slot: int, raw: str, *, dimmable: bool, table: Mapping[int, BindingEntry]
) -> BindingEntry:
    """Parse one ``linkId:level[:rate]`` value or raise ``_SlotRejected``."""

    parts = raw.split(":")
    if len(parts) not in (2, 3):
        msg = (
            f"Slot {slot}: Invalid format: {raw}. Expected linkId:level:rate "
            "(rate optional)"
        )
        raise _SlotRejected(SlotErrorKind.FORMAT, msg)

    link_id = _parse_int(parts[0], raw, slot)
    level = _parse_int(parts[1], raw, slot)
    rate = _parse_rate(parts[2], slot) if len(parts) == 3 else None

    low, high = LINK_ID_RANGE
    if not low <= link_id <= high:
        msg = f"Slot {slot}: Invalid linkId {link_id}. Must be {low}-{high}"
        raise _SlotRejected(SlotErrorKind.RANGE, msg)

    low, high = LEVEL_RANGE
    if dimmable and not low <= level <= high:
        msg = (
            f"Slot {slot}: Invalid level {level}. "
            f"Must be {low}-{high} for dimmable device"
        )
        raise _SlotRejected(SlotErrorKind.RANGE, msg)
    if not dimmable and level not in (low, high):
        msg = (
            f"Slot {slot}: Invalid level {level}. "
            f"Must be {low} or {high} for non-dimmable device"
        )
        raise _SlotRejected(SlotErrorKind.RANGE, msg)

    existing = table.get(link_id)
    if existing is not None:
        msg = (
            f"Slot {slot}: Duplicate linkId {link_id} already defined in "
            f"slot {existing.slot}"
        )
        raise _SlotRejected(SlotErrorKind.DUPLICATE, msg)

    return BindingEntry(link_id=link_id, level=level, rate=rate, slot=slot)


def parse_receive_components(
    slots: Sequence[str | None], *, dimmable: bool
) -> BindingParseResult:
    """Build a binding table from the ordered receive slots.

    Blank slots are skipped. A slot that fails to parse is reported in the
    diagnostics and skipped; it never prevents the remaining slots from being
    parsed. When two slots bind the same link id the first one wins.
    """

    if len(slots) > RECEIVE_COMPONENT_SLOTS:
        msg = f"At most {RECEIVE_COMPONENT_SLOTS} receive slots are supported"
        raise ValueError(msg)

    result = BindingParseResult()
    for slot, value in enumerate(slots, start=1):
        raw = (value or "").strip()
        if not raw:
            continue
        try:
            entry = _parse_slot(slot, raw, dimmable=dimmable, table=result.table)
        except _SlotRejected as rejected:
            _LOGGER.warning("%s, setting value removed", rejected.message)
            result.diagnostics.append(
                SlotDiagnostic(
                    slot=slot, raw=raw, kind=rejected.kind, message=rejected.message
                )
            )
            continue
        result.table[entry.link_id] = entry
    return result


def describe_table(table: Mapping[int, BindingEntry]) -> str:
    """Render one line per receive slot for debug logging."""

    by_slot = {entry.slot: entry for entry in table.values()}
    lines = []
    for slot in range(1, RECEIVE_COMPONENT_SLOTS + 1):
        entry = by_slot.get(slot)
        if entry is None:
            lines.append(f"Slot {slot}: Unused")
            continue
        rate = "default" if entry.rate is None else entry.rate
        lines.append(
            f"Slot {slot}: Link ID {entry.link_id}, Level {entry.level}%, Rate {rate}"
        )
    return "\n".join(lines)


def serialize_table(table: Mapping[int, BindingEntry]) -> dict[str, dict[str, Any]]:
    """Convert the table to JSON form; link ids become string keys."""

    return {str(link_id): entry.as_dict() for link_id, entry in sorted(table.items())}


def deserialize_table(payload: Mapping[str, Any] | None) -> BindingTable:
    """Rebuild a typed table from its JSON form."""

    if not payload:
        return {}
    return {
        int(link_id): BindingEntry.from_dict(int(link_id), entry)
        for link_id, entry in payload.items()
    }
