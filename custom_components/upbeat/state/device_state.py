"""Published device attributes and their change notifications."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AttributeEvent:
    """An attribute publication delivered to device listeners."""

    name: str
    value: Any
    description: str | None = None


AttributeListener = Callable[[AttributeEvent], None]


class FixedLengthHistory(Generic[T]):
    """Maintain a bounded history of published values."""

    def __init__(self, capacity: int) -> None:
        """Initialize the history storage."""

        self._capacity = capacity
        self._items: list[T] = []

    def enstack(self, value: T) -> None:
        """Push a new value onto the history stack, trimming as needed."""

        self._items.append(value)
        if len(self._items) > self._capacity:
            self._items.pop(0)

    def items(self) -> list[T]:
        """Return the retained values, oldest first."""

        return list(self._items)


class DeviceState(Generic[T]):
    """A named, externally observable device attribute.

    ``publish`` mirrors the hub's event semantics: a publication is a state
    change when the value differs from the current one, unless the caller
    forces the flag either way with ``is_state_change``. Listeners only hear
    about state changes.
    """

    history_size = 5

    def __init__(self, *, device: object, name: str, initial_value: T) -> None:
        """Initialize the attribute wrapper."""

        self.device = device
        self.name = name
        self._value = initial_value
        self._description: str | None = None
        self._history: FixedLengthHistory[T] = FixedLengthHistory(self.history_size)
        self._history.enstack(initial_value)
        self._listeners: list[AttributeListener] = []

    @property
    def value(self) -> T:
        """Return the latest published value."""

        return self._value

    @property
    def description(self) -> str | None:
        """Return the description attached to the latest publication."""

        return self._description

    @property
    def history(self) -> list[T]:
        """Return recently published values, oldest first."""

        return self._history.items()

    def register_listener(self, callback: AttributeListener) -> None:
        """Call ``callback`` with every state-changing publication."""

        self._listeners.append(callback)

    def _update_state(self, value: T) -> None:
        """Update the stored value and record the new history entry."""

        self._value = value
        self._history.enstack(value)

    def publish(
        self,
        value: T,
        *,
        description: str | None = None,
        is_state_change: bool | None = None,
    ) -> AttributeEvent | None:
        """Publish ``value`` and notify listeners when it is a state change."""

        changed = value != self._value
        if changed:
            self._update_state(value)
        self._description = description
        state_change = changed if is_state_change is None else is_state_change
        if not state_change:
            return None
        event = AttributeEvent(
            name=self.name,
            value=value,
            description=description,
        )
        for listener in list(self._listeners):
            listener(event)
        return event
