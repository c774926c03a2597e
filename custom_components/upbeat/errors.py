"""Typed errors surfaced through the device ``status`` attribute."""

from __future__ import annotations


class UPBeatError(Exception):
    """Base class for recoverable UPBeat device errors."""

    @property
    def description(self) -> str:
        """Return the human-readable text published alongside ``status``."""

        return str(self)


class ConfigurationError(UPBeatError):
    """A setting is missing, malformed or outside its allowed range."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        """Record the offending configuration field with the message."""

        super().__init__(message)
        self.field = field


class OwnershipError(UPBeatError):
    """The device was not provisioned by the controlling UPBeat app."""


class TransportError(UPBeatError):
    """A command could not be built or handed to the bus transport."""
