"""Persistence of receive link tables across restarts."""

from __future__ import annotations

import contextlib
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .bindings import BindingEntry, BindingTable, deserialize_table, serialize_table

_LOGGER = logging.getLogger(__name__)

STORAGE_KEY = "upbeat_receive_components"
STORAGE_VERSION = 1


class BindingStore:
    """Persist binding tables keyed by device network id in one JSON file.

    The file uses the same envelope as Home Assistant's storage helper
    (``version``, ``minor_version``, ``key``, ``data``) so it can live in a
    ``.storage`` directory next to other integration data.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        key: str = STORAGE_KEY,
        version: int = STORAGE_VERSION,
    ) -> None:
        """Initialise the store for the JSON file at ``path``."""

        self.key = key
        self.version = version
        self._path = Path(path)
        self._minor_version = 1

    @property
    def path(self) -> Path:
        """Return the backing file path."""

        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            _LOGGER.warning("Ignoring unreadable binding storage at %s", self._path)
            return {}
        if isinstance(payload, dict) and "data" in payload:
            payload = payload["data"]
        return payload if isinstance(payload, dict) else {}

    def _write(self, data: Mapping[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        envelope = {
            "version": self.version,
            "minor_version": self._minor_version,
            "key": self.key,
            "data": dict(data),
        }
        self._path.write_text(json.dumps(envelope, indent=2), encoding="utf-8")

    def load(self, device_key: str) -> BindingTable:
        """Return the stored table for ``device_key`` (empty when absent)."""

        return deserialize_table(self._read().get(device_key))

    def load_all(self) -> dict[str, BindingTable]:
        """Return every stored table keyed by device network id."""

        return {key: deserialize_table(value) for key, value in self._read().items()}

    def save(self, device_key: str, table: Mapping[int, BindingEntry]) -> None:
        """Replace the stored table for ``device_key``."""

        data = self._read()
        data[device_key] = serialize_table(table)
        self._write(data)
        _LOGGER.debug("Stored %d receive links for %s", len(table), device_key)

    def remove(self, device_key: str) -> None:
        """Forget the table for ``device_key``."""

        data = self._read()
        if data.pop(device_key, None) is None:
            return
        if data:
            self._write(data)
            return
        with contextlib.suppress(FileNotFoundError):
            self._path.unlink()
