"""Per-device logging helpers."""

from __future__ import annotations

import logging
from collections.abc import Iterable

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LOGGER = logging.getLogger(__package__)

# Device log level setting -> logging level.
_LEVELS = {
    0: logging.CRITICAL + 10,
    1: logging.ERROR,
    2: logging.WARNING,
    3: logging.INFO,
    4: logging.DEBUG,
    5: TRACE,
}


def device_logger(
    device_network_id: str, log_level: int | None = None
) -> logging.Logger:
    """Return the child logger for one device, honouring its log level setting."""

    logger = _LOGGER.getChild(device_network_id)
    logger.setLevel(logging.NOTSET if log_level is None else _LEVELS[log_level])
    return logger


def hex_bytes(data: Iterable[int] | None) -> str:
    """Render command bytes as ``0x01, 0xFF`` for log lines."""

    if not data:
        return ""
    return ", ".join(f"0x{value & 0xFF:02X}" for value in data)
