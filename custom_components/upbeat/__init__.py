"""Endpoint engine for UPB powerline devices managed by the UPBeat hub."""

from __future__ import annotations

DOMAIN = "upbeat"
PARENT_APP_NAME = "UPBeat App"

__all__ = [
    "DOMAIN",
    "PARENT_APP_NAME",
]
