"""Constants shared by the UPBeat device engine."""

from __future__ import annotations

from types import MappingProxyType

NETWORK_ID_RANGE = (0, 255)
DEVICE_ID_RANGE = (0, 255)
CHANNEL_ID_RANGE = (0, 255)
LINK_ID_RANGE = (1, 250)
LEVEL_RANGE = (0, 100)
RATE_RANGE = (0, 255)

RECEIVE_COMPONENT_SLOTS = 16

EVENT_SOURCE_USER = "user"
UPB_ACTIVATE_LINK = "UPB_ACTIVATE_LINK"
UPB_DEACTIVATE_LINK = "UPB_DEACTIVATE_LINK"

STATUS_OK = "ok"
STATUS_ERROR = "error"

SWITCH_ON = "on"
SWITCH_OFF = "off"

LAST_TRIGGER_INITIAL = "None (not triggered yet)"

SPEED_OFF = "off"
SPEED_LOW = "low"
SPEED_MEDIUM = "medium"
SPEED_HIGH = "high"

MULTI_SPEED_LEVELS = MappingProxyType(
    {
        SPEED_OFF: 0,
        SPEED_LOW: 33,
        SPEED_MEDIUM: 66,
        SPEED_HIGH: 100,
    }
)
SINGLE_SPEED_LEVELS = MappingProxyType({SPEED_OFF: 0, SPEED_HIGH: 100})

# Upper level bound of each running speed, slowest first.
LINK_SPEED_THRESHOLDS = ((50, SPEED_LOW), (75, SPEED_MEDIUM), (100, SPEED_HIGH))
REPORT_SPEED_THRESHOLDS = ((33, SPEED_LOW), (66, SPEED_MEDIUM), (100, SPEED_HIGH))
SINGLE_SPEED_THRESHOLDS = ((100, SPEED_HIGH),)

DEFAULT_FADE_RATE = "Default"
DEVICE_DEFAULT_RATE = 255

# Fade duration name -> UPB rate code.
FADE_RATE_MAPPING = MappingProxyType(
    {
        "Snap": 0,
        "0.3s": 1,
        "0.5s": 2,
        "1s": 3,
        "2s": 4,
        "5s": 5,
        "10s": 6,
        "20s": 7,
        "30s": 8,
        "40s": 9,
        "60s": 10,
        "90s": 11,
        "2min": 12,
        "5min": 13,
        "30min": 14,
        "1hr": 15,
        DEFAULT_FADE_RATE: DEVICE_DEFAULT_RATE,
    }
)

LOG_LEVELS = MappingProxyType(
    {0: "Off", 1: "Error", 2: "Warn", 3: "Info", 4: "Debug", 5: "Trace"}
)

CONF_NETWORK_ID = "network_id"
CONF_DEVICE_ID = "device_id"
CONF_CHANNEL_ID = "channel_id"
CONF_LINK_ID = "link_id"
CONF_LOG_LEVEL = "log_level"
CONF_FADE_RATE = "fade_rate"
CONF_RECEIVE_COMPONENT = "receive_component_{slot}"
