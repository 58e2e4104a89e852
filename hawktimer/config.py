"""Application-wide configuration values."""

import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".hawktimer"
PRESETS_PATH = CONFIG_DIR / "presets.json"
PREFS_PATH = CONFIG_DIR / "prefs.json"

LOG_LEVEL = os.environ.get("HAWKTIMER_LOG_LEVEL", "WARNING").upper()

CHANNEL_NAME = "alpha-timer-channel"
OUTPUT_RESET_DELAY_MS = 300
PREVIEW_REFRESH_MS = 50

# 999:59:59 in the duration field, 99:59:59 once validated.
MAX_FIELD_SECONDS = 999 * 3600 + 59 * 60 + 59
MAX_DURATION_SEC = 359999

THEME_BACKGROUNDS = {
    "light": "#faf9f6",
    "dark": "#0a0a0a",
}

DEFAULT_TIMER_CONFIG = {
    "mode": "countdown",
    "durationSec": 600,
    "format": "MM:SS",
    "style": {
        "fontFamily": "Inter",
        "fontWeight": "700",
        "color": "#ffffff",
        "strokeWidth": 0,
        "strokeColor": "#000000",
        "shadowSize": 0,
        "align": "center",
        "bgMode": "transparent",
        "bgColor": "#000000",
    },
    "warn": {
        "enabled": True,
        "seconds": 120,
        "colorEnabled": True,
        "color": "#E64A19",
        "flashEnabled": False,
        "flashRateMs": 500,
        "soundEnabled": False,
    },
    "sound": {
        "endEnabled": False,
        "endType": "none",
        "volume": 0.7,
    },
}
