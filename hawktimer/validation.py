"""Sanitizers for timer configurations and preset records.

Every function here accepts untrusted data (hand-edited files, imports,
messages from another window) and returns a fully populated canonical value.
Nothing raises: bad fields fall back to defaults, invalid presets are dropped
and only a non-mapping root yields ``None``.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional

from .assets import is_valid_sound_type
from .config import MAX_DURATION_SEC

VALID_MODES = ("countdown", "countup", "tod", "countdown-tod", "countup-tod", "hidden")
VALID_FORMATS = ("H:MM:SS", "MM:SS", "SS")
VALID_WEIGHTS = ("400", "500", "600", "700", "800")
VALID_ALIGNS = ("left", "center", "right")
VALID_BG_MODES = ("transparent", "solid")

DEFAULT_DURATION = 1200
UNNAMED_PRESET = "Unnamed Preset"

_HEX6_RE = re.compile(r"#[0-9A-Fa-f]{6}")
_HEX3_RE = re.compile(r"#[0-9A-Fa-f]{3}")

# Stands for an absent key, which has no numeric reading (unlike None or "").
MISSING = object()


def default_style() -> dict:
    return {
        "fontFamily": "Inter",
        "fontWeight": "600",
        "color": "#ffffff",
        "strokeWidth": 2,
        "strokeColor": "#000000",
        "shadowSize": 10,
        "align": "center",
        "bgMode": "transparent",
        "bgColor": "#000000",
    }


def default_warning() -> dict:
    return {
        "enabled": True,
        "seconds": 120,
        "colorEnabled": True,
        "color": "#E64A19",
        "flashEnabled": False,
        "flashRateMs": 500,
        "soundEnabled": False,
    }


def default_sound() -> dict:
    return {"endEnabled": False, "endType": "none", "volume": 0.7}


# ---------- scalar helpers ----------
def _to_number(value: Any) -> float:
    """Numeric coercion; NaN when ``value`` has no numeric reading.

    ``None`` and blank strings read as 0, an absent key as NaN.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def _tidy(num: float) -> int | float:
    return int(num) if float(num).is_integer() else num


def validate_number(value: Any, default: int | float, lo: float, hi: float) -> int | float:
    num = _to_number(value)
    if math.isnan(num):
        return default
    return _tidy(max(lo, min(hi, num)))


def validate_string(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def validate_hex_color(value: Any, default: str) -> str:
    if not isinstance(value, str):
        return default
    hex_value = value.strip()
    if _HEX6_RE.fullmatch(hex_value):
        return hex_value
    if _HEX3_RE.fullmatch(hex_value):
        r, g, b = hex_value[1:]
        return f"#{r}{r}{g}{g}{b}{b}"
    return default


def _choice(value: Any, choices: Sequence[str], default: str) -> str:
    return value if isinstance(value, str) and value in choices else default


# ---------- config fields ----------
def validate_mode(mode: Any) -> str:
    return _choice(mode, VALID_MODES, "countdown")


def validate_duration(duration: Any) -> int | float:
    num = _to_number(duration)
    if math.isnan(num) or num < 0:
        return DEFAULT_DURATION
    return _tidy(min(num, MAX_DURATION_SEC))


def validate_format(fmt: Any) -> str:
    return _choice(fmt, VALID_FORMATS, "MM:SS")


def validate_font_weight(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value)
    return text if text in VALID_WEIGHTS else "600"


def validate_style(style: Any) -> dict:
    if not isinstance(style, Mapping):
        return default_style()
    defaults = default_style()
    return {
        "fontFamily": validate_string(style.get("fontFamily"), defaults["fontFamily"]),
        "fontWeight": validate_font_weight(style.get("fontWeight")),
        "color": validate_hex_color(style.get("color"), defaults["color"]),
        "strokeWidth": validate_number(style.get("strokeWidth", MISSING), 2, 0, 20),
        "strokeColor": validate_hex_color(style.get("strokeColor"), defaults["strokeColor"]),
        "shadowSize": validate_number(style.get("shadowSize", MISSING), 10, 0, 50),
        "align": _choice(style.get("align"), VALID_ALIGNS, "center"),
        "bgMode": _choice(style.get("bgMode"), VALID_BG_MODES, "transparent"),
        "bgColor": validate_hex_color(style.get("bgColor"), defaults["bgColor"]),
    }


def validate_warning(warn: Any) -> dict:
    if not isinstance(warn, Mapping):
        return default_warning()
    return {
        "enabled": bool(warn.get("enabled")),
        "seconds": validate_number(warn.get("seconds", MISSING), 120, 0, MAX_DURATION_SEC),
        "colorEnabled": bool(warn.get("colorEnabled")),
        "color": validate_hex_color(warn.get("color"), "#E64A19"),
        "flashEnabled": bool(warn.get("flashEnabled")),
        "flashRateMs": validate_number(warn.get("flashRateMs", MISSING), 500, 100, 2000),
        "soundEnabled": bool(warn.get("soundEnabled")),
    }


def validate_sound(sound: Any) -> dict:
    if not isinstance(sound, Mapping):
        return default_sound()
    end_type = sound.get("endType")
    return {
        "endEnabled": bool(sound.get("endEnabled")),
        "endType": end_type if is_valid_sound_type(end_type) else "none",
        "volume": validate_number(sound.get("volume", MISSING), 0.7, 0, 1),
    }


def validate_config(config: Any) -> Optional[dict]:
    if not isinstance(config, Mapping):
        return None
    return {
        "mode": validate_mode(config.get("mode")),
        "durationSec": validate_duration(config.get("durationSec", MISSING)),
        "format": validate_format(config.get("format")),
        "style": validate_style(config.get("style")),
        "warn": validate_warning(config.get("warn")),
        "sound": validate_sound(config.get("sound")),
    }


# ---------- presets ----------
def validate_preset(preset: Any) -> Optional[dict]:
    if not isinstance(preset, Mapping):
        return None
    config = validate_config(preset.get("config"))
    if config is None:
        return None
    return {
        "name": validate_string(preset.get("name"), UNNAMED_PRESET),
        "config": config,
        "linkedToNext": bool(preset.get("linkedToNext")),
    }


def validate_presets(presets: Any) -> list:
    if isinstance(presets, (str, bytes, Mapping)) or not isinstance(presets, Sequence):
        return []
    validated = (validate_preset(p) for p in presets)
    return [p for p in validated if p is not None]


def safe_json_parse(text: Any, validator: Optional[Callable[[Any], Any]] = None) -> Any:
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError):
        return None
    return validator(data) if validator else data


__all__ = [
    "MISSING",
    "VALID_FORMATS",
    "VALID_MODES",
    "default_sound",
    "default_style",
    "default_warning",
    "safe_json_parse",
    "validate_config",
    "validate_duration",
    "validate_format",
    "validate_hex_color",
    "validate_mode",
    "validate_number",
    "validate_preset",
    "validate_presets",
    "validate_sound",
    "validate_style",
    "validate_warning",
]
