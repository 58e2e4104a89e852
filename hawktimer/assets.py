"""Catalogue of bundled fonts and end-of-timer sounds."""

from __future__ import annotations

import re
import secrets
import time
from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class FontInfo:
    family: str
    weights: Tuple[int, ...]
    description: str


BUILT_IN_FONTS: Tuple[FontInfo, ...] = (
    FontInfo("Inter", (400, 600, 700), "Modern & Clean"),
    FontInfo("Roboto", (400, 700), "Versatile"),
    FontInfo("JetBrains Mono", (400, 600), "Monospace"),
    FontInfo("Oswald", (400, 700), "Bold Condensed"),
    FontInfo("Bebas Neue", (400,), "Classic Display"),
    FontInfo("Orbitron", (400, 700), "Futuristic"),
    FontInfo("Teko", (400, 600), "Modern Condensed"),
    FontInfo("Share Tech Mono", (400,), "Digital"),
)

WEIGHT_LABELS = {
    300: "Light",
    400: "Regular",
    500: "Medium",
    600: "Semi Bold",
    700: "Bold",
    800: "Extra Bold",
    900: "Black",
}

BUILT_IN_SOUNDS: Tuple[Tuple[str, str], ...] = (
    ("none", "None"),
    ("chime", "Chime"),
    ("bell", "Bell"),
    ("alert", "Alert"),
    ("gong", "Gong"),
    ("soft", "Soft"),
)

CUSTOM_PREFIX = "custom:"

_AUDIO_MIME = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "webm": "audio/webm",
    "m4a": "audio/mp4",
}
_AUDIO_EXT_RE = re.compile(r"\.(mp3|wav|ogg|webm|m4a)$", re.IGNORECASE)
_CAMEL_RE = re.compile(r"([a-z])([A-Z])")


# ---------- fonts ----------
def _font(family: str) -> Optional[FontInfo]:
    return next((font for font in BUILT_IN_FONTS if font.family == family), None)


def available_weights(family: str) -> Tuple[int, ...]:
    font = _font(family)
    return font.weights if font else (400, 700)


def is_built_in_font(family: str) -> bool:
    return _font(family) is not None


def font_description(family: str) -> str:
    font = _font(family)
    return font.description if font else ""


# ---------- sounds ----------
def is_built_in_sound(sound_type: Any) -> bool:
    return any(value == sound_type for value, _label in BUILT_IN_SOUNDS)


def is_custom_sound(sound_type: Any) -> bool:
    return isinstance(sound_type, str) and sound_type.startswith(CUSTOM_PREFIX)


def is_valid_sound_type(sound_type: Any) -> bool:
    if is_built_in_sound(sound_type):
        return True
    return is_custom_sound(sound_type) and len(sound_type) > len(CUSTOM_PREFIX)


def custom_sound_id(sound_type: Any) -> Optional[str]:
    if not is_custom_sound(sound_type):
        return None
    return sound_type[len(CUSTOM_PREFIX):]


def custom_sound_type(sound_id: str) -> str:
    return f"{CUSTOM_PREFIX}{sound_id}"


def generate_sound_id() -> str:
    return f"sound-{int(time.time() * 1000)}-{secrets.token_hex(5)[:9]}"


def audio_format(file_name: str) -> str:
    ext = file_name.lower().rsplit(".", 1)[-1]
    return ext if ext in _AUDIO_MIME else "mp3"


def audio_mime_type(fmt: str) -> str:
    return _AUDIO_MIME.get(fmt, "audio/mpeg")


def sound_name_from_file(file_name: str) -> str:
    """``my-alarm_Sound.mp3`` -> ``My Alarm Sound``."""
    name = _AUDIO_EXT_RE.sub("", file_name)
    name = re.sub(r"[-_]", " ", name)
    name = _CAMEL_RE.sub(r"\1 \2", name)
    words = [word[:1].upper() + word[1:].lower() for word in name.split(" ")]
    return " ".join(words).strip()


__all__ = [
    "BUILT_IN_FONTS",
    "BUILT_IN_SOUNDS",
    "FontInfo",
    "WEIGHT_LABELS",
    "audio_format",
    "audio_mime_type",
    "available_weights",
    "custom_sound_id",
    "custom_sound_type",
    "font_description",
    "generate_sound_id",
    "is_built_in_font",
    "is_built_in_sound",
    "is_custom_sound",
    "is_valid_sound_type",
    "sound_name_from_file",
]
