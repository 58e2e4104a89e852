"""Formatting and parsing helpers used by the time fields and the preview."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .config import MAX_FIELD_SECONDS

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class TimeComponents:
    h: int = 0
    m: int = 0
    s: int = 0

    @property
    def total_seconds(self) -> int:
        return self.h * 3600 + self.m * 60 + self.s

    @classmethod
    def from_seconds(cls, total: int, limit: int = MAX_FIELD_SECONDS) -> "TimeComponents":
        """Clamp ``total`` to ``[0, limit]`` and carry it into h/m/s."""
        total = max(0, min(int(total), limit))
        return cls(total // 3600, (total % 3600) // 60, total % 60)


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))


def _leading_int(text: str) -> int:
    """Read the integer prefix of ``text``; 0 when there is none."""
    match = _LEADING_INT_RE.match(text or "")
    return int(match.group(1)) if match else 0


# ---------- HH:MM:SS ----------
def format_time_value(h: int, m: int, s: int) -> str:
    hh = _clamp(h, 0, 999)
    mm = _clamp(m, 0, 59)
    ss = _clamp(s, 0, 59)
    hours = str(hh) if hh >= 100 else f"{hh:02d}"
    return f"{hours}:{mm:02d}:{ss:02d}"


def parse_time_value(text: str) -> TimeComponents:
    """Fixed-position parse of ``HH:MM:SS``; missing or bad parts read as 0."""
    parts = (text or "00:00:00").split(":")
    parts += [""] * (3 - len(parts))
    return TimeComponents(_leading_int(parts[0]), _leading_int(parts[1]), _leading_int(parts[2]))


def time_value_to_seconds(text: str) -> int:
    return parse_time_value(text).total_seconds


def seconds_to_time_value(total: int) -> str:
    total = max(0, int(total))
    return format_time_value(total // 3600, (total % 3600) // 60, total % 60)


# ---------- MM:SS ----------
def format_ms_value(m: int, s: int) -> str:
    return f"{_clamp(m, 0, 99):02d}:{_clamp(s, 0, 59):02d}"


def parse_ms_value(text: str) -> TimeComponents:
    parts = (text or "00:00").split(":")
    parts += [""] * (2 - len(parts))
    return TimeComponents(0, _leading_int(parts[0]), _leading_int(parts[1]))


def ms_value_to_seconds(text: str) -> int:
    value = parse_ms_value(text)
    return value.m * 60 + value.s


def seconds_to_ms_value(total: int) -> str:
    total = max(0, int(total))
    return format_ms_value(total // 60, total % 60)


# ---------- Preview ----------
def format_display(total_seconds: float, fmt: str) -> str:
    """Render a duration the way the display surface shows it."""
    total = max(0, int(total_seconds))
    if fmt == "H:MM:SS":
        return f"{total // 3600}:{(total % 3600) // 60:02d}:{total % 60:02d}"
    if fmt == "SS":
        return str(total)
    return f"{total // 60:02d}:{total % 60:02d}"


__all__ = [
    "TimeComponents",
    "format_display",
    "format_ms_value",
    "format_time_value",
    "ms_value_to_seconds",
    "parse_ms_value",
    "parse_time_value",
    "seconds_to_ms_value",
    "seconds_to_time_value",
    "time_value_to_seconds",
]
