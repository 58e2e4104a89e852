"""Heuristic parsing of informal durations such as ``530``, ``90`` or ``1:30:00``."""

from __future__ import annotations

import re
from typing import Optional

from .utils import TimeComponents

HMS_RE = re.compile(r"([0-9]{1,3}):([0-9]{1,2}):([0-9]{1,2})")
MS_RE = re.compile(r"([0-9]{1,2}):([0-9]{1,2})")
DIGITS_RE = re.compile(r"[0-9]+")


def parse_smart_duration(text: Optional[str]) -> Optional[TimeComponents]:
    """Infer hours/minutes/seconds from ``text``.

    Colon forms are read as ``H:MM:SS`` or ``M:SS``. A bare digit run is read
    by length: up to 2 digits are seconds, 3-4 digits are ``MMSS`` and 5 or
    more are ``HHMMSS``. Every result goes through a flat total so overflowing
    units carry upward (``1:99:99`` gives 2:40:39) and the 999:59:59 ceiling
    holds. Returns None when the text has none of these shapes.
    """
    if not text:
        return None
    value = text.strip()

    match = HMS_RE.fullmatch(value)
    if match:
        h, m, s = (int(part) for part in match.groups())
        return TimeComponents.from_seconds(h * 3600 + m * 60 + s)

    match = MS_RE.fullmatch(value)
    if match:
        m, s = (int(part) for part in match.groups())
        return TimeComponents.from_seconds(m * 60 + s)

    if DIGITS_RE.fullmatch(value):
        if len(value) <= 2:
            return TimeComponents.from_seconds(int(value))
        s = int(value[-2:])
        if len(value) <= 4:
            m = int(value[:-2])
            return TimeComponents.from_seconds(m * 60 + s)
        m = int(value[-4:-2])
        h = int(value[:-4] or 0)
        return TimeComponents.from_seconds(h * 3600 + m * 60 + s)

    return None


__all__ = ["parse_smart_duration"]
