# -*- coding: utf-8 -*-
"""
Preset persistence.
- ``PresetStore`` is what the controller talks to: ``load()`` / ``save(list)``,
- ``JsonPresetStore`` keeps the list in ~/.hawktimer/presets.json,
- ``MemoryPresetStore`` keeps it in memory (tests, throw-away sessions).
Whatever comes back from ``load()`` has gone through ``validate_presets``.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import List, Protocol

from .config import PRESETS_PATH
from .validation import validate_presets

log = logging.getLogger(__name__)


class PresetStore(Protocol):
    def load(self) -> List[dict]: ...

    def save(self, presets: List[dict]) -> None: ...


class MemoryPresetStore:
    def __init__(self, presets: List[dict] | None = None):
        self._presets = copy.deepcopy(list(presets or []))

    def load(self) -> List[dict]:
        return validate_presets(copy.deepcopy(self._presets))

    def save(self, presets: List[dict]) -> None:
        self._presets = copy.deepcopy(list(presets))


class JsonPresetStore:
    def __init__(self, path: os.PathLike | str = PRESETS_PATH):
        self.path = Path(path)

    def load(self) -> List[dict]:
        """Read the preset file; an absent or unreadable file gives []."""
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            log.warning("cannot read presets from %s: %s", self.path, exc)
            return []
        return validate_presets(data)

    def save(self, presets: List[dict]) -> None:
        os.makedirs(self.path.parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(list(presets), f, indent=2, ensure_ascii=False)


__all__ = ["JsonPresetStore", "MemoryPresetStore", "PresetStore"]
