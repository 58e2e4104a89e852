"""Headless side of the controller window: form values, commands and presets."""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, List, Mapping, Optional, Sequence

from .config import DEFAULT_TIMER_CONFIG
from .presets import PresetStore
from .sync import Transport, build_message
from .utils import ms_value_to_seconds, seconds_to_ms_value, seconds_to_time_value, time_value_to_seconds
from .validation import MISSING, safe_json_parse, validate_config, validate_presets

log = logging.getLogger(__name__)

COPY_SUFFIX = " (copy)"
DEFAULT_PRESET_NAME = "Preset"


class PresetImportError(ValueError):
    """Raised when an import file is not a JSON array of presets."""


def config_from_form(form: Mapping[str, Any]) -> dict:
    """Assemble a raw config from the controller form values.

    ``duration`` is an ``HH:MM:SS`` field value and ``warnTime`` an ``MM:SS``
    one; everything else is copied as entered. The result is not validated.
    """
    return {
        "mode": form.get("mode"),
        "durationSec": time_value_to_seconds(form.get("duration", "")),
        "format": form.get("format"),
        "style": {
            "fontFamily": form.get("fontFamily"),
            "fontWeight": form.get("fontWeight"),
            "color": form.get("color"),
            "strokeWidth": form.get("strokeWidth", MISSING),
            "strokeColor": form.get("strokeColor"),
            "shadowSize": form.get("shadowSize", MISSING),
            "align": form.get("align"),
            "bgMode": form.get("bgMode"),
            "bgColor": form.get("bgColor"),
        },
        "warn": {
            "enabled": form.get("warnEnabled"),
            "seconds": ms_value_to_seconds(form.get("warnTime", "")),
            "colorEnabled": form.get("warnColorEnabled"),
            "color": form.get("warnColor"),
            "flashEnabled": form.get("warnFlashEnabled"),
            "flashRateMs": form.get("flashRateMs", MISSING),
            "soundEnabled": form.get("warnSoundEnabled"),
        },
        "sound": {
            "endEnabled": form.get("soundEndEnabled"),
            "endType": form.get("soundEndType"),
            "volume": form.get("volume", MISSING),
        },
    }


def form_from_config(config: Mapping[str, Any]) -> dict:
    """Inverse of :func:`config_from_form` for a validated config."""
    style, warn, sound = config["style"], config["warn"], config["sound"]
    return {
        "mode": config["mode"],
        "duration": seconds_to_time_value(config["durationSec"]),
        "format": config["format"],
        "fontFamily": style["fontFamily"],
        "fontWeight": style["fontWeight"],
        "color": style["color"],
        "strokeWidth": style["strokeWidth"],
        "strokeColor": style["strokeColor"],
        "shadowSize": style["shadowSize"],
        "align": style["align"],
        "bgMode": style["bgMode"],
        "bgColor": style["bgColor"],
        "warnEnabled": warn["enabled"],
        "warnTime": seconds_to_ms_value(warn["seconds"]),
        "warnColorEnabled": warn["colorEnabled"],
        "warnColor": warn["color"],
        "warnFlashEnabled": warn["flashEnabled"],
        "flashRateMs": warn["flashRateMs"],
        "warnSoundEnabled": warn["soundEnabled"],
        "soundEndEnabled": sound["endEnabled"],
        "soundEndType": sound["endType"],
        "volume": sound["volume"],
    }


class TimerController:
    def __init__(self, store: PresetStore, transports: Sequence[Transport] = ()):
        self.store = store
        self.transports: List[Transport] = list(transports)
        self.config: dict = validate_config(DEFAULT_TIMER_CONFIG)

    # ---------- current config ----------
    def update(self, raw: Any) -> dict:
        """Validate ``raw`` and make it the current config (kept on failure)."""
        config = validate_config(raw)
        if config is None:
            log.warning("config rejected, keeping the previous one")
        else:
            self.config = config
        return copy.deepcopy(self.config)

    def update_from_form(self, form: Mapping[str, Any]) -> dict:
        return self.update(config_from_form(form))

    # ---------- commands ----------
    def send(self, command: str, config: Any = None) -> Optional[dict]:
        """Validate and relay ``command`` through every transport."""
        validated = validate_config(self.config if config is None else config)
        if validated is None:
            log.warning("not sending %s: invalid config", command)
            return None
        message = build_message(command, validated)
        for transport in self.transports:
            transport.send(message)
        log.info("sent %s (%ss)", command, validated["durationSec"])
        return message

    def start(self) -> Optional[dict]:
        return self.send("start")

    def pause(self) -> Optional[dict]:
        return self.send("pause")

    def reset(self) -> Optional[dict]:
        return self.send("reset")

    # ---------- presets ----------
    def presets(self) -> List[dict]:
        return self.store.load()

    def _preset_at(self, presets: List[dict], index: int) -> dict:
        if not 0 <= index < len(presets):
            raise IndexError(f"no preset at position {index}")
        return presets[index]

    def save_preset(self, name: str, config: Any = None) -> dict:
        validated = validate_config(self.config if config is None else config) or self.config
        preset = {
            "name": (name or "").strip() or DEFAULT_PRESET_NAME,
            "config": copy.deepcopy(validated),
            "linkedToNext": False,
        }
        presets = self.presets()
        presets.append(preset)
        self.store.save(presets)
        return preset

    def apply_preset(self, index: int) -> dict:
        preset = self._preset_at(self.presets(), index)
        self.config = copy.deepcopy(preset["config"])
        return copy.deepcopy(self.config)

    def start_preset(self, index: int) -> Optional[dict]:
        self.apply_preset(index)
        return self.start()

    def duplicate_preset(self, index: int) -> dict:
        presets = self.presets()
        clone = copy.deepcopy(self._preset_at(presets, index))
        clone["name"] = clone["name"] + COPY_SUFFIX
        presets.insert(index + 1, clone)
        self.store.save(presets)
        return clone

    def delete_preset(self, index: int) -> dict:
        presets = self.presets()
        removed = self._preset_at(presets, index)
        del presets[index]
        self.store.save(presets)
        return removed

    def set_linked(self, index: int, linked: bool) -> None:
        presets = self.presets()
        self._preset_at(presets, index)["linkedToNext"] = bool(linked)
        self.store.save(presets)

    def linked_successor(self, index: int) -> Optional[int]:
        """Index of the preset chained after ``index``, if any."""
        presets = self.presets()
        if not 0 <= index < len(presets) - 1:
            return None
        return index + 1 if presets[index]["linkedToNext"] else None

    # ---------- import / export ----------
    def export_presets(self) -> str:
        return json.dumps(self.presets(), indent=2, ensure_ascii=False)

    def import_presets(self, text: str) -> int:
        """Replace the stored presets with the JSON array in ``text``."""
        data = safe_json_parse(text)
        if data is None and (text or "").strip() != "null":
            raise PresetImportError("Failed to parse JSON")
        if not isinstance(data, list):
            raise PresetImportError("Invalid presets file")
        presets = validate_presets(data)
        dropped = len(data) - len(presets)
        if dropped:
            log.warning("import dropped %d invalid preset(s)", dropped)
        self.store.save(presets)
        return len(presets)


__all__ = [
    "PresetImportError",
    "TimerController",
    "config_from_form",
    "form_from_config",
]
