"""Section-based editing engine for compound time fields.

The editor owns no widget. It drives anything that implements
:class:`TextField` (a ttk entry through :mod:`hawktimer.widgets`, or the
in-memory :class:`EditableField` used headless) and reports every mutation to
its subscribers. Each ``on_*`` handler returns True when it consumed the
event, meaning the host must suppress the native behaviour.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Protocol, Tuple

from .sections import HMS, MS, FieldShape
from .smart_parse import parse_smart_duration
from .utils import format_ms_value, format_time_value, parse_ms_value, parse_time_value

log = logging.getLogger(__name__)

# Tk keysyms for the keys the editor cares about.
KEY_LEFT = "Left"
KEY_RIGHT = "Right"
KEY_TAB = "Tab"
KEY_BACKSPACE = "BackSpace"
KEY_DELETE = "Delete"

_LOOSE_MS_RE = re.compile(r"([0-9]{1,2}):([0-9]{1,2})")


class TextField(Protocol):
    def get_value(self) -> str: ...

    def set_value(self, value: str) -> None: ...

    def get_selection(self) -> Tuple[int, int]: ...

    def set_selection(self, start: int, end: int) -> None: ...


@dataclass
class EditableField:
    """Plain text field state: the string, the cursor and the selection end."""

    value: str = ""
    cursor: int = 0
    selection_end: int = 0

    def get_value(self) -> str:
        return self.value

    def set_value(self, value: str) -> None:
        self.value = value
        self.set_selection(self.cursor, self.selection_end)

    def get_selection(self) -> Tuple[int, int]:
        return self.cursor, self.selection_end

    def set_selection(self, start: int, end: int) -> None:
        width = len(self.value)
        self.cursor = max(0, min(width, int(start)))
        self.selection_end = max(self.cursor, min(width, int(end)))


ChangeCallback = Callable[[str], None]


class CompoundFieldEditor:
    """Finite state machine over ``(value, cursor, selection end)``."""

    shape: FieldShape = HMS

    def __init__(self, field: TextField):
        self.field = field
        self._observers: List[ChangeCallback] = []

    # ---------- observers ----------
    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        self._observers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return _unsubscribe

    def _notify(self) -> None:
        value = self.field.get_value()
        for callback in list(self._observers):
            callback(value)

    # ---------- shape specific ----------
    def normalize(self, text: str) -> str:
        """Strict parse, clamp and reformat the whole field."""
        raise NotImplementedError

    def parse_paste(self, text: str) -> str | None:
        raise NotImplementedError

    def normalize_on_blur(self, text: str) -> str:
        return self.normalize(text)

    # ---------- helpers ----------
    @property
    def value(self) -> str:
        return self.field.get_value()

    def _text(self) -> str:
        text = self.field.get_value()
        if len(text) < self.shape.width:
            text = self.normalize(text)
        return text

    def _layout(self, text: str) -> FieldShape:
        return self.shape.offset_by(len(text) - self.shape.width)

    def _move(self, pos: int) -> None:
        self.field.set_selection(pos, pos)

    def _write(self, text: str, cursor: int) -> None:
        self.field.set_value(text)
        self._move(cursor)
        self._notify()

    # ---------- mouse ----------
    def on_click(self) -> bool:
        pos, _ = self.field.get_selection()
        if self._layout(self.field.get_value()).is_colon(pos):
            self._move(pos + 1)
        return False

    def on_double_click(self) -> bool:
        self.select_current_section()
        return True

    def select_current_section(self) -> None:
        pos, _ = self.field.get_selection()
        layout = self._layout(self.field.get_value())
        start, end = layout.range_of(layout.section_of(pos))
        self.field.set_selection(start, end)

    # ---------- keyboard ----------
    def on_key(self, key: str, *, ctrl: bool = False) -> bool:
        pos, sel_end = self.field.get_selection()
        text = self._text()
        layout = self._layout(text)
        section = layout.section_of(pos)
        start, end = layout.range_of(section)

        if key == KEY_LEFT:
            if pos > start:
                return False
            target = layout.prev_section_end(section)
            if target is not None:
                self._move(target)
            return True

        if key == KEY_RIGHT:
            if pos < end:
                return False
            target = layout.next_section_start(section)
            if target is not None:
                self._move(target)
            return True

        if key == KEY_TAB:
            return False

        if ctrl and key.lower() == "a":
            self.field.set_selection(start, end)
            return True

        if key == KEY_BACKSPACE:
            if pos > start:
                chars = list(text)
                chars[pos - 1] = "0"
                self._write("".join(chars), pos - 1)
            return True

        if key == KEY_DELETE:
            if pos < end:
                chars = list(text)
                chars[pos] = "0"
                self._write("".join(chars), pos)
            return True

        if len(key) == 1 and key in "0123456789":
            self._type_digit(key, text, layout, pos, sel_end, start, end)
            return True

        if len(key) == 1 and not ctrl:
            return True
        return False

    def _type_digit(self, digit: str, text: str, layout: FieldShape, pos: int, sel_end: int, start: int, end: int) -> None:
        chars = list(text)
        if sel_end > pos:
            for i in range(start, end):
                chars[i] = "0"
            chars[start] = digit
            self._commit_digit(chars, layout, start + 1)
            return
        if pos >= end:
            return
        chars[pos] = digit
        new_pos = pos + 1
        if layout.is_colon(new_pos):
            new_pos += 1
        self._commit_digit(chars, layout, new_pos)

    def _commit_digit(self, chars: List[str], layout: FieldShape, new_pos: int) -> None:
        # Reparsing can drop a third hour digit; later positions follow it.
        text = self.normalize("".join(chars))
        after = self._layout(text)
        if new_pos > layout.sections[0].end:
            new_pos += after.width - layout.width
        elif after.is_colon(new_pos):
            new_pos += 1
        self._write(text, min(new_pos, after.last_position))

    # ---------- clipboard / focus ----------
    def on_paste(self, text: str) -> bool:
        formatted = self.parse_paste(text or "")
        if formatted is None:
            log.debug("ignored paste %r", text)
            return True
        self.field.set_value(formatted)
        self._notify()
        return True

    def on_blur(self) -> None:
        current = self.field.get_value()
        formatted = self.normalize_on_blur(current)
        if formatted != current:
            self.field.set_value(formatted)
            self._notify()


class TimeFieldEditor(CompoundFieldEditor):
    """``HH:MM:SS`` duration field with smart paste and smart blur."""

    shape = HMS

    def normalize(self, text: str) -> str:
        value = parse_time_value(text)
        return format_time_value(value.h, value.m, value.s)

    def parse_paste(self, text: str) -> str | None:
        parsed = parse_smart_duration(text)
        if parsed is None:
            return None
        return format_time_value(parsed.h, parsed.m, parsed.s)

    def normalize_on_blur(self, text: str) -> str:
        return self.parse_paste(text) or self.normalize(text)


class MinuteSecondEditor(CompoundFieldEditor):
    """``MM:SS`` field used for the warning threshold."""

    shape = MS

    def normalize(self, text: str) -> str:
        value = parse_ms_value(text)
        return format_ms_value(value.m, value.s)

    def parse_paste(self, text: str) -> str | None:
        match = _LOOSE_MS_RE.search(text)
        if not match:
            return None
        return format_ms_value(int(match.group(1)), int(match.group(2)))


__all__ = [
    "CompoundFieldEditor",
    "EditableField",
    "MinuteSecondEditor",
    "TextField",
    "TimeFieldEditor",
]
