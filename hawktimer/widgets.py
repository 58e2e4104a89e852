"""Reusable Tkinter widgets tailored for the application."""

from __future__ import annotations

import sys
import tkinter as tk
from tkinter import ttk

from .editor import CompoundFieldEditor, MinuteSecondEditor, TimeFieldEditor

_CONTROL_MASK = 0x0004
_COMMAND_MASK = 0x0008  # Command key on macOS, Alt elsewhere


class TimeEntry(ttk.Entry):
    """Entry whose content is driven by a :class:`CompoundFieldEditor`.

    The widget is the editor's text field; keyboard, mouse, clipboard and
    focus events are routed to the editor and suppressed when it consumes
    them.
    """

    def __init__(self, master, *, editor_cls: type[CompoundFieldEditor] = TimeFieldEditor, initial: str = "", **kwargs):
        width = kwargs.pop("width", editor_cls.shape.width + 2)
        super().__init__(master, width=width, **kwargs)
        self.editor = editor_cls(self)
        self.set_value(self.editor.normalize(initial))
        self.bind("<KeyPress>", self._on_key)
        self.bind("<<Paste>>", self._on_paste)
        self.bind("<<PasteSelection>>", self._on_paste_selection)
        self.bind("<<Cut>>", lambda _event: "break")
        self.bind("<<Clear>>", lambda _event: "break")
        self.bind("<ButtonRelease-1>", lambda _event: self.after_idle(self.editor.on_click))
        self.bind("<Double-Button-1>", lambda _event: "break" if self.editor.on_double_click() else None)
        self.bind("<FocusOut>", lambda _event: self.editor.on_blur())

    # ---------- TextField ----------
    def get_value(self) -> str:
        return self.get()

    def set_value(self, value: str) -> None:
        self.delete(0, tk.END)
        self.insert(0, value)

    def get_selection(self) -> tuple[int, int]:
        if self.selection_present():
            return self.index("sel.first"), self.index("sel.last")
        pos = self.index(tk.INSERT)
        return pos, pos

    def set_selection(self, start: int, end: int) -> None:
        self.selection_clear()
        self.icursor(start)
        if end > start:
            self.selection_range(start, end)

    # ---------- events ----------
    @staticmethod
    def _key_of(event) -> str:
        char = event.char or ""
        if len(char) == 1 and char.isprintable():
            return char
        return event.keysym

    @staticmethod
    def _has_ctrl(event) -> bool:
        state = int(getattr(event, "state", 0) or 0)
        if state & _CONTROL_MASK:
            return True
        return sys.platform == "darwin" and bool(state & _COMMAND_MASK)

    def _on_key(self, event):
        if self.editor.on_key(self._key_of(event), ctrl=self._has_ctrl(event)):
            return "break"
        return None

    def _on_paste(self, _event=None):
        try:
            text = self.clipboard_get()
        except tk.TclError:
            text = ""
        self.editor.on_paste(text)
        return "break"

    def _on_paste_selection(self, _event=None):
        try:
            text = self.selection_get(selection="PRIMARY")
        except tk.TclError:
            text = ""
        self.editor.on_paste(text)
        return "break"


class MinuteSecondEntry(TimeEntry):
    def __init__(self, master, **kwargs):
        kwargs.setdefault("editor_cls", MinuteSecondEditor)
        super().__init__(master, **kwargs)


class Tooltip:
    def __init__(self, widget, text, *, bg="#1f1f1f", fg="#f5f5f5"):
        self.widget = widget
        self.text = text
        self.bg = bg
        self.fg = fg
        self.tip = None
        widget.bind("<Enter>", self.show, add="+")
        widget.bind("<Leave>", self.hide, add="+")

    def show(self, _event=None):
        if self.tip is not None:
            return
        tip = tk.Toplevel(self.widget)
        tip.overrideredirect(True)
        try:
            tip.attributes("-alpha", 0.95)
        except tk.TclError:
            pass
        tip.configure(bg=self.bg)
        tk.Label(tip, text=self.text, bg=self.bg, fg=self.fg, font=("Segoe UI", 9), padx=8, pady=4, justify="left").pack()
        tip.update_idletasks()
        x_pos = self.widget.winfo_rootx() + 12
        y_pos = self.widget.winfo_rooty() + self.widget.winfo_height() + 6
        tip.geometry(f"+{x_pos}+{y_pos}")
        self.tip = tip

    def hide(self, _event=None):
        if self.tip is None:
            return
        try:
            self.tip.destroy()
        except tk.TclError:
            pass
        self.tip = None


__all__ = ["MinuteSecondEntry", "TimeEntry", "Tooltip"]
