# -*- coding: utf-8 -*-
"""Manage ttk and matplotlib themes with cycling helpers."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Sequence

from .config import THEME_BACKGROUNDS
from .ui.theming import apply_theme as apply_plot_theme

DEFAULT_THEME = "dark"
THEME_SEQUENCE: tuple[str, ...] = ("dark", "light")

THEME_PRESETS: dict[str, dict[str, object]] = {
    "light": {
        "bg": THEME_BACKGROUNDS["light"],
        "surface": "#ffffff",
        "panel": "#f1efe9",
        "fg": "#1c1917",
        "fg_muted": "#57534e",
        "accent": "#2563eb",
        "accent_fg": "#ffffff",
        "border": "#d6d3d1",
        "success": "#15803d",
        "warn": "#b91c1c",
        "is_dark": False,
    },
    "dark": {
        "bg": THEME_BACKGROUNDS["dark"],
        "surface": "#171717",
        "panel": "#1f1f1f",
        "fg": "#e5e5e5",
        "fg_muted": "#a3a3a3",
        "accent": "#f97316",
        "accent_fg": "#0a0a0a",
        "border": "#2e2e2e",
        "success": "#4ade80",
        "warn": "#f87171",
        "is_dark": True,
    },
}

THEME_ALIASES = {
    "clair": "light",
    "white": "light",
    "blanc": "light",
    "sombre": "dark",
    "noir": "dark",
    "black": "dark",
}

STYLE_NAMES = {
    "Frame": "H.TFrame",
    "Card": "HCard.TFrame",
    "Label": "H.TLabel",
    "Muted": "HMuted.TLabel",
    "Error": "HError.TLabel",
    "Button": "H.TButton",
    "Accent": "HAccent.TButton",
    "Entry": "H.TEntry",
    "TimeEntry": "HTime.TEntry",
    "Check": "H.TCheckbutton",
    "Treeview": "H.Treeview",
}


def canonical_theme(name: str) -> str:
    key = str(name or "").strip().lower()
    if key in THEME_PRESETS:
        return key
    alias = THEME_ALIASES.get(key)
    if alias in THEME_PRESETS:
        return alias
    return DEFAULT_THEME


def next_theme(current: str, order: Sequence[str] = THEME_SEQUENCE) -> str:
    ordered: list[str] = []
    for name in order:
        canonical = canonical_theme(name)
        if canonical not in ordered:
            ordered.append(canonical)
    if not ordered:
        return DEFAULT_THEME
    if current not in ordered:
        return ordered[0]
    return ordered[(ordered.index(current) + 1) % len(ordered)]


class ThemeManager:
    def __init__(self, root: tk.Misc):
        self.root = root
        self.style = ttk.Style(root)
        try:
            self.style.theme_use("clam")
        except tk.TclError:
            pass
        self.current = DEFAULT_THEME
        self.colors = dict(THEME_PRESETS[DEFAULT_THEME])
        self._listeners = []

    def on_change(self, callback) -> None:
        self._listeners.append(callback)

    def toggle(self, order: Sequence[str] = THEME_SEQUENCE) -> str:
        self.apply(next_theme(self.current, order))
        return self.current

    def apply(self, name: str):
        canonical = canonical_theme(name)
        self.current = canonical
        self.colors = dict(THEME_PRESETS[canonical])
        c = self.colors
        apply_plot_theme(canonical)

        try:
            self.root.configure(bg=c["bg"])
        except tk.TclError:
            pass

        base_font = ("Segoe UI", 10)
        self.style.configure(STYLE_NAMES["Frame"], background=c["bg"], borderwidth=0)
        self.style.configure(STYLE_NAMES["Card"], background=c["surface"], relief="flat")
        self.style.configure(STYLE_NAMES["Label"], background=c["surface"], foreground=c["fg"], font=base_font)
        self.style.configure(STYLE_NAMES["Muted"], background=c["surface"], foreground=c["fg_muted"], font=("Segoe UI", 9))
        self.style.configure(STYLE_NAMES["Error"], background=c["bg"], foreground=c["warn"], font=base_font)
        self.style.configure(
            STYLE_NAMES["Button"],
            background=c["panel"],
            foreground=c["fg"],
            bordercolor=c["border"],
            focusthickness=1,
            focuscolor=c["accent"],
        )
        self.style.map(
            STYLE_NAMES["Button"],
            background=[("active", c["surface"])],
            foreground=[("disabled", c["fg_muted"])],
        )
        self.style.configure(
            STYLE_NAMES["Accent"],
            background=c["accent"],
            foreground=c["accent_fg"],
            borderwidth=0,
            font=("Segoe UI", 10, "bold"),
        )
        self.style.map(STYLE_NAMES["Accent"], background=[("active", c["panel"])])
        self.style.configure(
            STYLE_NAMES["Entry"],
            fieldbackground=c["panel"],
            foreground=c["fg"],
            bordercolor=c["border"],
            insertcolor=c["fg"],
        )
        self.style.map(STYLE_NAMES["Entry"], bordercolor=[("focus", c["accent"])])
        self.style.configure(
            STYLE_NAMES["TimeEntry"],
            fieldbackground=c["panel"],
            foreground=c["fg"],
            bordercolor=c["border"],
            insertcolor=c["accent"],
        )
        self.style.map(STYLE_NAMES["TimeEntry"], bordercolor=[("focus", c["accent"])])
        self.style.configure(STYLE_NAMES["Check"], background=c["surface"], foreground=c["fg"])
        self.style.configure(
            STYLE_NAMES["Treeview"],
            background=c["surface"],
            fieldbackground=c["surface"],
            foreground=c["fg"],
            bordercolor=c["border"],
        )
        self.style.map(
            STYLE_NAMES["Treeview"],
            background=[("selected", c["accent"])],
            foreground=[("selected", c["accent_fg"])],
        )
        self.style.configure("TFrame", background=c["bg"])
        self.style.configure("TLabel", background=c["bg"], foreground=c["fg"])
        self.style.configure("TCombobox", fieldbackground=c["panel"], foreground=c["fg"])

        for callback in list(self._listeners):
            callback(canonical)


__all__ = ["DEFAULT_THEME", "STYLE_NAMES", "THEME_SEQUENCE", "ThemeManager", "canonical_theme", "next_theme"]
