from __future__ import annotations

from matplotlib import rcParams

from .theme import THEMES, Theme

_current_theme: Theme = THEMES["dark"]


def apply_theme(name: str) -> Theme:
    global _current_theme
    _current_theme = THEMES.get(name, _current_theme)
    t = _current_theme

    rcParams.update({
        "figure.facecolor": t.preview_bg,
        "savefig.facecolor": t.preview_bg,
        "axes.facecolor": t.preview_bg,
        "text.color": t.text,
    })
    return t


def theme() -> Theme:
    return _current_theme
