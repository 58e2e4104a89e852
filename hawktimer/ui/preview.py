"""Matplotlib rendering of the timer text for the preview and output windows."""

from __future__ import annotations

from typing import Optional

from matplotlib import patheffects
from matplotlib.figure import Figure

from ..utils import format_display
from ..validation import validate_config
from .theming import theme

_ALIGN_X = {"left": 0.04, "center": 0.5, "right": 0.96}


class TimerPreview:
    """Draws the configured time with its colour, stroke and shadow."""

    def __init__(self, figure: Optional[Figure] = None, *, size=(6.4, 1.8), dpi: int = 96):
        self.figure = figure if figure is not None else Figure(figsize=size, dpi=dpi)
        self.ax = self.figure.add_axes([0.0, 0.0, 1.0, 1.0])
        self.ax.set_axis_off()
        self.text = self.ax.text(0.5, 0.5, "", ha="center", va="center", transform=self.ax.transAxes)
        self.warning = False

    def _font_size(self) -> float:
        return max(8.0, self.figure.get_figheight() * 72 * 0.55)

    def render(self, config: dict, *, seconds: Optional[float] = None, warning: bool = False) -> str:
        cfg = validate_config(config)
        if cfg is None:
            return self.text.get_text()
        style, warn = cfg["style"], cfg["warn"]
        total = cfg["durationSec"] if seconds is None else seconds
        label = format_display(total, cfg["format"])
        self.warning = bool(warning and warn["enabled"])

        color = warn["color"] if self.warning and warn["colorEnabled"] else style["color"]
        background = style["bgColor"] if style["bgMode"] == "solid" else theme().preview_bg
        self.figure.set_facecolor(background)

        effects = []
        shadow = float(style["shadowSize"])
        if shadow > 0:
            offset = max(1.0, shadow * 0.25)
            effects.append(patheffects.SimplePatchShadow(offset=(offset, -offset), shadow_rgbFace="#000000", alpha=0.6))
        stroke = float(style["strokeWidth"])
        if stroke > 0:
            effects.append(patheffects.Stroke(linewidth=stroke, foreground=style["strokeColor"]))
        effects.append(patheffects.Normal())

        self.text.set_text(label)
        self.text.set_color(color)
        self.text.set_fontfamily([style["fontFamily"], "sans-serif"])
        self.text.set_fontweight(int(style["fontWeight"]))
        self.text.set_fontsize(self._font_size())
        self.text.set_horizontalalignment(style["align"])
        self.text.set_x(_ALIGN_X[style["align"]])
        self.text.set_path_effects(effects)
        self.figure.canvas.draw_idle()
        return label


__all__ = ["TimerPreview"]
