from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from .config import CHANNEL_NAME
from .sync import BroadcastChannel, TimerReceiver
from .ui.preview import TimerPreview
from .ui.theming import theme

log = logging.getLogger(__name__)

STATUS_TEXT = {"idle": "Ready", "running": "Running", "paused": "Paused"}
STATUS_COLOR = {"idle": "text_muted", "running": "success", "paused": "warning"}


class DisplayWindow(tk.Toplevel):
    """Output surface: listens on the broadcast channel and to direct posts."""

    def __init__(self, app, *, channel_name: str = CHANNEL_NAME):
        super().__init__(app)
        self.app = app
        self.title("HawkTimer Pro - Output")
        self.geometry("800x600")
        self.configure(bg="#000000")
        self.closed = False
        self._fullscreen = False

        self.receiver = TimerReceiver()
        self.receiver.subscribe(self._on_state)
        self.channel = BroadcastChannel(channel_name)
        self.channel.add_listener(self.receiver.apply)

        self.figure = Figure(figsize=(8, 4.5), dpi=96)
        self.preview = TimerPreview(self.figure)
        self.canvas = FigureCanvasTkAgg(self.figure, master=self)
        self.canvas.get_tk_widget().pack(fill="both", expand=True)
        self.status = ttk.Label(self, text=STATUS_TEXT["idle"], anchor="center")
        self.status.pack(fill="x")

        self.bind("<Escape>", lambda _e: self.set_fullscreen(False))
        self.bind("<F11>", lambda _e: self.toggle_fullscreen())
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def post_message(self, message: dict) -> None:
        if self.closed:
            return
        self.receiver.apply(message)

    def _on_state(self, receiver: TimerReceiver) -> None:
        if receiver.config is None:
            return
        self.preview.render(receiver.config, seconds=receiver.remaining_sec)
        self.canvas.draw_idle()
        self.status.config(
            text=STATUS_TEXT.get(receiver.status, receiver.status),
            foreground=getattr(theme(), STATUS_COLOR.get(receiver.status, "text")),
        )
        if receiver.config["mode"] == "hidden":
            self.withdraw()
        elif self.state() == "withdrawn":
            self.deiconify()

    def set_fullscreen(self, on: bool) -> None:
        self._fullscreen = bool(on)
        try:
            self.attributes("-fullscreen", self._fullscreen)
        except tk.TclError:
            log.debug("fullscreen not supported by this window manager")

    def toggle_fullscreen(self) -> None:
        self.focus_set()
        self.set_fullscreen(not self._fullscreen)

    def _on_close(self):
        self.closed = True
        self.receiver.close()
        self.channel.close()
        try:
            if getattr(self.app, "output_window", None) is self:
                self.app.output_window = None
        except AttributeError:
            pass
        self.destroy()


__all__ = ["DisplayWindow"]
