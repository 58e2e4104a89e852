from __future__ import annotations

import ctypes
import json
import logging
import sys
import tkinter as tk
from tkinter import filedialog, ttk

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from .assets import BUILT_IN_FONTS, BUILT_IN_SOUNDS, WEIGHT_LABELS, available_weights
from .config import CHANNEL_NAME, CONFIG_DIR, LOG_LEVEL, OUTPUT_RESET_DELAY_MS, PREFS_PATH, PREVIEW_REFRESH_MS
from .controller import PresetImportError, TimerController, form_from_config
from .display_window import DisplayWindow
from .presets import JsonPresetStore
from .sync import BroadcastChannel, BroadcastTransport, DirectTransport
from .theme_manager import STYLE_NAMES, THEME_SEQUENCE, ThemeManager
from .ui.preview import TimerPreview
from .utils import format_display
from .validation import VALID_FORMATS, VALID_MODES, validate_config
from .widgets import MinuteSecondEntry, TimeEntry, Tooltip

log = logging.getLogger(__name__)

MODE_LABELS = {
    "countdown": "Countdown",
    "countup": "Count Up",
    "tod": "Time of Day",
    "countdown-tod": "C/D + ToD",
    "countup-tod": "C/U + ToD",
    "hidden": "Hidden",
}

_BOOL_KEYS = ("warnEnabled", "warnColorEnabled", "warnFlashEnabled", "warnSoundEnabled", "soundEndEnabled")
_CHOICE_KEYS = ("mode", "format", "fontFamily", "fontWeight", "align", "bgMode", "soundEndType")
_TEXT_KEYS = ("color", "strokeColor", "bgColor", "warnColor")
_NUMBER_KEYS = ("strokeWidth", "shadowSize", "flashRateMs", "volume")


class TimerApp(tk.Tk):
    def __init__(self):
        if sys.platform == "win32":
            try:
                ctypes.windll.shcore.SetProcessDpiAwareness(2)
            except (AttributeError, OSError):
                pass
        super().__init__()
        self.theme = ThemeManager(self)
        self.theme.apply(THEME_SEQUENCE[0])
        self.title("HawkTimer Pro")
        self.minsize(900, 600)
        self._toasts = []
        self._error_after = None
        self._preview_after = None
        self.output_window: DisplayWindow | None = None

        self.direct = DirectTransport()
        self.channel = BroadcastChannel(CHANNEL_NAME)
        self.controller = TimerController(
            JsonPresetStore(),
            transports=[self.direct, BroadcastTransport(self.channel)],
        )

        self.vars: dict[str, tk.Variable] = {}
        self._build_ui()
        self._load_prefs()
        self._apply_form(form_from_config(self.controller.config))
        self._render_presets()

        self.bind_all("<F5>", lambda e: self.on_start())
        self.bind_all("<Control-r>", lambda e: self.on_reset())
        self.bind_all("<Control-n>", lambda e: self.on_open_output())
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self.theme.on_change(lambda _name: self._schedule_preview())

    # ---------- layout ----------
    def _card(self, parent, title, **grid_kwargs):
        card = ttk.Frame(parent, style=STYLE_NAMES["Card"], padding=(14, 10))
        card.grid(sticky="nsew", padx=6, pady=6, **grid_kwargs)
        ttk.Label(card, text=title, style=STYLE_NAMES["Muted"]).grid(row=0, column=0, columnspan=4, sticky="w", pady=(0, 6))
        return card

    def _var(self, key, kind=tk.StringVar):
        var = kind()
        var.trace_add("write", lambda *_: self._schedule_preview())
        self.vars[key] = var
        return var

    def _row(self, card, row, label, widget, column=0):
        ttk.Label(card, text=label, style=STYLE_NAMES["Label"]).grid(row=row, column=column, sticky="w", padx=(0, 8), pady=3)
        widget.grid(row=row, column=column + 1, sticky="ew", pady=3)
        return widget

    def _combo(self, card, key, values):
        return ttk.Combobox(card, textvariable=self._var(key), values=list(values), state="readonly", width=16)

    def _entry(self, card, key, kind=tk.StringVar, width=10):
        return ttk.Entry(card, textvariable=self._var(key, kind), style=STYLE_NAMES["Entry"], width=width)

    def _check(self, card, key, text):
        return ttk.Checkbutton(card, text=text, variable=self._var(key, tk.BooleanVar), style=STYLE_NAMES["Check"])

    def _build_ui(self):
        root = ttk.Frame(self, style=STYLE_NAMES["Frame"], padding=10)
        root.pack(fill="both", expand=True)
        root.columnconfigure(0, weight=1)
        root.columnconfigure(1, weight=2)
        root.rowconfigure(0, weight=1)

        form = ttk.Frame(root, style=STYLE_NAMES["Frame"])
        form.grid(row=0, column=0, sticky="nsew")
        side = ttk.Frame(root, style=STYLE_NAMES["Frame"])
        side.grid(row=0, column=1, sticky="nsew")
        side.columnconfigure(0, weight=1)
        side.rowconfigure(2, weight=1)

        # Timer
        card = self._card(form, "TIMER", row=0, column=0)
        self._row(card, 1, "Mode", self._combo(card, "mode", VALID_MODES))
        self.duration_entry = TimeEntry(card, style=STYLE_NAMES["TimeEntry"], font=("Consolas", 14))
        self.duration_entry.editor.subscribe(lambda _v: self._schedule_preview())
        self._row(card, 2, "Duration", self.duration_entry)
        Tooltip(self.duration_entry, "Type digits per section, or paste 530, 5:30, 1:30:00...")
        self._row(card, 3, "Format", self._combo(card, "format", VALID_FORMATS))

        # Style
        card = self._card(form, "STYLE", row=1, column=0)
        family = self._combo(card, "fontFamily", [f.family for f in BUILT_IN_FONTS])
        self._row(card, 1, "Font", family)
        self.weight_combo = self._combo(card, "fontWeight", [])
        self._row(card, 2, "Weight", self.weight_combo)
        self.vars["fontFamily"].trace_add("write", lambda *_: self._refresh_weights())
        self._row(card, 3, "Colour", self._entry(card, "color"))
        self._row(card, 4, "Stroke", self._entry(card, "strokeWidth", tk.DoubleVar, width=6))
        self._row(card, 5, "Stroke colour", self._entry(card, "strokeColor"))
        self._row(card, 6, "Shadow", self._entry(card, "shadowSize", tk.DoubleVar, width=6))
        self._row(card, 7, "Align", self._combo(card, "align", ("left", "center", "right")))
        self._row(card, 8, "Background", self._combo(card, "bgMode", ("transparent", "solid")))
        self._row(card, 9, "Background colour", self._entry(card, "bgColor"))

        # Warning & sound
        card = self._card(form, "WARNING & SOUND", row=2, column=0)
        self._check(card, "warnEnabled", "Warning").grid(row=1, column=0, sticky="w")
        self.warn_entry = MinuteSecondEntry(card, style=STYLE_NAMES["TimeEntry"], font=("Consolas", 12))
        self.warn_entry.editor.subscribe(lambda _v: self._schedule_preview())
        self.warn_entry.grid(row=1, column=1, sticky="w")
        self._check(card, "warnColorEnabled", "Colour").grid(row=2, column=0, sticky="w")
        self._entry(card, "warnColor").grid(row=2, column=1, sticky="w")
        self._check(card, "warnFlashEnabled", "Flash (ms)").grid(row=3, column=0, sticky="w")
        self._entry(card, "flashRateMs", tk.IntVar, width=6).grid(row=3, column=1, sticky="w")
        self._check(card, "warnSoundEnabled", "Warning sound").grid(row=4, column=0, sticky="w")
        self._check(card, "soundEndEnabled", "End sound").grid(row=5, column=0, sticky="w")
        self._combo(card, "soundEndType", [value for value, _label in BUILT_IN_SOUNDS]).grid(row=5, column=1, sticky="w")
        self._row(card, 6, "Volume", ttk.Scale(card, variable=self._var("volume", tk.DoubleVar), from_=0.0, to=1.0))

        # Preview
        self.preview_figure = Figure(figsize=(6.4, 1.8), dpi=96)
        self.preview = TimerPreview(self.preview_figure)
        self.preview_canvas = FigureCanvasTkAgg(self.preview_figure, master=side)
        self.preview_canvas.get_tk_widget().grid(row=0, column=0, sticky="ew", padx=6, pady=6)

        bar = ttk.Frame(side, style=STYLE_NAMES["Frame"])
        bar.grid(row=1, column=0, sticky="ew", padx=6)
        ttk.Button(bar, text="Start", style=STYLE_NAMES["Accent"], command=self.on_start).pack(side="left")
        ttk.Button(bar, text="Pause", style=STYLE_NAMES["Button"], command=self.on_pause).pack(side="left", padx=(6, 0))
        ttk.Button(bar, text="Reset", style=STYLE_NAMES["Button"], command=self.on_reset).pack(side="left", padx=(6, 0))
        ttk.Button(bar, text="Open output", style=STYLE_NAMES["Button"], command=self.on_open_output).pack(side="left", padx=(18, 0))
        ttk.Button(bar, text="Fullscreen", style=STYLE_NAMES["Button"], command=self.on_fullscreen).pack(side="left", padx=(6, 0))
        ttk.Button(bar, text="Theme", style=STYLE_NAMES["Button"], command=self.theme.toggle).pack(side="right")

        # Presets
        card = self._card(side, "PRESETS", row=2, column=0)
        card.columnconfigure(1, weight=1)
        card.rowconfigure(2, weight=1)
        self.vars["presetName"] = tk.StringVar()
        self._row(card, 1, "Name", ttk.Entry(card, textvariable=self.vars["presetName"], style=STYLE_NAMES["Entry"]))
        ttk.Button(card, text="Save", style=STYLE_NAMES["Accent"], command=self.on_save_preset).grid(row=1, column=2, padx=(6, 0))
        cols = ("name", "duration", "linked")
        self.preset_tree = ttk.Treeview(card, columns=cols, show="headings", height=8, style=STYLE_NAMES["Treeview"], selectmode="browse")
        for col, text, width in (("name", "Preset", 220), ("duration", "Duration", 100), ("linked", "Linked", 70)):
            self.preset_tree.heading(col, text=text)
            self.preset_tree.column(col, width=width, anchor="w" if col == "name" else "center")
        self.preset_tree.grid(row=2, column=0, columnspan=3, sticky="nsew", pady=(6, 6))
        self.preset_tree.bind("<Double-Button-1>", lambda _e: self.on_apply_preset())
        actions = ttk.Frame(card, style=STYLE_NAMES["Card"])
        actions.grid(row=3, column=0, columnspan=3, sticky="ew")
        for text, command in (
            ("Apply", self.on_apply_preset),
            ("Start", self.on_start_preset),
            ("Duplicate", self.on_duplicate_preset),
            ("Delete", self.on_delete_preset),
            ("Link next", self.on_toggle_link),
            ("Export", self.on_export),
            ("Import", self.on_import),
        ):
            ttk.Button(actions, text=text, style=STYLE_NAMES["Button"], command=command).pack(side="left", padx=(0, 4))

        self.err_box = ttk.Label(side, text="", style=STYLE_NAMES["Error"])
        self.err_box.grid(row=3, column=0, sticky="ew", padx=6)

    def _refresh_weights(self):
        weights = [str(w) for w in available_weights(self.vars["fontFamily"].get())]
        self.weight_combo.configure(values=weights)
        if self.vars["fontWeight"].get() not in weights:
            self.vars["fontWeight"].set(weights[-1])
        names = ", ".join(WEIGHT_LABELS.get(int(w), w) for w in weights)
        log.debug("weights for %s: %s", self.vars["fontFamily"].get(), names)

    # ---------- form <-> config ----------
    def _form_values(self) -> dict:
        values = {"duration": self.duration_entry.get_value(), "warnTime": self.warn_entry.get_value()}
        for key in _CHOICE_KEYS + _TEXT_KEYS + _BOOL_KEYS + _NUMBER_KEYS:
            try:
                values[key] = self.vars[key].get()
            except tk.TclError:
                continue  # unreadable entry: the field default applies
        return values

    def _apply_form(self, form: dict) -> None:
        for key, value in form.items():
            if key == "duration":
                self.duration_entry.set_value(value)
            elif key == "warnTime":
                self.warn_entry.set_value(value)
            elif key in self.vars:
                self.vars[key].set(value)
        self._schedule_preview()

    def _schedule_preview(self):
        if self._preview_after is not None:
            return
        self._preview_after = self.after(PREVIEW_REFRESH_MS, self._refresh_preview)

    def _refresh_preview(self):
        self._preview_after = None
        config = self.controller.update_from_form(self._form_values())
        self.preview.render(config)
        self.preview_canvas.draw_idle()

    def current_config(self) -> dict:
        return self.controller.update_from_form(self._form_values())

    # ---------- commands ----------
    def _send(self, command: str):
        self.controller.send(command, self.current_config())

    def on_start(self):
        self._send("start")

    def on_pause(self):
        self._send("pause")

    def on_reset(self):
        self._send("reset")

    def on_open_output(self):
        if self.output_window is not None and not self.output_window.closed:
            self.output_window.lift()
            self.output_window.focus_set()
            return
        self.output_window = DisplayWindow(self)
        self.direct.attach(self.output_window)
        self.after(OUTPUT_RESET_DELAY_MS, self.on_reset)

    def on_fullscreen(self):
        if self.output_window is not None and not self.output_window.closed:
            self.output_window.toggle_fullscreen()
        else:
            self.toast("Open the output window first")

    # ---------- presets ----------
    def _render_presets(self):
        tree = self.preset_tree
        for row in tree.get_children():
            tree.delete(row)
        for idx, preset in enumerate(self.controller.presets()):
            cfg = preset["config"]
            tree.insert(
                "",
                "end",
                iid=str(idx),
                values=(preset["name"], format_display(cfg["durationSec"], cfg["format"]), "yes" if preset["linkedToNext"] else ""),
            )

    def _selected_index(self) -> int | None:
        selection = self.preset_tree.selection()
        if not selection:
            self._show_error("Select a preset first")
            return None
        return int(selection[0])

    def on_save_preset(self):
        preset = self.controller.save_preset(self.vars["presetName"].get(), self.current_config())
        self.vars["presetName"].set("")
        self._render_presets()
        self.toast(f"Saved {preset['name']}")

    def on_apply_preset(self):
        idx = self._selected_index()
        if idx is None:
            return
        self._apply_form(form_from_config(self.controller.apply_preset(idx)))

    def on_start_preset(self):
        idx = self._selected_index()
        if idx is None:
            return
        self._apply_form(form_from_config(self.controller.apply_preset(idx)))
        self.controller.send("start", self.current_config())
        successor = self.controller.linked_successor(idx)
        if successor is not None:
            self.preset_tree.selection_set(str(successor))
            self.preset_tree.see(str(successor))

    def on_duplicate_preset(self):
        idx = self._selected_index()
        if idx is None:
            return
        self.controller.duplicate_preset(idx)
        self._render_presets()

    def on_delete_preset(self):
        idx = self._selected_index()
        if idx is None:
            return
        self.controller.delete_preset(idx)
        self._render_presets()

    def on_toggle_link(self):
        idx = self._selected_index()
        if idx is None:
            return
        preset = self.controller.presets()[idx]
        self.controller.set_linked(idx, not preset["linkedToNext"])
        self._render_presets()

    def on_export(self):
        path = filedialog.asksaveasfilename(
            defaultextension=".json",
            initialfile="hawktimer-pro-presets.json",
            filetypes=[("JSON", "*.json")],
        )
        if not path:
            return
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.controller.export_presets())
        except OSError as e:
            self._show_error(f"Export failed: {e}")
        else:
            self.toast(f"Exported to {path}")

    def on_import(self):
        path = filedialog.askopenfilename(filetypes=[("JSON", "*.json"), ("All files", "*.*")])
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                count = self.controller.import_presets(f.read())
        except (OSError, PresetImportError) as e:
            self._show_error(str(e))
            return
        self._render_presets()
        self.toast(f"Imported {count} preset(s)")

    # ---------- feedback ----------
    def toast(self, message: str, ms=2000):
        tip = tk.Toplevel(self)
        tip.overrideredirect(True)
        tip.configure(bg="#000000")
        try:
            tip.attributes("-alpha", 0.9)
        except tk.TclError:
            pass
        tk.Label(tip, text=message, bg="#000000", fg="#ffffff", font=("Segoe UI", 10), padx=12, pady=6).pack()
        tip.update_idletasks()
        tip.geometry(f"+{self.winfo_rootx() + 40}+{self.winfo_rooty() + 20}")
        tip.after(ms, tip.destroy)

        def _cleanup(_=None):
            if tip in self._toasts:
                self._toasts.remove(tip)

        tip.bind("<Destroy>", _cleanup)
        self._toasts.append(tip)

    def _clear_error(self):
        if self._error_after is not None:
            try:
                self.after_cancel(self._error_after)
            except tk.TclError:
                pass
            self._error_after = None
        self.err_box.config(text="")

    def _show_error(self, msg):
        self._clear_error()
        self.err_box.config(text=f"⚠ {msg}")
        self._error_after = self.after(4000, self._clear_error)
        try:
            self.bell()
        except tk.TclError:
            pass

    # ---------- prefs ----------
    def _save_prefs(self):
        data = dict(
            geom=self.winfo_geometry(),
            theme=self.theme.current,
            config=self.controller.config,
        )
        try:
            CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            PREFS_PATH.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            log.warning("cannot save preferences: %s", e)

    def _load_prefs(self):
        if not PREFS_PATH.exists():
            return
        try:
            data = json.loads(PREFS_PATH.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("ignoring unreadable preferences: %s", e)
            return
        if not isinstance(data, dict):
            return
        self.theme.apply(data.get("theme", THEME_SEQUENCE[0]))
        config = validate_config(data.get("config"))
        if config is not None:
            self.controller.update(config)
        geom = data.get("geom")
        if isinstance(geom, str) and geom:
            try:
                self.geometry(geom)
            except tk.TclError:
                pass

    def _on_close(self):
        self._save_prefs()
        for tip in list(self._toasts):
            tip.destroy()
        if self.output_window is not None and not self.output_window.closed:
            self.output_window._on_close()
        self.channel.close()
        self.destroy()


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = TimerApp()
    app.mainloop()


__all__ = ["TimerApp", "main"]
