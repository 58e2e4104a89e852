import sys
from types import SimpleNamespace

import pytest

pytest.importorskip("tkinter")

from hawktimer.widgets import TimeEntry  # noqa: E402


def _event(char="", keysym="", state=0):
    return SimpleNamespace(char=char, keysym=keysym, state=state)


@pytest.mark.parametrize(
    "event, expected",
    [
        (_event("7", "7"), "7"),
        (_event("a", "a"), "a"),
        (_event(":", "colon"), ":"),
        (_event("", "Left"), "Left"),
        (_event("\x08", "BackSpace"), "BackSpace"),
        (_event("\x7f", "Delete"), "Delete"),
        (_event("\t", "Tab"), "Tab"),
        (_event("\x01", "a", state=0x4), "a"),
    ],
)
def test_key_of_prefers_printable_char(event, expected):
    assert TimeEntry._key_of(event) == expected


def test_has_ctrl_reads_control_mask(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert TimeEntry._has_ctrl(_event(state=0x4)) is True
    assert TimeEntry._has_ctrl(_event(state=0x4 | 0x1)) is True
    assert TimeEntry._has_ctrl(_event(state=0x8)) is False
    assert TimeEntry._has_ctrl(_event(state=0)) is False
    assert TimeEntry._has_ctrl(SimpleNamespace()) is False


def test_has_ctrl_accepts_command_on_macos(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    assert TimeEntry._has_ctrl(_event(state=0x8)) is True
    assert TimeEntry._has_ctrl(_event(state=0x1)) is False


@pytest.fixture
def entry():
    import tkinter as tk

    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display")
    root.withdraw()
    widget = TimeEntry(root, initial="00:00:00")
    yield widget
    root.destroy()


def test_native_cut_and_clear_are_swallowed(entry):
    for sequence in ("<<Cut>>", "<<Clear>>", "<<Paste>>", "<<PasteSelection>>"):
        assert entry.bind(sequence)


def test_middle_click_paste_goes_through_the_parser(entry, monkeypatch):
    monkeypatch.setattr(entry, "selection_get", lambda **_kw: "5:30")
    assert entry._on_paste_selection() == "break"
    assert entry.get_value() == "00:05:30"
