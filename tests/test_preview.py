import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from matplotlib import patheffects  # noqa: E402
from matplotlib.colors import to_rgba  # noqa: E402

from hawktimer.ui.preview import TimerPreview  # noqa: E402
from hawktimer.ui.theming import apply_theme  # noqa: E402


@pytest.fixture(autouse=True)
def dark_theme():
    apply_theme("dark")
    yield
    apply_theme("dark")


def _config(**style):
    return {
        "durationSec": 3725,
        "format": "H:MM:SS",
        "style": style,
        "warn": {"enabled": True, "colorEnabled": True, "color": "#ff0000"},
    }


def test_renders_formatted_label():
    preview = TimerPreview()
    assert preview.render(_config()) == "1:02:05"
    assert preview.text.get_text() == "1:02:05"
    assert preview.render(_config(), seconds=59) == "0:00:59"


def test_invalid_config_keeps_previous_text():
    preview = TimerPreview()
    preview.render(_config())
    assert preview.render("bad") == "1:02:05"


def test_warning_colour():
    preview = TimerPreview()
    preview.render(_config(color="#00ff00"))
    assert to_rgba(preview.text.get_color()) == to_rgba("#00ff00")
    preview.render(_config(color="#00ff00"), warning=True)
    assert to_rgba(preview.text.get_color()) == to_rgba("#ff0000")


def test_background_follows_mode_and_theme():
    preview = TimerPreview()
    preview.render(_config(bgMode="solid", bgColor="#123456"))
    assert preview.figure.get_facecolor() == to_rgba("#123456")
    apply_theme("light")
    preview.render(_config(bgMode="transparent", bgColor="#123456"))
    assert preview.figure.get_facecolor() == to_rgba("#2b2b2b")


def test_stroke_and_shadow_effects():
    preview = TimerPreview()
    preview.render(_config(strokeWidth=4, shadowSize=10, align="left"))
    kinds = [type(effect) for effect in preview.text.get_path_effects()]
    assert kinds == [patheffects.SimplePatchShadow, patheffects.Stroke, patheffects.Normal]
    assert preview.text.get_horizontalalignment() == "left"
    preview.render(_config())
    assert [type(effect) for effect in preview.text.get_path_effects()] == [patheffects.Normal]
