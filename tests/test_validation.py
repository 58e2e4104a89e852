import math

import pytest

from hawktimer.validation import (
    safe_json_parse,
    validate_config,
    validate_duration,
    validate_format,
    validate_hex_color,
    validate_mode,
    validate_preset,
    validate_presets,
    validate_sound,
    validate_style,
    validate_warning,
)

VALID = {
    "mode": "countup",
    "durationSec": 300,
    "format": "H:MM:SS",
    "style": {"color": "#ff0000", "strokeWidth": 4, "shadowSize": 0},
    "warn": {"enabled": True, "seconds": 30},
    "sound": {"endEnabled": True, "volume": 0.5},
}

MESSY = [
    {},
    {"mode": 3, "durationSec": "abc", "format": None, "style": "red", "warn": [], "sound": 7},
    {"durationSec": float("nan"), "style": {"strokeWidth": "12", "shadowSize": -4, "color": "#ABC"}},
    {"durationSec": "  90 ", "warn": {"flashRateMs": 1, "seconds": 10**500, "color": 12}},
    {"durationSec": 10**400, "sound": {"volume": "loud", "endType": "custom:"}},
    {"extra": {"deep": [1, 2, 3]}, "style": {"fontWeight": 700.0, "align": "justify"}},
    VALID,
]


@pytest.mark.parametrize("raw", [None, 5, "config", [1, 2], True])
def test_validate_config_rejects_non_objects(raw):
    assert validate_config(raw) is None


@pytest.mark.parametrize("raw", MESSY)
def test_validate_config_is_total(raw):
    config = validate_config(raw)
    assert config is not None
    assert set(config) == {"mode", "durationSec", "format", "style", "warn", "sound"}
    assert 0 <= config["durationSec"] <= 359999
    assert 0 <= config["style"]["strokeWidth"] <= 20
    assert 100 <= config["warn"]["flashRateMs"] <= 2000
    assert 0 <= config["sound"]["volume"] <= 1


@pytest.mark.parametrize("raw", MESSY)
def test_validate_config_is_idempotent(raw):
    once = validate_config(raw)
    assert validate_config(once) == once


def test_unknown_fields_are_dropped():
    config = validate_config({"extra": 1, "style": {"bogus": True}})
    assert "extra" not in config
    assert "bogus" not in config["style"]


def test_valid_fields_survive():
    config = validate_config(VALID)
    assert config["mode"] == "countup"
    assert config["durationSec"] == 300
    assert config["format"] == "H:MM:SS"
    assert config["style"]["color"] == "#ff0000"
    assert config["style"]["strokeWidth"] == 4
    assert config["warn"]["seconds"] == 30
    assert config["warn"]["colorEnabled"] is False
    assert config["sound"] == {"endEnabled": True, "endType": "none", "volume": 0.5}


@pytest.mark.parametrize(
    "value, expected",
    [(999999, 359999), (-1, 1200), ("abc", 1200), (None, 0), ("", 0), ("   ", 0), (float("nan"), 1200), ("60", 60), (12.5, 12.5), (True, 1)],
)
def test_validate_duration(value, expected):
    assert validate_duration(value) == expected


def test_mode_and_format_defaults():
    assert validate_mode("countdown-tod") == "countdown-tod"
    assert validate_mode("COUNTDOWN") == "countdown"
    assert validate_format("SS") == "SS"
    assert validate_format("HH:MM") == "MM:SS"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#abc", "#aabbcc"),
        ("#A1B2C3", "#A1B2C3"),
        (" #123456 ", "#123456"),
        ("not-a-color", "#010203"),
        ("#abcd", "#010203"),
        (None, "#010203"),
        (0xFFFFFF, "#010203"),
    ],
)
def test_validate_hex_color(value, expected):
    assert validate_hex_color(value, "#010203") == expected


def test_style_clamping():
    assert validate_style({"strokeWidth": 999})["strokeWidth"] == 20
    assert validate_style({"shadowSize": -3})["shadowSize"] == 0
    assert validate_style({"strokeWidth": "nope"})["strokeWidth"] == 2
    style = validate_style({"fontWeight": 800, "align": "left", "bgMode": "solid", "fontFamily": "  Teko "})
    assert style["fontWeight"] == "800"
    assert style["align"] == "left"
    assert style["bgMode"] == "solid"
    assert style["fontFamily"] == "Teko"


def test_null_and_blank_numbers_read_as_zero():
    style = validate_style({"strokeWidth": None, "shadowSize": ""})
    assert style["strokeWidth"] == 0
    assert style["shadowSize"] == 0
    assert validate_style({})["strokeWidth"] == 2
    assert validate_warning({"flashRateMs": None})["flashRateMs"] == 100
    config = validate_config({"durationSec": None, "sound": {"volume": None}})
    assert config["durationSec"] == 0
    assert config["sound"]["volume"] == 0
    assert validate_config({})["durationSec"] == 1200


def test_non_object_sections_get_defaults():
    assert validate_style(None)["color"] == "#ffffff"
    warn = validate_warning("on")
    assert warn["enabled"] is True and warn["seconds"] == 120 and warn["flashRateMs"] == 500
    assert validate_sound([]) == {"endEnabled": False, "endType": "none", "volume": 0.7}


def test_warning_coercion():
    warn = validate_warning({"enabled": 1, "flashEnabled": "", "flashRateMs": 50, "seconds": 400000})
    assert warn["enabled"] is True
    assert warn["flashEnabled"] is False
    assert warn["flashRateMs"] == 100
    assert warn["seconds"] == 359999
    assert warn["color"] == "#E64A19"


def test_sound_types():
    assert validate_sound({"endType": "gong"})["endType"] == "gong"
    assert validate_sound({"endType": "custom:sound-1"})["endType"] == "custom:sound-1"
    assert validate_sound({"endType": "kazoo"})["endType"] == "none"
    assert validate_sound({"volume": 3})["volume"] == 1


def test_validate_preset():
    preset = validate_preset({"name": "  Keynote ", "config": VALID, "linkedToNext": 1})
    assert preset["name"] == "Keynote"
    assert preset["linkedToNext"] is True
    assert preset["config"] == validate_config(VALID)
    assert validate_preset({"name": "", "config": {}})["name"] == "Unnamed Preset"
    assert validate_preset({"name": "B", "config": None}) is None
    assert validate_preset("A") is None


def test_validate_presets_drops_invalid_records():
    result = validate_presets([{"name": "A", "config": VALID}, {"name": "B", "config": None}])
    assert len(result) == 1
    assert result[0]["name"] == "A"
    assert validate_presets({"name": "A"}) == []
    assert validate_presets("[]") == []
    assert validate_presets(None) == []


def test_safe_json_parse():
    assert safe_json_parse("{bad json") is None
    assert safe_json_parse(None) is None
    assert safe_json_parse("[1, 2]") == [1, 2]
    assert safe_json_parse('[{"name": "A", "config": {}}, 3]', validate_presets)[0]["name"] == "A"
    assert math.isclose(safe_json_parse('{"durationSec": 1.5}', validate_config)["durationSec"], 1.5)
