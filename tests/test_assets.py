import re

import pytest

from hawktimer.assets import (
    audio_format,
    audio_mime_type,
    available_weights,
    custom_sound_id,
    custom_sound_type,
    font_description,
    generate_sound_id,
    is_built_in_font,
    is_valid_sound_type,
    sound_name_from_file,
)


def test_font_catalogue():
    assert is_built_in_font("Orbitron")
    assert not is_built_in_font("Comic Sans")
    assert available_weights("Bebas Neue") == (400,)
    assert available_weights("Comic Sans") == (400, 700)
    assert font_description("Share Tech Mono") == "Digital"
    assert font_description("Comic Sans") == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("none", True),
        ("gong", True),
        ("custom:sound-1", True),
        ("custom:", False),
        ("trumpet", False),
        (None, False),
        (3, False),
    ],
)
def test_sound_types(value, expected):
    assert is_valid_sound_type(value) is expected


def test_custom_sound_ids():
    sound_id = generate_sound_id()
    assert re.fullmatch(r"sound-[0-9]+-[0-9a-f]{9}", sound_id)
    assert custom_sound_id(custom_sound_type(sound_id)) == sound_id
    assert custom_sound_id("bell") is None


@pytest.mark.parametrize(
    "file_name, fmt, mime",
    [
        ("alarm.WAV", "wav", "audio/wav"),
        ("clip.m4a", "m4a", "audio/mp4"),
        ("noext", "mp3", "audio/mpeg"),
    ],
)
def test_audio_format(file_name, fmt, mime):
    assert audio_format(file_name) == fmt
    assert audio_mime_type(fmt) == mime


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("my-alarm_Sound.mp3", "My Alarm Sound"),
        ("fireAlarm.wav", "Fire Alarm"),
        ("ding.txt", "Ding.txt"),
    ],
)
def test_sound_name_from_file(file_name, expected):
    assert sound_name_from_file(file_name) == expected
