import pytest

pytest.importorskip("tkinter")

from hawktimer.theme_manager import canonical_theme, next_theme  # noqa: E402


@pytest.mark.parametrize(
    "name, expected",
    [("light", "light"), (" Dark ", "dark"), ("sombre", "dark"), ("blanc", "light"), ("", "dark"), (None, "dark")],
)
def test_canonical_theme(name, expected):
    assert canonical_theme(name) == expected


def test_next_theme_cycles():
    assert next_theme("dark") == "light"
    assert next_theme("light") == "dark"
    assert next_theme("unknown") == "dark"
    assert next_theme("dark", order=("noir", "dark")) == "dark"
