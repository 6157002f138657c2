"""Tests for colour palettes."""

import pytest

from cardstack.errors import ValidationError
from cardstack.palette import BOARD_COLORS, DEFAULT_BOARD_COLOR, LABEL_COLORS, normalize_color


def test_default_is_in_palette():
    assert DEFAULT_BOARD_COLOR in BOARD_COLORS.values()


def test_palettes_are_normalized():
    for color in [*BOARD_COLORS.values(), *LABEL_COLORS.values()]:
        assert normalize_color(color) == color


def test_normalize_hex():
    assert normalize_color("#D29034") == "#d29034"
    assert normalize_color(" #abc ") == "#aabbcc"


def test_normalize_names():
    assert normalize_color("Green") == BOARD_COLORS["green"]
    assert normalize_color("green", LABEL_COLORS) == LABEL_COLORS["green"]


@pytest.mark.parametrize("value", ["", "#12", "#12345", "#gggggg", "0079bf", "teal", "#0079bf00"])
def test_normalize_rejects(value):
    with pytest.raises(ValidationError):
        normalize_color(value)


@pytest.mark.parametrize("value", [5, None, ["#0079bf"]])
def test_normalize_rejects_non_text(value):
    with pytest.raises(ValidationError, match="Invalid colour"):
        normalize_color(value)
