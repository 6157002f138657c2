"""Board and label colour palettes."""

import re

from cardstack.errors import ValidationError

DEFAULT_BOARD_COLOR = "#0079bf"

BOARD_COLORS: dict[str, str] = {
    "blue": "#0079bf",
    "orange": "#d29034",
    "green": "#519839",
    "red": "#b04632",
    "purple": "#89609e",
    "pink": "#cd5a91",
    "lime": "#4bbf6b",
    "sky": "#00aecc",
}

LABEL_COLORS: dict[str, str] = {
    "green": "#61bd4f",
    "yellow": "#f2d600",
    "orange": "#ff9f1a",
    "red": "#eb5a46",
    "purple": "#c377e0",
    "blue": "#0079bf",
}

_HEX_RE = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def normalize_color(value: str, names: dict[str, str] = BOARD_COLORS) -> str:
    """Return value as a lowercase #rrggbb colour.

    Accepts "#rgb" and "#rrggbb" (any case), or a name from the given
    palette such as "green". "#ABC" → "#aabbcc". Raises ValidationError
    otherwise.
    """
    if not isinstance(value, str):
        raise ValidationError(f"Invalid colour {value!r}, expected #rrggbb")
    text = value.strip()
    named = names.get(text.lower())
    if named is not None:
        return named
    if not _HEX_RE.fullmatch(text):
        raise ValidationError(f"Invalid colour {value!r}, expected #rrggbb")
    text = text.lower()
    if len(text) == 4:
        text = "#" + "".join(ch * 2 for ch in text[1:])
    return text
