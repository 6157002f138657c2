"""Field cleaning helpers: markup stripping, labels, dates and timestamps."""

from collections.abc import Iterable
from datetime import date, datetime

from markdown_it import MarkdownIt

from cardstack.errors import ValidationError
from cardstack.palette import LABEL_COLORS, normalize_color

# Only paragraphs and inline HTML are recognised, so markdown syntax in a
# title survives untouched and just the tags are dropped.
_md = MarkdownIt("zero", {"html": True}).enable("html_inline")


def strip_tags(value: str) -> str:
    """Remove HTML tags and comments from value, keeping their text content."""
    paragraphs = []
    for token in _md.parse(value):
        if token.type != "inline" or not token.children:
            continue
        parts = []
        for child in token.children:
            if child.type == "text":
                parts.append(child.content)
            elif child.type in ("softbreak", "hardbreak"):
                parts.append("\n")
        paragraphs.append("".join(parts))
    return "\n\n".join(paragraphs)


def sanitize(value: str) -> str:
    """Strip markup and surrounding whitespace for safe storage."""
    return strip_tags(value).strip()


def sanitize_title(value: str | None, default: str) -> str:
    """Sanitize a title, falling back to default when nothing is left."""
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"Invalid title {value!r}, expected text")
    return sanitize(value) or default


def normalize_labels(labels: Iterable[str]) -> list[str]:
    """Normalize label colours, dropping blanks and duplicates.

    Order of first appearance is kept: ["red", "#EB5A46", ""] → ["#eb5a46"]
    """
    if isinstance(labels, str) or not isinstance(labels, Iterable):
        raise ValidationError(f"Invalid labels {labels!r}, expected a list of colours")
    result: list[str] = []
    for raw in labels:
        if raw is None:
            continue
        if not isinstance(raw, str):
            raise ValidationError(f"Invalid label {raw!r}, expected a colour")
        if not raw.strip():
            continue
        color = normalize_color(raw, LABEL_COLORS)
        if color not in result:
            result.append(color)
    return result


def normalize_due_date(value: str | None) -> str | None:
    """Return value as a YYYY-MM-DD string, or None when blank.

    A full ISO timestamp is cut down to its date. Raises ValidationError
    for anything that is not a date.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid due date {value!r}, expected YYYY-MM-DD")
    if not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        raise ValidationError(f"Invalid due date {value!r}, expected YYYY-MM-DD") from None


def now() -> str:
    """Current local time as ISO-8601 with seconds and UTC offset."""
    return datetime.now().astimezone().isoformat(timespec="seconds")
