"""Tests for field cleaning helpers."""

from datetime import datetime

import pytest

from cardstack.errors import ValidationError
from cardstack.text import normalize_due_date, normalize_labels, now, sanitize, sanitize_title, strip_tags


def test_strip_tags_keeps_text():
    assert strip_tags("<b>bold</b> and <i>italic</i>") == "bold and italic"


def test_strip_tags_script():
    assert "<script>" not in strip_tags("hi <script>alert(1)</script>")


def test_strip_tags_leaves_markdown():
    """Markdown syntax is not interpreted."""
    assert strip_tags("**not bold** `code` [link](x)") == "**not bold** `code` [link](x)"


def test_strip_tags_comments():
    assert strip_tags("a<!-- hidden -->b") == "ab"


def test_sanitize_trims():
    assert sanitize("   <p>padded</p>  ") == "padded"


def test_sanitize_plain_text_unchanged():
    assert sanitize("Café & co / 2 < 3") == "Café & co / 2 < 3"


def test_sanitize_title_default():
    assert sanitize_title(None, "Default") == "Default"
    assert sanitize_title("", "Default") == "Default"
    assert sanitize_title("<br>", "Default") == "Default"
    assert sanitize_title(" Real ", "Default") == "Real"


def test_normalize_labels():
    assert normalize_labels(["red", "#EB5A46", "", " ", "#abc", "Yellow"]) == ["#eb5a46", "#aabbcc", "#f2d600"]


def test_normalize_labels_uses_label_palette():
    """Label names map to label colours, not board colours."""
    assert normalize_labels(["green"]) == ["#61bd4f"]


def test_normalize_labels_rejects_unknown():
    with pytest.raises(ValidationError):
        normalize_labels(["mauve"])


@pytest.mark.parametrize("value", ["red", [1], [["red"]], 5])
def test_normalize_labels_rejects_non_text(value):
    with pytest.raises(ValidationError):
        normalize_labels(value)


def test_normalize_labels_skips_none():
    assert normalize_labels([None, "red"]) == ["#eb5a46"]


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("", None),
        ("  ", None),
        ("2024-02-29", "2024-02-29"),
        (" 2024-02-29 ", "2024-02-29"),
        ("2024-02-29T23:59:00", "2024-02-29"),
        ("2024-02-29T23:59:00+02:00", "2024-02-29"),
    ],
)
def test_normalize_due_date(value, expected):
    assert normalize_due_date(value) == expected


@pytest.mark.parametrize("value", ["tomorrow", "2024-02-30", "29/02/2024"])
def test_normalize_due_date_rejects(value):
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        normalize_due_date(value)


@pytest.mark.parametrize("value", [20240101, ["2024-01-01"]])
def test_normalize_due_date_rejects_non_text(value):
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        normalize_due_date(value)


def test_sanitize_title_rejects_non_text():
    with pytest.raises(ValidationError):
        sanitize_title(5, "Default")


def test_now_is_iso_with_offset():
    stamp = now()
    parsed = datetime.fromisoformat(stamp)
    assert parsed.tzinfo is not None
    assert parsed.microsecond == 0
