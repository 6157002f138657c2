"""Tests for position bookkeeping."""

from cardstack.model.order import clamp, is_contiguous, reindex, sort_by_position
from cardstack.models import Card


def _cards(*positions):
    return [Card(id=str(i), position=p) for i, p in enumerate(positions)]


def test_reindex():
    cards = _cards(5, 9, 2)
    reindex(cards)
    assert [c.position for c in cards] == [0, 1, 2]
    assert [c.id for c in cards] == ["0", "1", "2"]


def test_sort_by_position():
    cards = _cards(5, 9, 2)
    sort_by_position(cards)
    assert [c.id for c in cards] == ["2", "0", "1"]
    assert is_contiguous(cards)


def test_sort_by_position_is_stable():
    cards = _cards(1, 0, 1, 0)
    sort_by_position(cards)
    assert [c.id for c in cards] == ["1", "3", "0", "2"]


def test_clamp():
    assert clamp(-3, 4) == 0
    assert clamp(2, 4) == 2
    assert clamp(4, 4) == 4
    assert clamp(10, 4) == 4
    assert clamp(0, 0) == 0


def test_is_contiguous():
    assert is_contiguous([])
    assert is_contiguous(_cards(0, 1, 2))
    assert not is_contiguous(_cards(0, 2))
    assert not is_contiguous(_cards(1, 0))
