"""Shared fixtures: a store on tmp_path with a predictable clock."""

import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from cardstack.model.card import CardOps
from cardstack.model.column import ColumnOps
from cardstack.model.store import BoardStore
from cardstack.models import BoardPatch, CardPatch, ColumnPatch


class TickingClock:
    """Returns a timestamp one second later on every call."""

    def __init__(self):
        self.current = datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> str:
        self.current += timedelta(seconds=1)
        return self.current.isoformat(timespec="seconds")


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(tmp_path, clock):
    return BoardStore(tmp_path / "boards", clock=clock)


@pytest.fixture
def columns(store):
    return ColumnOps(store)


@pytest.fixture
def cards(store):
    return CardOps(store)


@pytest.fixture
def sprint(store, columns, cards):
    """Board "Sprint": Todo holds cards A, B, C; Doing is empty."""
    board_id = store.create(BoardPatch(title="Sprint"))
    todo = columns.add(board_id, ColumnPatch(title="Todo"))
    doing = columns.add(board_id, ColumnPatch(title="Doing"))
    ids = {}
    for title in ("A", "B", "C"):
        ids[title] = cards.create(todo, CardPatch(title=title)).card.id
    return SimpleNamespace(board=board_id, todo=todo, doing=doing, cards=ids)


@pytest.fixture
def read_document(store):
    """Returns a function loading the raw JSON document of a board."""

    def read(board_id) -> dict:
        return json.loads(store.path_for(board_id).read_text(encoding="utf-8"))

    return read
