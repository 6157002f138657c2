"""Tests for 'cardstack card' commands."""

import json
from argparse import Namespace

import pytest

from cardstack.cli.card import card_add, card_delete, card_get, card_move, card_update
from cardstack.cli.column import column_get


def _add_args(data_dir, column, title, **overrides):
    args = dict(
        data=data_dir, json=True, column=column, title=title, description="", label=None, due=None, position=None
    )
    args.update(overrides)
    return Namespace(**args)


def _update_args(data_dir, card_id, **overrides):
    args = dict(
        data=data_dir,
        json=True,
        id=card_id,
        title=None,
        description=None,
        label=None,
        clear_labels=False,
        due=None,
        no_due=False,
        position=None,
    )
    args.update(overrides)
    return Namespace(**args)


def _card_titles(data_dir, board_id, column_id, capsys):
    capsys.readouterr()
    column_get(Namespace(data=data_dir, json=True, board=board_id, id=column_id))
    return [c["title"] for c in json.loads(capsys.readouterr().out)["cards"]]


def test_card_get(data_dir, sprint, capsys):
    args = Namespace(data=data_dir, json=True, id=sprint.cards["B"])
    assert card_get(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["card"]["title"] == "B"
    assert data["boardId"] == sprint.board
    assert data["columnId"] == sprint.todo


def test_card_get_text(data_dir, sprint, capsys):
    card_add(_add_args(data_dir, sprint.doing, "Write docs", description="Long text", label=["red"], due="2024-06-01"))
    card_id = json.loads(capsys.readouterr().out)["card"]["id"]

    assert card_get(Namespace(data=data_dir, json=False, id=card_id)) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Write docs"
    assert "labels: #eb5a46" in out
    assert "due: 2024-06-01" in out
    assert "Long text" in out


def test_card_get_not_found(data_dir, capsys):
    with pytest.raises(SystemExit):
        card_get(Namespace(data=data_dir, json=False, id="ffff"))
    assert "Card 'ffff' not found" in capsys.readouterr().err


def test_card_add(data_dir, sprint, capsys):
    assert card_add(_add_args(data_dir, sprint.todo, "D", position=1)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["columnId"] == sprint.todo
    assert data["card"]["position"] == 1
    assert _card_titles(data_dir, sprint.board, sprint.todo, capsys) == ["A", "D", "B", "C"]


def test_card_add_text(data_dir, sprint, capsys):
    args = _add_args(data_dir, sprint.doing, "Review", json=False)
    assert card_add(args) == 0
    assert 'Created card "Review" at position 1' in capsys.readouterr().out


def test_card_add_column_not_found(data_dir, capsys):
    with pytest.raises(SystemExit):
        card_add(_add_args(data_dir, "ffff", "x"))
    assert json.loads(capsys.readouterr().err) == {"error": "Column 'ffff' not found."}


def test_card_update(data_dir, sprint, capsys):
    args = _update_args(data_dir, sprint.cards["A"], title="Alpha", label=["green", "blue"], due="2024-07-01")
    assert card_update(args) == 0

    card = json.loads(capsys.readouterr().out)["card"]
    assert card["title"] == "Alpha"
    assert card["labels"] == ["#61bd4f", "#0079bf"]
    assert card["dueDate"] == "2024-07-01"
    assert "updatedAt" in card


def test_card_update_clears(data_dir, sprint, capsys):
    card_update(_update_args(data_dir, sprint.cards["A"], label=["red"], due="2024-07-01"))
    capsys.readouterr()

    assert card_update(_update_args(data_dir, sprint.cards["A"], clear_labels=True, no_due=True)) == 0
    card = json.loads(capsys.readouterr().out)["card"]
    assert card["labels"] == []
    assert card["dueDate"] is None


def test_card_update_position(data_dir, sprint, capsys):
    assert card_update(_update_args(data_dir, sprint.cards["A"], position=3)) == 0
    assert _card_titles(data_dir, sprint.board, sprint.todo, capsys) == ["B", "A", "C"]


def test_card_delete(data_dir, sprint, capsys):
    args = Namespace(data=data_dir, json=False, id=sprint.cards["C"])
    assert card_delete(args) == 0
    assert 'Deleted card "C"' in capsys.readouterr().out
    assert _card_titles(data_dir, sprint.board, sprint.todo, capsys) == ["A", "B"]


def test_card_move(data_dir, sprint, capsys):
    args = Namespace(data=data_dir, json=True, id=sprint.cards["A"], column=sprint.doing, position=None)
    assert card_move(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["columnId"] == sprint.doing
    assert data["card"]["position"] == 0
    assert _card_titles(data_dir, sprint.board, sprint.todo, capsys) == ["B", "C"]


def test_card_move_to_end_of_own_column(data_dir, sprint, capsys):
    args = Namespace(data=data_dir, json=False, id=sprint.cards["A"], column=sprint.todo, position=None)
    assert card_move(args) == 0
    assert "at position 3" in capsys.readouterr().out
    assert _card_titles(data_dir, sprint.board, sprint.todo, capsys) == ["B", "C", "A"]


def test_card_move_column_not_on_board(data_dir, sprint, capsys):
    args = Namespace(data=data_dir, json=False, id=sprint.cards["A"], column="ffff", position=1)
    with pytest.raises(SystemExit):
        card_move(args)
    assert "Column 'ffff' not found" in capsys.readouterr().err
