"""Convert boards to and from their JSON documents."""

import json
from typing import Any

from cardstack.errors import DecodeError
from cardstack.models import (
    DEFAULT_BOARD_TITLE,
    DEFAULT_CARD_TITLE,
    DEFAULT_COLUMN_TITLE,
    Board,
    Card,
    Column,
)
from cardstack.palette import DEFAULT_BOARD_COLOR

# --- Encoding ---


def card_to_dict(card: Card) -> dict[str, Any]:
    data = {
        "id": card.id,
        "title": card.title,
        "description": card.description,
        "labels": list(card.labels),
        "dueDate": card.due_date,
        "position": card.position,
        "createdAt": card.created_at,
    }
    if card.updated_at is not None:
        data["updatedAt"] = card.updated_at
    return data


def column_to_dict(column: Column) -> dict[str, Any]:
    return {
        "id": column.id,
        "title": column.title,
        "emoji": column.emoji,
        "position": column.position,
        "cards": [card_to_dict(c) for c in column.cards],
    }


def board_to_dict(board: Board) -> dict[str, Any]:
    """Convert a Board to its document form (camelCase keys).

    emoji and dueDate are always present, null when empty; updatedAt
    only once the entity has been changed.
    """
    data: dict[str, Any] = {
        "id": board.id,
        "title": board.title,
        "color": board.color,
        "createdAt": board.created_at,
    }
    if board.updated_at is not None:
        data["updatedAt"] = board.updated_at
    data["columns"] = [column_to_dict(c) for c in board.columns]
    return data


def dumps(board: Board) -> str:
    """Serialize a board as pretty-printed JSON, non-ASCII left as-is."""
    return json.dumps(board_to_dict(board), indent=4, ensure_ascii=False) + "\n"


# --- Decoding ---


def _require(data: Any, kind: str) -> dict:
    if not isinstance(data, dict):
        raise DecodeError(f"{kind} must be an object, got {type(data).__name__}")
    if not isinstance(data.get("id"), str) or not data["id"]:
        raise DecodeError(f"{kind} has no id")
    return data


def _str(data: dict, key: str, default: str | None) -> str | None:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise DecodeError(f"{key} must be a string")
    return value


def _position(data: dict, fallback: int) -> int:
    value = data.get("position")
    if value is None:
        return fallback
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DecodeError(f"position must be an integer, got {value!r}") from None


def _list(data: dict, key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"{key} must be a list")
    return value


def card_from_dict(data: Any, index: int = 0) -> Card:
    data = _require(data, "card")
    labels = _list(data, "labels")
    if not all(isinstance(label, str) for label in labels):
        raise DecodeError("labels must be strings")
    return Card(
        id=data["id"],
        title=_str(data, "title", DEFAULT_CARD_TITLE),
        description=_str(data, "description", ""),
        labels=labels,
        due_date=_str(data, "dueDate", None),
        position=_position(data, index),
        created_at=_str(data, "createdAt", ""),
        updated_at=_str(data, "updatedAt", None),
    )


def column_from_dict(data: Any, index: int = 0) -> Column:
    data = _require(data, "column")
    return Column(
        id=data["id"],
        title=_str(data, "title", DEFAULT_COLUMN_TITLE),
        emoji=_str(data, "emoji", None),
        position=_position(data, index),
        cards=[card_from_dict(c, i) for i, c in enumerate(_list(data, "cards"))],
    )


def board_from_dict(data: Any) -> Board:
    """Build a Board from its document form.

    Missing optional fields take their defaults. Raises DecodeError for
    anything structurally wrong.
    """
    data = _require(data, "board")
    return Board(
        id=data["id"],
        title=_str(data, "title", DEFAULT_BOARD_TITLE),
        color=_str(data, "color", DEFAULT_BOARD_COLOR),
        created_at=_str(data, "createdAt", ""),
        updated_at=_str(data, "updatedAt", None),
        columns=[column_from_dict(c, i) for i, c in enumerate(_list(data, "columns"))],
    )


def loads(text: str) -> Board:
    """Parse a board document. Raises DecodeError on bad JSON or shape."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON: {e}") from e
    return board_from_dict(data)
