"""Data models for cardstack boards."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from cardstack.palette import DEFAULT_BOARD_COLOR

DEFAULT_BOARD_TITLE = "Untitled Board"
DEFAULT_COLUMN_TITLE = "New Column"
DEFAULT_CARD_TITLE = "New Card"


class _Unset:
    """Marker for a patch field the caller did not supply."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class Card:
    """A work item inside a column."""

    id: str
    title: str = DEFAULT_CARD_TITLE
    description: str = ""
    labels: list[str] = field(default_factory=list)
    due_date: str | None = None
    position: int = 0
    created_at: str = ""
    updated_at: str | None = None


@dataclass
class Column:
    """An ordered list of cards on a board."""

    id: str
    title: str = DEFAULT_COLUMN_TITLE
    emoji: str | None = None
    position: int = 0
    cards: list[Card] = field(default_factory=list)


@dataclass
class Board:
    """A board document: the unit of persistence."""

    id: str
    title: str = DEFAULT_BOARD_TITLE
    color: str = DEFAULT_BOARD_COLOR
    created_at: str = ""
    updated_at: str | None = None
    columns: list[Column] = field(default_factory=list)

    @property
    def card_count(self) -> int:
        return sum(len(col.cards) for col in self.columns)


@dataclass
class BoardSummary:
    """Board listing entry without its columns and cards."""

    id: str
    title: str
    color: str
    created_at: str
    column_count: int
    card_count: int

    @classmethod
    def of(cls, board: Board) -> BoardSummary:
        return cls(
            id=board.id,
            title=board.title,
            color=board.color,
            created_at=board.created_at,
            column_count=len(board.columns),
            card_count=board.card_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "color": self.color,
            "createdAt": self.created_at,
            "columnCount": self.column_count,
            "cardCount": self.card_count,
        }


@dataclass
class CardLocation:
    """A card together with the IDs of the board and column holding it."""

    card: Card
    board_id: str
    column_id: str


# --- Patches: partial updates, UNSET fields are left alone ---


def _patch_from_fields(cls, data: Mapping[str, Any], keys: dict[str, str], nullable: set[str]):
    """Build a patch from a camelCase field map.

    Unknown keys are ignored. None counts as absent unless the field is
    nullable, where it means "clear".
    """
    kwargs = {}
    for key, attr in keys.items():
        if key not in data:
            continue
        value = data[key]
        if value is None and attr not in nullable:
            continue
        kwargs[attr] = value
    return cls(**kwargs)


@dataclass
class BoardPatch:
    """Changes to a board's own fields."""

    title: str = UNSET
    color: str = UNSET
    columns: list[Column] = UNSET

    @classmethod
    def from_fields(cls, data: Mapping[str, Any]) -> BoardPatch:
        patch = _patch_from_fields(cls, data, {"title": "title", "color": "color"}, set())
        if data.get("columns") is not None:
            from cardstack.model.codec import column_from_dict

            patch.columns = [column_from_dict(c) for c in data["columns"]]
        return patch


@dataclass
class ColumnPatch:
    """Changes to a column. emoji=None removes the emoji."""

    title: str = UNSET
    emoji: str | None = UNSET
    position: int = UNSET

    @classmethod
    def from_fields(cls, data: Mapping[str, Any]) -> ColumnPatch:
        return _patch_from_fields(
            cls,
            data,
            {"title": "title", "emoji": "emoji", "position": "position"},
            {"emoji"},
        )


@dataclass
class CardPatch:
    """Changes to a card. due_date=None clears it, description=None empties it."""

    title: str = UNSET
    description: str | None = UNSET
    labels: list[str] = UNSET
    due_date: str | None = UNSET
    position: int = UNSET

    @classmethod
    def from_fields(cls, data: Mapping[str, Any]) -> CardPatch:
        return _patch_from_fields(
            cls,
            data,
            {
                "title": "title",
                "description": "description",
                "labels": "labels",
                "dueDate": "due_date",
                "position": "position",
            },
            {"description", "due_date"},
        )


def changed_fields(patch) -> list[str]:
    """Names of the fields a patch actually sets."""
    return [f.name for f in fields(patch) if getattr(patch, f.name) is not UNSET]
