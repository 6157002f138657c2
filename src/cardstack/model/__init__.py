"""Board persistence: store, column and card operations."""

from cardstack.model.card import CardOps, create_card, find_card, move_card, remove_card, update_card
from cardstack.model.codec import board_from_dict, board_to_dict, dumps, loads
from cardstack.model.column import (
    ColumnOps,
    create_column,
    find_column,
    remove_column,
    reorder_columns,
    update_column,
)
from cardstack.model.index import LocationIndex
from cardstack.model.store import BoardStore

__all__ = [
    "BoardStore",
    "CardOps",
    "ColumnOps",
    "LocationIndex",
    "board_from_dict",
    "board_to_dict",
    "create_card",
    "create_column",
    "dumps",
    "find_card",
    "find_column",
    "loads",
    "move_card",
    "remove_card",
    "remove_column",
    "reorder_columns",
    "update_card",
    "update_column",
]
