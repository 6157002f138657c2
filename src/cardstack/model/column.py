"""Column mutation operations for cardstack boards."""

import logging

from cardstack.errors import ValidationError
from cardstack.model.order import reindex, sort_by_position
from cardstack.model.store import BoardStore
from cardstack.models import (
    DEFAULT_COLUMN_TITLE,
    UNSET,
    Board,
    Column,
    ColumnPatch,
    changed_fields,
)
from cardstack.text import sanitize_title

logger = logging.getLogger(__name__)


def clean_emoji(value: str | None) -> str | None:
    """Strip an emoji value; blank means no emoji."""
    if value is None:
        return None
    return value.strip() or None


def find_column(board: Board, column_id: str) -> int | None:
    """Index of the column with column_id, or None."""
    for i, col in enumerate(board.columns):
        if col.id == column_id:
            return i
    return None


def column_location(board: Board, column_id: str) -> tuple[int] | None:
    """(column_index,) for column_id, the shape BoardStore.locked_lookup expects."""
    idx = find_column(board, column_id)
    return None if idx is None else (idx,)


def create_column(board: Board, column_id: str, patch: ColumnPatch) -> Column:
    """Add a new column to the board.

    Without an explicit position the column goes last. Columns are
    then renumbered; an explicit position that ties with an existing
    column lands after it.
    """
    col = Column(
        id=column_id,
        title=sanitize_title(patch.title or None, DEFAULT_COLUMN_TITLE),
        emoji=clean_emoji(patch.emoji) if patch.emoji is not UNSET else None,
        position=int(patch.position) if patch.position is not UNSET else len(board.columns),
    )
    board.columns.append(col)
    sort_by_position(board.columns)
    return col


def update_column(board: Board, column: Column, patch: ColumnPatch) -> None:
    """Merge patch fields into a column and renumber the board's columns."""
    if patch.title is not UNSET:
        column.title = sanitize_title(patch.title, column.title)
    if patch.emoji is not UNSET:
        column.emoji = clean_emoji(patch.emoji)
    if patch.position is not UNSET:
        column.position = int(patch.position)
    sort_by_position(board.columns)


def remove_column(board: Board, column_id: str) -> Column | None:
    """Remove a column with all its cards. Returns it, or None if absent."""
    idx = find_column(board, column_id)
    if idx is None:
        return None
    col = board.columns.pop(idx)
    reindex(board.columns)
    return col


def reorder_columns(board: Board, column_ids: list[str]) -> None:
    """Arrange columns in the order of column_ids.

    column_ids must name every column of the board exactly once,
    otherwise ValidationError is raised and the board is untouched.
    """
    by_id = {col.id: col for col in board.columns}
    if len(column_ids) != len(by_id) or set(column_ids) != set(by_id):
        missing = [cid for cid in by_id if cid not in column_ids]
        unknown = [cid for cid in column_ids if cid not in by_id]
        details = []
        if missing:
            details.append(f"missing {', '.join(missing)}")
        if unknown:
            details.append(f"unknown {', '.join(unknown)}")
        if not details:
            details.append("duplicate ids")
        raise ValidationError("Column order must list every column once: " + "; ".join(details))
    board.columns = [by_id[cid] for cid in column_ids]
    reindex(board.columns)


class ColumnOps:
    """Column operations that load, change and save a board."""

    def __init__(self, store: BoardStore) -> None:
        self.store = store

    def add(self, board_id: str, patch: ColumnPatch | None = None) -> str | None:
        """Create a column. Returns its id, or None if the board is missing."""
        with self.store.locked(board_id) as board:
            if board is None:
                return None
            col = create_column(board, self.store.new_id(), patch or ColumnPatch())
            self.store.stamp(board)
            self.store.save(board)
        logger.debug("added column %s to board %s", col.id, board_id)
        return col.id

    def update(self, board_id: str, column_id: str, patch: ColumnPatch) -> bool:
        """Change a column. False if the board or column is missing."""
        with self.store.locked(board_id) as board:
            if board is None:
                return False
            idx = find_column(board, column_id)
            if idx is None:
                return False
            update_column(board, board.columns[idx], patch)
            self.store.stamp(board)
            self.store.save(board)
        logger.debug("updated column %s: %s", column_id, ", ".join(changed_fields(patch)))
        return True

    def delete(self, board_id: str, column_id: str) -> bool:
        """Delete a column and its cards. False if the board or column is missing."""
        with self.store.locked(board_id) as board:
            if board is None or remove_column(board, column_id) is None:
                return False
            self.store.stamp(board)
            self.store.save(board)
        return True

    def reorder(self, board_id: str, column_ids: list[str]) -> bool:
        """Put the board's columns in the given order. False if the board is missing."""
        with self.store.locked(board_id) as board:
            if board is None:
                return False
            reorder_columns(board, list(column_ids))
            self.store.stamp(board)
            self.store.save(board)
        return True

    def get(self, board_id: str, column_id: str) -> Column | None:
        board = self.store.get(board_id)
        if board is None:
            return None
        idx = find_column(board, column_id)
        return board.columns[idx] if idx is not None else None

    def find_board(self, column_id: str) -> Board | None:
        """Load the board that holds column_id, or None."""
        with self.store.locked_lookup(
            lambda refresh: self.store.locate_column(column_id, refresh),
            lambda board: column_location(board, column_id),
        ) as found:
            return found[0] if found else None
