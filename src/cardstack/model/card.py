"""Card mutation operations for cardstack boards."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from cardstack.model.column import column_location, find_column
from cardstack.model.order import clamp, reindex, sort_by_position
from cardstack.model.store import BoardStore
from cardstack.models import (
    DEFAULT_CARD_TITLE,
    UNSET,
    Board,
    Card,
    CardLocation,
    CardPatch,
    Column,
    changed_fields,
)
from cardstack.text import normalize_due_date, normalize_labels, sanitize_title

logger = logging.getLogger(__name__)


def find_card(board: Board, card_id: str) -> tuple[int, int] | None:
    """(column_index, card_index) of card_id within the board, or None."""
    for ci, col in enumerate(board.columns):
        for ki, card in enumerate(col.cards):
            if card.id == card_id:
                return ci, ki
    return None


def create_card(column: Column, card_id: str, patch: CardPatch, timestamp: str) -> Card:
    """Add a new card to a column, last unless the patch gives a position."""
    card = Card(
        id=card_id,
        title=sanitize_title(patch.title or None, DEFAULT_CARD_TITLE),
        description=patch.description or "",
        labels=normalize_labels(patch.labels or []),
        due_date=normalize_due_date(patch.due_date or None),
        position=int(patch.position) if patch.position is not UNSET else len(column.cards),
        created_at=timestamp,
    )
    column.cards.append(card)
    sort_by_position(column.cards)
    return card


def update_card(column: Column, card: Card, patch: CardPatch, timestamp: str) -> None:
    """Merge patch fields into a card held by column."""
    if patch.title is not UNSET:
        card.title = sanitize_title(patch.title, card.title)
    if patch.description is not UNSET:
        card.description = patch.description or ""
    if patch.labels is not UNSET:
        card.labels = normalize_labels(patch.labels or [])
    if patch.due_date is not UNSET:
        card.due_date = normalize_due_date(patch.due_date)
    if patch.position is not UNSET:
        card.position = int(patch.position)
        sort_by_position(column.cards)
    card.updated_at = timestamp


def remove_card(board: Board, card_id: str) -> Card | None:
    """Take a card out of its column and renumber the rest."""
    loc = find_card(board, card_id)
    if loc is None:
        return None
    cards = board.columns[loc[0]].cards
    card = cards.pop(loc[1])
    reindex(cards)
    return card


def move_card(board: Board, card_id: str, target_column_id: str, position: int, timestamp: str) -> bool:
    """Move a card to target_column_id at position.

    The position is clamped against the target column after the card has
    left its source, so a same-column move past the end lands last.
    Returns False, leaving the board alone, if either id is unknown.
    """
    loc = find_card(board, card_id)
    target_idx = find_column(board, target_column_id)
    if loc is None or target_idx is None:
        return False

    source = board.columns[loc[0]]
    card = source.cards.pop(loc[1])
    reindex(source.cards)

    target = board.columns[target_idx]
    target.cards.insert(clamp(position, len(target.cards)), card)
    card.updated_at = timestamp
    reindex(target.cards)
    return True


class CardOps:
    """Card operations. Cards are addressed by id alone; the owning
    board and column are resolved through the store's location index."""

    def __init__(self, store: BoardStore) -> None:
        self.store = store

    @contextmanager
    def _card(self, card_id: str) -> Iterator[tuple[Board, int, int] | None]:
        def locate(refresh: bool) -> str | None:
            hit = self.store.locate_card(card_id, refresh)
            return hit[0] if hit else None

        with self.store.locked_lookup(locate, lambda board: find_card(board, card_id)) as found:
            yield found

    @contextmanager
    def _column(self, column_id: str) -> Iterator[tuple[Board, int] | None]:
        with self.store.locked_lookup(
            lambda refresh: self.store.locate_column(column_id, refresh),
            lambda board: column_location(board, column_id),
        ) as found:
            yield found

    def find_card_location(self, card_id: str) -> tuple[Board, int, int] | None:
        """Resolve a card id to (board, column_index, card_index)."""
        with self._card(card_id) as found:
            return found

    def find_column_location(self, column_id: str) -> tuple[Board, int] | None:
        """Resolve a column id to (board, column_index)."""
        with self._column(column_id) as found:
            return found

    def create(self, column_id: str, patch: CardPatch | None = None) -> CardLocation | None:
        """Create a card in column_id. None if the column does not exist."""
        with self._column(column_id) as found:
            if found is None:
                return None
            board, ci = found
            card = create_card(board.columns[ci], self.store.new_id(), patch or CardPatch(), self.store.stamp(board))
            self.store.save(board)
        logger.debug("added card %s to column %s", card.id, column_id)
        return CardLocation(card=card, board_id=board.id, column_id=column_id)

    def get(self, card_id: str) -> CardLocation | None:
        found = self.find_card_location(card_id)
        if found is None:
            return None
        board, ci, ki = found
        col = board.columns[ci]
        return CardLocation(card=col.cards[ki], board_id=board.id, column_id=col.id)

    def update(self, card_id: str, patch: CardPatch) -> bool:
        """Change a card. False if it does not exist."""
        with self._card(card_id) as found:
            if found is None:
                return False
            board, ci, ki = found
            col = board.columns[ci]
            update_card(col, col.cards[ki], patch, self.store.stamp(board))
            self.store.save(board)
        logger.debug("updated card %s: %s", card_id, ", ".join(changed_fields(patch)))
        return True

    def delete(self, card_id: str) -> bool:
        """Delete a card. False if it does not exist."""
        with self._card(card_id) as found:
            if found is None:
                return False
            board = found[0]
            remove_card(board, card_id)
            self.store.stamp(board)
            self.store.save(board)
        return True

    def move(self, card_id: str, target_column_id: str, position: int = 0) -> bool:
        """Move a card to another column (or within its own) of the same board.

        False if the card is unknown or the target column is not on the
        card's board. The board is saved once.
        """
        with self._card(card_id) as found:
            if found is None:
                return False
            board = found[0]
            if not move_card(board, card_id, target_column_id, int(position), self.store.stamp(board)):
                return False
            self.store.save(board)
        logger.debug("moved card %s to column %s", card_id, target_column_id)
        return True
