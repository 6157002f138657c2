"""In-memory id → location index for columns and cards."""

from __future__ import annotations

from collections.abc import Iterable

from cardstack.models import Board


class LocationIndex:
    """Maps card IDs to (board_id, column_id) and column IDs to board_id.

    Starts empty and unbuilt; the owner fills it with one full scan via
    rebuild() and keeps it current with add_board()/drop_board().
    """

    def __init__(self) -> None:
        self._cards: dict[str, tuple[str, str]] = {}
        self._columns: dict[str, str] = {}
        self._by_board: dict[str, tuple[set[str], set[str]]] = {}
        self.built = False

    def rebuild(self, boards: Iterable[Board]) -> None:
        """Replace the whole index with the given boards."""
        self._cards.clear()
        self._columns.clear()
        self._by_board.clear()
        for board in boards:
            self.add_board(board)
        self.built = True

    def add_board(self, board: Board) -> None:
        """Index a board, replacing whatever was indexed for it before."""
        self.drop_board(board.id)
        column_ids: set[str] = set()
        card_ids: set[str] = set()
        for col in board.columns:
            self._columns[col.id] = board.id
            column_ids.add(col.id)
            for card in col.cards:
                self._cards[card.id] = (board.id, col.id)
                card_ids.add(card.id)
        self._by_board[board.id] = (column_ids, card_ids)

    def drop_board(self, board_id: str) -> None:
        """Forget every entry belonging to board_id."""
        column_ids, card_ids = self._by_board.pop(board_id, (set(), set()))
        for column_id in column_ids:
            if self._columns.get(column_id) == board_id:
                del self._columns[column_id]
        for card_id in card_ids:
            if self._cards.get(card_id, ("",))[0] == board_id:
                del self._cards[card_id]

    def card(self, card_id: str) -> tuple[str, str] | None:
        return self._cards.get(card_id)

    def column(self, column_id: str) -> str | None:
        return self._columns.get(column_id)

    def __len__(self) -> int:
        return len(self._cards) + len(self._columns)
