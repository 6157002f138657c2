"""Board documents on disk, one JSON file per board."""

from __future__ import annotations

import fcntl
import logging
import os
import tempfile
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO, TypeVar

from cardstack.errors import DecodeError, PersistenceError, ValidationError
from cardstack.ids import is_valid_id, new_id
from cardstack.model import codec
from cardstack.model.index import LocationIndex
from cardstack.model.order import sort_by_position
from cardstack.models import (
    DEFAULT_BOARD_TITLE,
    UNSET,
    Board,
    BoardPatch,
    BoardSummary,
    changed_fields,
)
from cardstack.palette import DEFAULT_BOARD_COLOR, normalize_color
from cardstack.text import normalize_due_date, normalize_labels, now, sanitize_title

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BoardStore:
    """Owns the directory of board documents.

    Every board lives in <root>/<id>.json. Writers take an exclusive
    flock on a hidden per-board lock file; lock() is re-entrant within a
    thread so an operation can hold it across load, mutate and save.
    """

    def __init__(
        self,
        root: str | Path,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], str] = now,
    ) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.new_id = id_factory
        self.now = clock
        self.index = LocationIndex()
        self._local = threading.local()

    # --- Paths and locking ---

    def path_for(self, board_id: str) -> Path:
        return self.root / f"{board_id}.json"

    def _lock_path(self, board_id: str) -> Path:
        return self.root / f".{board_id}.lock"

    def _held_locks(self) -> set[str]:
        held = getattr(self._local, "held", None)
        if held is None:
            held = self._local.held = set()
        return held

    def _acquire(self, board_id: str) -> TextIO:
        """Open and flock the lock file, retrying if it was unlinked while we waited."""
        path = self._lock_path(board_id)
        while True:
            try:
                fh = open(path, "a")
            except OSError as e:
                raise PersistenceError(f"could not lock board {board_id}: {e}") from e
            try:
                fcntl.flock(fh, fcntl.LOCK_EX)
                current = os.stat(path)
            except FileNotFoundError:
                fh.close()
                continue
            except BaseException:
                fh.close()
                raise
            if os.path.samestat(os.fstat(fh.fileno()), current):
                return fh
            fh.close()

    def _forget_lock(self, board_id: str) -> None:
        """Remove the lock file of a board that has no document. The lock must be held."""
        if not self.path_for(board_id).exists():
            self._lock_path(board_id).unlink(missing_ok=True)

    @contextmanager
    def lock(self, board_id: str) -> Iterator[None]:
        """Hold the exclusive lock for board_id.

        Lock files are only ever unlinked by their holder, so a waiter
        that wakes up on an unlinked file drops it and locks the new one.
        """
        if not is_valid_id(board_id):
            raise ValidationError(f"Invalid board id {board_id!r}")
        held = self._held_locks()
        if board_id in held:
            yield
            return
        with self._acquire(board_id) as fh:
            held.add(board_id)
            try:
                yield
            finally:
                held.discard(board_id)
                fcntl.flock(fh, fcntl.LOCK_UN)

    @contextmanager
    def locked(self, board_id: str) -> Iterator[Board | None]:
        """Lock board_id and yield it loaded, or None if there is no such board.

        A missing board is reported without creating a lock file for it.
        """
        if not is_valid_id(board_id) or not self.path_for(board_id).exists():
            yield None
            return
        with self.lock(board_id):
            board = self.get(board_id)
            if board is None:
                self._forget_lock(board_id)
            yield board

    # --- Reading ---

    def _read(self, path: Path) -> Board | None:
        """Load one document, or None if it is missing or unreadable."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("cannot read %s: %s", path.name, e)
            return None
        try:
            board = codec.loads(text)
        except DecodeError as e:
            logger.warning("skipping malformed board %s: %s", path.name, e)
            return None
        if board.id != path.stem:
            logger.warning("skipping %s: it holds board %s", path.name, board.id)
            return None
        return board

    def boards(self) -> Iterator[Board]:
        """Yield every readable board, in file name order."""
        for path in sorted(self.root.glob("*.json")):
            board = self._read(path)
            if board is not None:
                yield board

    def get(self, board_id: str) -> Board | None:
        """Load a board by id. None if absent or undecodable."""
        if not is_valid_id(board_id):
            return None
        return self._read(self.path_for(board_id))

    def get_all(self) -> list[BoardSummary]:
        """Summaries of all boards, newest first.

        The scan also refreshes the location index.
        """
        boards = list(self.boards())
        self.index.rebuild(boards)
        summaries = [BoardSummary.of(b) for b in boards]
        summaries.sort(key=lambda s: s.created_at, reverse=True)
        return summaries

    # --- Writing ---

    def stamp(self, board: Board) -> str:
        """Set board.updated_at to now and return the timestamp."""
        board.updated_at = self.now()
        return board.updated_at

    def save(self, board: Board) -> None:
        """Overwrite the board's document with the full board.

        The JSON goes to a temporary file beside the target which is then
        renamed over it, so readers never see a half-written document.
        """
        text = codec.dumps(board)
        path = self.path_for(board.id)
        with self.lock(board.id):
            try:
                fd, tmp = tempfile.mkstemp(dir=self.root, prefix=f".{board.id}.", suffix=".tmp")
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        fh.write(text)
                        fh.flush()
                        os.fsync(fh.fileno())
                    os.chmod(tmp, 0o644)
                    os.replace(tmp, path)
                except BaseException:
                    Path(tmp).unlink(missing_ok=True)
                    raise
            except OSError as e:
                raise PersistenceError(f"could not save board {board.id}: {e}") from e
            if self.index.built:
                self.index.add_board(board)

    def create(self, patch: BoardPatch | None = None) -> str:
        """Create an empty board and return its id.

        Columns in the patch are ignored; add them with ColumnOps.
        """
        patch = patch or BoardPatch()
        board = Board(
            id=self.new_id(),
            title=sanitize_title(patch.title or None, DEFAULT_BOARD_TITLE),
            color=normalize_color(patch.color) if patch.color is not UNSET else DEFAULT_BOARD_COLOR,
            created_at=self.now(),
        )
        self.save(board)
        logger.debug("created board %s", board.id)
        return board.id

    def update(self, board_id: str, patch: BoardPatch) -> bool:
        """Apply a patch to a board. False if the board does not exist.

        A blank title leaves the current one in place. Replacement
        columns are sorted and renumbered along with their cards, whose
        labels and due dates are normalized as CardOps writes them.
        """
        with self.locked(board_id) as board:
            if board is None:
                return False
            if patch.title is not UNSET:
                board.title = sanitize_title(patch.title, board.title)
            if patch.color is not UNSET:
                board.color = normalize_color(patch.color)
            if patch.columns is not UNSET:
                board.columns = list(patch.columns)
                sort_by_position(board.columns)
                for col in board.columns:
                    sort_by_position(col.cards)
                    for card in col.cards:
                        card.labels = normalize_labels(card.labels)
                        card.due_date = normalize_due_date(card.due_date)
            self.stamp(board)
            self.save(board)
        logger.debug("updated board %s: %s", board_id, ", ".join(changed_fields(patch)))
        return True

    def delete(self, board_id: str) -> bool:
        """Remove a board document. False if it did not exist."""
        if not is_valid_id(board_id) or not self.path_for(board_id).exists():
            return False
        with self.lock(board_id):
            try:
                self.path_for(board_id).unlink()
            except FileNotFoundError:
                deleted = False
            except OSError as e:
                raise PersistenceError(f"could not delete board {board_id}: {e}") from e
            else:
                deleted = True
                logger.debug("deleted board %s", board_id)
            self.index.drop_board(board_id)
            self._forget_lock(board_id)
        return deleted

    # --- Location resolution ---

    def rebuild_index(self) -> None:
        """Rescan every document into the location index."""
        logger.debug("rebuilding location index")
        self.index.rebuild(self.boards())

    def _lookup(self, lookup: Callable[[], T | None], refresh: bool) -> T | None:
        if refresh or not self.index.built:
            self.rebuild_index()
            return lookup()
        hit = lookup()
        if hit is None:
            # another process may have written it since the last scan
            self.rebuild_index()
            hit = lookup()
        return hit

    def locate_card(self, card_id: str, refresh: bool = False) -> tuple[str, str] | None:
        """(board_id, column_id) holding card_id, or None."""
        return self._lookup(lambda: self.index.card(card_id), refresh)

    def locate_column(self, column_id: str, refresh: bool = False) -> str | None:
        """board_id holding column_id, or None."""
        return self._lookup(lambda: self.index.column(column_id), refresh)

    @contextmanager
    def locked_lookup(
        self,
        locate: Callable[[bool], str | None],
        find: Callable[[Board], tuple | None],
    ) -> Iterator[tuple | None]:
        """Lock and load the board that locate() names.

        Yields (board, *find(board)) with the board's lock held, or None
        when nothing matches. An index hit that the stored board no
        longer agrees with is retried once after a full rescan.
        """
        for refresh in (False, True):
            board_id = locate(refresh)
            if board_id is None:
                break
            with self.locked(board_id) as board:
                found = find(board) if board is not None else None
                if found is not None:
                    yield (board, *found)
                    return
            logger.debug("stale index entry for board %s", board_id)
        yield None
