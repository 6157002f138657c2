"""Shared helpers for CLI command handlers."""

import json
import sys
from pathlib import Path

from cardstack.ids import normalize_id
from cardstack.model.column import find_column
from cardstack.model.store import BoardStore
from cardstack.models import Board, Card, Column


def open_store(args) -> BoardStore:
    """BoardStore for the data directory given by --data."""
    return BoardStore(Path(args.data) / "boards")


def load_board_or_die(store: BoardStore, board_id: str, json_mode: bool) -> Board:
    """Load a board by id. Exit 1 with message if not found."""
    board = store.get(normalize_id(board_id))
    if board is not None:
        return board
    error(f"Board '{board_id}' not found.", json_mode)


def find_column_or_die(board: Board, column_id: str, json_mode: bool) -> Column:
    """Lookup column by id. Exit 1 listing available columns if not found."""
    idx = find_column(board, normalize_id(column_id))
    if idx is not None:
        return board.columns[idx]
    available = [f"  {c.id}  {c.title}" for c in board.columns]
    msg = f"Column '{column_id}' not found. Available:\n" + "\n".join(available)
    error(msg, json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def build_column_summaries(board: Board) -> list[dict]:
    """Build column summary dicts from board."""
    return [
        {
            "id": col.id,
            "title": col.title,
            "emoji": col.emoji,
            "position": col.position,
            "cards": len(col.cards),
        }
        for col in board.columns
    ]


def format_column_line(c: dict, indent: str = "") -> str:
    """Format a column summary dict as a text line."""
    name = f"{c['emoji']} {c['title']}" if c["emoji"] else c["title"]
    return f"{indent}{c['position'] + 1}. {name:<20} {plural(c['cards'], 'card'):<9} {c['id']}"


def format_card_line(card: Card, indent: str = "") -> str:
    """Format a card as a text line with its labels and due date."""
    extras = []
    if card.labels:
        extras.append(" ".join(card.labels))
    if card.due_date:
        extras.append(f"due {card.due_date}")
    suffix = f"  [{', '.join(extras)}]" if extras else ""
    return f"{indent}{card.position + 1}. {card.title}{suffix}  {card.id}"
