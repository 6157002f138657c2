"""Handlers for 'cardstack board' commands."""

from cardstack.cli._common import (
    build_column_summaries,
    error,
    format_card_line,
    format_column_line,
    load_board_or_die,
    open_store,
    output_json,
    output_result,
    plural,
)
from cardstack.ids import normalize_id
from cardstack.model.codec import board_to_dict
from cardstack.models import BoardPatch


def board_list(args) -> int:
    """List boards, newest first."""
    store = open_store(args)
    summaries = store.get_all()

    if args.json:
        output_json([s.to_dict() for s in summaries])
    else:
        for s in summaries:
            counts = f"{plural(s.column_count, 'column')}, {plural(s.card_count, 'card')}"
            print(f"{s.id}  {s.title:<20} {counts}")

    return 0


def board_get(args) -> int:
    """Show a board with its columns and cards."""
    store = open_store(args)
    board = load_board_or_die(store, args.id, args.json)

    if args.json:
        output_json(board_to_dict(board))
    else:
        print(f"{board.title}  ({board.color})")
        for summary, col in zip(build_column_summaries(board), board.columns):
            print(format_column_line(summary, indent="  "))
            for card in col.cards:
                print(format_card_line(card, indent="      "))

    return 0


def board_create(args) -> int:
    """Create a new board."""
    store = open_store(args)
    patch = BoardPatch(title=args.title)
    if args.color is not None:
        patch.color = args.color

    board_id = store.create(patch)
    board = store.get(board_id)

    output_result(
        {"id": board_id, "title": board.title, "color": board.color},
        f'Created board "{board.title}" ({board_id})',
        args.json,
    )

    return 0


def board_update(args) -> int:
    """Change a board's title or colour."""
    store = open_store(args)
    board_id = normalize_id(args.id)
    patch = BoardPatch()
    if args.title is not None:
        patch.title = args.title
    if args.color is not None:
        patch.color = args.color

    if not store.update(board_id, patch):
        error(f"Board '{args.id}' not found.", args.json)
    board = store.get(board_id)

    output_result(
        {"id": board_id, "title": board.title, "color": board.color},
        f'Updated board "{board.title}"',
        args.json,
    )

    return 0


def board_delete(args) -> int:
    """Delete a board and everything on it."""
    store = open_store(args)
    board_id = normalize_id(args.id)

    if not store.delete(board_id):
        error(f"Board '{args.id}' not found.", args.json)

    output_result({"id": board_id, "deleted": True}, f"Deleted board {board_id}", args.json)

    return 0
