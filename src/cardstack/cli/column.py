"""Handlers for 'cardstack column' commands."""

from cardstack.cli._common import (
    build_column_summaries,
    error,
    find_column_or_die,
    format_card_line,
    format_column_line,
    load_board_or_die,
    open_store,
    output_json,
    output_result,
)
from cardstack.ids import normalize_id
from cardstack.model.codec import column_to_dict
from cardstack.model.column import ColumnOps
from cardstack.models import ColumnPatch


def column_list(args) -> int:
    """List the columns of a board."""
    store = open_store(args)
    board = load_board_or_die(store, args.board, args.json)

    items = build_column_summaries(board)

    if args.json:
        output_json(items)
    else:
        for c in items:
            print(format_column_line(c))

    return 0


def column_get(args) -> int:
    """Show a column and its cards."""
    store = open_store(args)
    board = load_board_or_die(store, args.board, args.json)
    col = find_column_or_die(board, args.id, args.json)

    if args.json:
        data = column_to_dict(col)
        data["boardId"] = board.id
        output_json(data)
    else:
        print(f"{col.emoji} {col.title}" if col.emoji else col.title)
        for card in col.cards:
            print(format_card_line(card, indent="  "))

    return 0


def column_add(args) -> int:
    """Create a new column."""
    store = open_store(args)
    ops = ColumnOps(store)
    board_id = normalize_id(args.board)

    patch = ColumnPatch(title=args.title)
    if args.emoji is not None:
        patch.emoji = args.emoji
    # CLI uses 1-indexed positions, model uses 0-indexed
    if args.position is not None:
        patch.position = args.position - 1

    column_id = ops.add(board_id, patch)
    if column_id is None:
        error(f"Board '{args.board}' not found.", args.json)
    col = ops.get(board_id, column_id)

    output_result(
        {"id": column_id, "title": col.title, "position": col.position + 1},
        f'Created column "{col.title}" at position {col.position + 1} ({column_id})',
        args.json,
    )

    return 0


def column_update(args) -> int:
    """Rename, re-emoji or move a column."""
    store = open_store(args)
    ops = ColumnOps(store)
    board = load_board_or_die(store, args.board, args.json)
    col = find_column_or_die(board, args.id, args.json)

    patch = ColumnPatch()
    if args.title is not None:
        patch.title = args.title
    if args.no_emoji:
        patch.emoji = None
    elif args.emoji is not None:
        patch.emoji = args.emoji
    if args.position is not None:
        patch.position = args.position - 1

    if not ops.update(board.id, col.id, patch):
        error(f"Column '{args.id}' not found.", args.json)
    col = ops.get(board.id, col.id)

    output_result(
        {"id": col.id, "title": col.title, "emoji": col.emoji, "position": col.position + 1},
        f'Updated column "{col.title}"',
        args.json,
    )

    return 0


def column_delete(args) -> int:
    """Delete a column with all its cards."""
    store = open_store(args)
    board = load_board_or_die(store, args.board, args.json)
    col = find_column_or_die(board, args.id, args.json)

    ColumnOps(store).delete(board.id, col.id)

    output_result(
        {"id": col.id, "title": col.title, "cards": len(col.cards)},
        f'Deleted column "{col.title}" and {len(col.cards)} card(s)',
        args.json,
    )

    return 0


def column_reorder(args) -> int:
    """Set the order of all columns of a board."""
    store = open_store(args)
    board = load_board_or_die(store, args.board, args.json)

    ColumnOps(store).reorder(board.id, [normalize_id(i) for i in args.ids])

    board = store.get(board.id)
    items = build_column_summaries(board)

    if args.json:
        output_json(items)
    else:
        for c in items:
            print(format_column_line(c))

    return 0
