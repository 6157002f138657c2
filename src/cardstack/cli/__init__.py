"""CLI argument parser and dispatch for cardstack."""

import argparse

from cardstack.cli.board import board_create, board_delete, board_get, board_list, board_update
from cardstack.cli.card import card_add, card_delete, card_get, card_move, card_update
from cardstack.cli.column import (
    column_add,
    column_delete,
    column_get,
    column_list,
    column_reorder,
    column_update,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--data",
        default=argparse.SUPPRESS,
        help="Data directory (default: $CARDSTACK_DATA_PATH or ./data)",
    )
    common.add_argument("--json", action="store_true", default=argparse.SUPPRESS, help="Machine-readable JSON output")
    common.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Log store activity to stderr"
    )

    parser = argparse.ArgumentParser(
        prog="cardstack",
        description="Kanban boards stored as JSON files",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_list_p = board_verbs.add_parser("list", help="List boards, newest first", parents=[common])
    board_list_p.set_defaults(func=board_list)

    board_get_p = board_verbs.add_parser("get", help="Show a board", parents=[common])
    board_get_p.add_argument("id", help="Board ID")
    board_get_p.set_defaults(func=board_get)

    board_create_p = board_verbs.add_parser("create", help="Create a board", parents=[common])
    board_create_p.add_argument("title", help="Board title")
    board_create_p.add_argument("--color", help="Board colour (#rrggbb or a palette name)")
    board_create_p.set_defaults(func=board_create)

    board_update_p = board_verbs.add_parser("update", help="Change a board", parents=[common])
    board_update_p.add_argument("id", help="Board ID")
    board_update_p.add_argument("--title", help="New title")
    board_update_p.add_argument("--color", help="New colour")
    board_update_p.set_defaults(func=board_update)

    board_delete_p = board_verbs.add_parser("delete", help="Delete a board", parents=[common])
    board_delete_p.add_argument("id", help="Board ID")
    board_delete_p.set_defaults(func=board_delete)

    # board with no verb = list
    board_p.set_defaults(func=board_list)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common])
    col_list_p.add_argument("board", help="Board ID")
    col_list_p.set_defaults(func=column_list)

    col_get_p = col_verbs.add_parser("get", help="Show a column", parents=[common])
    col_get_p.add_argument("board", help="Board ID")
    col_get_p.add_argument("id", help="Column ID")
    col_get_p.set_defaults(func=column_get)

    col_add_p = col_verbs.add_parser("add", help="Create a column", parents=[common])
    col_add_p.add_argument("board", help="Board ID")
    col_add_p.add_argument("title", help="Column title")
    col_add_p.add_argument("--emoji", help="Column emoji")
    col_add_p.add_argument("--position", type=int, help="Position (1-indexed, default: last)")
    col_add_p.set_defaults(func=column_add)

    col_update_p = col_verbs.add_parser("update", help="Change a column", parents=[common])
    col_update_p.add_argument("board", help="Board ID")
    col_update_p.add_argument("id", help="Column ID")
    col_update_p.add_argument("--title", help="New title")
    emoji_group = col_update_p.add_mutually_exclusive_group()
    emoji_group.add_argument("--emoji", help="New emoji")
    emoji_group.add_argument("--no-emoji", action="store_true", help="Remove the emoji")
    col_update_p.add_argument("--position", type=int, help="New position (1-indexed)")
    col_update_p.set_defaults(func=column_update)

    col_delete_p = col_verbs.add_parser("delete", help="Delete a column and its cards", parents=[common])
    col_delete_p.add_argument("board", help="Board ID")
    col_delete_p.add_argument("id", help="Column ID")
    col_delete_p.set_defaults(func=column_delete)

    col_reorder_p = col_verbs.add_parser("reorder", help="Set the column order", parents=[common])
    col_reorder_p.add_argument("board", help="Board ID")
    col_reorder_p.add_argument("ids", nargs="+", help="Every column ID, in the new order")
    col_reorder_p.set_defaults(func=column_reorder)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb")

    card_get_p = card_verbs.add_parser("get", help="Show a card", parents=[common])
    card_get_p.add_argument("id", help="Card ID")
    card_get_p.set_defaults(func=card_get)

    card_add_p = card_verbs.add_parser("add", help="Create a card", parents=[common])
    card_add_p.add_argument("column", help="Column ID")
    card_add_p.add_argument("title", help="Card title")
    card_add_p.add_argument("--description", default="", help="Card description")
    card_add_p.add_argument("--label", action="append", help="Label colour (repeatable)")
    card_add_p.add_argument("--due", help="Due date (YYYY-MM-DD)")
    card_add_p.add_argument("--position", type=int, help="Position in column (1-indexed, default: last)")
    card_add_p.set_defaults(func=card_add)

    card_update_p = card_verbs.add_parser("update", help="Change a card", parents=[common])
    card_update_p.add_argument("id", help="Card ID")
    card_update_p.add_argument("--title", help="New title")
    card_update_p.add_argument("--description", help="New description")
    labels_group = card_update_p.add_mutually_exclusive_group()
    labels_group.add_argument("--label", action="append", help="Replace labels (repeatable)")
    labels_group.add_argument("--clear-labels", action="store_true", help="Remove all labels")
    due_group = card_update_p.add_mutually_exclusive_group()
    due_group.add_argument("--due", help="Due date (YYYY-MM-DD)")
    due_group.add_argument("--no-due", action="store_true", help="Clear the due date")
    card_update_p.add_argument("--position", type=int, help="Position in column (1-indexed)")
    card_update_p.set_defaults(func=card_update)

    card_delete_p = card_verbs.add_parser("delete", help="Delete a card", parents=[common])
    card_delete_p.add_argument("id", help="Card ID")
    card_delete_p.set_defaults(func=card_delete)

    card_move_p = card_verbs.add_parser("move", help="Move a card", parents=[common])
    card_move_p.add_argument("id", help="Card ID")
    card_move_p.add_argument("--column", dest="column", required=True, help="Target column ID")
    card_move_p.add_argument("--position", type=int, help="Position in column (1-indexed, default: last)")
    card_move_p.set_defaults(func=card_move)

    return parser
