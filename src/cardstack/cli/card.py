"""Handlers for 'cardstack card' commands."""

from cardstack.cli._common import (
    error,
    find_column_or_die,
    load_board_or_die,
    open_store,
    output_json,
    output_result,
)
from cardstack.ids import normalize_id
from cardstack.model.card import CardOps
from cardstack.model.codec import card_to_dict
from cardstack.models import CardLocation, CardPatch


def _location_or_die(ops: CardOps, card_id: str, json_mode: bool) -> CardLocation:
    """Resolve a card id. Exit 1 if not found."""
    location = ops.get(normalize_id(card_id))
    if location is not None:
        return location
    error(f"Card '{card_id}' not found.", json_mode)


def _location_dict(location: CardLocation) -> dict:
    return {
        "card": card_to_dict(location.card),
        "boardId": location.board_id,
        "columnId": location.column_id,
    }


def card_get(args) -> int:
    """Show a card."""
    ops = CardOps(open_store(args))
    location = _location_or_die(ops, args.id, args.json)
    card = location.card

    if args.json:
        output_json(_location_dict(location))
    else:
        print(card.title)
        if card.labels:
            print(f"labels: {' '.join(card.labels)}")
        if card.due_date:
            print(f"due: {card.due_date}")
        if card.description:
            print()
            print(card.description)

    return 0


def card_add(args) -> int:
    """Create a new card in a column."""
    ops = CardOps(open_store(args))

    patch = CardPatch(title=args.title, description=args.description)
    if args.label:
        patch.labels = args.label
    if args.due is not None:
        patch.due_date = args.due
    # CLI uses 1-indexed positions, model uses 0-indexed
    if args.position is not None:
        patch.position = args.position - 1

    location = ops.create(normalize_id(args.column), patch)
    if location is None:
        error(f"Column '{args.column}' not found.", args.json)
    card = location.card

    output_result(
        _location_dict(location),
        f'Created card "{card.title}" at position {card.position + 1} ({card.id})',
        args.json,
    )

    return 0


def card_update(args) -> int:
    """Change a card's fields."""
    ops = CardOps(open_store(args))
    card_id = _location_or_die(ops, args.id, args.json).card.id

    patch = CardPatch()
    if args.title is not None:
        patch.title = args.title
    if args.description is not None:
        patch.description = args.description
    if args.clear_labels:
        patch.labels = []
    elif args.label:
        patch.labels = args.label
    if args.no_due:
        patch.due_date = None
    elif args.due is not None:
        patch.due_date = args.due
    if args.position is not None:
        patch.position = args.position - 1

    if not ops.update(card_id, patch):
        error(f"Card '{args.id}' not found.", args.json)
    location = ops.get(card_id)

    output_result(_location_dict(location), f'Updated card "{location.card.title}"', args.json)

    return 0


def card_delete(args) -> int:
    """Delete a card."""
    ops = CardOps(open_store(args))
    card = _location_or_die(ops, args.id, args.json).card

    if not ops.delete(card.id):
        error(f"Card '{args.id}' not found.", args.json)

    output_result({"id": card.id, "deleted": True}, f'Deleted card "{card.title}"', args.json)

    return 0


def card_move(args) -> int:
    """Move a card to a column of the same board."""
    store = open_store(args)
    ops = CardOps(store)
    location = _location_or_die(ops, args.id, args.json)
    board = load_board_or_die(store, location.board_id, args.json)
    target = find_column_or_die(board, args.column, args.json)

    position = args.position - 1 if args.position is not None else len(target.cards)
    if not ops.move(location.card.id, target.id, position):
        error(f"Card '{args.id}' could not be moved.", args.json)
    location = ops.get(location.card.id)

    output_result(
        _location_dict(location),
        f'Moved card "{location.card.title}" to {target.title} at position {location.card.position + 1}',
        args.json,
    )

    return 0
