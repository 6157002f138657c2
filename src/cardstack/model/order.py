"""Position bookkeeping for ordered columns and cards."""

from typing import Protocol, TypeVar


class Positioned(Protocol):
    position: int


T = TypeVar("T", bound=Positioned)


def reindex(items: list[T]) -> None:
    """Set each item's position to its index in the list."""
    for i, item in enumerate(items):
        item.position = i


def sort_by_position(items: list[T]) -> None:
    """Sort items in place by position, then reindex to 0..N-1.

    The sort is stable: items sharing a position keep their list order.
    """
    items.sort(key=lambda item: item.position)
    reindex(items)


def clamp(position: int, length: int) -> int:
    """Clamp an insertion index into [0, length]."""
    return max(0, min(position, length))


def is_contiguous(items: list[T]) -> bool:
    """True if positions read 0..N-1 in list order."""
    return [item.position for item in items] == list(range(len(items)))
