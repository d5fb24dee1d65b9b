from __future__ import annotations

from typing import Callable, Hashable, Sequence, TypeVar

T = TypeVar("T")


def assign_positions_with_ties(
    items: Sequence[T],
    value: Callable[[T], Hashable],
) -> list[tuple[int, T]]:
    """Pair pre-sorted items with their 1-based positions.

    Items with an equal value share a position and the next distinct value
    takes its sort position, so three items where the first two tie are
    placed 1, 1, 3.
    """
    ranked: list[tuple[int, T]] = []
    position = 0
    previous: Hashable = None
    for index, item in enumerate(items, start=1):
        current = value(item)
        if index == 1 or current != previous:
            position = index
        ranked.append((position, item))
        previous = current
    return ranked
