"""Chronological ordering of resolved entries."""

from typing import Sequence, TypeVar

T = TypeVar("T")

UNKNOWN = 0


def sort_entries(items: Sequence[tuple[T, int]], descending: bool = True) -> list[T]:
    """Order items by timestamp.

    Unknown timestamps (0) always sit at the oldest end: last when
    descending, first when ascending, even next to dates before 1970.
    The sort is stable in both directions: items with equal timestamps keep
    their input order, so repeated passes over an unchanged list never
    reshuffle ties.
    """
    if descending:
        ordered = sorted(items, key=lambda pair: (pair[1] == UNKNOWN, -pair[1]))
    else:
        ordered = sorted(items, key=lambda pair: (pair[1] != UNKNOWN, pair[1]))
    return [item for item, _ts in ordered]
