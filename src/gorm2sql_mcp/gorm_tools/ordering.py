"""Ordering helpers for presenting results by source line."""

from __future__ import annotations

from collections.abc import Iterable


def sort_ints(nums: Iterable[int], ascending: bool = True) -> list[int]:  # noqa: FBT001, FBT002
    """Return a new sorted list; the input is left untouched.

    Example:
        >>> sort_ints([3, 1, 2])
        [1, 2, 3]
        >>> sort_ints([3, 1, 2], ascending=False)
        [3, 2, 1]
    """
    return sorted(nums, reverse=not ascending)
