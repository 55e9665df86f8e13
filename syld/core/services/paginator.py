"""
Paginator — stable windows over an ordered project list.

A pure view: the input is never copied into a new order or mutated.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def _check(limit: int, offset: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")


def page(items: Sequence[T], limit: int = 0, offset: int = 0) -> list[T]:
    """Return ``items[offset:offset + limit]``.

    ``limit == 0`` means everything from ``offset`` to the end. An
    offset past the end gives an empty list.
    """
    _check(limit, offset)
    if offset >= len(items):
        return []
    end = len(items) if limit == 0 else offset + limit
    return list(items[offset:end])


def remaining(items: Sequence[T], limit: int = 0, offset: int = 0) -> int:
    """How many items come after the page selected by ``limit``/``offset``."""
    _check(limit, offset)
    if limit == 0:
        return 0
    return max(len(items) - offset - limit, 0)
