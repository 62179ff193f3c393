"""Geometry of the active heads as reported by Xinerama."""

from __future__ import annotations

from typing import Iterable

from xgbkit.core import XUtil
from xgbkit.rects import Rect


def sort_heads(heads: Iterable[Rect]) -> list[Rect]:
    """Return the heads ordered left to right, then top to bottom."""
    return sorted(heads, key=lambda head: (head.x, head.y))


def physical_heads(xu: XUtil) -> list[Rect]:
    """Return the unique heads in physical order.

    The connection's ``query_screens()`` yields ``(x, y, width, height)``
    tuples. Heads sharing an ``(x, y)`` origin are clones and only the first
    is kept. Errors from the query propagate.
    """
    heads: list[Rect] = []
    seen: set[tuple[int, int]] = set()
    for x, y, width, height in xu.conn.query_screens():
        origin = (int(x), int(y))
        if origin in seen:
            continue
        seen.add(origin)
        heads.append(Rect(int(x), int(y), int(width), int(height)))
    return sort_heads(heads)