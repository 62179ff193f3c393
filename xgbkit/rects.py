"""Rectangles in X coordinates: intersection, subtraction and struts.

An X rectangle is the 4-tuple (x, y, width, height), with the origin at the
top-left corner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

_UINT_BITS = 64
_UINT_MOD = 1 << _UINT_BITS
_INT_MAX = (1 << (_UINT_BITS - 1)) - 1


def _u(value: int) -> int:
    """Reduce a value to an unsigned machine word, wrapping like the X code."""
    return value % _UINT_MOD


def _signed(value: int) -> int:
    """Reinterpret an unsigned machine word as a signed one."""
    return value - _UINT_MOD if value > _INT_MAX else value


@dataclass
class Rect:
    """A mutable rectangle given by its top-left corner and its size."""

    x: int
    y: int
    width: int
    height: int

    def pieces(self) -> tuple[int, int, int, int]:
        """Return the tuple (x, y, width, height)."""
        return self.x, self.y, self.width, self.height

    def __str__(self) -> str:
        return f"[({self.x}, {self.y}) {self.width}x{self.height}]"


def valid(rect: Rect) -> bool:
    """Whether both the width and the height of the rectangle are non-zero."""
    return rect.width != 0 and rect.height != 0


def subtract(r1: Rect, r2: Rect) -> list[Rect]:
    """Cut ``r2`` out of ``r1`` and return the remaining rectangles.

    Without overlap the result is a copy of ``r1``; when ``r2`` covers ``r1``
    the result is empty; otherwise up to four rectangles are returned.
    """
    r1x1, r1y1, r1w, r1h = r1.pieces()
    r2x1, r2y1, r2w, r2h = r2.pieces()

    r1x2, r1y2 = r1x1 + r1w, r1y1 + r1h
    r2x2, r2y2 = r2x1 + r2w, r2y1 + r2h

    if r2x1 >= r1x2 or r1x1 >= r2x2 or r2y1 >= r1y2 or r1y1 >= r2y2:
        return [Rect(r1x1, r1y1, r1w, r1h)]

    if r1x1 >= r2x1 and r1y1 >= r2y1 and r1x2 <= r2x2 and r1y2 <= r2y2:
        return []

    candidates = (
        Rect(r1x1, r1y1, r1w, r2y1 - r1y1),
        Rect(r1x1, r1y1, r2x1 - r1x1, r1h),
        Rect(r1x1, r2y2, r1w, r1h - ((r2y1 - r1y1) + r2h)),
        Rect(r2x2, r1y1, r1w - ((r2x1 - r1x1) + r2w), r1h),
    )
    return [rect for rect in candidates if valid(rect)]


def intersect_area(r1: Rect, r2: Rect) -> int:
    """Return the area of the intersection of two rectangles, or 0."""
    x1, y1, w1, h1 = r1.pieces()
    x2, y2, w2, h2 = r2.pieces()
    if x2 < x1 + w1 and x2 + w2 > x1 and y2 < y1 + h1 and y2 + h2 > y1:
        iw = min(x1 + w1 - 1, x2 + w2 - 1) - max(x1, x2) + 1
        ih = min(y1 + h1 - 1, y2 + h2 - 1) - max(y1, y2) + 1
        return iw * ih
    return 0


def largest_overlap(needle: Rect, haystack: Iterable[Rect]) -> Optional[int]:
    """Return the index of the rectangle overlapping ``needle`` the most.

    Ties go to the earliest rectangle. ``None`` is returned when nothing
    overlaps.
    """
    biggest_area = 0
    best: Optional[int] = None
    for index, possible in enumerate(haystack):
        area = intersect_area(needle, possible)
        if area > biggest_area:
            biggest_area = area
            best = index
    return best


def _x_in_rect(xtest: int, rect: Rect) -> bool:
    return rect.x <= xtest < rect.x + rect.width


def _y_in_rect(ytest: int, rect: Rect) -> bool:
    return rect.y <= ytest < rect.y + rect.height


def apply_strut(
    rects: Sequence[Rect],
    root_width: int,
    root_height: int,
    left: int,
    right: int,
    top: int,
    bottom: int,
    left_start_y: int,
    left_end_y: int,
    right_start_y: int,
    right_end_y: int,
    top_start_x: int,
    top_end_x: int,
    bottom_start_x: int,
    bottom_end_x: int,
) -> None:
    """Shrink each head rectangle in place to make room for a partial strut.

    Only the first of bottom, top, right and left (in that order) whose
    range touches a rectangle is applied to it, and a rectangle only ever
    shrinks. All strut values are unsigned; arithmetic wraps as on an
    unsigned machine word, so a strut that would grow a head is ignored.
    """
    params = (
        root_width, root_height, left, right, top, bottom,
        left_start_y, left_end_y, right_start_y, right_end_y,
        top_start_x, top_end_x, bottom_start_x, bottom_end_x,
    )
    if any(value < 0 for value in params):
        raise ValueError("strut values and root dimensions must be non-negative")

    for rect in rects:
        x, y, w, h = (_u(value) for value in rect.pieces())

        bt = bottom_start_x != bottom_end_x and (
            _x_in_rect(bottom_start_x, rect) or _x_in_rect(bottom_end_x, rect)
        )
        tp = top_start_x != top_end_x and (
            _x_in_rect(top_start_x, rect) or _x_in_rect(top_end_x, rect)
        )
        lt = left_start_y != left_end_y and (
            _y_in_rect(left_start_y, rect) or _y_in_rect(left_end_y, rect)
        )
        rt = right_start_y != right_end_y and (
            _y_in_rect(right_start_y, rect) or _y_in_rect(right_end_y, rect)
        )

        if bt:
            nh = _u(h - _u(bottom - _u(_u(root_height - h) - y)))
            if nh < _u(rect.height):
                rect.height = _signed(nh)
        elif tp:
            nh = _u(h - _u(top - y))
            if nh < _u(rect.height):
                rect.height = _signed(nh)
            if top > _u(rect.y):
                rect.y = _signed(top)
        elif rt:
            nw = _u(w - _u(right - _u(_u(root_width - w) - x)))
            if nw < _u(rect.width):
                rect.width = _signed(nw)
        elif lt:
            nw = _u(w - _u(left - x))
            if nw < _u(rect.width):
                rect.width = _signed(nw)
            if left > _u(rect.x):
                rect.x = _signed(left)