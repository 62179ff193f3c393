"""An image stored in the X server's BGRA pixel layout."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import BinaryIO, Callable, Iterator, Optional, Union

from PIL import Image as PILImage


@dataclass(frozen=True)
class BGRA:
    """One pixel as stored in an X pixmap: blue, green, red, alpha bytes."""

    b: int = 0
    g: int = 0
    r: int = 0
    a: int = 0


ColorLike = Union[BGRA, tuple]


def to_bgra(color: ColorLike) -> BGRA:
    """Convert a BGRA value or an ``(r, g, b)`` / ``(r, g, b, a)`` tuple.

    Three-item tuples are taken as fully opaque.
    """
    if isinstance(color, BGRA):
        return color
    if not isinstance(color, tuple) or len(color) not in (3, 4):
        raise TypeError(f"cannot convert {color!r} to a BGRA color")
    if any(not isinstance(c, int) or not 0 <= c <= 0xFF for c in color):
        raise ValueError(f"color components must be bytes: {color!r}")
    r, g, b = color[:3]
    a = color[3] if len(color) == 4 else 0xFF
    return BGRA(b=b, g=g, r=r, a=a)


@dataclass(frozen=True)
class Rectangle:
    """A half-open rectangle [min_x, max_x) x [min_y, max_y)."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def dx(self) -> int:
        return self.max_x - self.min_x

    @property
    def dy(self) -> int:
        return self.max_y - self.min_y

    @property
    def empty(self) -> bool:
        return self.min_x >= self.max_x or self.min_y >= self.max_y

    def intersect(self, other: "Rectangle") -> "Rectangle":
        """Return the common part, or the zero rectangle if there is none."""
        result = Rectangle(
            max(self.min_x, other.min_x),
            max(self.min_y, other.min_y),
            min(self.max_x, other.max_x),
            min(self.max_y, other.max_y),
        )
        return Rectangle(0, 0, 0, 0) if result.empty else result

    def contains(self, x: int, y: int) -> bool:
        """Whether the point (x, y) lies inside the rectangle."""
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y


@dataclass(eq=False)
class Image:
    """Pixels in BGRA order, ready to be sent to the server as they are.

    A sub-image shares ``pix`` with its parent and starts at ``offset``.
    A new image is black and fully transparent.
    """

    rect: Rectangle
    pix: Optional[bytearray] = None
    stride: int = 0
    subimg: bool = False
    offset: int = 0

    def __post_init__(self) -> None:
        if self.pix is None:
            self.stride = 4 * self.rect.dx
            self.pix = bytearray(4 * self.rect.dx * self.rect.dy)

    def pix_offset(self, x: int, y: int) -> int:
        """Index in ``pix`` of the first byte of the pixel at (x, y)."""
        return self.offset + (y - self.rect.min_y) * self.stride + (x - self.rect.min_x) * 4

    def at(self, x: int, y: int) -> BGRA:
        """The pixel at (x, y); outside the image it is all zeros."""
        if not self.rect.contains(x, y):
            return BGRA()
        i = self.pix_offset(x, y)
        b, g, r, a = self.pix[i:i + 4]
        return BGRA(b=b, g=g, r=r, a=a)

    def set(self, x: int, y: int, color: ColorLike) -> None:
        """Set the pixel at (x, y); points outside the image are ignored."""
        if self.rect.contains(x, y):
            self.set_bgra(x, y, to_bgra(color))

    def set_bgra(self, x: int, y: int, color: BGRA) -> None:
        """Set the pixel at (x, y) to a BGRA value; outside is ignored."""
        if not self.rect.contains(x, y):
            return
        i = self.pix_offset(x, y)
        self.pix[i:i + 4] = bytes((color.b, color.g, color.r, color.a))

    def _points(self) -> Iterator[tuple[int, int]]:
        return itertools.product(
            range(self.rect.min_x, self.rect.max_x),
            range(self.rect.min_y, self.rect.max_y),
        )

    def for_each(self, each: Callable[[int, int], BGRA]) -> None:
        """Set every pixel to ``each(x, y)``, column by column."""
        for x, y in self._points():
            self.set_bgra(x, y, each(x, y))

    def for_exp(self, each: Callable[[int, int], tuple[int, int, int, int]]) -> None:
        """Like for_each, but ``each`` returns an ``(r, g, b, a)`` tuple."""
        for x, y in self._points():
            r, g, b, a = each(x, y)
            i = self.pix_offset(x, y)
            self.pix[i:i + 4] = bytes((b, g, r, a))

    def sub_image(self, rect: Rectangle) -> Optional["Image"]:
        """A view of the part of the image inside ``rect``, sharing pixels.

        Returns None when ``rect`` does not meet the image.
        """
        r = rect.intersect(self.rect)
        if r.empty:
            return None
        return Image(
            rect=r,
            pix=self.pix,
            stride=self.stride,
            subimg=True,
            offset=self.pix_offset(r.min_x, r.min_y),
        )

    def _packed(self) -> bytes:
        width = self.rect.dx * 4
        rows = (
            self.pix[start:start + width]
            for start in (
                self.pix_offset(self.rect.min_x, y)
                for y in range(self.rect.min_y, self.rect.max_y)
            )
        )
        return b"".join(rows)

    def _to_pil(self) -> PILImage.Image:
        bgra = self._packed()
        rgba = bytearray(len(bgra))
        rgba[0::4] = bgra[2::4]
        rgba[1::4] = bgra[1::4]
        rgba[2::4] = bgra[0::4]
        rgba[3::4] = bgra[3::4]
        return PILImage.frombytes("RGBa", (self.rect.dx, self.rect.dy), bytes(rgba))

    def scale(self, width: int, height: int) -> "Image":
        """Return a new image of the given size, interpolated from this one."""
        if width < 0 or height < 0:
            raise ValueError("width and height must be non-negative")
        if width == 0 or height == 0 or self.rect.empty:
            return Image(Rectangle(0, 0, width, height))
        resized = self._to_pil().resize((width, height), PILImage.BILINEAR)
        return _from_pil(resized)

    def write_png(self, stream: BinaryIO) -> None:
        """Encode the image as PNG into a binary stream."""
        self._to_pil().convert("RGBA").save(stream, format="PNG")

    def save_png(self, name: str) -> None:
        """Write the image to the file ``name`` as PNG."""
        with open(name, "wb") as stream:
            self.write_png(stream)


def _from_pil(pil: PILImage.Image) -> Image:
    rgba = pil.convert("RGBa").tobytes()
    bgra = bytearray(len(rgba))
    bgra[0::4] = rgba[2::4]
    bgra[1::4] = rgba[1::4]
    bgra[2::4] = rgba[0::4]
    bgra[3::4] = rgba[3::4]
    width, height = pil.size
    return Image(Rectangle(0, 0, width, height), pix=bgra, stride=4 * width)