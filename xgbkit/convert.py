"""Building BGRA images from decoded pictures, window icons and pixmap data."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

from PIL import Image as PILImage

from xgbkit.image import BGRA, Image, Rectangle


@dataclass
class EwmhIcon:
    """One _NET_WM_ICON entry: its size and ARGB pixels, row by row."""

    width: int
    height: int
    data: Sequence[int] = field(default_factory=list)


@dataclass(frozen=True)
class PixmapFormat:
    """A pixmap format announced by the server at connection time."""

    depth: int
    bits_per_pixel: int
    scanline_pad: int = 32


_OPAQUE = BGRA(b=0x00, g=0x00, r=0x00, a=0xFF)
_TRANSPARENT = BGRA(b=0xFF, g=0xFF, r=0xFF, a=0x00)


def _copy_image(src: Image) -> Image:
    dest = Image(Rectangle(src.rect.min_x, src.rect.min_y, src.rect.max_x, src.rect.max_y))
    width = src.rect.dx * 4
    for y in range(src.rect.min_y, src.rect.max_y):
        s = src.pix_offset(src.rect.min_x, y)
        d = dest.pix_offset(dest.rect.min_x, y)
        dest.pix[d:d + width] = src.pix[s:s + width]
    return dest


def _has_alpha(pil: PILImage.Image) -> bool:
    bands = pil.getbands()
    return "A" in bands or "a" in bands or "transparency" in pil.info


def _from_pil(pil: PILImage.Image) -> Image:
    width, height = pil.size
    count = width * height
    pix = bytearray(4 * count)

    if pil.mode == "RGBa":
        rgba = pil.tobytes()
        pix[0::4] = rgba[2::4]
        pix[1::4] = rgba[1::4]
        pix[2::4] = rgba[0::4]
        pix[3::4] = rgba[3::4]
    elif _has_alpha(pil):
        rgba = pil.convert("RGBA").tobytes()
        alphas = rgba[3::4]
        pix[0::4] = bytes(c * a // 0xFF for c, a in zip(rgba[2::4], alphas))
        pix[1::4] = bytes(c * a // 0xFF for c, a in zip(rgba[1::4], alphas))
        pix[2::4] = bytes(c * a // 0xFF for c, a in zip(rgba[0::4], alphas))
        pix[3::4] = alphas
    else:
        rgb = pil.convert("RGB").tobytes()
        pix[0::4] = rgb[2::3]
        pix[1::4] = rgb[1::3]
        pix[2::4] = rgb[0::3]
        pix[3::4] = b"\xff" * count

    return Image(Rectangle(0, 0, width, height), pix=pix, stride=4 * width)


def new_convert(img: Union[Image, PILImage.Image]) -> Image:
    """Convert a picture to a new BGRA image with premultiplied colors.

    An existing BGRA image is copied. Pictures without alpha become opaque.
    """
    if isinstance(img, Image):
        return _copy_image(img)
    if isinstance(img, PILImage.Image):
        return _from_pil(img)
    raise TypeError(f"cannot convert {type(img).__name__} to an image")


def new_file_name(file_name: str) -> Image:
    """Decode the picture in ``file_name`` and convert it."""
    with PILImage.open(file_name) as pil:
        pil.load()
        return new_convert(pil)


def new_bytes(data: bytes) -> Image:
    """Decode an encoded picture held in memory and convert it."""
    with PILImage.open(io.BytesIO(bytes(data))) as pil:
        pil.load()
        return new_convert(pil)


def new_ewmh_icon(icon: EwmhIcon) -> Image:
    """Convert EWMH icon data (one ARGB word per pixel) to a BGRA image."""
    count = icon.width * icon.height
    if len(icon.data) < count:
        raise ValueError(
            f"icon of {icon.width}x{icon.height} needs {count} pixels, "
            f"got {len(icon.data)}"
        )
    # An ARGB word written little-endian is exactly the bytes B, G, R, A.
    pix = bytearray(
        struct.pack(f"<{count}I", *(int(v) & 0xFFFFFFFF for v in icon.data[:count]))
    )
    return Image(Rectangle(0, 0, icon.width, icon.height), pix=pix, stride=4 * icon.width)


def merge_icccm_icon(
    pixmap_image: Optional[Image], mask_image: Optional[Image]
) -> Image:
    """Combine WM_HINTS icon pixmap and mask images into one image.

    Where the mask is transparent the icon becomes transparent. Either one
    may be missing, but not both.
    """
    if pixmap_image is None and mask_image is None:
        raise ValueError(
            "merge_icccm_icon: at least one of the icon pixmap or the icon "
            "mask must be given, but both are missing."
        )
    if pixmap_image is None:
        return mask_image  # type: ignore[return-value]
    if mask_image is None:
        return pixmap_image

    r = pixmap_image.rect
    for x in range(r.min_x, r.max_x):
        for y in range(r.min_y, r.max_y):
            if mask_image.at(x, y).a == 0:
                pixel = pixmap_image.at(x, y)
                pixmap_image.set_bgra(x, y, BGRA(b=pixel.b, g=pixel.g, r=pixel.r, a=0))
    return pixmap_image


def get_format(formats: Iterable[PixmapFormat], depth: int) -> Optional[PixmapFormat]:
    """Return the first format with the given depth, or None."""
    return next((fmt for fmt in formats if fmt.depth == depth), None)


def _unsupported_bpp(fmt: PixmapFormat) -> ValueError:
    return ValueError(
        f"pixmap data with depth {fmt.depth} has an unsupported value for "
        f"bits-per-pixel: {fmt.bits_per_pixel}"
    )


def read_drawable_data(
    ximg: Image,
    fmt: Optional[PixmapFormat],
    scanline_pad: int,
    data: bytes,
    width: int,
    height: int,
) -> None:
    """Fill ``ximg`` from ZPixmap data of a drawable.

    Depth 1 bitmaps are read as alpha masks with scanlines padded to
    ``scanline_pad`` bits; depth 24 (24 or 32 bits per pixel) is read as
    opaque and depth 32 keeps its alpha. Anything else raises ValueError.
    """
    if fmt is None:
        raise ValueError("could not find a valid pixmap format")

    if fmt.depth == 1:
        if fmt.bits_per_pixel != 1:
            raise _unsupported_bpp(fmt)
        padded = width
        if width % scanline_pad:
            padded = width + scanline_pad - width % scanline_pad
        for y in range(height):
            row = y * padded // 8
            for x in range(width):
                bit = (data[row + x // 8] >> (x % 8)) & 1
                ximg.set(x, y, _OPAQUE if bit else _TRANSPARENT)
    elif fmt.depth in (24, 32):
        allowed = (24, 32) if fmt.depth == 24 else (32,)
        if fmt.bits_per_pixel not in allowed:
            raise _unsupported_bpp(fmt)
        per = fmt.bits_per_pixel // 8
        keep_alpha = fmt.depth == 32

        def pixel(x: int, y: int) -> BGRA:
            i = y * width * per + x * per
            return BGRA(
                b=data[i],
                g=data[i + 1],
                r=data[i + 2],
                a=data[i + 3] if keep_alpha else 0xFF,
            )

        ximg.for_each(pixel)
    else:
        raise ValueError(f"pixmap data has an unsupported value for depth: {fmt.depth}")