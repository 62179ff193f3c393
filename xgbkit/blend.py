"""Alpha blending, scaling and icon selection for BGRA images."""

from __future__ import annotations

from typing import Optional, Sequence, Union

from PIL import Image as PILImage

from xgbkit.convert import EwmhIcon, new_convert
from xgbkit.image import BGRA, ColorLike, Image, to_bgra

_MAX_INT32 = (1 << 31) - 1


def _as_image(img: Union[Image, PILImage.Image]) -> Image:
    return img if isinstance(img, Image) else new_convert(img)


def scale(img: Union[Image, PILImage.Image], width: int, height: int) -> Image:
    """Return a new image of the given size interpolated from ``img``."""
    return _as_image(img).scale(width, height)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def alpha(dest: Image, alpha: int) -> None:
    """Scale the alpha channel in place: a = a * alpha / 100."""
    r = dest.rect
    for x in range(r.min_x, r.max_x):
        for y in range(r.min_y, r.max_y):
            i = dest.pix_offset(x, y) + 3
            dest.pix[i] = _trunc_div(dest.pix[i] * alpha, 100) & 0xFF


def _mix(d: int, s: int, a: float) -> int:
    return int(s * a + d * (1 - a)) & 0xFF


def blend(dest: Image, src: Union[Image, PILImage.Image], sp: tuple[int, int]) -> None:
    """Blend ``src``, read from point ``sp``, over ``dest`` from its corner.

    Only the source alpha is used; the result is opaque.
    """
    source = _as_image(src)
    sx0, sy0 = sp
    rs, rd = source.rect, dest.rect
    for sx, dx in zip(range(sx0, rs.max_x), range(rd.min_x, rd.max_x)):
        for sy, dy in zip(range(sy0, rs.max_y), range(rd.min_y, rd.max_y)):
            s = source.at(sx, sy)
            d = dest.at(dx, dy)
            a = s.a / 255.0
            dest.set_bgra(
                dx, dy,
                BGRA(b=_mix(d.b, s.b, a), g=_mix(d.g, s.g, a), r=_mix(d.r, s.r, a), a=0xFF),
            )


def blend_bg_color(dest: Image, color: ColorLike) -> None:
    """Blend ``dest`` in place over a solid background color."""
    bg = to_bgra(color)
    r = dest.rect
    for x in range(r.min_x, r.max_x):
        for y in range(r.min_y, r.max_y):
            p = dest.at(x, y)
            a = p.a / 255.0
            dest.set_bgra(
                x, y,
                BGRA(b=_mix(bg.b, p.b, a), g=_mix(bg.g, p.g, a), r=_mix(bg.r, p.r, a), a=0xFF),
            )


def blend_bgra(dest: BGRA, src: BGRA) -> BGRA:
    """Blend ``src`` over an opaque ``dest`` color."""
    a = src.a / 255.0
    return BGRA(
        b=_mix(dest.b, src.b, a),
        g=_mix(dest.g, src.g, a),
        r=_mix(dest.r, src.r, a),
        a=0xFF,
    )


def find_best_ewmh_icon(
    width: int, height: int, icons: Sequence[EwmhIcon]
) -> Optional[EwmhIcon]:
    """Pick the icon that best fits the preferred size.

    The smallest icon at least as large as the preferred area wins; if none
    is that large, the largest one. A zero preferred area picks the largest.
    """
    if not icons:
        return None

    preferred = width * height or _MAX_INT32
    best = icons[0]
    for icon in icons[1:]:
        best_area = best.width * best.height
        icon_area = icon.width * icon.height
        if (preferred <= icon_area <= best_area) or (
            best_area < preferred and icon_area > best_area
        ):
            best = icon
    return best