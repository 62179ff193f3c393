import io

import pytest
from PIL import Image as PILImage

from xgbkit.convert import (
    EwmhIcon,
    PixmapFormat,
    get_format,
    merge_icccm_icon,
    new_bytes,
    new_convert,
    new_ewmh_icon,
    new_file_name,
    read_drawable_data,
)
from xgbkit.image import BGRA, Image, Rectangle


def _opaque_picture():
    pil = PILImage.new("RGB", (3, 2))
    for x in range(3):
        for y in range(2):
            pil.putpixel((x, y), (x * 40, y * 90, 7))
    return pil


def test_ewmh_icon_bytes_follow_argb():
    icon = EwmhIcon(1, 1, [0x80102030])
    img = new_ewmh_icon(icon)
    assert img.at(0, 0) == BGRA(b=0x30, g=0x20, r=0x10, a=0x80)


def test_ewmh_icon_row_major_order():
    icon = EwmhIcon(2, 2, [1, 2, 3, 4])
    img = new_ewmh_icon(icon)
    assert [img.at(x, y).b for y in range(2) for x in range(2)] == [1, 2, 3, 4]
    assert img.rect == Rectangle(0, 0, 2, 2)


def test_ewmh_icon_short_data():
    with pytest.raises(ValueError):
        new_ewmh_icon(EwmhIcon(2, 2, [1, 2]))


def test_convert_rgb_is_opaque():
    pil = _opaque_picture()
    img = new_convert(pil)
    for x in range(3):
        for y in range(2):
            r, g, b = pil.getpixel((x, y))
            assert img.at(x, y) == BGRA(b=b, g=g, r=r, a=255)


def test_convert_transparent_rgba_is_premultiplied():
    pil = PILImage.new("RGBA", (2, 2), (200, 100, 50, 0))
    img = new_convert(pil)
    assert img.at(1, 1) == BGRA()


def test_convert_opaque_rgba_keeps_colors():
    pil = PILImage.new("RGBA", (2, 2), (200, 100, 50, 255))
    img = new_convert(pil)
    assert img.at(0, 1) == BGRA(b=50, g=100, r=200, a=255)


def test_convert_copies_image():
    src = Image(Rectangle(0, 0, 2, 2))
    src.set_bgra(1, 1, BGRA(1, 2, 3, 4))
    copy = new_convert(src)
    src.set_bgra(1, 1, BGRA(9, 9, 9, 9))
    assert copy.at(1, 1) == BGRA(1, 2, 3, 4)
    assert copy.rect == src.rect


def test_convert_rejects_other_types():
    with pytest.raises(TypeError):
        new_convert("not an image")


def test_png_round_trip_bytes():
    original = new_convert(_opaque_picture())
    stream = io.BytesIO()
    original.write_png(stream)
    decoded = new_bytes(stream.getvalue())
    assert decoded.pix == original.pix


def test_new_file_name(tmp_path):
    original = new_convert(_opaque_picture())
    path = tmp_path / "pic.png"
    original.save_png(str(path))
    assert new_file_name(str(path)).pix == original.pix


def test_new_file_name_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        new_file_name(str(tmp_path / "missing.png"))


def test_new_bytes_garbage():
    with pytest.raises(OSError):
        new_bytes(b"not a picture at all")


def test_merge_needs_one_image():
    with pytest.raises(ValueError):
        merge_icccm_icon(None, None)


def test_merge_mask_only():
    mask = Image(Rectangle(0, 0, 1, 1))
    assert merge_icccm_icon(None, mask) is mask


def test_merge_applies_mask():
    icon = Image(Rectangle(0, 0, 2, 1))
    icon.set_bgra(0, 0, BGRA(10, 20, 30, 255))
    icon.set_bgra(1, 0, BGRA(40, 50, 60, 255))
    mask = Image(Rectangle(0, 0, 2, 1))
    mask.set_bgra(1, 0, BGRA(0, 0, 0, 255))
    merged = merge_icccm_icon(icon, mask)
    assert merged.at(0, 0) == BGRA(10, 20, 30, 0)
    assert merged.at(1, 0) == BGRA(40, 50, 60, 255)


def test_get_format():
    formats = [PixmapFormat(1, 1), PixmapFormat(24, 32), PixmapFormat(32, 32)]
    assert get_format(formats, 24) is formats[1]
    assert get_format(formats, 8) is None


def test_read_depth24():
    img = Image(Rectangle(0, 0, 2, 1))
    data = bytes([1, 2, 3, 0, 4, 5, 6, 0])
    read_drawable_data(img, PixmapFormat(24, 32), 32, data, 2, 1)
    assert img.at(0, 0) == BGRA(1, 2, 3, 255)
    assert img.at(1, 0) == BGRA(4, 5, 6, 255)


def test_read_depth32_keeps_alpha():
    img = Image(Rectangle(0, 0, 1, 1))
    read_drawable_data(img, PixmapFormat(32, 32), 32, bytes([1, 2, 3, 4]), 1, 1)
    assert img.at(0, 0) == BGRA(1, 2, 3, 4)


def test_read_bitmap():
    img = Image(Rectangle(0, 0, 3, 2))
    data = bytes([0b101, 0, 0, 0, 0b010, 0, 0, 0])
    read_drawable_data(img, PixmapFormat(1, 1), 32, data, 3, 2)
    opaque = BGRA(0, 0, 0, 0xFF)
    clear = BGRA(0xFF, 0xFF, 0xFF, 0)
    assert [img.at(x, 0) for x in range(3)] == [opaque, clear, opaque]
    assert [img.at(x, 1) for x in range(3)] == [clear, opaque, clear]


@pytest.mark.parametrize(
    "fmt",
    [None, PixmapFormat(8, 8), PixmapFormat(1, 8), PixmapFormat(24, 16), PixmapFormat(32, 24)],
)
def test_read_unsupported(fmt):
    img = Image(Rectangle(0, 0, 1, 1))
    with pytest.raises(ValueError):
        read_drawable_data(img, fmt, 32, bytes(16), 1, 1)