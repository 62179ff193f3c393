import pytest

from xgbkit.rects import (
    Rect,
    apply_strut,
    intersect_area,
    largest_overlap,
    subtract,
    valid,
)


def _contains(rect, px, py):
    return rect.x <= px < rect.x + rect.width and rect.y <= py < rect.y + rect.height


def _area(rect):
    return intersect_area(rect, rect)


def _strut(rects, root_w, root_h, **kwargs):
    names = [
        "left", "right", "top", "bottom",
        "left_start_y", "left_end_y", "right_start_y", "right_end_y",
        "top_start_x", "top_end_x", "bottom_start_x", "bottom_end_x",
    ]
    values = [kwargs.get(name, 0) for name in names]
    apply_strut(rects, root_w, root_h, *values)


def test_pieces_round_trip():
    rect = Rect(3, 4, 5, 6)
    assert rect.pieces() == (3, 4, 5, 6)
    assert Rect(*rect.pieces()) == rect


def test_str_format():
    assert str(Rect(1, 2, 3, 4)) == "[(1, 2) 3x4]"


def test_valid():
    assert valid(Rect(0, 0, 3, 5))
    assert not valid(Rect(0, 0, 0, 5))
    assert not valid(Rect(0, 0, 5, 0))
    assert valid(Rect(0, 0, -2, 5))


def test_subtract_no_overlap_returns_copy_of_r1():
    r1 = Rect(0, 0, 10, 10)
    result = subtract(r1, Rect(20, 20, 5, 5))
    assert result == [r1]
    assert result[0] is not r1


def test_subtract_adjacent_is_no_overlap():
    r1 = Rect(0, 0, 10, 10)
    assert subtract(r1, Rect(10, 0, 5, 10)) == [r1]


def test_subtract_covered_is_empty():
    assert subtract(Rect(2, 2, 4, 4), Rect(0, 0, 10, 10)) == []
    assert subtract(Rect(0, 0, 10, 10), Rect(0, 0, 10, 10)) == []


def test_subtract_inner_gives_four_pieces_covering_rest():
    r1 = Rect(0, 0, 10, 10)
    r2 = Rect(3, 3, 4, 4)
    pieces = subtract(r1, r2)
    assert len(pieces) == 4
    for piece in pieces:
        assert intersect_area(piece, r1) == _area(piece)
        assert intersect_area(piece, r2) == 0
    for px in range(10):
        for py in range(10):
            if _contains(r2, px, py):
                continue
            assert any(_contains(piece, px, py) for piece in pieces)


def test_subtract_corner_gives_two_pieces():
    r1 = Rect(0, 0, 10, 10)
    r2 = Rect(5, 5, 5, 5)
    pieces = subtract(r1, r2)
    assert len(pieces) == 2
    for piece in pieces:
        assert intersect_area(piece, r2) == 0
    for px in range(10):
        for py in range(10):
            inside = any(_contains(piece, px, py) for piece in pieces)
            assert inside != _contains(r2, px, py)


def test_intersect_area_symmetric_and_contained():
    big = Rect(0, 0, 100, 50)
    small = Rect(10, 10, 7, 3)
    assert intersect_area(big, small) == intersect_area(small, small)
    a = Rect(0, 0, 10, 10)
    b = Rect(5, 5, 10, 10)
    assert intersect_area(a, b) == intersect_area(b, a)
    assert 0 < intersect_area(a, b) < _area(a)


def test_intersect_area_disjoint_is_zero():
    assert intersect_area(Rect(0, 0, 10, 10), Rect(10, 0, 10, 10)) == 0
    assert intersect_area(Rect(0, 0, 10, 10), Rect(50, 50, 1, 1)) == 0


def test_largest_overlap_picks_biggest():
    heads = [Rect(0, 0, 100, 100), Rect(100, 0, 100, 100)]
    assert largest_overlap(Rect(90, 10, 50, 50), heads) == 1
    assert largest_overlap(Rect(10, 10, 50, 50), heads) == 0


def test_largest_overlap_tie_goes_to_first():
    heads = [Rect(0, 0, 100, 100), Rect(100, 0, 100, 100)]
    assert largest_overlap(Rect(90, 0, 20, 20), heads) == 0


def test_largest_overlap_none_when_no_overlap():
    heads = [Rect(0, 0, 100, 100)]
    assert largest_overlap(Rect(500, 500, 10, 10), heads) is None
    assert largest_overlap(Rect(0, 0, 10, 10), []) is None


def test_apply_strut_bottom():
    head = Rect(0, 0, 1920, 1080)
    _strut([head], 1920, 1080, bottom=30, bottom_start_x=0, bottom_end_x=1919)
    assert head.height + 30 == 1080
    assert (head.x, head.y, head.width) == (0, 0, 1920)


def test_apply_strut_top():
    head = Rect(0, 0, 1920, 1080)
    _strut([head], 1920, 1080, top=25, top_start_x=0, top_end_x=1919)
    assert head.y == 25
    assert head.y + head.height == 1080


def test_apply_strut_left_and_right():
    left_head = Rect(0, 0, 1920, 1080)
    _strut([left_head], 1920, 1080, left=40, left_start_y=0, left_end_y=1079)
    assert left_head.x == 40
    assert left_head.x + left_head.width == 1920

    right_head = Rect(0, 0, 1920, 1080)
    _strut([right_head], 1920, 1080, right=40, right_start_y=0, right_end_y=1079)
    assert right_head.width + 40 == 1920
    assert right_head.x == 0


def test_apply_strut_only_touches_affected_head():
    first = Rect(0, 0, 1920, 1080)
    second = Rect(1920, 0, 1920, 1080)
    _strut(
        [first, second], 3840, 1080,
        bottom=30, bottom_start_x=1920, bottom_end_x=3839,
    )
    assert first == Rect(0, 0, 1920, 1080)
    assert second.height + 30 == 1080


def test_apply_strut_oversized_wraps_and_is_ignored():
    head = Rect(0, 0, 100, 100)
    _strut([head], 100, 100, bottom=200, bottom_start_x=0, bottom_end_x=50)
    assert head == Rect(0, 0, 100, 100)


def test_apply_strut_empty_range_is_ignored():
    head = Rect(0, 0, 100, 100)
    _strut([head], 100, 100, bottom=30, bottom_start_x=10, bottom_end_x=10)
    assert head == Rect(0, 0, 100, 100)


def test_apply_strut_negative_raises():
    with pytest.raises(ValueError):
        _strut([Rect(0, 0, 100, 100)], 100, 100, bottom=-1)