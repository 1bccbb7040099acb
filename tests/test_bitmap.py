import pytest

from dsshell.bitmap import BITMAP_ERROR, ELEM_BITS, Bitmap, buf_size


def make(pattern):
    bm = Bitmap(len(pattern))
    for i, ch in enumerate(pattern):
        bm.set(i, ch == "1")
    return bm


def bits(bm):
    return "".join("1" if bm.test(i) else "0" for i in range(len(bm)))


def test_new_bitmap_is_all_false():
    bm = Bitmap(16)
    assert len(bm) == 16
    assert bits(bm) == "0" * 16
    assert bm.none(0, 16)


def test_mark_reset_flip():
    bm = Bitmap(8)
    bm.mark(3)
    assert bm.test(3)
    bm.flip(3)
    assert not bm.test(3)
    bm.flip(5)
    assert bits(bm) == "00000100"
    bm.reset(5)
    assert bits(bm) == "0" * 8


def test_set_out_of_range_raises():
    bm = Bitmap(4)
    with pytest.raises(IndexError):
        bm.set(4, True)
    with pytest.raises(IndexError):
        bm.test(-1)
    with pytest.raises(IndexError):
        bm.mark(10)


def test_set_multiple_and_count():
    bm = Bitmap(16)
    bm.set_multiple(4, 6, True)
    assert bm.count(0, 16, True) == 6
    assert bm.count(0, 16, False) == 10
    assert bm.all(4, 6)
    assert not bm.all(3, 6)
    assert bm.any(0, 5)
    assert bm.none(10, 6)


def test_count_true_and_false_sum_to_range():
    bm = make("1011001110")
    for start in range(len(bm)):
        cnt = len(bm) - start
        assert bm.count(start, cnt, True) + bm.count(start, cnt, False) == cnt


def test_range_out_of_bounds_raises():
    bm = Bitmap(8)
    with pytest.raises(IndexError):
        bm.set_multiple(5, 4, True)
    with pytest.raises(IndexError):
        bm.count(9, 0, True)


def test_set_all():
    bm = Bitmap(70)
    bm.set_all(True)
    assert bm.all(0, 70)
    bm.set_all(False)
    assert bm.none(0, 70)


def test_contains_empty_range_is_false():
    bm = make("1111")
    assert not bm.contains(2, 0, True)
    assert bm.all(2, 0)


def test_scan_finds_first_group():
    bm = make("1100011000")
    assert bm.scan(0, 3, False) == 2
    assert bm.scan(3, 3, False) == 7
    assert bm.scan(0, 2, True) == 0
    assert bm.scan(1, 2, True) == 5


def test_scan_missing_returns_error():
    bm = make("1010")
    assert bm.scan(0, 2, True) == BITMAP_ERROR
    assert bm.scan(0, 5, False) == BITMAP_ERROR
    assert BITMAP_ERROR == 18446744073709551615


def test_scan_and_flip():
    bm = make("11000")
    idx = bm.scan_and_flip(0, 2, False)
    assert idx == 2
    assert bits(bm) == "11110"
    assert bm.scan_and_flip(0, 2, False) == BITMAP_ERROR
    assert bits(bm) == "11110"


def test_expand_adds_false_bits():
    bm = make("111")
    bm.expand(5)
    assert len(bm) == 8
    assert bits(bm) == "11100000"


def test_file_size_grows_in_elements():
    assert Bitmap(0).file_size() == 0
    assert Bitmap(1).file_size() == ELEM_BITS // 8
    assert Bitmap(ELEM_BITS + 1).file_size() == 2 * (ELEM_BITS // 8)
    assert buf_size(1) - buf_size(0) == Bitmap(1).file_size()


def test_to_bytes_layout():
    bm = Bitmap(16)
    bm.mark(0)
    bm.mark(9)
    data = bm.to_bytes()
    assert len(data) == bm.file_size()
    assert data[0] == 0x01
    assert data[1] == 0x02
    assert all(b == 0 for b in data[2:])


def test_dump_shows_half_of_storage():
    bm = Bitmap(16)
    bm.set_all(True)
    out = bm.dump()
    assert out.startswith("00000000  ff ff 00 00")
    assert out.count("\n") == 1


def test_negative_size_raises():
    with pytest.raises(ValueError):
        Bitmap(-1)
    with pytest.raises(ValueError):
        buf_size(-1)