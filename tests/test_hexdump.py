import pytest

from dsshell.hexdump import div_round_up, hex_dump, round_down


def test_empty_data_gives_nothing():
    assert hex_dump(0, b"", True) == ""


def test_two_bytes_without_ascii():
    assert hex_dump(0, b"\x01\x02", False) == "00000000  01 02 \n"


def test_eighth_byte_followed_by_dash():
    out = hex_dump(0, bytes(range(16)), False)
    assert out.startswith("00000000  00 01 02 03 04 05 06 07-08 ")
    assert out.count("\n") == 1


def test_ascii_column_with_offset():
    out = hex_dump(0x10, b"AB", True)
    expected = "00000010  41 42 " + "   " * 14 + "|AB" + " " * 14 + "|\n"
    assert out == expected


def test_unaligned_offset_pads_and_splits_lines():
    out = hex_dump(14, b"abcd", True)
    lines = out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("00000000  " + "   " * 14 + "61 62 ")
    assert lines[1].startswith("00000010  63 64 ")
    assert "|" + " " * 14 + "ab|" in lines[0]


def test_non_printable_shown_as_dot():
    out = hex_dump(0, b"\x00A\x7f", True)
    assert "|.A." in out


def test_line_count_matches_size():
    out = hex_dump(0, bytes(40), False)
    assert len(out.splitlines()) == div_round_up(40, 16)


@pytest.mark.parametrize("x,step", [(0, 16), (15, 16), (16, 16), (33, 16), (7, 1)])
def test_round_down_invariants(x, step):
    r = round_down(x, step)
    assert r % step == 0
    assert r <= x < r + step


@pytest.mark.parametrize("x,step", [(0, 8), (1, 8), (8, 8), (9, 8), (64, 64)])
def test_div_round_up_invariants(x, step):
    q = div_round_up(x, step)
    assert q * step >= x
    assert (q - 1) * step < x or q == 0


def test_bad_step_raises():
    with pytest.raises(ValueError):
        round_down(5, 0)
    with pytest.raises(ValueError):
        div_round_up(5, 0)