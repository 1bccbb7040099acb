"""A fixed-size array of bits with range queries and scanning."""

from __future__ import annotations

from .hexdump import div_round_up, hex_dump

CHAR_BIT = 8
ELEM_SIZE = 8  # bytes in one storage element
ELEM_BITS = ELEM_SIZE * CHAR_BIT
HEADER_SIZE = 16  # bytes of bookkeeping kept beside the bits

# Returned by scan operations when no matching group exists.
BITMAP_ERROR = 2**64 - 1


def _elem_cnt(bit_cnt: int) -> int:
    return div_round_up(bit_cnt, ELEM_BITS)


def _byte_cnt(bit_cnt: int) -> int:
    return ELEM_SIZE * _elem_cnt(bit_cnt)


def buf_size(bit_cnt: int) -> int:
    """Return the bytes needed to hold a bitmap of ``bit_cnt`` bits with its header."""
    if bit_cnt < 0:
        raise ValueError("bit count must be non-negative")
    return HEADER_SIZE + _byte_cnt(bit_cnt)


class Bitmap:
    """An array of ``bit_cnt`` bits, all false at creation."""

    def __init__(self, bit_cnt: int) -> None:
        if bit_cnt < 0:
            raise ValueError("bit count must be non-negative")
        self._size = bit_cnt
        self._bits = 0

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        digits = "".join("1" if self.test(i) else "0" for i in range(self._size))
        return f"Bitmap({digits!r})"

    # Single bits.

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < self._size:
            raise IndexError(f"bit index {idx} out of range for {self._size} bits")

    def _check_range(self, start: int, cnt: int) -> None:
        if start < 0 or cnt < 0 or start > self._size or start + cnt > self._size:
            raise IndexError(
                f"range start={start} cnt={cnt} out of range for {self._size} bits"
            )

    def set(self, idx: int, value: bool) -> None:
        """Set bit ``idx`` to ``value``."""
        if value:
            self.mark(idx)
        else:
            self.reset(idx)

    def mark(self, idx: int) -> None:
        """Set bit ``idx`` to true."""
        self._check_index(idx)
        self._bits |= 1 << idx

    def reset(self, idx: int) -> None:
        """Set bit ``idx`` to false."""
        self._check_index(idx)
        self._bits &= ~(1 << idx)

    def flip(self, idx: int) -> None:
        """Toggle bit ``idx``."""
        self._check_index(idx)
        self._bits ^= 1 << idx

    def test(self, idx: int) -> bool:
        """Return the value of bit ``idx``."""
        self._check_index(idx)
        return bool((self._bits >> idx) & 1)

    # Ranges of bits.

    def set_all(self, value: bool) -> None:
        """Set every bit to ``value``."""
        self.set_multiple(0, self._size, value)

    def set_multiple(self, start: int, cnt: int, value: bool) -> None:
        """Set the ``cnt`` bits starting at ``start`` to ``value``."""
        self._check_range(start, cnt)
        mask = ((1 << cnt) - 1) << start
        if value:
            self._bits |= mask
        else:
            self._bits &= ~mask

    def _ones(self, start: int, cnt: int) -> int:
        return ((self._bits >> start) & ((1 << cnt) - 1)).bit_count()

    def count(self, start: int, cnt: int, value: bool) -> int:
        """Return how many of the ``cnt`` bits from ``start`` equal ``value``."""
        self._check_range(start, cnt)
        ones = self._ones(start, cnt)
        return ones if value else cnt - ones

    def contains(self, start: int, cnt: int, value: bool) -> bool:
        """Return whether any of the ``cnt`` bits from ``start`` equals ``value``."""
        return self.count(start, cnt, value) > 0

    def any(self, start: int, cnt: int) -> bool:
        """Return whether any bit in the range is true."""
        return self.contains(start, cnt, True)

    def none(self, start: int, cnt: int) -> bool:
        """Return whether no bit in the range is true."""
        return not self.contains(start, cnt, True)

    def all(self, start: int, cnt: int) -> bool:
        """Return whether every bit in the range is true."""
        return not self.contains(start, cnt, False)

    # Scanning.

    def scan(self, start: int, cnt: int, value: bool) -> int:
        """Return the first index at or after ``start`` of ``cnt`` consecutive
        bits all equal to ``value``, or ``BITMAP_ERROR`` if there is none."""
        if not 0 <= start <= self._size:
            raise IndexError(f"scan start {start} out of range for {self._size} bits")
        if cnt < 0:
            raise ValueError("count must be non-negative")
        if cnt <= self._size:
            for i in range(start, self._size - cnt + 1):
                if not self.contains(i, cnt, not value):
                    return i
        return BITMAP_ERROR

    def scan_and_flip(self, start: int, cnt: int, value: bool) -> int:
        """Like :meth:`scan`, and set the group found to ``not value``."""
        idx = self.scan(start, cnt, value)
        if idx != BITMAP_ERROR:
            self.set_multiple(idx, cnt, not value)
        return idx

    # Size and storage.

    def expand(self, cnt: int) -> None:
        """Grow the bitmap by ``cnt`` bits, all false."""
        if cnt < 0:
            raise ValueError("count must be non-negative")
        old = self._size
        self._size += cnt
        self.set_multiple(old, cnt, False)

    def file_size(self) -> int:
        """Return the number of bytes needed to store the bits."""
        return _byte_cnt(self._size)

    def to_bytes(self) -> bytes:
        """Return the storage bytes, bit 0 in the low bit of the first byte."""
        return self._bits.to_bytes(self.file_size(), "little")

    def dump(self) -> str:
        """Return a hex dump of the first half of the storage bytes."""
        return hex_dump(0, self.to_bytes()[: self.file_size() // 2], False)