"""A chained hash table of values, with Fowler-Noll-Vo sample hash functions."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from typing import Any

FNV_32_PRIME = 16777619
FNV_32_BASIS = 2166136261
_MASK32 = 0xFFFFFFFF

MIN_BUCKETS = 4
BEST_ELEMS_PER_BUCKET = 2


def hash_bytes(data: bytes) -> int:
    """Return the 32-bit Fowler-Noll-Vo hash of ``data``."""
    value = FNV_32_BASIS
    for byte in bytes(data):
        value = ((value * FNV_32_PRIME) & _MASK32) ^ byte
    return value


def hash_string(s: str) -> int:
    """Return the hash of string ``s`` (UTF-8 bytes, up to any NUL character)."""
    return hash_bytes(s.encode("utf-8").split(b"\0", 1)[0])


def hash_int(i: int) -> int:
    """Return the hash of the four little-endian bytes of the 32-bit integer ``i``."""
    return hash_bytes((i & _MASK32).to_bytes(4, "little"))


def hash_int2(i: int) -> int:
    """Return a multiplicative mixing hash of the 32-bit integer ``i``."""
    value = i & _MASK32
    value ^= value >> 16
    value = (value * 0x25A1CA10) & _MASK32
    value ^= value >> 13
    value = (value * 0xF10AF0D2) & _MASK32
    value ^= value >> 16
    return value


def _same(a: Any, b: Any) -> bool:
    return not a < b and not b < a


def _is_power_of_2(x: int) -> bool:
    return x != 0 and x & (x - 1) == 0


class HashTable:
    """A hash table with chaining whose bucket count is a power of two.

    Two values are the same element when neither is less than the other.
    The number of buckets follows the element count, aiming at two
    elements per bucket and never fewer than four buckets.
    """

    def __init__(self, hash_func: Callable[[Any], int] | None = None) -> None:
        self._hash = hash_func or hash_int
        self._buckets: list[deque[Any]] = [deque() for _ in range(MIN_BUCKETS)]
        self._count = 0

    def __repr__(self) -> str:
        return f"HashTable({list(self)!r})"

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        for bucket in self._buckets:
            yield from list(bucket)

    def empty(self) -> bool:
        """Return whether the table holds no elements."""
        return self._count == 0

    def bucket_count(self) -> int:
        """Return the current number of buckets."""
        return len(self._buckets)

    # Internals.

    def _bucket_for(self, value: Any, buckets: list[deque[Any]]) -> deque[Any]:
        return buckets[self._hash(value) & (len(buckets) - 1)]

    @staticmethod
    def _position(bucket: deque[Any], value: Any) -> int | None:
        for index, item in enumerate(bucket):
            if _same(item, value):
                return index
        return None

    def _rehash(self) -> None:
        wanted = max(self._count // BEST_ELEMS_PER_BUCKET, MIN_BUCKETS)
        while not _is_power_of_2(wanted):
            wanted &= wanted - 1
        if wanted == len(self._buckets):
            return
        new_buckets: list[deque[Any]] = [deque() for _ in range(wanted)]
        for bucket in self._buckets:
            for value in bucket:
                self._bucket_for(value, new_buckets).appendleft(value)
        self._buckets = new_buckets

    # Search, insertion, deletion.

    def insert(self, value: Any) -> Any | None:
        """Insert ``value`` unless an equal element exists; return that element or None."""
        bucket = self._bucket_for(value, self._buckets)
        index = self._position(bucket, value)
        old = None if index is None else bucket[index]
        if index is None:
            bucket.appendleft(value)
            self._count += 1
        self._rehash()
        return old

    def replace(self, value: Any) -> Any | None:
        """Insert ``value``, replacing any equal element, which is returned."""
        bucket = self._bucket_for(value, self._buckets)
        index = self._position(bucket, value)
        old = None
        if index is not None:
            old = bucket[index]
            del bucket[index]
            self._count -= 1
        bucket.appendleft(value)
        self._count += 1
        self._rehash()
        return old

    def find(self, value: Any) -> Any | None:
        """Return the element equal to ``value``, or None."""
        bucket = self._bucket_for(value, self._buckets)
        index = self._position(bucket, value)
        return None if index is None else bucket[index]

    def delete(self, value: Any) -> Any | None:
        """Remove and return the element equal to ``value``, or return None."""
        bucket = self._bucket_for(value, self._buckets)
        index = self._position(bucket, value)
        if index is None:
            return None
        found = bucket[index]
        del bucket[index]
        self._count -= 1
        self._rehash()
        return found

    # Bulk operations.

    def apply(self, action: Callable[[Any], Any]) -> None:
        """Replace every element with ``action(element)``.

        Elements stay in the buckets they were in, as the table is not rehashed.
        """
        for bucket in self._buckets:
            for index, value in enumerate(list(bucket)):
                bucket[index] = action(value)

    def clear(self) -> None:
        """Remove every element, keeping the current bucket count."""
        self._buckets = [deque() for _ in range(len(self._buckets))]
        self._count = 0