import pytest

from dsshell.hashtable import (
    FNV_32_BASIS,
    HashTable,
    hash_bytes,
    hash_int,
    hash_int2,
    hash_string,
)


def test_hash_bytes_empty_is_basis():
    assert hash_bytes(b"") == FNV_32_BASIS
    assert hash_bytes(b"") == 2166136261


def test_hash_string_matches_bytes():
    assert hash_string("hello") == hash_bytes(b"hello")
    assert hash_string("") == 2166136261


def test_hash_string_stops_at_nul():
    assert hash_string("ab\0cd") == hash_string("ab")


def test_hash_int_uses_little_endian_bytes():
    assert hash_int(258) == hash_bytes(b"\x02\x01\x00\x00")
    assert hash_int(-1) == hash_bytes(b"\xff\xff\xff\xff")


@pytest.mark.parametrize("value", [0, 1, 7, -5, 123456, 2**31 - 1])
def test_hashes_fit_in_32_bits(value):
    for result in (hash_int(value), hash_int2(value), hash_bytes(str(value).encode())):
        assert 0 <= result <= 0xFFFFFFFF


def test_hash_int2_zero():
    assert hash_int2(0) == 0


def test_hash_int2_wraps_negative():
    assert hash_int2(-1) == hash_int2(0xFFFFFFFF)


def test_new_table_is_empty():
    table = HashTable()
    assert len(table) == 0
    assert table.empty() is True
    assert table.bucket_count() == 4
    assert list(table) == []


def test_insert_and_duplicate():
    table = HashTable()
    assert table.insert(5) is None
    assert table.insert(5) == 5
    assert len(table) == 1
    assert table.empty() is False


def test_find_present_and_absent():
    table = HashTable()
    for value in (1, 2, 3):
        table.insert(value)
    assert table.find(2) == 2
    assert table.find(9) is None


def test_delete():
    table = HashTable()
    for value in (1, 2, 3):
        table.insert(value)
    assert table.delete(2) == 2
    assert table.delete(2) is None
    assert sorted(table) == [1, 3]
    assert len(table) == 2


def test_replace_keeps_size():
    table = HashTable()
    table.insert(4)
    assert table.replace(4) == 4
    assert len(table) == 1
    assert table.replace(6) is None
    assert sorted(table) == [4, 6]


def test_iteration_order_within_bucket():
    table = HashTable(lambda value: 0)
    for value in (1, 2, 3):
        table.insert(value)
    assert list(table) == [3, 2, 1]


def test_bucket_count_grows_and_shrinks():
    table = HashTable()
    values = range(100)
    for value in values:
        table.insert(value)
    count = table.bucket_count()
    assert count > 4
    assert count & (count - 1) == 0
    assert sorted(table) == list(values)
    for value in values:
        assert table.delete(value) == value
    assert table.bucket_count() == 4
    assert table.empty()


def test_all_values_findable_after_rehash():
    table = HashTable(hash_int2)
    values = list(range(-20, 40))
    for value in values:
        table.insert(value)
    assert all(table.find(value) == value for value in values)
    assert len(table) == len(values)


def test_apply_squares_values():
    table = HashTable()
    for value in (1, 2, 3):
        table.insert(value)
    table.apply(lambda value: value * value)
    assert sorted(table) == [1, 4, 9]
    assert len(table) == 3


def test_apply_cubes_values():
    table = HashTable()
    for value in (-2, 3):
        table.insert(value)
    table.apply(lambda value: value * value * value)
    assert sorted(table) == [-8, 27]


def test_clear_keeps_bucket_count():
    table = HashTable()
    for value in range(40):
        table.insert(value)
    buckets = table.bucket_count()
    table.clear()
    assert len(table) == 0
    assert table.empty()
    assert list(table) == []
    assert table.bucket_count() == buckets


def test_string_values_with_string_hash():
    table = HashTable(hash_string)
    for word in ("apple", "pear", "fig"):
        table.insert(word)
    assert table.find("pear") == "pear"
    assert table.insert("fig") == "fig"
    assert sorted(table) == ["apple", "fig", "pear"]