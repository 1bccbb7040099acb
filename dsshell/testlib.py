"""A line-oriented interpreter that drives lists, hash tables and bitmaps.

Each input line names a command and its arguments, separated by white
space. Up to eleven structures of each kind are addressed by the last
character of their name, so ``list0`` and ``list10`` are the same slot.
"""

from __future__ import annotations

import argparse
import random
import re
import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from .bitmap import Bitmap
from .hashtable import HashTable, hash_int
from .linkedlist import LinkedList

MAX_ARGS = 6
_DIGITS = "0123456789"
_SIZE_MASK = 2**64 - 1
_INT_RE = re.compile(r"\s*([+-]?\d+)")


class CommandError(Exception):
    """Raised when a command is unknown or cannot be carried out."""


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return _to_int32(int(match.group(1))) if match else 0


def _size_t(text: str) -> int:
    return _atoi(text) & _SIZE_MASK


def _count(text: str) -> int:
    value = _atoi(text)
    if value < 0:
        raise CommandError(f"invalid count: {text!r}")
    return value


def _ds_index(arg: str) -> int:
    return int(arg[-1]) if arg and arg[-1] in _DIGITS else 0


def _parse_bool(arg: str) -> bool:
    return arg.startswith("true")


def _square(value: int) -> int:
    return _to_int32(value * value)


def _cube(value: int) -> int:
    return _to_int32(value * value * value)


_HASH_ACTIONS: dict[str, Callable[[int], int]] = {"square": _square, "triple": _cube}


class Interpreter:
    """Runs commands on named lists, hash tables and bitmaps, writing to ``out``."""

    def __init__(self, out: TextIO | None = None, rng: random.Random | None = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._rng = rng if rng is not None else random.Random()
        self._lists: dict[int, LinkedList] = {}
        self._hashes: dict[int, HashTable] = {}
        self._bitmaps: dict[int, Bitmap] = {}
        self._quit = False

    # Output and lookup helpers.

    def _print(self, text: str) -> None:
        self._out.write(text)

    def _print_bool(self, value: bool) -> None:
        self._out.write("true\n" if value else "false\n")

    def _list(self, arg: str) -> LinkedList:
        idx = _ds_index(arg)
        try:
            return self._lists[idx]
        except KeyError:
            raise CommandError(f"no list in slot {idx}") from None

    def _hash(self, arg: str) -> HashTable:
        idx = _ds_index(arg)
        try:
            return self._hashes[idx]
        except KeyError:
            raise CommandError(f"no hash table in slot {idx}") from None

    def _bitmap(self, arg: str) -> Bitmap:
        idx = _ds_index(arg)
        try:
            return self._bitmaps[idx]
        except KeyError:
            raise CommandError(f"no bitmap in slot {idx}") from None

    # Running.

    def run(self, lines: Iterable[str]) -> None:
        """Execute ``lines`` in order until they run out or ``quit`` is read."""
        for line in lines:
            if not self.execute(line):
                break

    def execute(self, line: str) -> bool:
        """Execute one command line; return False once ``quit`` has been given."""
        tokens = line.split()[:MAX_ARGS]
        if not tokens:
            return not self._quit
        cmd = tokens[0]
        args = tokens[1:] + [""] * (MAX_ARGS - len(tokens))
        try:
            self._dispatch(cmd, args, len(tokens) - 1, line)
        except (IndexError, ValueError) as exc:
            raise CommandError(f"{cmd}: {exc}") from exc
        return not self._quit

    def _dispatch(self, cmd: str, args: list[str], args_count: int, line: str) -> None:
        if cmd == "quit":
            self._quit = True
        elif cmd == "create":
            self._create(args)
        elif cmd == "delete":
            self._delete(args[0])
        elif cmd == "dumpdata":
            self._dumpdata(args[0])
        elif cmd.startswith("list_"):
            self._list_command(cmd, args, args_count)
        elif cmd.startswith("hash_"):
            self._hash_command(cmd, args)
        elif cmd.startswith("bitmap_"):
            self._bitmap_command(cmd, args)
        else:
            raise CommandError(f"Unknown command: {line.rstrip(chr(10))}")

    # Structure management.

    def _create(self, args: list[str]) -> None:
        kind, name = args[0], args[1]
        idx = _ds_index(name)
        if kind.startswith("list"):
            self._lists[idx] = LinkedList()
        elif kind.startswith("hashtable"):
            self._hashes[idx] = HashTable(hash_int)
        elif kind.startswith("bitmap"):
            self._bitmaps[idx] = Bitmap(_count(args[2]))

    def _delete(self, name: str) -> None:
        idx = _ds_index(name)
        if name.startswith("list"):
            self._list(name)
            del self._lists[idx]
        elif name.startswith("hash"):
            self._hash(name)
            del self._hashes[idx]
        elif name.startswith("bm"):
            self._bitmap(name)
            del self._bitmaps[idx]

    def _dumpdata(self, name: str) -> None:
        if name.startswith("list"):
            self._print("".join(f"{value} " for value in self._list(name)))
        elif name.startswith("hash"):
            self._print("".join(f"{value} " for value in self._hash(name)))
        elif name.startswith("bm"):
            bitmap = self._bitmap(name)
            self._print("".join("1" if bitmap.test(i) else "0" for i in range(len(bitmap))))
        self._print("\n")

    # Lists.

    def _list_command(self, cmd: str, args: list[str], args_count: int) -> None:
        name = args[0]
        match cmd:
            case "list_insert":
                lst = self._list(name)
                lst.insert(lst.node_at(_atoi(args[1])), _atoi(args[2]))
            case "list_insert_ordered":
                self._list(name).insert_ordered(_atoi(args[1]))
            case "list_push_front":
                self._list(name).push_front(_atoi(args[1]))
            case "list_push_back":
                self._list(name).push_back(_atoi(args[1]))
            case "list_pop_front":
                self._list(name).pop_front()
            case "list_pop_back":
                self._list(name).pop_back()
            case "list_remove":
                lst = self._list(name)
                lst.remove(lst.node_at(_atoi(args[1])))
            case "list_front":
                self._print(f"{self._list(name).front()}\n")
            case "list_back":
                self._print(f"{self._list(name).back()}\n")
            case "list_empty":
                self._print_bool(self._list(name).empty())
            case "list_size":
                self._print(f"{len(self._list(name))}\n")
            case "list_max":
                self._print(f"{self._list(name).max()}\n")
            case "list_min":
                self._print(f"{self._list(name).min()}\n")
            case "list_reverse":
                self._list(name).reverse()
            case "list_sort":
                self._list(name).sort()
            case "list_unique":
                lst = self._list(name)
                duplicates = None
                if args_count >= 2:
                    duplicates = self._lists.get(_ds_index(args[1]))
                lst.unique(duplicates)
            case "list_swap":
                lst = self._list(name)
                first, second = _atoi(args[1]), _atoi(args[2])
                if first == second:
                    raise CommandError("list_swap needs two different indices")
                lst.swap(lst.node_at(first), lst.node_at(second))
            case "list_splice":
                target = self._list(name)
                source = self._list(args[2])
                before = target.node_at(_atoi(args[1]))
                first = source.node_at(_atoi(args[3]))
                last = source.node_at(_atoi(args[4]))
                target.splice(before, first, last)
            case "list_shuffle":
                self._list(name).shuffle(self._rng)

    # Hash tables.

    def _hash_command(self, cmd: str, args: list[str]) -> None:
        name = args[0]
        match cmd:
            case "hash_insert":
                self._hash(name).insert(_atoi(args[1]))
            case "hash_delete":
                self._hash(name).delete(_atoi(args[1]))
            case "hash_replace":
                self._hash(name).replace(_atoi(args[1]))
            case "hash_find":
                found = self._hash(name).find(_atoi(args[1]))
                if found is not None:
                    self._print(f"{found}\n")
            case "hash_apply":
                table = self._hash(name)
                action = _HASH_ACTIONS.get(args[1])
                if action is not None:
                    table.apply(action)
            case "hash_empty":
                self._print_bool(self._hash(name).empty())
            case "hash_size":
                self._print(f"{len(self._hash(name))}\n")
            case "hash_clear":
                self._hash(name).clear()

    # Bitmaps.

    def _bitmap_command(self, cmd: str, args: list[str]) -> None:
        name = args[0]
        match cmd:
            case "bitmap_mark":
                self._bitmap(name).mark(_size_t(args[1]))
            case "bitmap_set":
                self._bitmap(name).set(_size_t(args[1]), _parse_bool(args[2]))
            case "bitmap_set_multiple":
                self._bitmap(name).set_multiple(
                    _size_t(args[1]), _size_t(args[2]), _parse_bool(args[3])
                )
            case "bitmap_set_all":
                self._bitmap(name).set_all(_parse_bool(args[1]))
            case "bitmap_reset":
                self._bitmap(name).reset(_size_t(args[1]))
            case "bitmap_flip":
                self._bitmap(name).flip(_size_t(args[1]))
            case "bitmap_scan_and_flip":
                found = self._bitmap(name).scan_and_flip(
                    _size_t(args[1]), _size_t(args[2]), _parse_bool(args[3])
                )
                self._print(f"{found}\n")
            case "bitmap_expand":
                self._bitmap(name).expand(_count(args[1]))
            case "bitmap_all":
                self._print_bool(self._bitmap(name).all(_size_t(args[1]), _size_t(args[2])))
            case "bitmap_any":
                self._print_bool(self._bitmap(name).any(_size_t(args[1]), _size_t(args[2])))
            case "bitmap_contains":
                self._print_bool(
                    self._bitmap(name).contains(
                        _size_t(args[1]), _size_t(args[2]), _parse_bool(args[3])
                    )
                )
            case "bitmap_none":
                self._print_bool(self._bitmap(name).none(_size_t(args[1]), _size_t(args[2])))
            case "bitmap_scan":
                found = self._bitmap(name).scan(
                    _size_t(args[1]), _size_t(args[2]), _parse_bool(args[3])
                )
                self._print(f"{found}\n")
            case "bitmap_test":
                self._print_bool(self._bitmap(name).test(_size_t(args[1])))
            case "bitmap_count":
                counted = self._bitmap(name).count(
                    _size_t(args[1]), _size_t(args[2]), _parse_bool(args[3])
                )
                self._print(f"{counted}\n")
            case "bitmap_size":
                self._print(f"{len(self._bitmap(name))}\n")
            case "bitmap_dump":
                self._print(self._bitmap(name).dump())


def main(argv: list[str] | None = None) -> int:
    """Read commands from a file or standard input and execute them."""
    parser = argparse.ArgumentParser(
        prog="testlib", description="Drive lists, hash tables and bitmaps by command."
    )
    parser.add_argument("script", nargs="?", help="file of commands (default: stdin)")
    options = parser.parse_args(argv)

    interpreter = Interpreter()
    try:
        if options.script:
            with open(options.script, encoding="utf-8") as stream:
                interpreter.run(stream)
        else:
            interpreter.run(sys.stdin)
    except CommandError as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())