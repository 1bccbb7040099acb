"""A doubly linked list with head and tail sentinels."""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable, Iterator
from typing import Any

SHUFFLE_SWAPS = 3


def _resolve_key(key: Callable[[Any], Any] | None) -> Callable[[Any], Any]:
    """Return ``key``, or a function giving each value itself when it is None."""
    if key is not None:
        return key
    return lambda value: value


class Node:
    """One link of a :class:`LinkedList`, holding a value."""

    __slots__ = ("value", "prev", "next")

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self.prev: Node | None = None
        self.next: Node | None = None

    def __repr__(self) -> str:
        return f"Node({self.value!r})"


def _is_interior(node: Node | None) -> bool:
    return node is not None and node.prev is not None and node.next is not None


def _is_position(node: Node | None) -> bool:
    """True for an interior node or a tail sentinel: a place to insert before."""
    return node is not None and node.prev is not None


class LinkedList:
    """A doubly linked list of values.

    Positions are :class:`Node` objects. ``node_at(len(lst))`` gives the
    position just past the last element, usable with :meth:`insert` and
    :meth:`splice` to append.
    """

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._head = Node()
        self._tail = Node()
        self._head.next = self._tail
        self._tail.prev = self._head
        for value in values:
            self.push_back(value)

    def __repr__(self) -> str:
        return f"LinkedList({list(self)!r})"

    # Linking helpers.

    @staticmethod
    def _link_before(before: Node, node: Node) -> None:
        node.prev = before.prev
        node.next = before
        before.prev.next = node
        before.prev = node

    @staticmethod
    def _unlink(node: Node) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev

    def _relink(self, nodes: Iterable[Node]) -> None:
        previous = self._head
        for node in nodes:
            previous.next = node
            node.prev = previous
            previous = node
        previous.next = self._tail
        self._tail.prev = previous

    # Traversal.

    def nodes(self) -> Iterator[Node]:
        """Yield the nodes from front to back."""
        node = self._head.next
        while node is not self._tail:
            following = node.next
            yield node
            node = following

    def __iter__(self) -> Iterator[Any]:
        return (node.value for node in self.nodes())

    def __reversed__(self) -> Iterator[Any]:
        node = self._tail.prev
        while node is not self._head:
            preceding = node.prev
            yield node.value
            node = preceding

    def __len__(self) -> int:
        return sum(1 for _ in self.nodes())

    def empty(self) -> bool:
        """Return whether the list has no elements."""
        return self._head.next is self._tail

    def front(self) -> Any:
        """Return the first value."""
        if self.empty():
            raise IndexError("front of an empty list")
        return self._head.next.value

    def back(self) -> Any:
        """Return the last value."""
        if self.empty():
            raise IndexError("back of an empty list")
        return self._tail.prev.value

    def node_at(self, index: int) -> Node:
        """Return the node at ``index``; ``len(self)`` gives the end position."""
        if index < 0:
            raise IndexError(f"list index {index} out of range")
        node = self._head.next
        for _ in range(index):
            if node is self._tail:
                raise IndexError(f"list index {index} out of range")
            node = node.next
        return node

    # Insertion and removal.

    def insert(self, before: Node, value: Any) -> Node:
        """Insert ``value`` just before ``before`` and return its node."""
        if not _is_position(before):
            raise ValueError("insert position must be an element or the end")
        node = Node(value)
        self._link_before(before, node)
        return node

    def push_front(self, value: Any) -> Node:
        """Insert ``value`` at the front."""
        return self.insert(self._head.next, value)

    def push_back(self, value: Any) -> Node:
        """Insert ``value`` at the back."""
        return self.insert(self._tail, value)

    def remove(self, node: Node) -> Node:
        """Remove ``node`` from its list and return the node that followed it."""
        if not _is_interior(node):
            raise ValueError("only an element in a list can be removed")
        following = node.next
        self._unlink(node)
        node.prev = node.next = None
        return following

    def pop_front(self) -> Any:
        """Remove the first element and return its value."""
        if self.empty():
            raise IndexError("pop from an empty list")
        node = self._head.next
        self.remove(node)
        return node.value

    def pop_back(self) -> Any:
        """Remove the last element and return its value."""
        if self.empty():
            raise IndexError("pop from an empty list")
        node = self._tail.prev
        self.remove(node)
        return node.value

    def splice(self, before: Node, first: Node, last: Node) -> None:
        """Move nodes ``first`` up to ``last`` (exclusive) to just before ``before``.

        The moved nodes may come from this list or another one.
        """
        if not _is_position(before):
            raise ValueError("splice position must be an element or the end")
        if first is last:
            return
        if not _is_position(last):
            raise ValueError("splice range end must be an element or the end")
        last = last.prev
        if not (_is_interior(first) and _is_interior(last)):
            raise ValueError("splice range must hold elements of a list")

        first.prev.next = last.next
        last.next.prev = first.prev

        first.prev = before.prev
        last.next = before
        before.prev.next = first
        before.prev = last

    def swap(self, a: Node, b: Node) -> None:
        """Exchange the positions of nodes ``a`` and ``b``."""
        if not (_is_interior(a) and _is_interior(b)):
            raise ValueError("only elements in a list can be swapped")
        if a is b:
            return
        if a.next is b:
            self._unlink(b)
            self._link_before(a, b)
        elif b.next is a:
            self._unlink(a)
            self._link_before(b, a)
        else:
            after_a, after_b = a.next, b.next
            self._unlink(a)
            self._unlink(b)
            self._link_before(after_b, a)
            self._link_before(after_a, b)

    # Reordering.

    def reverse(self) -> None:
        """Reverse the order of the elements."""
        self._relink(reversed(list(self.nodes())))

    def sort(self, key: Callable[[Any], Any] | None = None) -> None:
        """Sort the elements stably by ``key`` (default: the values themselves)."""
        k = _resolve_key(key)
        self._relink(sorted(self.nodes(), key=lambda node: k(node.value)))

    def insert_ordered(self, value: Any, key: Callable[[Any], Any] | None = None) -> Node:
        """Insert ``value`` into a list sorted by ``key``, after any equal elements."""
        k = _resolve_key(key)
        wanted = k(value)
        for node in self.nodes():
            if wanted < k(node.value):
                return self.insert(node, value)
        return self.insert(self._tail, value)

    def unique(
        self,
        duplicates: LinkedList | None = None,
        key: Callable[[Any], Any] | None = None,
    ) -> list[Any]:
        """Drop all but the first of each run of adjacent equal elements.

        The dropped elements are appended to ``duplicates`` when given, and
        their values are returned in the order they were dropped.
        """
        k = _resolve_key(key)
        removed: list[Any] = []
        if self.empty():
            return removed
        elem = self._head.next
        while elem.next is not self._tail:
            following = elem.next
            a, b = k(elem.value), k(following.value)
            if not a < b and not b < a:
                self._unlink(following)
                following.prev = following.next = None
                removed.append(following.value)
                if duplicates is not None:
                    self._link_before(duplicates._tail, following)
            else:
                elem = following
        return removed

    def max(self, key: Callable[[Any], Any] | None = None) -> Any:
        """Return the largest value; the earliest one among equals."""
        k = _resolve_key(key)
        values = iter(self)
        try:
            best = next(values)
        except StopIteration:
            raise ValueError("max of an empty list") from None
        for value in values:
            if k(best) < k(value):
                best = value
        return best

    def min(self, key: Callable[[Any], Any] | None = None) -> Any:
        """Return the smallest value; the earliest one among equals."""
        k = _resolve_key(key)
        values = iter(self)
        try:
            best = next(values)
        except StopIteration:
            raise ValueError("min of an empty list") from None
        for value in values:
            if k(value) < k(best):
                best = value
        return best

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Swap three pairs of distinct, randomly chosen elements."""
        rng = rng or random.Random()
        size = len(self)
        if size < 2:
            raise ValueError("shuffle needs at least two elements")
        for _ in range(SHUFFLE_SWAPS):
            first = rng.randrange(size)
            second = rng.randrange(size)
            while first == second:
                second = rng.randrange(size)
            self.swap(self.node_at(first), self.node_at(second))