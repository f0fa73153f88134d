"""Insertion-ordered hash table keyed by strings, hashed with lookup3."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any

from .lookup3 import hashlittle, hashmask, hashsize
from .seed import current_seed

INITIAL_ORDER = 3


class _Pair:
    """One key/value entry, linked into the table's insertion order."""

    __slots__ = ("key", "hash", "value", "prev", "next")

    def __init__(self, key: Any, hash_: int, value: Any) -> None:
        self.key = key
        self.hash = hash_
        self.value = value
        self.prev: _Pair = self
        self.next: _Pair = self


def _key_bytes(key: str) -> bytes:
    try:
        return key.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return key.encode("utf-8", "surrogatepass")


class HashTable(MutableMapping):
    """A mapping from strings to values that keeps insertion order.

    Keys are hashed with ``hashlittle`` and the process-wide seed; the
    bucket array doubles whenever the number of items reaches it.
    Replacing a value keeps its key's position, and deleting a key
    leaves the order of the others unchanged.
    """

    def __init__(self, items: Mapping | Iterable[tuple[str, Any]] | None = None) -> None:
        self._seed = current_seed()
        self._order = INITIAL_ORDER
        self._size = 0
        self._buckets: list[list[_Pair]] = self._empty_buckets(self._order)
        self._sentinel = _Pair(None, 0, None)
        if items is not None:
            self.update(items)

    @staticmethod
    def _empty_buckets(order: int) -> list[list[_Pair]]:
        return [[] for _ in range(hashsize(order))]

    def _hash(self, key: Any) -> int:
        if not isinstance(key, str):
            raise TypeError(f"keys must be str, not {type(key).__name__}")
        return hashlittle(_key_bytes(key), self._seed)

    def _bucket(self, hash_: int) -> list[_Pair]:
        return self._buckets[hash_ & hashmask(self._order)]

    def _find(self, key: Any) -> _Pair | None:
        hash_ = self._hash(key)
        for pair in self._bucket(hash_):
            if pair.hash == hash_ and pair.key == key:
                return pair
        return None

    def _rehash(self) -> None:
        self._order += 1
        buckets = self._empty_buckets(self._order)
        mask = hashmask(self._order)
        for bucket in self._buckets:
            for pair in bucket:
                buckets[pair.hash & mask].insert(0, pair)
        self._buckets = buckets

    def _walk(self, start: _Pair) -> Iterator[_Pair]:
        # The successor is taken before yielding so that the current
        # entry may be deleted while iterating.
        node = start
        while node is not self._sentinel:
            following = node.next
            yield node
            node = following

    def __getitem__(self, key: str) -> Any:
        pair = self._find(key)
        if pair is None:
            raise KeyError(key)
        return pair.value

    def __setitem__(self, key: str, value: Any) -> None:
        if self._size >= hashsize(self._order):
            self._rehash()

        hash_ = self._hash(key)
        bucket = self._bucket(hash_)
        for pair in bucket:
            if pair.hash == hash_ and pair.key == key:
                pair.value = value
                return

        pair = _Pair(key, hash_, value)
        bucket.insert(0, pair)
        last = self._sentinel.prev
        pair.prev = last
        pair.next = self._sentinel
        last.next = pair
        self._sentinel.prev = pair
        self._size += 1

    def __delitem__(self, key: str) -> None:
        pair = self._find(key)
        if pair is None:
            raise KeyError(key)
        self._bucket(pair.hash).remove(pair)
        pair.prev.next = pair.next
        pair.next.prev = pair.prev
        self._size -= 1

    def __iter__(self) -> Iterator[str]:
        return (pair.key for pair in self._walk(self._sentinel.next))

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key) is not None

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{body}}})"

    def clear(self) -> None:
        """Remove every item; the bucket array keeps its current size."""
        self._buckets = self._empty_buckets(self._order)
        self._sentinel.next = self._sentinel
        self._sentinel.prev = self._sentinel
        self._size = 0

    def iter_from(self, key: str) -> Iterator[str]:
        """Iterate over keys in order, starting at ``key``.

        Raises KeyError if ``key`` is not in the table.
        """
        pair = self._find(key)
        if pair is None:
            raise KeyError(key)
        return (p.key for p in self._walk(pair))