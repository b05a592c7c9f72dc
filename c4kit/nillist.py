"""Sorted, unique path lists in which "/" is replaced by a zero byte.

Replacing the separator with the lowest byte makes a plain byte-wise sort
place every directory's entries directly after the directory itself, before
any sibling whose name merely shares a prefix.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Iterator, List, Sequence, Union, overload

PathKey = Union[str, bytes, bytearray]

_NIL = b"\x00"


def from_slash(path: str) -> bytes:
    """Encode a path and replace every "/" with a zero byte."""
    return path.encode("utf-8", "surrogateescape").replace(b"/", _NIL)


def to_slash(key: bytes) -> str:
    """Replace every zero byte with "/" and decode the path."""
    return bytes(key).replace(_NIL, b"/").decode("utf-8", "surrogateescape")


def _as_key(value: PathKey) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return from_slash(value)


def _end(keys: Sequence[bytes], key: bytes) -> int:
    # First index whose entry does not start with `key`; the entries that do
    # must form a run at the front of `keys`.
    return bisect_left(keys, True, key=lambda entry: not entry.startswith(key))


class NilList:
    """A sorted list of unique paths held in zero-separated form."""

    __slots__ = ("_keys",)

    def __init__(self, paths: Iterable[PathKey] = ()):
        self._keys: List[bytes] = sorted({_as_key(path) for path in paths})

    @classmethod
    def _wrap(cls, keys: Iterable[bytes]) -> "NilList":
        nlist = cls.__new__(cls)
        nlist._keys = list(keys)
        return nlist

    @property
    def keys(self) -> List[bytes]:
        """The paths in their zero-separated form."""
        return list(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return (to_slash(key) for key in self._keys)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> "NilList": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return NilList._wrap(self._keys[index])
        return to_slash(self._keys[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NilList):
            return NotImplemented
        return self._keys == other._keys

    def __repr__(self) -> str:
        return f"NilList({self.strings()!r})"

    def strings(self) -> List[str]:
        """The paths with "/" separators, in list order."""
        return list(self)

    def reverse(self) -> None:
        """Reverse the list in place, giving a post-order traversal."""
        self._keys.reverse()

    def find(self, key: PathKey) -> int:
        """Index of the first entry not less than `key`: where it is or would go."""
        return bisect_left(self._keys, _as_key(key))

    def end(self, key: PathKey) -> int:
        """Index just after the run of entries at the front that start with `key`."""
        return _end(self._keys, _as_key(key))

    def sublist(self, key: PathKey) -> "NilList":
        """The entries that start with `key`: the path and its descendants."""
        key = _as_key(key)
        start = self.find(key)
        if start == len(self._keys):
            return NilList._wrap([])
        rest = self._keys[start:]
        return NilList._wrap(rest[:_end(rest, key)])

    def children(self, key: PathKey) -> "NilList":
        """The unique, sorted direct children of `key`, as full paths."""
        key = _as_key(key)
        rest = self.sublist(key)._keys
        length = len(key)
        found: List[bytes] = []
        while rest:
            first = rest[0]
            if len(first) == length or first[length] != 0:
                break
            rest = rest[1:]
            cut = first.find(_NIL, length + 1)
            prefix = first if cut < 0 else first[:cut]
            found.append(prefix)
            rest = rest[_end(rest, prefix + _NIL):]
        return NilList._wrap(found)


def diff(a: NilList, b: NilList) -> NilList:
    """The entries of `a` that are not in `b`, in order."""
    exclude = set(b.keys)
    return NilList._wrap(key for key in a.keys if key not in exclude)