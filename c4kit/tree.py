"""Sorted merkle trees of C4 IDs, which give a single ID to a set of IDs."""

from __future__ import annotations

from typing import BinaryIO, Iterable, List, Sequence

from .ids import DIGEST_SIZE, ID

_HEAD_SIZE = 3 * DIGEST_SIZE


class InvalidTreeError(ValueError):
    """Raised when data does not hold a valid ID tree."""


def tree_size(length: int) -> int:
    """Number of IDs needed to store the tree of a list of `length` IDs."""
    total = 1
    while length > 1:
        total += length
        length = (length + 1) // 2
    return total


def list_size(total: int) -> int:
    """Length of the list whose tree holds `total` IDs."""
    if total < 1:
        raise ValueError(f"a tree holds at least one ID, got {total}")
    high = (total + 1) // 2
    low = high - total.bit_length()
    if tree_size(low) == total:
        return low
    if tree_size(high) == total:
        return high
    while high - low > 1:
        middle = (low + high) // 2
        size = tree_size(middle)
        if size == total:
            return middle
        if size > total:
            high = middle
        else:
            low = middle
    raise ValueError(f"{total} is not the size of any tree")


def _pair(chunk: Sequence[ID]) -> ID:
    return chunk[0].sum(chunk[1]) if len(chunk) == 2 else chunk[0]


def _row_widths(width: int) -> List[int]:
    widths = [width]
    while widths[-1] > 1:
        widths.append((widths[-1] + 1) // 2)
    widths.reverse()
    return widths


class Tree:
    """An ID tree over a set of IDs; the bottom row is the sorted, unique list."""

    def __init__(self, ids: Iterable[ID]):
        bottom = sorted(set(ids))
        rows = [bottom or [ID()]]
        while len(rows[0]) > 1:
            row = rows[0]
            rows.insert(0, [_pair(row[i:i + 2]) for i in range(0, len(row), 2)])
        self._rows = rows
        self._count = len(bottom)

    @classmethod
    def _from_rows(cls, rows: List[List[ID]], count: int) -> "Tree":
        tree = cls.__new__(cls)
        tree._rows = rows
        tree._count = count
        return tree

    def id(self) -> ID:
        """The ID of the whole list: the root of the tree."""
        return self._rows[0][0]

    def rows(self) -> List[List[ID]]:
        """The rows of the tree, root first and the list itself last."""
        return [list(row) for row in self._rows]

    def to_bytes(self) -> bytes:
        """The binary form: every digest, row by row from the root down."""
        return b"".join(i.digest for row in self._rows for i in row)

    __bytes__ = to_bytes

    def __len__(self) -> int:
        return self._count

    def __str__(self) -> str:
        return "".join(str(i) for row in self._rows for i in row)

    def __repr__(self) -> str:
        return f"Tree(len={self._count}, id={self.id()})"


def read_tree(stream: BinaryIO) -> Tree:
    """Read a tree in binary form from a binary stream."""
    head = stream.read(_HEAD_SIZE)
    if len(head) != _HEAD_SIZE:
        raise InvalidTreeError("a tree starts with three digests")
    root, left, right = (ID(head[i:i + DIGEST_SIZE]) for i in range(0, _HEAD_SIZE, DIGEST_SIZE))
    if left.sum(right) != root:
        raise InvalidTreeError("the root digest does not match its branches")

    data = head + stream.read()
    if len(data) % DIGEST_SIZE:
        raise InvalidTreeError("tree data is not a whole number of digests")
    try:
        width = list_size(len(data) // DIGEST_SIZE)
    except ValueError as exc:
        raise InvalidTreeError(str(exc)) from exc

    ids = [ID(data[i:i + DIGEST_SIZE]) for i in range(0, len(data), DIGEST_SIZE)]
    rows = []
    start = 0
    for row_width in _row_widths(width):
        rows.append(ids[start:start + row_width])
        start += row_width
    return Tree._from_rows(rows, width)