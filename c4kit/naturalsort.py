"""Natural ordering of strings: runs of digits compare by numeric value."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Iterable, List, Union

_ZERO = ord("0")
_NINE = ord("9")

Text = Union[str, bytes]


def _as_bytes(value: Text) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def _skip(data: bytes, start: int, keep: Callable[[int], bool]) -> int:
    end = start
    while end < len(data) and keep(data[end]):
        end += 1
    return end


def _is_digit(byte: int) -> bool:
    return _ZERO <= byte <= _NINE


def natural_less(left: Text, right: Text) -> bool:
    """True when `left` sorts before `right` in natural order."""
    a = _as_bytes(left)
    b = _as_bytes(right)
    l = r = 0
    while l < len(a) and r < len(b):
        ca, cb = a[l], b[r]

        if ca > _NINE:
            if cb > _NINE:
                if ca == cb:
                    l += 1
                    r += 1
                    continue
                return ca < cb
            return False
        if cb > _NINE:
            return True

        if ca < _ZERO:
            if cb < _ZERO:
                if ca == cb:
                    l += 1
                    r += 1
                    continue
                return ca < cb
            return False
        if cb < _ZERO:
            return True

        # Both sides start a run of digits.
        l = _skip(a, l, lambda byte: byte == _ZERO)
        r = _skip(b, r, lambda byte: byte == _ZERO)
        zl, zr = l, r
        l = _skip(a, l, _is_digit)
        r = _skip(b, r, _is_digit)

        left_len, right_len = l - zl, r - zr
        if left_len != right_len:
            return left_len < right_len
        if a[zl:l] != b[zr:r]:
            return a[zl:l] < b[zr:r]
        # Same number; a different count of leading zeros decides.
        if l != r:
            return l < r

    return len(a) < len(b)


def _compare(left: Text, right: Text) -> int:
    if natural_less(left, right):
        return -1
    if natural_less(right, left):
        return 1
    return 0


def natural_sorted(items: Iterable[Text]) -> List[Text]:
    """Return the items in natural order."""
    return sorted(items, key=cmp_to_key(_compare))