"""Conversion between the old and the current C4 ID character sets.

The set of characters never changed, only their order: in the old set the
lower-case letters came before the capitals, which made IDs sort differently
in string and digest form. Digits keep their place in both sets.
"""

from __future__ import annotations

from typing import Optional

from .ids import CHARSET, ID, PREFIX, parse

OLD_CHARSET = "123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ"

_OLD_TO_NEW = dict(zip(OLD_CHARSET, CHARSET))
_NEW_TO_OLD = dict(zip(CHARSET, OLD_CHARSET))
_DIGITS = set("0123456789")
_UNCHANGED = set("123456789")


class CharsetMismatchError(ValueError):
    """Raised when two IDs are not encodings of the same ID in the two sets."""


def _same_numbers(a: str, b: str) -> bool:
    return all(y == x for x, y in zip(a, b) if x in _DIGITS)


def _letters(text: str) -> str:
    return "".join(char for char in text[len(PREFIX):] if char not in _UNCHANGED)


def check_character_set(a: Optional[ID], b: Optional[ID]) -> ID:
    """Given one ID written in both character sets, return the one in the current set.

    Raises CharsetMismatchError when either is missing or they do not encode
    the same ID.
    """
    if a is None or b is None:
        raise CharsetMismatchError("not the same id")
    a_text, b_text = str(a), str(b)
    if not _same_numbers(a_text, b_text):
        raise CharsetMismatchError("not the same id")

    # -1: a is in the current set, 1: b is, 0: undecided.
    newer = 0
    for x, y in zip(_letters(a_text), _letters(b_text)):
        if _OLD_TO_NEW.get(x) == y:
            if newer == -1:
                raise CharsetMismatchError("not the same id: mixed character sets")
            newer = 1
            continue
        if _NEW_TO_OLD.get(x) != y or newer == 1:
            raise CharsetMismatchError("not the same id: mixed character sets")
        newer = -1
    return a if newer == -1 else b


def _translate(id: Optional[ID], table: dict) -> Optional[ID]:
    if id is None:
        return None
    text = str(id)
    body = "".join(table[char] for char in text[len(PREFIX):])
    return parse(PREFIX + body)


def old_charset_id_to_new(id: Optional[ID]) -> Optional[ID]:
    """Re-read an ID written in the old character set in the current one.

    This cannot tell whether the ID really used the old set; applying it to a
    correct ID corrupts it.
    """
    return _translate(id, _OLD_TO_NEW)


def new_charset_id_to_old(id: Optional[ID]) -> Optional[ID]:
    """Write an ID in the old character set; mostly of use in testing."""
    return _translate(id, _NEW_TO_OLD)