"""File mode bits and their ten-character "ls" form."""

from __future__ import annotations

MODE_DIR = 1 << 31
MODE_APPEND = 1 << 30
MODE_EXCLUSIVE = 1 << 29
MODE_TEMPORARY = 1 << 28
MODE_SYMLINK = 1 << 27
MODE_DEVICE = 1 << 26
MODE_NAMED_PIPE = 1 << 25
MODE_SOCKET = 1 << 24
MODE_SETUID = 1 << 23
MODE_SETGID = 1 << 22
MODE_CHAR_DEVICE = 1 << 21
MODE_STICKY = 1 << 20
MODE_IRREGULAR = 1 << 19

READ = 0o4
WRITE = 0o2
EXEC = 0o1
USER_SHIFT = 6
GROUP_SHIFT = 3
OTHER_SHIFT = 0

USER_R = READ << USER_SHIFT
USER_W = WRITE << USER_SHIFT
USER_X = EXEC << USER_SHIFT
USER_RW = USER_R | USER_W
USER_RWX = USER_RW | USER_X

GROUP_R = READ << GROUP_SHIFT
GROUP_W = WRITE << GROUP_SHIFT
GROUP_X = EXEC << GROUP_SHIFT
GROUP_RW = GROUP_R | GROUP_W
GROUP_RWX = GROUP_RW | GROUP_X

OTHER_R = READ << OTHER_SHIFT
OTHER_W = WRITE << OTHER_SHIFT
OTHER_X = EXEC << OTHER_SHIFT
OTHER_RW = OTHER_R | OTHER_W
OTHER_RWX = OTHER_RW | OTHER_X

ALL_R = USER_R | GROUP_R | OTHER_R
ALL_W = USER_W | GROUP_W | OTHER_W
ALL_X = USER_X | GROUP_X | OTHER_X

_TYPE_LETTERS = "dalTLDpSugct?"
_TYPE_BITS = [(letter, 1 << (31 - i)) for i, letter in enumerate(_TYPE_LETTERS)]
# The text is lower-cased before its type letter is looked up, so the
# upper-case letters are never matched.
_PARSE_TYPES = {letter: bit for letter, bit in _TYPE_BITS if letter != "?"}
_PERMISSIONS = [(letter, 1 << (8 - i)) for i, letter in enumerate("rwxrwxrwx")]


def parse_file_mode(text: str) -> int:
    """Parse a mode string such as "drwxr-xr-x" into mode bits."""
    if len(text) < 10:
        raise ValueError("unable to parse file mode: string too short")
    text = text.lower()
    mode = _PARSE_TYPES.get(text[0], 0)
    for char, (letter, bit) in zip(text[1:10], _PERMISSIONS):
        if char == letter:
            mode |= bit
    return mode


def format_file_mode(mode: int) -> str:
    """Write mode bits as type letters (or "-") followed by nine permission letters."""
    types = "".join(letter for letter, bit in _TYPE_BITS if mode & bit) or "-"
    perms = "".join(letter if mode & bit else "-" for letter, bit in _PERMISSIONS)
    return types + perms


def is_dir(mode: int) -> bool:
    """True when the directory bit is set."""
    return bool(mode & MODE_DIR)