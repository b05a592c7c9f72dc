"""A store that keeps all data in memory."""

from __future__ import annotations

import errno
import os
from typing import Dict, Optional

from .ids import ID
from .store import Store, _Stream


def _closed_error() -> ValueError:
    return ValueError("I/O operation on closed stream")


class _RamReader(_Stream):
    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0
        self.closed = False

    def read(self, size: Optional[int] = -1) -> bytes:
        if self.closed:
            raise _closed_error()
        if size is None or size < 0:
            chunk = self._data[self._pos:]
        else:
            chunk = self._data[self._pos:self._pos + size]
        self._pos += len(chunk)
        return chunk

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        self.closed = True


class _RamWriter(_Stream):
    def __init__(self, target: Dict[ID, bytes], id: ID):
        self._target = target
        self._id = id
        self._buffer = bytearray()
        self.closed = False

    def write(self, data) -> int:
        if self.closed:
            raise _closed_error()
        view = memoryview(data).cast("B")
        self._buffer += view
        return len(view)

    def writable(self) -> bool:
        return True

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._target[self._id] = bytes(self._buffer)


def _missing(id: ID) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(id))


class RAMStore(Store):
    """Data held in a dictionary; written data appears when its writer closes."""

    def __init__(self) -> None:
        self._data: Dict[ID, bytes] = {}

    def open(self, id: ID) -> _RamReader:
        """A read-only stream of the data for `id`; raises if it is absent."""
        try:
            return _RamReader(self._data[id])
        except KeyError:
            raise _missing(id) from None

    def create(self, id: ID) -> _RamWriter:
        """A stream that stores its data under `id` when closed."""
        if id in self._data:
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(id))
        return _RamWriter(self._data, id)

    def remove(self, id: ID) -> None:
        """Forget the data for `id`; raises if it is absent."""
        try:
            del self._data[id]
        except KeyError:
            raise _missing(id) from None

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, id: object) -> bool:
        return id in self._data