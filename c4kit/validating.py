"""A store wrapper that checks data against its C4 ID."""

from __future__ import annotations

import hashlib
from typing import Any, Optional

from .ids import ID
from .store import InvalidIDError, Store, _Stream


class _ValidatingReader(_Stream):
    def __init__(self, reader: Any, id: ID):
        self._reader = reader
        self._id = id
        self._hash = hashlib.sha512()
        self.closed = False

    def _valid(self) -> bool:
        return self._hash.digest() == self._id.digest

    def read(self, size: Optional[int] = -1) -> bytes:
        data = self._reader.read(size)
        self._hash.update(data)
        at_end = size is None or size < 0 or (size > 0 and not data)
        if at_end and not self._valid():
            raise InvalidIDError()
        return data

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self._reader.close()
        finally:
            if not self._valid():
                raise InvalidIDError()


class _ValidatingWriter(_Stream):
    def __init__(self, writer: Any, id: ID, store: Store):
        self._writer = writer
        self._id = id
        self._store = store
        self._hash = hashlib.sha512()
        self.closed = False

    def write(self, data) -> int:
        view = memoryview(data).cast("B")
        written = self._writer.write(view)
        if written is None:
            written = len(view)
        self._hash.update(view[:written])
        return written

    def writable(self) -> bool:
        return True

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        failure: Optional[BaseException] = None
        try:
            self._writer.close()
        except Exception as exc:
            failure = exc
        if self._hash.digest() != self._id.digest:
            try:
                self._store.remove(self._id)
            except Exception:
                pass
            raise InvalidIDError() from failure
        if failure is not None:
            raise failure


class ValidatingStore(Store):
    """Wraps a store and checks every read and write against its C4 ID.

    The check happens when a stream is closed, or when a read reaches the end
    of the data. Data written under the wrong ID is removed again.
    """

    def __init__(self, store: Store):
        self.store = store

    def open(self, id: ID) -> _ValidatingReader:
        """Open `id` in the wrapped store, checking the data as it is read."""
        return _ValidatingReader(self.store.open(id), id)

    def create(self, id: ID) -> _ValidatingWriter:
        """Create `id` in the wrapped store, checking the data when closed."""
        return _ValidatingWriter(self.store.create(id), id, self.store)

    def remove(self, id: ID) -> None:
        """Remove `id` from the wrapped store."""
        self.store.remove(id)