"""A store wrapper that logs calls and errors to a text stream."""

from __future__ import annotations

import enum
from typing import Any, Optional, TextIO

from .ids import ID
from .store import InvalidIDError, Store, _Stream


class LoggerFlags(enum.IntFlag):
    """Which calls and errors a LoggerStore writes to its log."""

    OPEN = 1
    CREATE = 2
    REMOVE = 4
    READ = 8
    WRITE = 16
    CLOSE = 32
    ERROR = 64
    INVALID_ID = 128
    EOF = 256


_DEFAULT_FLAGS = (
    LoggerFlags.OPEN
    | LoggerFlags.CREATE
    | LoggerFlags.READ
    | LoggerFlags.WRITE
    | LoggerFlags.CLOSE
    | LoggerFlags.ERROR
    | LoggerFlags.INVALID_ID
    | LoggerFlags.EOF
)


class _Journal:
    def __init__(self, out: TextIO, flags: LoggerFlags, id: ID):
        self._out = out
        self._flags = flags
        self._id = str(id)

    def note(self, flag: LoggerFlags, text: str) -> None:
        if self._flags & flag:
            self._out.write(f"{self._id} {text}\n")

    def failure(self, name: str, exc: BaseException, flag: Optional[LoggerFlags] = None) -> None:
        if flag is None:
            flag = LoggerFlags.INVALID_ID if isinstance(exc, InvalidIDError) else LoggerFlags.ERROR
        self.note(flag, f"{name} error {exc}")


class _LoggingReader(_Stream):
    def __init__(self, reader: Any, journal: _Journal):
        self._reader = reader
        self._journal = journal

    def read(self, size: Optional[int] = -1) -> bytes:
        try:
            data = self._reader.read(size)
        except Exception as exc:
            self._journal.note(LoggerFlags.READ, "Read 0")
            self._journal.failure("Read", exc)
            raise
        self._journal.note(LoggerFlags.READ, f"Read {len(data)}")
        if not data and size != 0:
            self._journal.note(LoggerFlags.EOF, "Read error EOF")
        return data

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        self._journal.note(LoggerFlags.CLOSE, "Close")
        try:
            self._reader.close()
        except Exception as exc:
            self._journal.failure("Close", exc)
            raise


class _LoggingWriter(_Stream):
    def __init__(self, writer: Any, journal: _Journal):
        self._writer = writer
        self._journal = journal

    def write(self, data) -> int:
        try:
            written = self._writer.write(data)
        except Exception as exc:
            self._journal.note(LoggerFlags.WRITE, "Write 0")
            self._journal.failure("Write", exc)
            raise
        if written is None:
            written = memoryview(data).nbytes
        self._journal.note(LoggerFlags.WRITE, f"Write {written}")
        return written

    def writable(self) -> bool:
        return True

    def close(self) -> None:
        self._journal.note(LoggerFlags.CLOSE, "Close")
        try:
            self._writer.close()
        except Exception as exc:
            self._journal.failure("Close", exc)
            raise


class LoggerStore(Store):
    """Wraps a store and logs its calls, and those of its streams, as flags select.

    With no flags every call except remove is logged, along with all errors.
    """

    def __init__(self, store: Store, log: TextIO, flags: LoggerFlags = LoggerFlags(0)):
        self.store = store
        self.log = log
        self.flags = LoggerFlags(flags) if flags else _DEFAULT_FLAGS

    def _journal(self, id: ID) -> _Journal:
        return _Journal(self.log, self.flags, id)

    def open(self, id: ID) -> _LoggingReader:
        """Log and open `id` in the wrapped store."""
        journal = self._journal(id)
        journal.note(LoggerFlags.OPEN, "Open")
        try:
            reader = self.store.open(id)
        except Exception as exc:
            journal.failure("Open", exc, LoggerFlags.ERROR)
            raise
        return _LoggingReader(reader, journal)

    def create(self, id: ID) -> _LoggingWriter:
        """Log and create `id` in the wrapped store."""
        journal = self._journal(id)
        journal.note(LoggerFlags.CREATE, "Create")
        try:
            writer = self.store.create(id)
        except Exception as exc:
            journal.failure("Create", exc, LoggerFlags.ERROR)
            raise
        return _LoggingWriter(writer, journal)

    def remove(self, id: ID) -> None:
        """Log and remove `id` from the wrapped store."""
        journal = self._journal(id)
        journal.note(LoggerFlags.REMOVE, "Remove")
        try:
            self.store.remove(id)
        except Exception as exc:
            journal.failure("Remove", exc, LoggerFlags.ERROR)
            raise