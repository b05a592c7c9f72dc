"""A store backed by a mapping from C4 IDs to file paths."""

from __future__ import annotations

import errno
import os
from typing import BinaryIO, Dict, Iterator, MutableMapping, Optional, Tuple

from .ids import ID
from .store import Store


class MapStore(Store):
    """Data kept in files whose paths are looked up by C4 ID."""

    def __init__(self, mapping: Optional[MutableMapping[ID, str]] = None):
        self._mapping: MutableMapping[ID, str] = {} if mapping is None else mapping

    def _path(self, id: ID) -> str:
        try:
            return self._mapping[id]
        except KeyError:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(id)) from None

    def open(self, id: ID) -> BinaryIO:
        """Open the file mapped to `id` for reading."""
        return open(self._path(id), "rb")

    def create(self, id: ID) -> BinaryIO:
        """Create or truncate the file mapped to `id` for writing."""
        return open(self._path(id), "wb")

    def remove(self, id: ID) -> None:
        """Delete the file mapped to `id`; the mapping itself is kept."""
        os.remove(self._path(id))

    def delete(self, id: ID) -> None:
        """Drop `id` from the mapping, if present."""
        self._mapping.pop(id, None)

    def load(self, id: ID) -> Optional[str]:
        """The path mapped to `id`, or None."""
        return self._mapping.get(id)

    def load_or_store(self, id: ID, path: str) -> Tuple[str, bool]:
        """Return the existing path and True, or store `path` and return it with False."""
        existing = self._mapping.get(id)
        if existing is not None:
            return existing, True
        self._mapping[id] = path
        return path, False

    def items(self) -> Iterator[Tuple[ID, str]]:
        """Every (id, path) pair in the mapping."""
        return iter(list(self._mapping.items()))

    def __len__(self) -> int:
        return len(self._mapping)