"""Generic storage of data identified by C4 ID.

A store hides how data is kept and lets producers and consumers of C4
identified data write and read it by its ID alone. A store may be a folder,
memory, or a wrapper that adds validation or logging around another store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .ids import ID


class InvalidIDError(ValueError):
    """Raised when data read or written does not match its C4 ID."""

    def __init__(self, message: str = "c4 id does not match data"):
        super().__init__(message)


class StoreNotImplementedError(NotImplementedError):
    """Raised by stores that do not support an operation."""

    def __init__(self, message: str = "not implemented"):
        super().__init__(message)


class _Stream:
    """Context-manager support for the stream objects stores hand out."""

    def __enter__(self) -> Any:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the stream."""


class Store(ABC):
    """Opens data for reading and creates data for writing, by C4 ID."""

    @abstractmethod
    def open(self, id: ID):
        """Return a readable binary stream of the data for `id`."""

    @abstractmethod
    def create(self, id: ID):
        """Return a writable binary stream that stores data under `id`."""

    def remove(self, id: ID) -> None:
        """Remove the data for `id`; stores that cannot do so raise."""
        raise StoreNotImplementedError(f"remove is not supported by {type(self).__name__}")