"""A store that keeps each item as a file named by its C4 ID."""

from __future__ import annotations

import os
from typing import BinaryIO, Union

from .ids import ID
from .store import Store


class FolderStore(Store):
    """Files in one folder, each named by the C4 ID of its content."""

    def __init__(self, path: Union[str, "os.PathLike[str]"]):
        self.path = os.fspath(path)

    def _file(self, id: ID) -> str:
        return os.path.join(self.path, str(id))

    def open(self, id: ID) -> BinaryIO:
        """Open the file for `id` for reading; raises if it does not exist."""
        return open(self._file(id), "rb")

    def create(self, id: ID) -> BinaryIO:
        """Create the file for `id` for writing; raises FileExistsError if present."""
        return open(self._file(id), "xb")

    def remove(self, id: ID) -> None:
        """Delete the file for `id`."""
        os.remove(self._file(id))

    def __repr__(self) -> str:
        return f"FolderStore({self.path!r})"