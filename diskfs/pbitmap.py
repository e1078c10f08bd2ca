"""A bitmap that can be stored in, and fetched from, a file."""

from __future__ import annotations

from typing import Protocol

from .bitmap import Bitmap


class _RandomAccess(Protocol):
    def read_at(self, num_bytes: int, position: int) -> bytes: ...

    def write_at(self, data: bytes, position: int) -> int: ...


class PersistentBitmap(Bitmap):
    """A bitmap of ``num_items`` bits, optionally loaded from ``file``.

    Without ``file`` every bit starts clear; with it, the bits are read from
    the start of the file as written by :meth:`write_back`.
    """

    def __init__(self, num_items: int, file: _RandomAccess | None = None):
        super().__init__(num_items)
        if file is not None:
            self.fetch_from(file)

    def fetch_from(self, file: _RandomAccess) -> None:
        """Replace the bits with those stored at the start of ``file``."""
        self.load_bytes(file.read_at(self.num_words * 4, 0))

    def write_back(self, file: _RandomAccess) -> None:
        """Store the bits at the start of ``file``."""
        file.write_at(self.to_bytes(), 0)