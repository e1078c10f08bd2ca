"""A fixed-size array of bits, stored as 32-bit little-endian words."""

from __future__ import annotations

from collections.abc import Iterator

from .utility import div_round_up

BITS_IN_BYTE = 8
BITS_IN_WORD = 32
BYTES_IN_WORD = BITS_IN_WORD // BITS_IN_BYTE


class Bitmap:
    """A bitmap of ``num_items`` bits, all clear at first."""

    def __init__(self, num_items: int):
        if num_items <= 0:
            raise ValueError(f"bitmap needs at least one bit, got {num_items}")
        self._num_bits = num_items
        self._num_words = div_round_up(num_items, BITS_IN_WORD)
        self._map = 0

    @property
    def num_bits(self) -> int:
        return self._num_bits

    @property
    def num_words(self) -> int:
        return self._num_words

    def __len__(self) -> int:
        return self._num_bits

    def _check(self, which: int) -> None:
        if not 0 <= which < self._num_bits:
            raise IndexError(f"bit {which} out of range 0..{self._num_bits - 1}")

    def mark(self, which: int) -> None:
        """Set bit ``which``."""
        self._check(which)
        self._map |= 1 << which

    def clear(self, which: int) -> None:
        """Clear bit ``which``."""
        self._check(which)
        self._map &= ~(1 << which)

    def test(self, which: int) -> bool:
        """Return True if bit ``which`` is set."""
        self._check(which)
        return bool(self._map >> which & 1)

    def find_and_set(self) -> int | None:
        """Set the lowest clear bit and return its number, or None if all are set."""
        for which in range(self._num_bits):
            if not self.test(which):
                self.mark(which)
                return which
        return None

    def num_clear(self) -> int:
        """Return how many bits are clear."""
        return sum(1 for which in range(self._num_bits) if not self.test(which))

    def set_bits(self) -> Iterator[int]:
        """Yield the numbers of the set bits in increasing order."""
        return (which for which in range(self._num_bits) if self.test(which))

    def to_bytes(self) -> bytes:
        """Return the storage words as bytes, ``num_words * 4`` long."""
        return self._map.to_bytes(self._num_words * BYTES_IN_WORD, "little")

    def load_bytes(self, data: bytes) -> None:
        """Overwrite storage with ``data``; a short ``data`` replaces only a prefix."""
        size = self._num_words * BYTES_IN_WORD
        image = bytearray(self.to_bytes())
        chunk = bytes(data[:size])
        image[: len(chunk)] = chunk
        self._map = int.from_bytes(image, "little")

    def format(self) -> str:
        """Return a listing of the set bits."""
        return "Bitmap set:\n" + "".join(f"{which}, " for which in self.set_bits()) + "\n"