"""Read-only, bounds-checked view over a memory image."""

from typing import Iterable, Iterator

from pyquill.decoder.errors import MalformedTable


class ByteImage:
    """An addressable byte array.

    Every access names the table being decoded so a failure can say where
    it happened.
    """

    def __init__(self, data: bytes | bytearray | memoryview | Iterable[int]) -> None:
        if isinstance(data, (bytes, bytearray, memoryview)):
            self._data = bytes(data)
        else:
            # bytes() rejects values outside 0..255
            self._data = bytes(list(data))

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, addr: int) -> int:
        return self.byte(addr)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def byte(self, addr: int, table: str = "image") -> int:
        """Read one byte."""
        if not 0 <= addr < len(self._data):
            raise MalformedTable(table, addr)
        return self._data[addr]

    def word(self, addr: int, table: str = "image") -> int:
        """Read a little-endian 16-bit word."""
        return self.byte(addr, table) + 256 * self.byte(addr + 1, table)

    def slice(self, start: int, length: int, table: str = "image") -> bytes:
        """Read ``length`` consecutive bytes."""
        if length < 0 or start < 0 or start + length > len(self._data):
            raise MalformedTable(table, start)
        return self._data[start:start + length]
