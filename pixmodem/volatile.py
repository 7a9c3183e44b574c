"""Simulated memory-mapped registers with read-only, write-only and read-write access."""

from __future__ import annotations

_WIDTHS = (1, 2, 4, 8)


class Memory:
    """A little-endian byte-addressed region starting at ``base``."""

    def __init__(self, base: int, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self.base = base
        self.size = size
        self._data = bytearray(size)

    def _offset(self, address: int, width: int) -> int:
        if width not in _WIDTHS:
            raise ValueError(f"unsupported access width {width}")
        offset = address - self.base
        if offset < 0 or offset + width > self.size:
            raise IndexError(f"access of {width} bytes at {address:#x} is outside memory")
        return offset

    def load(self, address: int, width: int) -> int:
        """Read an unsigned ``width``-byte value at ``address``."""
        offset = self._offset(address, width)
        return int.from_bytes(self._data[offset : offset + width], "little")

    def store(self, address: int, width: int, value: int) -> None:
        """Write an unsigned ``width``-byte value at ``address``."""
        offset = self._offset(address, width)
        if not 0 <= value < 1 << (8 * width):
            raise ValueError(f"value {value:#x} does not fit in {width} bytes")
        self._data[offset : offset + width] = value.to_bytes(width, "little")


class Reserved:
    """A register slot that can be neither read nor written."""

    def __init__(self, memory: Memory, address: int, width: int = 4) -> None:
        memory._offset(address, width)
        self.memory = memory
        self.address = address
        self.width = width

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address:#x}, size={self.width})"


class ReadVolatile(Reserved):
    """A read-only register."""

    def read(self) -> int:
        """Return the register's current value."""
        return self.memory.load(self.address, self.width)

    def has_mask(self, mask: int) -> bool:
        """Return True if every bit of ``mask`` is set in the register."""
        return self.read() & mask == mask


class WriteVolatile(Reserved):
    """A write-only register."""

    def write(self, value: int) -> None:
        """Store ``value`` in the register."""
        self.memory.store(self.address, self.width, value)


class Volatile(ReadVolatile, WriteVolatile):
    """A read-write register."""

    def and_mask(self, mask: int) -> None:
        """Clear every bit not set in ``mask``."""
        self.write(self.read() & mask)

    def or_mask(self, mask: int) -> None:
        """Set every bit set in ``mask``."""
        self.write(self.read() | mask)