"""The mini UART: an 8-bit serial port on GPIO pins 14 and 15."""

from __future__ import annotations

import enum
from datetime import timedelta
from typing import Optional

from ..volatile import Memory, ReadVolatile, Volatile
from .common import IO_BASE, peripheral_memory
from .gpio import Function, Gpio
from .timer import Timer

MU_REG_BASE = IO_BASE + 0x215040
"""The base address of the mini UART registers."""

AUX_ENABLES = IO_BASE + 0x215004
"""The auxiliary peripheral enable register."""

_BAUD_DIVIDER = 270


class LsrStatus(enum.IntFlag):
    """Bits of the line status register."""

    DATA_READY = 1
    TX_EMPTY = 1 << 5
    TX_IDLE = 1 << 6


class MiniUart:
    """The mini UART, set up for 8-bit data at about 115200 baud.

    Reads never time out unless a timeout is set with ``set_read_timeout``.
    """

    def __init__(self, memory: Optional[Memory] = None) -> None:
        memory = peripheral_memory() if memory is None else memory
        self._memory = memory
        Volatile(memory, AUX_ENABLES, 1).or_mask(1)

        self._io = Volatile(memory, MU_REG_BASE, 1)
        self._ier = Volatile(memory, MU_REG_BASE + 4, 1)
        self._iir = Volatile(memory, MU_REG_BASE + 8, 1)
        self._lcr = Volatile(memory, MU_REG_BASE + 12, 1)
        self._mcr = Volatile(memory, MU_REG_BASE + 16, 1)
        self._lsr = ReadVolatile(memory, MU_REG_BASE + 20, 1)
        self._msr = ReadVolatile(memory, MU_REG_BASE + 24, 1)
        self._scratch = Volatile(memory, MU_REG_BASE + 28, 1)
        self._cntl = Volatile(memory, MU_REG_BASE + 32, 1)
        self._stat = ReadVolatile(memory, MU_REG_BASE + 36, 4)
        self._baud = Volatile(memory, MU_REG_BASE + 40, 2)

        Gpio(14, memory).into_alt(Function.ALT5)
        Gpio(15, memory).into_alt(Function.ALT5)

        self._cntl.write(0b00)
        self._lcr.write(0b11)
        self._baud.write(_BAUD_DIVIDER)
        self._cntl.write(0b11)

        self.timeout: Optional[timedelta] = None

    def set_read_timeout(self, timeout: timedelta) -> None:
        """Limit how long a read waits for the first byte."""
        self.timeout = timeout

    def write_byte(self, byte: int) -> None:
        """Write ``byte``, waiting until the transmit FIFO has room."""
        while not self._lsr.read() & LsrStatus.TX_EMPTY:
            pass
        self._io.write(byte)

    def has_byte(self) -> bool:
        """Return True if a byte is ready to be read."""
        return bool(self._lsr.read() & LsrStatus.DATA_READY)

    def wait_for_byte(self) -> None:
        """Wait until a byte is ready; raise TimeoutError if the timeout expires."""
        if self.timeout is None:
            while not self.has_byte():
                pass
            return
        timer = Timer(self._memory)
        deadline = timer.read() + self.timeout
        while timer.read() < deadline:
            if self.has_byte():
                return
        raise TimeoutError("Timed Out")

    def read_byte(self) -> int:
        """Read a byte, waiting for as long as it takes."""
        while not self.has_byte():
            pass
        return self._io.read()

    def is_idle(self) -> bool:
        """Return True once the last bit has been shifted out."""
        return bool(self._lsr.read() & LsrStatus.TX_IDLE)

    def write_str(self, text: str) -> None:
        """Write ``text``, sending each newline as a carriage return and newline."""
        for byte in text.encode():
            if byte == ord("\n"):
                self.write_byte(ord("\r"))
            self.write_byte(byte)

    def read(self, size: int) -> bytes:
        """Wait for data, then return up to ``size`` bytes that are ready."""
        self.wait_for_byte()
        received = bytearray()
        while len(received) < size and self.has_byte():
            received.append(self.read_byte())
        return bytes(received)

    def write(self, data: bytes) -> int:
        """Write every byte of ``data`` and return how many were written."""
        for byte in data:
            self.write_byte(byte)
        return len(data)

    def flush(self) -> None:
        """Wait until the transmitter is idle."""
        while not self.is_idle():
            pass