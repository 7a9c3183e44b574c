"""A console on the mini UART, set up on first use."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable, Optional

from .mutex import Mutex
from .pi.uart import MiniUart

_READ_TIMEOUT = timedelta(milliseconds=1000)


def _default_uart() -> MiniUart:
    uart = MiniUart()
    uart.set_read_timeout(_READ_TIMEOUT)
    return uart


class Console:
    """Read and write access to a UART that is created when first needed.

    ``factory`` builds the UART; by default it is the mini UART with a
    one-second read timeout.
    """

    def __init__(self, factory: Optional[Callable[[], MiniUart]] = None) -> None:
        self._factory = _default_uart if factory is None else factory
        self._uart = None

    @property
    def uart(self):
        """The UART behind the console, created on first access."""
        if self._uart is None:
            self._uart = self._factory()
        return self._uart

    def read_byte(self) -> int:
        """Read a byte, waiting until one is available."""
        return self.uart.read_byte()

    def write_byte(self, byte: int) -> None:
        """Write one byte."""
        self.uart.write_byte(byte)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes."""
        return self.uart.read(size)

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        return self.uart.write(data)

    def flush(self) -> None:
        """Wait until everything written has been sent."""
        self.uart.flush()

    def write_str(self, text: str) -> None:
        """Write ``text``."""
        self.uart.write_str(text)


CONSOLE: Mutex[Console] = Mutex(Console())
"""The console shared by the whole program."""


def kprint(console: Optional[Console], text: str) -> None:
    """Write ``text`` to ``console``, or to the shared console when it is None."""
    if console is None:
        with CONSOLE.lock() as guard:
            guard.value.write_str(text)
    else:
        console.write_str(text)


def kprintln(console: Optional[Console], text: str = "") -> None:
    """Write ``text`` followed by a newline."""
    kprint(console, text + "\n")