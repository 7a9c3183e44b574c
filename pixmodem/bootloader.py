"""Bootloader that receives a kernel over XMODEM, and a minimal kernel loop."""

from __future__ import annotations

import itertools
from datetime import timedelta
from typing import Optional

from .mutex import Mutex
from .pi.gpio import Gpio, PinOut
from .pi.timer import spin_sleep
from .pi.uart import MiniUart
from .volatile import Memory
from .xmodem import XmodemError, receive

BINARY_START_ADDR = 0x0080000
"""Where the loaded binary expects to be placed."""

BOOTLOADER_START_ADDR = 0x4000000
"""Where the bootloader itself lives."""

MAX_BINARY_SIZE = BOOTLOADER_START_ADDR - BINARY_START_ADDR
"""Free space between the loaded binary's start and the bootloader."""

PIN_16: Mutex[PinOut] = Mutex(PinOut(16))
"""The status LED pin shared by the whole program."""

_UART_TIMEOUT = timedelta(seconds=1)
_PAUSE = timedelta(seconds=2)
_GREETING = "Hello!"


class _BufferWriter:
    """Writes into a fixed buffer, accepting nothing once it is full."""

    def __init__(self, buffer) -> None:
        self._view = memoryview(buffer)
        self._position = 0

    def write(self, data: bytes) -> int:
        count = min(len(data), len(self._view) - self._position)
        self._view[self._position : self._position + count] = bytes(data[:count])
        self._position += count
        return count


def _flash(pin, count: int, millis: int, memory: Optional[Memory]) -> None:
    flash = timedelta(milliseconds=millis)
    for _ in range(count):
        pin.on()
        spin_sleep(flash, memory)
        pin.off()
        spin_sleep(flash, memory)


def flash_pin(pin, count: int, millis: int, memory: Optional[Memory] = None) -> None:
    """Flash ``pin`` ``count`` times, on and off for ``millis`` each.

    When ``pin`` is None the shared status pin is used.
    """
    if pin is None:
        with PIN_16.lock() as guard:
            _flash(guard.value, count, millis, memory)
    else:
        _flash(pin, count, millis, memory)


def _uart(uart, memory: Optional[Memory]):
    if uart is None:
        uart = MiniUart(memory)
        uart.set_read_timeout(_UART_TIMEOUT)
    return uart


def load_kernel(uart, buffer, pin=None, memory: Optional[Memory] = None) -> int:
    """Receive a kernel image into ``buffer`` over XMODEM, retrying until it succeeds.

    The status pin flashes five times at start, ten times after each failed
    attempt and twice on success. Returns the number of bytes received.
    """
    flash_pin(pin, 5, 450, memory)
    uart = _uart(uart, memory)
    while True:
        try:
            received = receive(uart, _BufferWriter(buffer))
        except (XmodemError, OSError, EOFError):
            flash_pin(pin, 10, 100, memory)
            spin_sleep(_PAUSE, memory)
            continue
        flash_pin(pin, 2, 100, memory)
        spin_sleep(_PAUSE, memory)
        return received


def hello_loop(uart=None, memory: Optional[Memory] = None, count: Optional[int] = None) -> None:
    """Turn on pin 16, then greet over the UART once a second.

    Runs forever unless ``count`` limits the number of greetings.
    """
    Gpio(16, memory).into_output().set()
    uart = _uart(uart, memory)
    delay = timedelta(seconds=1)
    rounds = itertools.count() if count is None else range(count)
    for _ in rounds:
        spin_sleep(delay, memory)
        uart.write_str(_GREETING)