"""Addresses and clock rate shared by the simulated peripherals."""

from __future__ import annotations

import functools
import time

from ..volatile import Memory

IO_BASE = 0x3F000000
"""The address where I/O peripherals are mapped."""

CLOCK_HZ = 250 * 1000 * 1000

TIMER_REG_BASE = IO_BASE + 0x3000
"""The base address of the system timer registers."""

_TIMER_CLO = TIMER_REG_BASE + 4
_TIMER_CHI = TIMER_REG_BASE + 8
_MU_LSR = IO_BASE + 0x215054
_LSR_TRANSMITTER_READY = 0x60
_PERIPHERAL_SIZE = 0x216000
_WORD_MASK = 0xFFFFFFFF


class _PeripheralMemory(Memory):
    """Peripheral address space whose system timer counts real microseconds."""

    def load(self, address: int, width: int) -> int:
        if width == 4 and address in (_TIMER_CLO, _TIMER_CHI):
            micros = time.monotonic_ns() // 1000
            if address == _TIMER_CLO:
                return micros & _WORD_MASK
            return (micros >> 32) & _WORD_MASK
        return super().load(address, width)


@functools.lru_cache(maxsize=None)
def peripheral_memory() -> Memory:
    """Return the peripheral address space shared by every device.

    Its system timer follows the host's monotonic clock and its mini UART
    transmitter always reports itself ready and idle.
    """
    memory = _PeripheralMemory(IO_BASE, _PERIPHERAL_SIZE)
    memory.store(_MU_LSR, 1, _LSR_TRANSMITTER_READY)
    return memory