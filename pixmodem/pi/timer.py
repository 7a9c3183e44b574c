"""The ARM system timer: a free-running 64-bit microsecond counter."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from ..volatile import Memory, ReadVolatile, Volatile
from .common import TIMER_REG_BASE, peripheral_memory


class Timer:
    """The system timer's registers."""

    def __init__(self, memory: Optional[Memory] = None) -> None:
        memory = peripheral_memory() if memory is None else memory
        self._cs = Volatile(memory, TIMER_REG_BASE, 4)
        self._clo = ReadVolatile(memory, TIMER_REG_BASE + 4, 4)
        self._chi = ReadVolatile(memory, TIMER_REG_BASE + 8, 4)
        self._compare = tuple(
            Volatile(memory, TIMER_REG_BASE + 12 + 4 * index, 4) for index in range(4)
        )

    def read(self) -> timedelta:
        """Return the time elapsed since the counter started."""
        lo = self._clo.read()
        hi = self._chi.read()
        return timedelta(microseconds=(hi << 32) | lo)


def current_time(memory: Optional[Memory] = None) -> timedelta:
    """Return the current value of the system timer."""
    return Timer(memory).read()


def spin_sleep(duration: timedelta, memory: Optional[Memory] = None) -> None:
    """Busy-wait until ``duration`` has passed on the system timer."""
    timer = Timer(memory)
    deadline = timer.read() + duration
    while timer.read() < deadline:
        pass