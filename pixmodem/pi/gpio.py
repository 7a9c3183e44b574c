"""General-purpose I/O pins and their function-select registers."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass
from typing import Optional

from ..volatile import Memory, ReadVolatile, Volatile, WriteVolatile
from .common import IO_BASE, peripheral_memory

GPIO_BASE = IO_BASE + 0x200000
"""The base address of the GPIO registers."""

_MAX_PIN = 53


class Function(enum.IntEnum):
    """The function a GPIO pin can be switched to."""

    INPUT = 0b000
    OUTPUT = 0b001
    ALT0 = 0b100
    ALT1 = 0b101
    ALT2 = 0b110
    ALT3 = 0b111
    ALT4 = 0b011
    ALT5 = 0b010


class GpioState(enum.Enum):
    """The state a pin has been put in."""

    UNINITIALIZED = "uninitialized"
    INPUT = "input"
    OUTPUT = "output"
    ALT = "alt"


@dataclass(frozen=True)
class _Registers:
    fsel: tuple
    set: tuple
    clr: tuple
    lev: tuple
    eds: tuple
    ren: tuple
    fen: tuple
    hen: tuple
    len: tuple
    aren: tuple
    afen: tuple
    pud: Volatile
    pudclk: tuple


def _registers(memory: Memory) -> _Registers:
    def bank(kind, offset, count):
        return tuple(kind(memory, GPIO_BASE + offset + 4 * i, 4) for i in range(count))

    return _Registers(
        fsel=bank(Volatile, 0x00, 6),
        set=bank(WriteVolatile, 0x1C, 2),
        clr=bank(WriteVolatile, 0x28, 2),
        lev=bank(ReadVolatile, 0x34, 2),
        eds=bank(Volatile, 0x40, 2),
        ren=bank(Volatile, 0x4C, 2),
        fen=bank(Volatile, 0x58, 2),
        hen=bank(Volatile, 0x64, 2),
        len=bank(Volatile, 0x70, 2),
        aren=bank(Volatile, 0x7C, 2),
        afen=bank(Volatile, 0x88, 2),
        pud=Volatile(memory, GPIO_BASE + 0x94, 4),
        pudclk=bank(Volatile, 0x98, 2),
    )


class Gpio:
    """A GPIO pin.

    A pin starts uninitialized and is switched to input, output or an
    alternative function with ``into_input``, ``into_output`` or ``into_alt``.
    Each switch returns a new pin and leaves the old one unusable.
    """

    def __init__(self, pin: int, memory: Optional[Memory] = None) -> None:
        if not 0 <= pin <= _MAX_PIN:
            raise ValueError(f"Gpio(): pin {pin} exceeds maximum of {_MAX_PIN}")
        self.pin = pin
        self._registers = _registers(peripheral_memory() if memory is None else memory)
        self._state: Optional[GpioState] = GpioState.UNINITIALIZED

    @property
    def state(self) -> Optional[GpioState]:
        """The pin's state, or None once it has been switched to another."""
        return self._state

    def _require(self, state: GpioState) -> None:
        if self._state is None:
            raise RuntimeError(f"pin {self.pin} has already been switched")
        if self._state is not state:
            raise RuntimeError(
                f"pin {self.pin} is {self._state.value}, not {state.value}"
            )

    def _transition(self, state: GpioState) -> Gpio:
        successor = copy.copy(self)
        successor._state = state
        self._state = None
        return successor

    def _bank_bit(self) -> tuple[int, int]:
        return self.pin // 32, 1 << (self.pin % 32)

    def into_alt(self, function: Function) -> Gpio:
        """Select ``function`` for the pin and return it in the alt state."""
        self._require(GpioState.UNINITIALIZED)
        register = self._registers.fsel[self.pin // 10]
        offset = 3 * (self.pin % 10)
        value = register.read() & ~(0b111 << offset)
        register.write(value | (Function(function) << offset))
        return self._transition(GpioState.ALT)

    def into_output(self) -> Gpio:
        """Make the pin an output pin."""
        return self.into_alt(Function.OUTPUT)._transition(GpioState.OUTPUT)

    def into_input(self) -> Gpio:
        """Make the pin an input pin."""
        return self.into_alt(Function.INPUT)._transition(GpioState.INPUT)

    def set(self) -> None:
        """Turn the output pin on."""
        self._require(GpioState.OUTPUT)
        bank, bit = self._bank_bit()
        self._registers.set[bank].write(bit)

    def clear(self) -> None:
        """Turn the output pin off."""
        self._require(GpioState.OUTPUT)
        bank, bit = self._bank_bit()
        self._registers.clr[bank].write(bit)

    def level(self) -> bool:
        """Return True if the input pin's level is high."""
        self._require(GpioState.INPUT)
        bank, bit = self._bank_bit()
        return self._registers.lev[bank].read() & bit > 0


class PinOut:
    """An output pin that is configured on first use."""

    def __init__(self, pin: int, memory: Optional[Memory] = None) -> None:
        self.pin = pin
        self._memory = memory
        self._inner: Optional[Gpio] = None

    def _gpio(self) -> Gpio:
        if self._inner is None:
            self._inner = Gpio(self.pin, self._memory).into_output()
        return self._inner

    def on(self) -> None:
        """Turn the pin on."""
        self._gpio().set()

    def off(self) -> None:
        """Turn the pin off."""
        self._gpio().clear()