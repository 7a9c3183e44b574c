"""Parsers for serial-port command-line options."""

from __future__ import annotations

import enum

import serial

_WIDTHS = {
    "5": serial.FIVEBITS,
    "6": serial.SIXBITS,
    "7": serial.SEVENBITS,
    "8": serial.EIGHTBITS,
}

_STOP_BITS = {
    "1": serial.STOPBITS_ONE,
    "2": serial.STOPBITS_TWO,
}

_DIGITS = frozenset("0123456789")
_MAX_SPEED = 2**64


class FlowControl(enum.Enum):
    """Flow-control mode of a serial port."""

    NONE = "none"
    SOFTWARE = "software"
    HARDWARE = "hardware"

    @property
    def xonxoff(self) -> bool:
        """Whether XON/XOFF software flow control is on."""
        return self is FlowControl.SOFTWARE

    @property
    def rtscts(self) -> bool:
        """Whether RTS/CTS hardware flow control is on."""
        return self is FlowControl.HARDWARE


def parse_width(text: str) -> int:
    """Parse a character width of 5 to 8 bits."""
    try:
        return _WIDTHS[text]
    except KeyError:
        raise ValueError("value must be >= 5 and <= 8") from None


def parse_stop_bits(text: str):
    """Parse a number of stop bits, 1 or 2."""
    try:
        return _STOP_BITS[text]
    except KeyError:
        raise ValueError("value must '1' or '2'") from None


def parse_flow_control(text: str) -> FlowControl:
    """Parse 'none', 'software' or 'hardware'."""
    try:
        return FlowControl(text)
    except ValueError:
        raise ValueError(
            "value must be 'none', 'software' (xon/xoff), or 'hardware' (rts/cts)"
        ) from None


def parse_baud_rate(text: str) -> int:
    """Parse a baud rate as an unsigned decimal number."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    digits = text[1:] if text.startswith("+") else text
    if not digits or not set(digits) <= _DIGITS:
        raise ValueError("invalid digit found in string")
    speed = int(digits)
    if speed >= _MAX_SPEED:
        raise ValueError("number too large to fit in target type")
    return speed