"""XMODEM transfers, a serial sending command and a simulated Raspberry Pi peripheral model."""

__version__ = "0.1.0"