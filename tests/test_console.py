from datetime import timedelta

import pytest

from pixmodem.console import Console, kprint, kprintln
from pixmodem.pi.common import peripheral_memory
from pixmodem.pi.uart import MU_REG_BASE


class FakeUart:
    def __init__(self, incoming=b""):
        self.incoming = bytearray(incoming)
        self.sent = bytearray()
        self.text = []
        self.flushed = 0

    def read_byte(self):
        return self.incoming.pop(0)

    def write_byte(self, byte):
        self.sent.append(byte)

    def read(self, size):
        chunk = bytes(self.incoming[:size])
        del self.incoming[:size]
        return chunk

    def write(self, data):
        self.sent += data
        return len(data)

    def flush(self):
        self.flushed += 1

    def write_str(self, text):
        self.text.append(text)


@pytest.fixture
def made():
    return []


@pytest.fixture
def console_and_uart(made):
    uart = FakeUart(b"abcdef")

    def factory():
        made.append(uart)
        return uart

    return Console(factory), uart


def test_uart_created_lazily_and_once(console_and_uart, made):
    console, uart = console_and_uart
    assert made == []
    console.write_byte(1)
    console.write_byte(2)
    assert made == [uart]
    assert console.uart is uart


def test_byte_io_delegates(console_and_uart):
    console, uart = console_and_uart
    assert console.read_byte() == ord("a")
    console.write_byte(0x42)
    assert uart.sent == bytearray([0x42])


def test_stream_io_delegates(console_and_uart):
    console, uart = console_and_uart
    assert console.read(3) == b"abc"
    assert console.write(b"xyz") == 3
    console.flush()
    assert uart.sent == bytearray(b"xyz")
    assert uart.flushed == 1


def test_kprint_and_kprintln(console_and_uart):
    console, uart = console_and_uart
    kprint(console, "hi")
    kprintln(console, "there")
    kprintln(console)
    assert uart.text == ["hi", "there\n", "\n"]


def test_default_console_uses_mini_uart_with_timeout():
    console = Console()
    console.write_byte(0x41)
    assert peripheral_memory().load(MU_REG_BASE, 1) == 0x41
    assert console.uart.timeout == timedelta(milliseconds=1000)


def test_kprintln_to_shared_console_ends_with_newline():
    kprintln(None, "boot")
    assert peripheral_memory().load(MU_REG_BASE, 1) == ord("\n")