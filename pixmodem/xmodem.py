"""XMODEM transfers with 128-byte packets and an additive 8-bit checksum."""

from __future__ import annotations

import io
from typing import Callable

from .progress import Progress, ProgressKind, noop

SOH = 0x01
EOT = 0x04
ACK = 0x06
NAK = 0x15
CAN = 0x18

PACKET_SIZE = 128
_RETRIES = 10

ProgressFn = Callable[[Progress], None]


class XmodemError(Exception):
    """Base class for protocol failures."""


class InvalidData(XmodemError):
    """The peer sent a byte the protocol does not allow at this point."""


class Aborted(XmodemError):
    """The peer cancelled the transfer with CAN."""


class ChecksumMismatch(XmodemError):
    """A packet was rejected because of a bad checksum; it may be retried."""


class ShortPacket(XmodemError):
    """A packet shorter than 128 bytes (and not empty) was supplied."""


class TransferFailed(XmodemError):
    """A packet could not be transferred within the retry limit."""


def checksum(data: bytes) -> int:
    """Return the wrapping 8-bit sum of ``data``."""
    return sum(data) & 0xFF


def read_max(stream, size: int) -> bytes:
    """Read from ``stream`` until ``size`` bytes are gathered or it runs dry."""
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        try:
            chunk = stream.read(remaining)
        except InterruptedError:
            continue
        if not chunk:
            break
        chunks.append(bytes(chunk))
        remaining -= len(chunk)
    return b"".join(chunks)


def _write_all(stream, data: bytes) -> None:
    view = memoryview(bytes(data))
    while view:
        written = stream.write(bytes(view))
        if written is None:
            written = len(view)
        if written == 0:
            raise OSError("failed to write whole buffer")
        view = view[written:]


class Xmodem:
    """One end of an XMODEM session over a duplex byte stream."""

    def __init__(self, inner, progress: ProgressFn = noop) -> None:
        self.inner = inner
        self.progress = progress
        self.packet = 1
        self.started = False

    def _next_packet(self) -> None:
        self.packet = (self.packet + 1) % 256

    def read_byte(self, abort_on_can: bool = False) -> int:
        """Read one byte; raise ``Aborted`` on CAN when ``abort_on_can`` is set."""
        data = self.inner.read(1)
        if not data:
            raise EOFError("stream ended before a byte was read")
        byte = data[0]
        if abort_on_can and byte == CAN:
            raise Aborted("received CAN")
        return byte

    def write_byte(self, byte: int) -> None:
        """Write one byte to the stream."""
        _write_all(self.inner, bytes([byte]))

    def expect_byte_or_cancel(self, byte: int, expected: str) -> int:
        """Read a byte that must equal ``byte``; send CAN on a mismatch."""
        read = self.read_byte(False)
        if read == byte:
            return read
        self.write_byte(CAN)
        if read == CAN:
            raise Aborted(expected)
        raise InvalidData(expected)

    def expect_byte(self, byte: int, expected: str) -> int:
        """Read a byte that must equal ``byte``."""
        read = self.read_byte(False)
        if read == byte:
            return read
        if read == CAN:
            raise Aborted("received CAN")
        raise InvalidData(expected)

    def read_packet(self) -> bytes:
        """Receive one packet: 128 bytes of data, or ``b""`` at end of transmission."""
        if not self.started:
            self.write_byte(NAK)
            self.progress(Progress(ProgressKind.STARTED))
            self.started = True

        first = self.read_byte(True)
        if first == EOT:
            self.write_byte(NAK)
            self.expect_byte(EOT, "EOT")
            self.write_byte(ACK)
            return b""
        if first != SOH:
            raise InvalidData("expected SOH or EOT")

        self.expect_byte_or_cancel(self.packet, "wrong packet number")
        self.expect_byte_or_cancel(255 - self.packet, "wrong packet complement")
        data = bytes(self.read_byte(False) for _ in range(PACKET_SIZE))
        if self.read_byte(False) != checksum(data):
            self.write_byte(NAK)
            raise ChecksumMismatch("wrong checksum")

        self.write_byte(ACK)
        self.progress(Progress(ProgressKind.PACKET, self.packet))
        self._next_packet()
        return data

    def write_packet(self, data: bytes) -> int:
        """Send one packet, or end of transmission when ``data`` is empty.

        Returns the number of data bytes sent.
        """
        if 0 < len(data) < PACKET_SIZE:
            raise ShortPacket("too short")
        if not self.started:
            self.progress(Progress(ProgressKind.WAITING))
            self.expect_byte(NAK, "not NAK")
            self.started = True
            self.progress(Progress(ProgressKind.STARTED))

        if not data:
            self.write_byte(EOT)
            self.expect_byte(NAK, "not NAK")
            self.write_byte(EOT)
            self.expect_byte(ACK, "not ACK")
            return 0

        frame = bytes([SOH, self.packet, 255 - self.packet]) + bytes(data)
        _write_all(self.inner, frame + bytes([checksum(data)]))

        reply = self.read_byte(True)
        if reply == NAK:
            raise ChecksumMismatch("receiver rejected packet")
        if reply != ACK:
            raise InvalidData("expected ACK or NAK")
        self._next_packet()
        self.progress(Progress(ProgressKind.PACKET, self.packet))
        return len(data)

    def flush(self) -> None:
        """Flush the underlying stream."""
        self.inner.flush()


def transmit(data, to, progress: ProgressFn = noop) -> int:
    """Send ``data`` (bytes or a readable stream) to ``to``.

    The last packet is padded with zeroes. Returns the number of data bytes
    sent, not counting padding.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        data = io.BytesIO(bytes(data))
    transmitter = Xmodem(to, progress)
    written = 0
    while True:
        chunk = read_max(data, PACKET_SIZE)
        if not chunk:
            transmitter.write_packet(b"")
            return written
        packet = chunk.ljust(PACKET_SIZE, b"\0")
        for _ in range(_RETRIES):
            try:
                transmitter.write_packet(packet)
            except ChecksumMismatch:
                continue
            written += len(chunk)
            break
        else:
            raise TransferFailed("bad transmit")


def receive(source, into, progress: ProgressFn = noop) -> int:
    """Receive packets from ``source`` and write their data to ``into``.

    Returns the number of bytes received, a multiple of 128.
    """
    receiver = Xmodem(source, progress)
    received = 0
    while True:
        for _ in range(_RETRIES):
            try:
                packet = receiver.read_packet()
            except ChecksumMismatch:
                continue
            if not packet:
                return received
            received += len(packet)
            _write_all(into, packet)
            break
        else:
            raise TransferFailed("bad receive")