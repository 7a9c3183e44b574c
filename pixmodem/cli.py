"""Command that sends a file or standard input to a serial device."""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

import serial

from .parsers import parse_baud_rate, parse_flow_control, parse_stop_bits, parse_width
from .progress import Progress
from .xmodem import XmodemError, transmit

_VERSION = "0.1.0"


def _option(parse: Callable) -> Callable:
    def checked(text: str):
        try:
            return parse(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None

    checked.__name__ = parse.__name__
    return checked


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="ttywrite",
        description="Write data to a TTY using the XMODEM protocol by default.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    parser.add_argument(
        "-i", dest="input", type=Path, default=None,
        help="input file (defaults to stdin if not set)",
    )
    parser.add_argument(
        "-b", "--baud", dest="baud_rate", type=_option(parse_baud_rate),
        default="115200", help="set baud rate",
    )
    parser.add_argument(
        "-t", "--timeout", dest="timeout", type=int, default=10,
        help="set timeout in seconds",
    )
    parser.add_argument(
        "-w", "--width", dest="char_width", type=_option(parse_width),
        default="8", help="set data character width in bits",
    )
    parser.add_argument("tty_path", type=Path, help="path to TTY device")
    parser.add_argument(
        "-f", "--flow-control", dest="flow_control", type=_option(parse_flow_control),
        default="none", help="enable flow control ('hardware' or 'software')",
    )
    parser.add_argument(
        "-s", "--stop-bits", dest="stop_bits", type=_option(parse_stop_bits),
        default="1", help="set number of stop bits",
    )
    parser.add_argument(
        "-r", "--raw", dest="raw", action="store_true", help="disable XMODEM",
    )
    return parser


def print_progress(progress: Progress) -> None:
    """Print a transfer progress report."""
    print(f"Progress: {progress}")


def _send(args: argparse.Namespace, port) -> None:
    if args.input is None:
        data = sys.stdin.buffer.read()
        if args.raw:
            port.write(data)
            port.flush()
        else:
            transmit(data, port, print_progress)
        return
    with open(args.input, "rb") as source:
        if args.raw:
            shutil.copyfileobj(source, port)
            port.flush()
        else:
            transmit(source, port, print_progress)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    try:
        port = serial.serial_for_url(
            str(args.tty_path),
            baudrate=args.baud_rate,
            bytesize=args.char_width,
            stopbits=args.stop_bits,
            xonxoff=args.flow_control.xonxoff,
            rtscts=args.flow_control.rtscts,
            timeout=args.timeout,
        )
    except (serial.SerialException, ValueError) as exc:
        print(f"ttywrite: path points to invalid TTY: {exc}", file=sys.stderr)
        return 1

    try:
        _send(args, port)
    except (OSError, EOFError, XmodemError) as exc:
        print(f"ttywrite: transfer failed: {exc}", file=sys.stderr)
        return 1
    finally:
        port.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())