# pixmodem

Send data to a serial device with the XMODEM protocol (128-byte packets,
8-bit additive checksum). The package also holds a software model of the
Raspberry Pi timer, GPIO and mini UART, and a bootloader loop built on that
model that receives a kernel image over XMODEM.

## Installing

    pip install .

The tests use pytest, which the `test` extra installs:

    pip install ".[test]"

## Sending data: `ttywrite`

    ttywrite /dev/ttyUSB0 -i kernel.bin

The file is sent to the device through XMODEM. If `-i` is not given, all of
standard input is read and sent. The device path is opened with pyserial's
`serial_for_url`, so pyserial URLs such as `loop://` are accepted as well.

Options:

- `-i PATH`: the file to send (standard input if not given)
- `-b`, `--baud RATE`: the baud rate, an unsigned decimal number (default `115200`)
- `-t`, `--timeout SECONDS`: the port's read timeout (default `10`)
- `-w`, `--width BITS`: the character width, `5` to `8` (default `8`)
- `-f`, `--flow-control MODE`: `none`, `software` (XON/XOFF) or `hardware` (RTS/CTS) (default `none`)
- `-s`, `--stop-bits N`: `1` or `2` (default `1`)
- `-r`, `--raw`: write the bytes as they are, without XMODEM
- `--version`: print the version and exit

In XMODEM mode every progress report is printed as `Progress: ...`, for
example `Progress: Waiting`, `Progress: Started` or `Progress: Packet(2)`.
The command exits with status 1 and a message on standard error if the
device cannot be opened or the transfer fails, and with 0 otherwise.

The option parsers are in `pixmodem.parsers`: `parse_width`,
`parse_stop_bits`, `parse_flow_control` (returning a `FlowControl`) and
`parse_baud_rate`. Each raises `ValueError` on bad input.

## Using XMODEM from Python

`pixmodem.xmodem` holds the protocol.

- `transmit(data, to, progress=noop)` sends `data` (bytes or a readable
  stream) over `to`, a stream that can be read and written. The last packet
  is padded with zeroes. It returns the number of data bytes sent, not
  counting padding.
- `receive(source, into, progress=noop)` reads packets from `source` and
  writes their data to `into`. It returns the number of bytes received,
  always a multiple of 128.
- `Xmodem(inner, progress=noop)` works one packet at a time:
  `read_packet()` returns 128 bytes, or `b""` at end of transmission;
  `write_packet(data)` sends 128 bytes, or end of transmission when `data`
  is empty; `flush()` flushes the stream. `read_byte`, `write_byte`,
  `expect_byte` and `expect_byte_or_cancel` are the byte-level steps.
- `checksum(data)` and `read_max(stream, size)` are the helpers used above.

Protocol failures raise subclasses of `XmodemError`: `InvalidData`,
`Aborted` (the other side sent CAN), `ChecksumMismatch` (a packet was
rejected; `transmit` and `receive` retry it), `ShortPacket` (data shorter
than 128 bytes and not empty) and `TransferFailed` (ten attempts at one
packet all failed). A stream that ends mid-transfer raises `EOFError`.

Progress callbacks receive `pixmodem.progress.Progress` values, each with a
`ProgressKind` and, for `PACKET` reports, a packet number. Use
`pixmodem.progress.noop` to ignore them.

## Other modules

- `pixmodem.stackvec.StackVec`: a vector with a fixed capacity that lives
  in a storage sequence you supply. `push` raises `CapacityError` when it is
  full; `pop` returns `None` when it is empty. It supports `len`, indexing,
  iteration, `truncate`, `as_list`, `capacity` and `is_full`.
- `pixmodem.mutex.Mutex`: a lock that holds a value. `lock()` blocks and
  `try_lock()` returns `None` if another thread holds it; the thread that
  holds it may lock it again. Both return a `MutexGuard` with a `value`
  attribute, usable as a context manager or released with `release()`.
- `pixmodem.volatile`: a little-endian `Memory` region with `load` and
  `store`, and register views over it: `Volatile` (read and write, with
  `and_mask` and `or_mask`), `ReadVolatile` (`read`, `has_mask`),
  `WriteVolatile` (`write`) and `Reserved` (neither).
- `pixmodem.pi.common.peripheral_memory()`: the shared simulated peripheral
  memory. Its system timer follows the host's monotonic clock, and its mini
  UART transmitter always reports itself ready and idle.
- `pixmodem.pi.timer`: `Timer`, `current_time` and `spin_sleep`.
- `pixmodem.pi.gpio`: `Gpio` pins (`into_input`, `into_output`,
  `into_alt`, `set`, `clear`, `level`), `Function`, `GpioState`, and
  `PinOut`, an output pin configured on first use.
- `pixmodem.pi.uart.MiniUart`: the mini UART, with byte, text and stream
  reads and writes and an optional read timeout (`TimeoutError` when it
  expires).
- `pixmodem.console`: `Console`, a UART created on first use, the shared
  `CONSOLE`, and `kprint` and `kprintln`.
- `pixmodem.bootloader`: `load_kernel`, which receives an image into a
  buffer over XMODEM and retries until it succeeds, flashing the status
  pin; `flash_pin`; and `hello_loop`, which writes `Hello!` once a second.

## What this package does not do

The Raspberry Pi peripherals exist only as simulated memory: nothing here
drives real hardware. No byte ever arrives on the simulated mini UART
unless you place it in that memory yourself, and `load_kernel` only fills a
buffer; it does not start the image it receives.