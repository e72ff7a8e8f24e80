"""
Binary stream primitives for the row serialization format.

Values are framed the way a Java DataOutputStream writes them: booleans as a
single byte and integers as big-endian signed 32-bit words.
"""

import struct
from typing import IO

_INT = struct.Struct(">i")


class ShortReadError(EOFError):
    """Stream ended before the requested number of bytes were read."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"expected {expected} byte(s), got {received}")


def pack_boolean(value: bool) -> bytes:
    return b"\x01" if value else b"\x00"


def pack_int(value: int) -> bytes:
    return _INT.pack(value)


def read_fully(stream: IO[bytes], size: int) -> bytes:
    """
    Read exactly ``size`` bytes.

    Sockets and pipes may return fewer bytes than requested, so keep reading
    until the buffer is full or the stream reports end of data.

    Raises:
        ShortReadError: If the stream is exhausted first
    """
    buf = bytearray()
    while len(buf) < size:
        chunk = stream.read(size - len(buf))
        if not chunk:
            raise ShortReadError(size, len(buf))
        buf.extend(chunk)
    return bytes(buf)


def read_boolean(stream: IO[bytes]) -> bool:
    return read_fully(stream, 1) != b"\x00"


def read_int(stream: IO[bytes]) -> int:
    return _INT.unpack(read_fully(stream, _INT.size))[0]
