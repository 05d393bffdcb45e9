"""Network-byte-order parsing and serialization of integers."""

from __future__ import annotations

from enum import Enum

from .buffer import Buffer


class ParseResult(Enum):
    """Outcome of parsing a datagram, segment, frame or ARP message."""

    NoError = 0
    BadChecksum = 1
    PacketTooShort = 2
    WrongIPVersion = 3
    HeaderTooShort = 4
    TruncatedPacket = 5
    Unsupported = 6

    def __str__(self) -> str:
        return self.name


class ParseError(Exception):
    """Raised when parsing fails; carries the ParseResult."""

    def __init__(self, result: ParseResult):
        super().__init__(str(result))
        self.result = result


class NetParser:
    """Reads big-endian integers from the front of a buffer, recording the first error."""

    def __init__(self, buffer):
        self._buffer = Buffer(buffer)
        self._error = ParseResult.NoError

    def buffer(self) -> Buffer:
        """Return the unparsed remainder."""
        return Buffer(self._buffer)

    def get_error(self) -> ParseResult:
        return self._error

    def set_error(self, result: ParseResult) -> None:
        self._error = result

    def error(self) -> bool:
        """True if an error has been recorded."""
        return self._error is not ParseResult.NoError

    def raise_for_error(self) -> None:
        """Raise ParseError if an error has been recorded."""
        if self.error():
            raise ParseError(self._error)

    def _check_size(self, size: int) -> None:
        if size > len(self._buffer):
            self.set_error(ParseResult.PacketTooShort)

    def _parse_int(self, size: int) -> int:
        self._check_size(size)
        if self.error():
            return 0
        value = int.from_bytes(bytes(self._buffer)[:size], "big")
        self._buffer.remove_prefix(size)
        return value

    def u32(self) -> int:
        return self._parse_int(4)

    def u16(self) -> int:
        return self._parse_int(2)

    def u8(self) -> int:
        return self._parse_int(1)

    def remove_prefix(self, n: int) -> None:
        """Skip ``n`` bytes, recording an error if there are too few."""
        self._check_size(n)
        if self.error():
            return
        self._buffer.remove_prefix(n)


def pack_u32(value: int) -> bytes:
    """Encode a 32-bit integer in network byte order."""
    return (value & 0xFFFFFFFF).to_bytes(4, "big")


def pack_u16(value: int) -> bytes:
    """Encode a 16-bit integer in network byte order."""
    return (value & 0xFFFF).to_bytes(2, "big")


def pack_u8(value: int) -> bytes:
    """Encode an 8-bit integer."""
    return (value & 0xFF).to_bytes(1, "big")