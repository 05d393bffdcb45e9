"""Timing, randomness, the Internet checksum and hex dumps."""

from __future__ import annotations

import os
import random
import sys
import time

_PROGRAM_START = time.monotonic()

_MT_STATE_BYTES = 624 * 4


def timestamp_ms() -> int:
    """Milliseconds elapsed since the module was loaded."""
    return int((time.monotonic() - _PROGRAM_START) * 1000)


def get_random_generator() -> random.Random:
    """A Mersenne Twister generator seeded with a full state's worth of entropy."""
    return random.Random(int.from_bytes(os.urandom(_MT_STATE_BYTES), "big"))


class InternetChecksum:
    """Incremental Internet checksum; the value is in host byte order."""

    def __init__(self, initial_sum: int = 0):
        self._sum = initial_sum & 0xFFFFFFFF
        self._parity = False

    def add(self, data) -> None:
        """Add bytes (or a Buffer/BufferList) to the running sum."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            data = bytes(data)
        data = bytes(data)
        evens = sum(data[0::2])
        odds = sum(data[1::2])
        if self._parity:
            total = evens + (odds << 8)
        else:
            total = (evens << 8) + odds
        self._sum = (self._sum + total) & 0xFFFFFFFF
        if len(data) % 2:
            self._parity = not self._parity

    def value(self) -> int:
        """The one's-complement of the folded sum."""
        ret = self._sum
        while ret > 0xFFFF:
            ret = (ret >> 16) + (ret & 0xFFFF)
        return ~ret & 0xFFFF


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte <= 0x7E else "."


def hexdump(data, indent: int = 0, file=None) -> None:
    """Write a hex dump of ``data``, sixteen bytes per line, to ``file`` (stdout by default)."""
    out = sys.stdout if file is None else file
    data = bytes(data)
    indent_string = " " * indent
    pieces: list[str] = []
    chars = ""
    for printed, byte in enumerate(data):
        if printed % 16 == 0:
            if printed:
                pieces.append("    " + (chars or " ") + "\n")
                chars = ""
            pieces.append(f"{indent_string}{printed:08x}:    ")
        elif printed % 2 == 0:
            pieces.append(" ")
        pieces.append(f"{byte:02x}")
        chars += _printable(byte)
    remaining = (16 - len(data) % 16) % 16
    pieces.append(" " * (2 * remaining + remaining // 2 + 4) + (chars or " "))
    pieces.append("\n\n")
    out.write("".join(pieces))
    out.flush()