"""Adapters that carry TCP segments over a datagram transport."""

from __future__ import annotations

from typing import Optional

from .parser import ParseError
from .sockets import UDPSocket
from .tcp_config import FdAdapterConfig
from .tcp_segment import TCPSegment


class FdAdapterBase:
    """Configuration and listening state shared by all adapters."""

    def __init__(self):
        self._cfg = FdAdapterConfig()
        self._listen = False

    def listening(self) -> bool:
        """Whether the adapter is waiting for a new connection."""
        return self._listen

    def set_listening(self, listening: bool) -> None:
        self._listen = listening

    def config(self) -> FdAdapterConfig:
        """The adapter's configuration; it may be modified in place."""
        return self._cfg

    def tick(self, ms_since_last_tick: int) -> None:
        """Called periodically as time passes."""


class TCPOverUDPSocketAdapter(FdAdapterBase):
    """Reads and writes TCP segments as UDP payloads."""

    def __init__(self, sock: UDPSocket):
        super().__init__()
        self._sock = sock

    def socket(self) -> UDPSocket:
        """The underlying UDP socket."""
        return self._sock

    def read(self) -> Optional[TCPSegment]:
        """Receive a datagram and return its segment, or None if invalid or unrelated.

        While listening, a SYN without RST fixes the peer address and ends listening.
        """
        datagram = self._sock.recv()

        if not self.listening() and datagram.source_address != self.config().destination:
            return None

        try:
            seg = TCPSegment.parse(datagram.payload, 0)
        except ParseError:
            return None

        if self.listening():
            if seg.header.syn and not seg.header.rst:
                self.config().destination = datagram.source_address
                self.set_listening(False)
            else:
                return None

        return seg

    def write(self, seg: TCPSegment) -> None:
        """Fill in the ports and send the segment to the peer."""
        seg.header.sport = self.config().source.port()
        seg.header.dport = self.config().destination.port()
        self._sock.sendto(self.config().destination, seg.serialize(0))