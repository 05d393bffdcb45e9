"""Conversion between TCP segments and IPv4 datagrams."""

from __future__ import annotations

import ipaddress
from typing import Optional

from .address import Address
from .fd_adapter import FdAdapterBase
from .ipv4 import IPv4Datagram, IPv4Header
from .parser import ParseError
from .tcp_segment import TCPSegment


def _dotted_quad(value: int) -> str:
    return str(ipaddress.IPv4Address(value & 0xFFFFFFFF))


class TCPOverIPv4Adapter(FdAdapterBase):
    """Wraps TCP segments in IPv4 datagrams and unwraps those that belong to the connection."""

    def unwrap_tcp_in_ip(self, ip_dgram: IPv4Datagram) -> Optional[TCPSegment]:
        """Return the TCP segment carried by ``ip_dgram``, or None if invalid or unrelated.

        While listening, a SYN without RST fixes both addresses and ends listening.
        """
        header = ip_dgram.header
        cfg = self.config()

        if not self.listening() and header.dst != cfg.source.ipv4_numeric():
            return None
        if not self.listening() and header.src != cfg.destination.ipv4_numeric():
            return None
        if header.proto != IPv4Header.PROTO_TCP:
            return None

        try:
            tcp_seg = TCPSegment.parse(ip_dgram.payload, header.pseudo_cksum())
        except ParseError:
            return None

        if tcp_seg.header.dport != cfg.source.port():
            return None

        if self.listening():
            if tcp_seg.header.syn and not tcp_seg.header.rst:
                cfg.source = Address(_dotted_quad(header.dst), cfg.source.port())
                cfg.destination = Address(_dotted_quad(header.src), tcp_seg.header.sport)
                self.set_listening(False)
            else:
                return None

        if tcp_seg.header.sport != cfg.destination.port():
            return None

        return tcp_seg

    def wrap_tcp_in_ip(self, seg: TCPSegment) -> IPv4Datagram:
        """Fill in the ports of ``seg`` and wrap it in an IPv4 datagram."""
        cfg = self.config()
        seg.header.sport = cfg.source.port()
        seg.header.dport = cfg.destination.port()

        ip_dgram = IPv4Datagram()
        ip_dgram.header.src = cfg.source.ipv4_numeric()
        ip_dgram.header.dst = cfg.destination.ipv4_numeric()
        ip_dgram.header.len = ip_dgram.header.hlen * 4 + seg.header.doff * 4 + len(seg.payload)

        ip_dgram.payload = seg.serialize(ip_dgram.header.pseudo_cksum())
        return ip_dgram