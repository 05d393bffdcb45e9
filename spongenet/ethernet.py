"""Ethernet addresses, headers and frames."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .buffer import BufferList
from .parser import NetParser, ParseError, ParseResult, pack_u16

ETHERNET_ADDRESS_LENGTH = 6

ETHERNET_BROADCAST = b"\xff" * ETHERNET_ADDRESS_LENGTH


def _ethernet_address(value) -> bytes:
    address = bytes(value)
    if len(address) != ETHERNET_ADDRESS_LENGTH:
        raise ValueError(f"an Ethernet address has {ETHERNET_ADDRESS_LENGTH} bytes, got {len(address)}")
    return address


def format_ethernet_address(address) -> str:
    """Render an Ethernet address as colon-separated hex pairs."""
    return ":".join(f"{byte:02x}" for byte in bytes(address))


@dataclass
class EthernetHeader:
    """Ethernet frame header: destination, source and type."""

    LENGTH: ClassVar[int] = 14
    TYPE_IPv4: ClassVar[int] = 0x800
    TYPE_ARP: ClassVar[int] = 0x806

    dst: bytes = bytes(ETHERNET_ADDRESS_LENGTH)
    src: bytes = bytes(ETHERNET_ADDRESS_LENGTH)
    type: int = 0

    def __post_init__(self) -> None:
        self.dst = _ethernet_address(self.dst)
        self.src = _ethernet_address(self.src)

    @classmethod
    def parse(cls, parser: NetParser) -> EthernetHeader:
        """Read a header from ``parser``; raises ParseError on failure."""
        if len(parser.buffer()) < cls.LENGTH:
            raise ParseError(ParseResult.PacketTooShort)
        dst = bytes(parser.u8() for _ in range(ETHERNET_ADDRESS_LENGTH))
        src = bytes(parser.u8() for _ in range(ETHERNET_ADDRESS_LENGTH))
        frame_type = parser.u16()
        parser.raise_for_error()
        return cls(dst=dst, src=src, type=frame_type)

    def serialize(self) -> bytes:
        """The header in wire format."""
        return _ethernet_address(self.dst) + _ethernet_address(self.src) + pack_u16(self.type)

    def __str__(self) -> str:
        if self.type == self.TYPE_IPv4:
            type_name = "IPv4"
        elif self.type == self.TYPE_ARP:
            type_name = "ARP"
        else:
            type_name = f"[unknown type {self.type:x}!]"
        return (
            f"dst={format_ethernet_address(self.dst)}, "
            f"src={format_ethernet_address(self.src)}, type={type_name}"
        )


@dataclass(eq=False)
class EthernetFrame:
    """An Ethernet header followed by its payload."""

    header: EthernetHeader = field(default_factory=EthernetHeader)
    payload: BufferList = field(default_factory=BufferList)

    def __post_init__(self) -> None:
        if not isinstance(self.payload, BufferList):
            self.payload = BufferList(self.payload)

    @classmethod
    def parse(cls, data) -> EthernetFrame:
        """Parse a frame; raises ParseError on failure."""
        parser = NetParser(data)
        header = EthernetHeader.parse(parser)
        payload = BufferList(parser.buffer())
        parser.raise_for_error()
        return cls(header=header, payload=payload)

    def serialize(self) -> BufferList:
        """The frame in wire format, header then payload."""
        ret = BufferList(self.header.serialize())
        ret.append(self.payload)
        return ret