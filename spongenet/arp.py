"""ARP messages for Ethernet/IPv4."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import ClassVar

from .ethernet import (
    ETHERNET_ADDRESS_LENGTH,
    EthernetHeader,
    _ethernet_address,
    format_ethernet_address,
)
from .parser import NetParser, ParseError, ParseResult, pack_u8, pack_u16, pack_u32

_IPV4_ADDRESS_LENGTH = 4


def _dotted_quad(value: int) -> str:
    return str(ipaddress.IPv4Address(value & 0xFFFFFFFF))


@dataclass
class ARPMessage:
    """An ARP request or reply."""

    LENGTH: ClassVar[int] = 28
    TYPE_ETHERNET: ClassVar[int] = 1
    OPCODE_REQUEST: ClassVar[int] = 1
    OPCODE_REPLY: ClassVar[int] = 2

    hardware_type: int = 1
    protocol_type: int = EthernetHeader.TYPE_IPv4
    hardware_address_size: int = ETHERNET_ADDRESS_LENGTH
    protocol_address_size: int = _IPV4_ADDRESS_LENGTH
    opcode: int = 0
    sender_ethernet_address: bytes = bytes(ETHERNET_ADDRESS_LENGTH)
    sender_ip_address: int = 0
    target_ethernet_address: bytes = bytes(ETHERNET_ADDRESS_LENGTH)
    target_ip_address: int = 0

    def __post_init__(self) -> None:
        self.sender_ethernet_address = _ethernet_address(self.sender_ethernet_address)
        self.target_ethernet_address = _ethernet_address(self.target_ethernet_address)

    @classmethod
    def parse(cls, data) -> ARPMessage:
        """Parse an ARP message; raises ParseError on failure."""
        parser = NetParser(data)
        if len(parser.buffer()) < cls.LENGTH:
            raise ParseError(ParseResult.PacketTooShort)

        msg = cls(
            hardware_type=parser.u16(),
            protocol_type=parser.u16(),
            hardware_address_size=parser.u8(),
            protocol_address_size=parser.u8(),
            opcode=parser.u16(),
        )
        if not msg.supported():
            raise ParseError(ParseResult.Unsupported)

        msg.sender_ethernet_address = bytes(parser.u8() for _ in range(ETHERNET_ADDRESS_LENGTH))
        msg.sender_ip_address = parser.u32()
        msg.target_ethernet_address = bytes(parser.u8() for _ in range(ETHERNET_ADDRESS_LENGTH))
        msg.target_ip_address = parser.u32()
        parser.raise_for_error()
        return msg

    def supported(self) -> bool:
        """True for Ethernet/IPv4 requests and replies."""
        return (
            self.hardware_type == self.TYPE_ETHERNET
            and self.protocol_type == EthernetHeader.TYPE_IPv4
            and self.hardware_address_size == ETHERNET_ADDRESS_LENGTH
            and self.protocol_address_size == _IPV4_ADDRESS_LENGTH
            and self.opcode in (self.OPCODE_REQUEST, self.OPCODE_REPLY)
        )

    def serialize(self) -> bytes:
        """The message in wire format."""
        if not self.supported():
            raise ValueError(
                "ARPMessage.serialize: unsupported field combination "
                "(must be Ethernet/IP, and request or reply)"
            )
        return b"".join(
            [
                pack_u16(self.hardware_type),
                pack_u16(self.protocol_type),
                pack_u8(self.hardware_address_size),
                pack_u8(self.protocol_address_size),
                pack_u16(self.opcode),
                _ethernet_address(self.sender_ethernet_address),
                pack_u32(self.sender_ip_address),
                _ethernet_address(self.target_ethernet_address),
                pack_u32(self.target_ip_address),
            ]
        )

    def __str__(self) -> str:
        if self.opcode == self.OPCODE_REQUEST:
            opcode_str = "REQUEST"
        elif self.opcode == self.OPCODE_REPLY:
            opcode_str = "REPLY"
        else:
            opcode_str = "(unknown type)"
        return (
            f"opcode={opcode_str}, "
            f"sender={format_ethernet_address(self.sender_ethernet_address)}/"
            f"{_dotted_quad(self.sender_ip_address)}, "
            f"target={format_ethernet_address(self.target_ethernet_address)}/"
            f"{_dotted_quad(self.target_ip_address)}"
        )