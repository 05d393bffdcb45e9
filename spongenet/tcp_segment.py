"""TCP segments: a header and a payload."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from .buffer import Buffer, BufferList
from .parser import NetParser, ParseError, ParseResult
from .tcp_header import TCPHeader
from .util import InternetChecksum


@dataclass(eq=False)
class TCPSegment:
    """A TCP header followed by its payload."""

    header: TCPHeader = field(default_factory=TCPHeader)
    payload: Buffer = field(default_factory=Buffer)

    def __post_init__(self) -> None:
        if not isinstance(self.payload, Buffer):
            self.payload = Buffer(self.payload)

    @classmethod
    def parse(cls, data, datagram_layer_checksum: int = 0) -> TCPSegment:
        """Parse and checksum-verify a segment; raises ParseError on failure."""
        if isinstance(data, BufferList):
            data = data.concatenate()
        check = InternetChecksum(datagram_layer_checksum)
        check.add(data)
        if check.value():
            raise ParseError(ParseResult.BadChecksum)

        parser = NetParser(data)
        header = TCPHeader.parse(parser)
        payload = parser.buffer()
        parser.raise_for_error()
        return cls(header=header, payload=payload)

    def length_in_sequence_space(self) -> int:
        """Payload length plus one each for SYN and FIN."""
        return len(self.payload) + (1 if self.header.syn else 0) + (1 if self.header.fin else 0)

    def serialize(self, datagram_layer_checksum: int = 0) -> BufferList:
        """The segment in wire format, with the checksum computed over the whole segment."""
        header_out = dataclasses.replace(self.header, cksum=0)
        check = InternetChecksum(datagram_layer_checksum)
        check.add(header_out.serialize())
        check.add(self.payload)
        header_out.cksum = check.value()

        ret = BufferList(header_out.serialize())
        ret.append(self.payload)
        return ret