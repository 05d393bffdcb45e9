import pytest

from spongenet.buffer import Buffer
from spongenet.parser import (
    NetParser,
    ParseError,
    ParseResult,
    pack_u8,
    pack_u16,
    pack_u32,
)


@pytest.mark.parametrize("value", [0, 1, 255, 0x1234, 0xFFFF])
def test_u16_round_trip(value):
    assert NetParser(pack_u16(value)).u16() == value


@pytest.mark.parametrize("value", [0, 7, 0xDEADBEEF, 0xFFFFFFFF, 1 << 31])
def test_u32_round_trip(value):
    assert NetParser(pack_u32(value)).u32() == value


@pytest.mark.parametrize("value", [0, 1, 0x7F, 0xFF])
def test_u8_round_trip(value):
    assert NetParser(pack_u8(value)).u8() == value


def test_pack_is_big_endian():
    assert pack_u16(0x0102) == b"\x01\x02"
    assert len(pack_u32(5)) == 4
    assert pack_u32(0x01020304)[0] == 0x01


def test_pack_truncates_to_width():
    assert pack_u8(0x1FF) == pack_u8(0xFF)
    assert pack_u16(0x10002) == pack_u16(2)
    assert pack_u32((1 << 32) + 9) == pack_u32(9)


def test_sequential_parse_consumes_buffer():
    data = pack_u8(1) + pack_u16(2) + pack_u32(3) + b"rest"
    parser = NetParser(data)
    assert parser.u8() == 1
    assert parser.u16() == 2
    assert parser.u32() == 3
    assert bytes(parser.buffer()) == b"rest"
    assert not parser.error()
    assert parser.get_error() is ParseResult.NoError


def test_short_read_sets_sticky_error():
    parser = NetParser(b"\x01")
    assert parser.u16() == 0
    assert parser.get_error() is ParseResult.PacketTooShort
    assert parser.u8() == 0
    assert len(parser.buffer()) == 1


def test_raise_for_error():
    parser = NetParser(b"")
    parser.u32()
    with pytest.raises(ParseError) as info:
        parser.raise_for_error()
    assert info.value.result is ParseResult.PacketTooShort


def test_remove_prefix():
    parser = NetParser(b"abcdef")
    parser.remove_prefix(2)
    assert bytes(parser.buffer()) == b"cdef"
    parser.remove_prefix(10)
    assert parser.get_error() is ParseResult.PacketTooShort
    assert bytes(parser.buffer()) == b"cdef"


def test_parser_does_not_consume_callers_buffer():
    buf = Buffer(pack_u16(9))
    parser = NetParser(buf)
    assert parser.u16() == 9
    assert len(buf) == 2


def test_set_error():
    parser = NetParser(b"\x00\x00")
    parser.set_error(ParseResult.BadChecksum)
    assert parser.error()
    with pytest.raises(ParseError) as info:
        parser.raise_for_error()
    assert info.value.result is ParseResult.BadChecksum


def test_parse_result_names():
    assert str(ParseResult.BadChecksum) == "BadChecksum"
    assert str(ParseError(ParseResult.TruncatedPacket)) == "TruncatedPacket"