import socket

import pytest

from spongenet.address import Address


def test_ip_and_port():
    addr = Address("127.0.0.1", 8080)
    assert addr.ip() == "127.0.0.1"
    assert addr.port() == 8080
    assert addr.ip_port() == ("127.0.0.1", 8080)
    assert addr.sockaddr() == ("127.0.0.1", 8080)


def test_str():
    assert str(Address("18.243.0.1", 53)) == "18.243.0.1:53"


def test_ipv4_numeric():
    assert Address("127.0.0.1").ipv4_numeric() == 0x7F000001


def test_from_ipv4_numeric_round_trip():
    original = Address("10.1.2.3", 0)
    rebuilt = Address.from_ipv4_numeric(original.ipv4_numeric())
    assert rebuilt == original
    assert rebuilt.port() == 0


def test_default_port_is_zero():
    assert Address("192.168.0.1").port() == 0


def test_equality_and_hash():
    assert Address("1.1.1.1", 1) == Address("1.1.1.1", 1)
    assert not Address("1.1.1.1", 1) == Address("1.1.1.1", 2)
    assert len({Address("1.1.1.1", 1), Address("1.1.1.1", 1)}) == 1


def test_resolve_numeric():
    assert Address.resolve("127.0.0.1", "80") == Address("127.0.0.1", 80)


def test_invalid_ip_raises():
    with pytest.raises(socket.gaierror):
        Address("not-an-ip", 1)