import pytest

from spongenet.address import Address
from spongenet.fd_adapter import FdAdapterBase, TCPOverUDPSocketAdapter
from spongenet.sockets import UDPSocket
from spongenet.tcp_header import TCPHeader
from spongenet.tcp_segment import TCPSegment


@pytest.fixture
def udp_sockets():
    socks = [UDPSocket() for _ in range(3)]
    for sock in socks:
        sock.bind(Address("127.0.0.1", 0))
    yield socks
    for sock in socks:
        sock.close()


def _adapter(sock, peer):
    adapter = TCPOverUDPSocketAdapter(sock)
    adapter.config().source = sock.local_address()
    adapter.config().destination = peer.local_address()
    return adapter


def test_base_listening_flag():
    base = FdAdapterBase()
    assert base.listening() is False
    base.set_listening(True)
    base.tick(10)
    assert base.listening() is True


def test_write_sets_ports_and_sends(udp_sockets):
    a, b, _ = udp_sockets
    adapter = _adapter(a, b)
    assert adapter.socket() is a
    adapter.write(TCPSegment(TCPHeader(seqno=7, syn=True), b"hello"))
    datagram = b.recv()
    parsed = TCPSegment.parse(datagram.payload)
    assert datagram.source_address == a.local_address()
    assert parsed.header.sport == a.local_address().port()
    assert parsed.header.dport == b.local_address().port()
    assert parsed.header.seqno == 7
    assert bytes(parsed.payload) == b"hello"


def test_read_from_peer(udp_sockets):
    a, b, _ = udp_sockets
    adapter = _adapter(a, b)
    b.sendto(a.local_address(), TCPSegment(TCPHeader(seqno=42, ack=True), b"abc").serialize())
    seg = adapter.read()
    assert seg.header.seqno == 42
    assert bytes(seg.payload) == b"abc"


def test_read_from_stranger_is_ignored(udp_sockets):
    a, b, c = udp_sockets
    adapter = _adapter(a, b)
    c.sendto(a.local_address(), TCPSegment(TCPHeader(seqno=1)).serialize())
    assert adapter.read() is None


def test_read_invalid_payload_is_ignored(udp_sockets):
    a, b, _ = udp_sockets
    adapter = _adapter(a, b)
    b.sendto(a.local_address(), b"junk")
    assert adapter.read() is None


def test_listening_syn_sets_destination(udp_sockets):
    a, b, _ = udp_sockets
    adapter = TCPOverUDPSocketAdapter(a)
    adapter.config().source = a.local_address()
    adapter.set_listening(True)
    b.sendto(a.local_address(), TCPSegment(TCPHeader(seqno=5, syn=True)).serialize())
    seg = adapter.read()
    assert seg.header.syn is True
    assert adapter.listening() is False
    assert adapter.config().destination == b.local_address()


@pytest.mark.parametrize("header", [TCPHeader(ack=True), TCPHeader(syn=True, rst=True)])
def test_listening_ignores_non_syn(udp_sockets, header):
    a, b, _ = udp_sockets
    adapter = TCPOverUDPSocketAdapter(a)
    adapter.set_listening(True)
    b.sendto(a.local_address(), TCPSegment(header).serialize())
    assert adapter.read() is None
    assert adapter.listening() is True