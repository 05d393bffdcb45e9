"""Network sockets built on FileDescriptor."""

from __future__ import annotations

import socket
from contextlib import contextmanager
from dataclasses import dataclass

from .address import Address
from .buffer import BufferViewList
from .file_descriptor import FileDescriptor

_MSG_TRUNC = getattr(socket, "MSG_TRUNC", 0)


class Socket(FileDescriptor):
    """Base class for network sockets."""

    def __init__(self, domain: int, type_: int, fd: FileDescriptor | None = None):
        if fd is None:
            raw = socket.socket(domain, type_)
            super().__init__(raw.detach())
            return
        self._wrapper = fd._wrapper
        with self._borrowed() as sock:
            if sock.family != domain:
                raise ValueError("socket domain mismatch")
            if sock.type != type_:
                raise ValueError("socket type mismatch")

    @contextmanager
    def _borrowed(self):
        sock = socket.socket(fileno=self.fd_num())
        try:
            yield sock
        finally:
            sock.detach()

    def bind(self, address: Address) -> None:
        """Bind to a local address."""
        with self._borrowed() as sock:
            sock.bind(address.sockaddr())

    def connect(self, address: Address) -> None:
        """Connect to a peer address."""
        with self._borrowed() as sock:
            sock.connect(address.sockaddr())

    def shutdown(self, how: int) -> None:
        """Shut down reading, writing or both."""
        if how not in (socket.SHUT_RD, socket.SHUT_WR, socket.SHUT_RDWR):
            raise ValueError("Socket.shutdown() called with invalid `how`")
        with self._borrowed() as sock:
            sock.shutdown(how)
        if how in (socket.SHUT_RD, socket.SHUT_RDWR):
            self._register_read()
        if how in (socket.SHUT_WR, socket.SHUT_RDWR):
            self._register_write()

    def local_address(self) -> Address:
        with self._borrowed() as sock:
            ip, port = sock.getsockname()[:2]
        return Address(ip, port)

    def peer_address(self) -> Address:
        with self._borrowed() as sock:
            ip, port = sock.getpeername()[:2]
        return Address(ip, port)

    def set_reuseaddr(self) -> None:
        """Allow the local address to be reused sooner."""
        with self._borrowed() as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)


@dataclass
class ReceivedDatagram:
    """A received datagram and the address it came from."""

    source_address: Address
    payload: bytes


class UDPSocket(Socket):
    """A UDP socket."""

    def __init__(self):
        super().__init__(socket.AF_INET, socket.SOCK_DGRAM)

    def recv(self, mtu: int = 65536) -> ReceivedDatagram:
        """Receive one datagram; raises RuntimeError if it is larger than ``mtu``."""
        buf = bytearray(mtu)
        with self._borrowed() as sock:
            length, source = sock.recvfrom_into(buf, mtu, _MSG_TRUNC)
        if length > mtu:
            raise RuntimeError("recvfrom (oversized datagram)")
        self._register_read()
        return ReceivedDatagram(Address(source[0], source[1]), bytes(buf[:length]))

    def _sendmsg(self, payload, destination=None) -> None:
        views = payload if isinstance(payload, BufferViewList) else BufferViewList(payload)
        with self._borrowed() as sock:
            if destination is None:
                sent = sock.sendmsg(views.as_views())
            else:
                sent = sock.sendmsg(views.as_views(), [], 0, destination)
        if sent != len(views):
            raise RuntimeError("datagram payload too big for sendmsg()")
        self._register_write()

    def sendto(self, destination: Address, payload) -> None:
        """Send a datagram to ``destination``."""
        self._sendmsg(payload, destination.sockaddr())

    def send(self, payload) -> None:
        """Send a datagram to the connected address."""
        self._sendmsg(payload)


class TCPSocket(Socket):
    """A TCP socket."""

    def __init__(self):
        super().__init__(socket.AF_INET, socket.SOCK_STREAM)

    @classmethod
    def _adopt(cls, fd: FileDescriptor) -> TCPSocket:
        sock = cls.__new__(cls)
        Socket.__init__(sock, socket.AF_INET, socket.SOCK_STREAM, fd)
        return sock

    def listen(self, backlog: int = 16) -> None:
        """Mark the socket as accepting connections."""
        with self._borrowed() as sock:
            sock.listen(backlog)

    def accept(self) -> TCPSocket:
        """Block until a connection arrives and return a socket for it."""
        self._register_read()
        with self._borrowed() as sock:
            conn, _ = sock.accept()
        return TCPSocket._adopt(FileDescriptor(conn.detach()))


class LocalStreamSocket(Socket):
    """A Unix-domain stream socket."""

    def __init__(self, fd: FileDescriptor):
        super().__init__(socket.AF_UNIX, socket.SOCK_STREAM, fd)


def socket_pair() -> tuple[LocalStreamSocket, LocalStreamSocket]:
    """A pair of connected Unix-domain stream sockets."""
    first, second = socket.socketpair(socket.AF_UNIX, socket.SOCK_STREAM)
    return (
        LocalStreamSocket(FileDescriptor(first.detach())),
        LocalStreamSocket(FileDescriptor(second.detach())),
    )