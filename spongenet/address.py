"""IPv4 socket addresses and name resolution."""

from __future__ import annotations

import ipaddress
import socket


def _lookup(node: str, service: str, flags: int) -> tuple[str, int]:
    try:
        results = socket.getaddrinfo(node, service, socket.AF_INET, 0, 0, flags)
    except socket.gaierror as exc:
        raise socket.gaierror(exc.errno, f"getaddrinfo({node}, {service}): {exc.strerror}") from exc
    if not results:
        raise OSError("getaddrinfo returned successfully but with no results")
    sockaddr = results[0][4]
    return str(sockaddr[0]), int(sockaddr[1])


class Address:
    """An IPv4 address and port."""

    __slots__ = ("_ip", "_port")

    def __init__(self, ip: str, port=0):
        self._ip, self._port = _lookup(
            ip, str(port), socket.AI_NUMERICHOST | socket.AI_NUMERICSERV
        )

    @classmethod
    def resolve(cls, hostname: str, service: str) -> Address:
        """Resolve a host name and a service name or number."""
        ip, port = _lookup(hostname, str(service), getattr(socket, "AI_ALL", 0))
        return cls._from_parts(ip, port)

    @classmethod
    def from_ipv4_numeric(cls, ip_address: int) -> Address:
        """An address with port 0 from a host-order 32-bit IPv4 number."""
        return cls._from_parts(str(ipaddress.IPv4Address(ip_address & 0xFFFFFFFF)), 0)

    @classmethod
    def _from_parts(cls, ip: str, port: int) -> Address:
        address = cls.__new__(cls)
        address._ip = ip
        address._port = port
        return address

    def ip_port(self) -> tuple[str, int]:
        """The dotted-quad IP and the numeric port."""
        return self._ip, self._port

    def ip(self) -> str:
        return self._ip

    def port(self) -> int:
        return self._port

    def ipv4_numeric(self) -> int:
        """The IP address as a host-order integer."""
        return int(ipaddress.IPv4Address(self._ip))

    def sockaddr(self) -> tuple[str, int]:
        """The address in the form the socket module takes."""
        return self._ip, self._port

    def __str__(self) -> str:
        return f"{self._ip}:{self._port}"

    def __repr__(self) -> str:
        return f"Address({self._ip!r}, {self._port})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return (self._ip, self._port) == (other._ip, other._port)

    def __hash__(self) -> int:
        return hash((self._ip, self._port))