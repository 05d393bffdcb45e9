# spongenet

Building blocks for a user-space TCP/IP stack, in pure Python with no
third-party dependencies. It needs a POSIX system: the file descriptor and
event loop code use `os.writev` and `select.poll`.

## What is inside

- `spongenet.buffer`: `Buffer`, `BufferList` and `BufferViewList`. These are
  byte buffers that drop bytes from the front without copying. A
  `BufferList` can hold a header and a payload side by side, so a header can
  be prepended without copying the payload.
- `spongenet.parser`: `NetParser` reads big-endian integers (`u8`, `u16`,
  `u32`) from the front of a buffer and records the first error.
  `ParseResult` names the possible errors and `ParseError` carries one. The
  functions `pack_u8`, `pack_u16` and `pack_u32` write integers.
- `spongenet.util`: `InternetChecksum` (incremental Internet checksum),
  `hexdump`, `timestamp_ms` and `get_random_generator`.
- `spongenet.ethernet`: `EthernetHeader`, `EthernetFrame` and
  `format_ethernet_address`.
- `spongenet.arp`: `ARPMessage`, for Ethernet/IPv4 requests and replies.
- `spongenet.ipv4`: `IPv4Header` and `IPv4Datagram` (also available as
  `InternetDatagram`). Parsing validates the header checksum. Serializing
  computes it.
- `spongenet.tcp_header` and `spongenet.tcp_segment`: `TCPHeader` and
  `TCPSegment`. The segment checksum can include an IPv4 pseudo-header
  contribution from `IPv4Header.pseudo_cksum()`.
- `spongenet.address`: `Address`, an IPv4 address and port. It also provides
  `Address.resolve` for name lookup.
- `spongenet.file_descriptor`: `FileDescriptor`, a shared handle that tracks
  EOF, closure, and read and write counts.
- `spongenet.sockets`: `UDPSocket`, `TCPSocket`, `LocalStreamSocket` and
  `socket_pair()`.
- `spongenet.eventloop`: `EventLoop`, with `Direction` and `Result`. It polls
  descriptors and runs the callbacks of ready rules. Rules are cancelled on
  EOF, closure or hangup. It raises `RuntimeError` when a callback neither
  reads nor writes its descriptor but is still interested.
- `spongenet.tcp_config`: `TCPConfig` and `FdAdapterConfig`.
- `spongenet.fd_adapter`: `FdAdapterBase` and `TCPOverUDPSocketAdapter`,
  which carries TCP segments as UDP payloads.
- `spongenet.lossy_fd_adapter`: `LossyFdAdapter` wraps an adapter and drops
  reads and writes at random. The rates come from `loss_rate_dn` and
  `loss_rate_up`, out of 65536.
- `spongenet.tcp_over_ip`: `TCPOverIPv4Adapter` wraps TCP segments in IPv4
  datagrams. In the other direction, it unwraps only the segments that belong
  to the configured connection.
- `spongenet.tcp_state`: `State` (the official TCP state names),
  `SenderSummary`, `ReceiverSummary` and `TCPState`. `TCPState.from_state`
  maps an official state to its summary.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from spongenet.tcp_segment import TCPSegment

seg = TCPSegment()
seg.header.syn = True
seg.header.sport = 1234
seg.header.dport = 80
wire = seg.serialize()

parsed = TCPSegment.parse(wire.concatenate())
assert parsed.header.syn
assert parsed.length_in_sequence_space() == 1
```

Parsing functions raise `spongenet.parser.ParseError` when a packet is
malformed. The error's `result` holds the `ParseResult` that names the
problem, such as `BadChecksum` or `PacketTooShort`.

## What it does not do

The package does not provide these parts of a TCP stack:

- a TCP sender
- a TCP receiver
- a connection state machine
- a network interface with ARP resolution
- access to TUN/TAP devices
- a socket that runs a whole connection in a background thread

`TCPState` compares and describes state summaries. It does not track a live
connection. There is no command-line program.