"""Byte buffers that share storage and can discard bytes from the front."""

from __future__ import annotations

from collections import deque


def _as_view(data) -> memoryview:
    if isinstance(data, str):
        return memoryview(data.encode())
    if isinstance(data, (bytes, bytearray, memoryview)):
        return memoryview(data)
    return memoryview(bytes(data))


class Buffer:
    """A read-only byte string that shares storage and drops a prefix without copying."""

    __slots__ = ("_view",)

    def __init__(self, data=b""):
        if isinstance(data, Buffer):
            self._view = data._view
        elif isinstance(data, BufferList):
            self._view = data.to_buffer()._view
        elif isinstance(data, str):
            self._view = memoryview(data.encode())
        else:
            self._view = memoryview(bytes(data))

    def __bytes__(self) -> bytes:
        return bytes(self._view)

    def __len__(self) -> int:
        return len(self._view)

    def __repr__(self) -> str:
        return f"Buffer({bytes(self._view)!r})"

    def at(self, n: int) -> int:
        """Return the byte at position ``n``."""
        if not 0 <= n < len(self._view):
            raise IndexError(f"Buffer.at: index {n} out of range")
        return self._view[n]

    def copy(self) -> bytes:
        """Return the contents as a new bytes object."""
        return bytes(self._view)

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes."""
        if n < 0 or n > len(self._view):
            raise IndexError("Buffer.remove_prefix")
        self._view = self._view[n:]


class BufferList:
    """A discontiguous byte string made of several buffers."""

    __slots__ = ("_buffers",)

    def __init__(self, data=None):
        self._buffers: deque[Buffer] = deque()
        if data is not None:
            self.append(data)

    def __len__(self) -> int:
        return sum(len(buf) for buf in self._buffers)

    def __bytes__(self) -> bytes:
        return self.concatenate()

    def __repr__(self) -> str:
        return f"BufferList({list(self._buffers)!r})"

    def buffers(self) -> tuple[Buffer, ...]:
        """Return the buffers that make up the list."""
        return tuple(Buffer(buf) for buf in self._buffers)

    def append(self, other) -> None:
        """Append a BufferList, a Buffer or raw bytes."""
        if isinstance(other, BufferList):
            self._buffers.extend([Buffer(buf) for buf in other._buffers])
        else:
            self._buffers.append(Buffer(other))

    def to_buffer(self) -> Buffer:
        """Return the contents as one Buffer; only possible when contiguous."""
        if not self._buffers:
            return Buffer()
        if len(self._buffers) == 1:
            return Buffer(self._buffers[0])
        raise ValueError(
            "BufferList: please use concatenate() to combine a multi-Buffer BufferList into one Buffer"
        )

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes across the buffers."""
        while n > 0:
            if not self._buffers:
                raise IndexError("BufferList.remove_prefix")
            front = self._buffers[0]
            if n < len(front):
                front.remove_prefix(n)
                n = 0
            else:
                n -= len(front)
                self._buffers.popleft()

    def concatenate(self) -> bytes:
        """Return the contents as one bytes object."""
        return b"".join(bytes(buf) for buf in self._buffers)


class BufferViewList:
    """A non-owning view of a discontiguous byte string."""

    __slots__ = ("_views",)

    def __init__(self, data=b""):
        if isinstance(data, BufferList):
            self._views = deque(buf._view for buf in data._buffers)
        elif isinstance(data, Buffer):
            self._views = deque([data._view])
        else:
            self._views = deque([_as_view(data)])

    def __len__(self) -> int:
        return sum(len(view) for view in self._views)

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes across the views."""
        while n > 0:
            if not self._views:
                raise IndexError("BufferViewList.remove_prefix")
            front = self._views[0]
            if n < len(front):
                self._views[0] = front[n:]
                n = 0
            else:
                n -= len(front)
                self._views.popleft()

    def as_views(self) -> list[memoryview]:
        """Return the pieces as memoryviews, suitable for scatter/gather writes."""
        return list(self._views)