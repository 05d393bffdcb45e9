"""Reference-counted handles to kernel file descriptors."""

from __future__ import annotations

import os
import sys

from .buffer import BufferViewList

_MAX_READ = 1024 * 1024


class _FDWrapper:
    """Owns a kernel file descriptor and tracks its EOF, closure and use counts."""

    __slots__ = ("fd", "eof", "closed", "read_count", "write_count")

    def __init__(self, fd: int):
        if fd < 0:
            raise ValueError(f"invalid fd number:{fd}")
        self.fd = fd
        self.eof = False
        self.closed = False
        self.read_count = 0
        self.write_count = 0

    def close(self) -> None:
        os.close(self.fd)
        self.eof = True
        self.closed = True

    def __del__(self):
        if getattr(self, "closed", True):
            return
        try:
            self.close()
        except OSError as exc:
            print(f"Exception destructing FDWrapper: {exc}", file=sys.stderr)


class FileDescriptor:
    """A handle to a file descriptor; duplicates share the same descriptor and counters."""

    def __init__(self, fd: int):
        self._wrapper = _FDWrapper(fd)

    @classmethod
    def _from_wrapper(cls, wrapper: _FDWrapper) -> FileDescriptor:
        handle = cls.__new__(cls)
        handle._wrapper = wrapper
        return handle

    def _register_read(self) -> None:
        self._wrapper.read_count += 1

    def _register_write(self) -> None:
        self._wrapper.write_count += 1

    def duplicate(self) -> FileDescriptor:
        """Another handle sharing this descriptor."""
        return FileDescriptor._from_wrapper(self._wrapper)

    def read(self, limit: int | None = None) -> bytes:
        """Read up to ``limit`` bytes (at most 1 MiB per call); marks EOF on an empty read."""
        size = _MAX_READ if limit is None else min(_MAX_READ, limit)
        data = os.read(self.fd_num(), size)
        if (limit is None or limit > 0) and not data:
            self._wrapper.eof = True
        if len(data) > size:
            raise RuntimeError("read() read more than requested")
        self._register_read()
        return data

    def write(self, data, write_all: bool = True) -> int:
        """Write bytes, a Buffer or a BufferList; with ``write_all`` keep going until all is written."""
        views = data if isinstance(data, BufferViewList) else BufferViewList(data)
        total = 0
        while True:
            remaining = len(views)
            written = os.writev(self.fd_num(), views.as_views())
            if written == 0 and remaining != 0:
                raise RuntimeError("write returned 0 given non-empty input buffer")
            if written > remaining:
                raise RuntimeError("write wrote more than length of input buffer")
            self._register_write()
            views.remove_prefix(written)
            total += written
            if not (write_all and len(views)):
                return total

    def close(self) -> None:
        """Close the underlying descriptor."""
        self._wrapper.close()

    def set_blocking(self, blocking: bool) -> None:
        """Switch the descriptor between blocking and non-blocking mode."""
        os.set_blocking(self.fd_num(), blocking)

    def fileno(self) -> int:
        return self._wrapper.fd

    def fd_num(self) -> int:
        return self._wrapper.fd

    def eof(self) -> bool:
        return self._wrapper.eof

    def closed(self) -> bool:
        return self._wrapper.closed

    def read_count(self) -> int:
        return self._wrapper.read_count

    def write_count(self) -> int:
        return self._wrapper.write_count

    def __enter__(self) -> FileDescriptor:
        return self

    def __exit__(self, *args) -> None:
        if not self.closed():
            self.close()