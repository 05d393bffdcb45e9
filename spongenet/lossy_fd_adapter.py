"""An adapter wrapper that randomly drops segments."""

from __future__ import annotations

from typing import Optional

from .tcp_config import FdAdapterConfig
from .tcp_segment import TCPSegment
from .util import get_random_generator


class LossyFdAdapter:
    """Wraps an adapter and drops reads and writes at the configured loss rates."""

    def __init__(self, adapter, rng=None):
        self._adapter = adapter
        self._rand = rng if rng is not None else get_random_generator()

    def _should_drop(self, uplink: bool) -> bool:
        cfg = self._adapter.config()
        loss = cfg.loss_rate_up if uplink else cfg.loss_rate_dn
        return loss != 0 and (self._rand.getrandbits(32) & 0xFFFF) < loss

    def read(self) -> Optional[TCPSegment]:
        """Read from the wrapped adapter, possibly dropping the result."""
        ret = self._adapter.read()
        if self._should_drop(False):
            return None
        return ret

    def write(self, seg: TCPSegment) -> None:
        """Write through the wrapped adapter, possibly dropping the segment."""
        if self._should_drop(True):
            return
        self._adapter.write(seg)

    def set_listening(self, listening: bool) -> None:
        self._adapter.set_listening(listening)

    def config(self) -> FdAdapterConfig:
        return self._adapter.config()

    def tick(self, ms_since_last_tick: int) -> None:
        self._adapter.tick(ms_since_last_tick)