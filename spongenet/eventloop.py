"""Waits for events on file descriptors and runs callbacks for them."""

from __future__ import annotations

import select
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class Direction(Enum):
    """Whether a rule waits for its descriptor to be readable or writable."""

    In = select.POLLIN
    Out = select.POLLOUT


class Result(Enum):
    """Outcome of one call to EventLoop.wait_next_event."""

    Success = 0
    Timeout = 1
    Exit = 2


def _always() -> bool:
    return True


@dataclass(eq=False)
class _Rule:
    fd: object
    direction: Direction
    callback: Callable[[], None]
    interest: Callable[[], bool]
    cancel: Optional[Callable[[], None]]

    def service_count(self) -> int:
        """How often the descriptor has been read or written, depending on the direction."""
        if self.direction is Direction.In:
            return self.fd.read_count()
        return self.fd.write_count()

    def run_cancel(self) -> None:
        """Call the cancel callback, if one was given."""
        if self.cancel is not None:
            self.cancel()


class EventLoop:
    """Polls file descriptors and calls the callbacks of the rules that are ready."""

    def __init__(self):
        self._rules: list[_Rule] = []

    def add_rule(
        self,
        fd,
        direction: Direction,
        callback: Callable[[], None],
        interest: Optional[Callable[[], bool]] = None,
        cancel: Optional[Callable[[], None]] = None,
    ) -> None:
        """Call ``callback`` whenever ``fd`` is ready in ``direction`` and ``interest`` returns true."""
        self._rules.append(
            _Rule(
                fd=fd.duplicate(),
                direction=direction,
                callback=callback,
                interest=interest if interest is not None else _always,
                cancel=cancel,
            )
        )

    def wait_next_event(self, timeout_ms: int) -> Result:
        """Poll once and run the callbacks of ready rules.

        Rules whose descriptor reached EOF (for reading), was closed, or hung up
        are cancelled. Raises RuntimeError on a descriptor error or when a
        callback neither read nor wrote its descriptor but is still interested.
        """
        polled: list[tuple[_Rule, int]] = []
        survivors: list[_Rule] = []
        for rule in self._rules:
            if (rule.direction is Direction.In and rule.fd.eof()) or rule.fd.closed():
                rule.run_cancel()
                continue
            survivors.append(rule)
            events = rule.direction.value if rule.interest() else 0
            polled.append((rule, events))
        self._rules = survivors

        if not any(events for _, events in polled):
            return Result.Exit

        masks: dict[int, int] = {}
        for rule, events in polled:
            fd_num = rule.fd.fd_num()
            masks[fd_num] = masks.get(fd_num, 0) | events
        poller = select.poll()
        for fd_num, mask in masks.items():
            poller.register(fd_num, mask)

        try:
            ready = poller.poll(timeout_ms)
        except InterruptedError:
            return Result.Exit
        if not ready:
            return Result.Timeout

        revents_by_fd: dict[int, int] = {}
        for fd_num, revents in ready:
            revents_by_fd[fd_num] = revents_by_fd.get(fd_num, 0) | revents

        cancelled: list[_Rule] = []
        for rule, events in polled:
            revents = revents_by_fd.get(rule.fd.fd_num(), 0)
            if revents & (select.POLLERR | select.POLLNVAL):
                raise RuntimeError("EventLoop: error on polled file descriptor")

            poll_ready = bool(revents & events)
            poll_hup = bool(revents & select.POLLHUP)
            if poll_hup and events and not poll_ready:
                rule.run_cancel()
                cancelled.append(rule)
                continue

            if poll_ready:
                count_before = rule.service_count()
                rule.callback()
                if count_before == rule.service_count() and rule.interest():
                    raise RuntimeError(
                        "EventLoop: busy wait detected: callback did not read/write fd and is still interested"
                    )

        if cancelled:
            self._rules = [rule for rule in self._rules if all(rule is not c for c in cancelled)]
        return Result.Success