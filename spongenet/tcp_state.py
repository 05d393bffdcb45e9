"""Summary of a TCP connection's state, built from its sender and receiver parts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class State(Enum):
    """Official state names from the TCP specification."""

    LISTEN = 0
    SYN_RCVD = 1
    SYN_SENT = 2
    ESTABLISHED = 3
    CLOSE_WAIT = 4
    LAST_ACK = 5
    FIN_WAIT_1 = 6
    FIN_WAIT_2 = 7
    CLOSING = 8
    TIME_WAIT = 9
    CLOSED = 10
    RESET = 11


class ReceiverSummary:
    """Descriptions of the receiver's state."""

    ERROR = "error (connection was reset)"
    LISTEN = "waiting for SYN: ackno is empty"
    SYN_RECV = "SYN received (ackno exists), and input to stream hasn't ended"
    FIN_RECV = "input to stream has ended"


class SenderSummary:
    """Descriptions of the sender's state."""

    ERROR = "error (connection was reset)"
    CLOSED = "waiting for stream to begin (no SYN sent)"
    SYN_SENT = "stream started but nothing acknowledged"
    SYN_ACKED = "stream ongoing"
    FIN_SENT = "stream finished (FIN sent) but not fully acknowledged"
    FIN_ACKED = "stream finished and fully acknowledged"


# state -> (sender, receiver, active, linger_after_streams_finish)
_OFFICIAL_STATES: dict[State, tuple[str, str, bool, bool]] = {
    State.LISTEN: (SenderSummary.CLOSED, ReceiverSummary.LISTEN, True, True),
    State.SYN_RCVD: (SenderSummary.SYN_SENT, ReceiverSummary.SYN_RECV, True, True),
    State.SYN_SENT: (SenderSummary.SYN_SENT, ReceiverSummary.LISTEN, True, True),
    State.ESTABLISHED: (SenderSummary.SYN_ACKED, ReceiverSummary.SYN_RECV, True, True),
    State.CLOSE_WAIT: (SenderSummary.SYN_ACKED, ReceiverSummary.FIN_RECV, True, False),
    State.LAST_ACK: (SenderSummary.FIN_SENT, ReceiverSummary.FIN_RECV, True, False),
    State.CLOSING: (SenderSummary.FIN_SENT, ReceiverSummary.FIN_RECV, True, True),
    State.FIN_WAIT_1: (SenderSummary.FIN_SENT, ReceiverSummary.SYN_RECV, True, True),
    State.FIN_WAIT_2: (SenderSummary.FIN_ACKED, ReceiverSummary.SYN_RECV, True, True),
    State.TIME_WAIT: (SenderSummary.FIN_ACKED, ReceiverSummary.FIN_RECV, True, True),
    State.RESET: (SenderSummary.ERROR, ReceiverSummary.ERROR, False, False),
    State.CLOSED: (SenderSummary.FIN_ACKED, ReceiverSummary.FIN_RECV, False, False),
}


@dataclass(frozen=True, eq=False)
class TCPState:
    """Sender and receiver summaries plus the connection's active and linger bits.

    An inactive connection never lingers.
    """

    sender: str = ""
    receiver: str = ""
    active: bool = True
    linger_after_streams_finish: bool = True

    def __post_init__(self) -> None:
        if not self.active:
            object.__setattr__(self, "linger_after_streams_finish", False)

    @classmethod
    def from_state(cls, state: State) -> TCPState:
        """The summary that corresponds to one of the official TCP states."""
        sender, receiver, active, linger = _OFFICIAL_STATES[State(state)]
        return cls(sender=sender, receiver=receiver, active=active, linger_after_streams_finish=linger)

    def name(self) -> str:
        """A one-line description of the state."""
        return (
            f"sender=`{self.sender}`, receiver=`{self.receiver}`, "
            f"active={int(self.active)}, "
            f"linger_after_streams_finish={int(self.linger_after_streams_finish)}"
        )

    def __str__(self) -> str:
        return self.name()

    def __eq__(self, other) -> bool:
        if isinstance(other, State):
            other = TCPState.from_state(other)
        if not isinstance(other, TCPState):
            return NotImplemented
        return (
            self.active == other.active
            and self.linger_after_streams_finish == other.linger_after_streams_finish
            and self.sender == other.sender
            and self.receiver == other.receiver
        )

    def __hash__(self) -> int:
        return hash((self.sender, self.receiver, self.active, self.linger_after_streams_finish))