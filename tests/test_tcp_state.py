import itertools

import pytest

from spongenet.tcp_state import ReceiverSummary, SenderSummary, State, TCPState


def test_established_fields():
    st = TCPState.from_state(State.ESTABLISHED)
    assert st.sender == SenderSummary.SYN_ACKED
    assert st.receiver == ReceiverSummary.SYN_RECV
    assert st.active is True
    assert st.linger_after_streams_finish is True


def test_listen_fields():
    st = TCPState.from_state(State.LISTEN)
    assert st.sender == SenderSummary.CLOSED
    assert st.receiver == ReceiverSummary.LISTEN


def test_close_wait_does_not_linger():
    st = TCPState.from_state(State.CLOSE_WAIT)
    assert st.receiver == ReceiverSummary.FIN_RECV
    assert st.sender == SenderSummary.SYN_ACKED
    assert st.active is True
    assert st.linger_after_streams_finish is False


def test_reset_is_inactive_error():
    st = TCPState.from_state(State.RESET)
    assert st.sender == SenderSummary.ERROR
    assert st.receiver == ReceiverSummary.ERROR
    assert st.active is False
    assert st.linger_after_streams_finish is False


def test_closed_and_time_wait_differ_only_in_activity():
    closed = TCPState.from_state(State.CLOSED)
    time_wait = TCPState.from_state(State.TIME_WAIT)
    assert closed.sender == time_wait.sender == SenderSummary.FIN_ACKED
    assert closed.receiver == time_wait.receiver == ReceiverSummary.FIN_RECV
    assert closed.active is False
    assert time_wait.active is True
    assert closed != time_wait


def test_all_official_states_are_distinct():
    states = [TCPState.from_state(s) for s in State]
    for a, b in itertools.combinations(states, 2):
        assert a != b


def test_equality_with_same_fields():
    built = TCPState(
        sender=SenderSummary.FIN_SENT,
        receiver=ReceiverSummary.SYN_RECV,
        active=True,
        linger_after_streams_finish=True,
    )
    assert built == TCPState.from_state(State.FIN_WAIT_1)
    assert hash(built) == hash(TCPState.from_state(State.FIN_WAIT_1))


def test_equality_with_state_enum():
    assert TCPState.from_state(State.SYN_SENT) == State.SYN_SENT
    assert TCPState.from_state(State.SYN_SENT) != State.SYN_RCVD


def test_inactive_forces_no_linger():
    st = TCPState(
        sender=SenderSummary.FIN_ACKED,
        receiver=ReceiverSummary.FIN_RECV,
        active=False,
        linger_after_streams_finish=True,
    )
    assert st.linger_after_streams_finish is False
    assert st == State.CLOSED


def test_linger_distinguishes_closing_from_last_ack():
    assert TCPState.from_state(State.CLOSING) != TCPState.from_state(State.LAST_ACK)
    assert TCPState.from_state(State.CLOSING).sender == TCPState.from_state(State.LAST_ACK).sender


def test_name_format():
    st = TCPState.from_state(State.ESTABLISHED)
    expected = (
        "sender=`" + SenderSummary.SYN_ACKED + "`, receiver=`" + ReceiverSummary.SYN_RECV
        + "`, active=1, linger_after_streams_finish=1"
    )
    assert st.name() == expected
    assert str(st) == expected


def test_name_for_reset_shows_zero_bits():
    name = TCPState.from_state(State.RESET).name()
    assert name.endswith("active=0, linger_after_streams_finish=0")


def test_compare_with_unrelated_type():
    assert (TCPState.from_state(State.LISTEN) == "LISTEN") is False


def test_from_state_rejects_unknown():
    with pytest.raises(ValueError):
        TCPState.from_state(99)


def test_from_state_accepts_numeric_value():
    assert TCPState.from_state(State.TIME_WAIT.value) == State.TIME_WAIT