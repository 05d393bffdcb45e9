from spongenet.fd_adapter import FdAdapterBase
from spongenet.lossy_fd_adapter import LossyFdAdapter
from spongenet.tcp_header import TCPHeader
from spongenet.tcp_segment import TCPSegment


class _RecordingAdapter(FdAdapterBase):
    def __init__(self, segment=None):
        super().__init__()
        self.segment = segment
        self.written = []
        self.ticks = []

    def read(self):
        return self.segment

    def write(self, seg):
        self.written.append(seg)

    def tick(self, ms_since_last_tick):
        self.ticks.append(ms_since_last_tick)


class _FixedRandom:
    def __init__(self, value):
        self.value = value

    def getrandbits(self, k):
        return self.value


def _segment():
    return TCPSegment(TCPHeader(seqno=3), b"data")


def test_no_loss_passes_everything():
    seg = _segment()
    inner = _RecordingAdapter(seg)
    lossy = LossyFdAdapter(inner)
    assert lossy.read() is seg
    lossy.write(seg)
    assert inner.written == [seg]


def test_downlink_loss_drops_read_only():
    seg = _segment()
    inner = _RecordingAdapter(seg)
    inner.config().loss_rate_dn = 100
    lossy = LossyFdAdapter(inner, _FixedRandom(99))
    assert lossy.read() is None
    lossy.write(seg)
    assert inner.written == [seg]


def test_random_equal_to_loss_is_kept():
    seg = _segment()
    inner = _RecordingAdapter(seg)
    inner.config().loss_rate_dn = 100
    lossy = LossyFdAdapter(inner, _FixedRandom(100))
    assert lossy.read() is seg


def test_random_value_truncated_to_sixteen_bits():
    seg = _segment()
    inner = _RecordingAdapter(seg)
    inner.config().loss_rate_dn = 100
    lossy = LossyFdAdapter(inner, _FixedRandom(0x10063))
    assert lossy.read() is None


def test_uplink_loss_drops_write_only():
    seg = _segment()
    inner = _RecordingAdapter(seg)
    inner.config().loss_rate_up = 100
    lossy = LossyFdAdapter(inner, _FixedRandom(0))
    lossy.write(seg)
    assert inner.written == []
    assert lossy.read() is seg


def test_passthroughs():
    inner = _RecordingAdapter()
    lossy = LossyFdAdapter(inner)
    lossy.set_listening(True)
    lossy.tick(25)
    assert inner.listening() is True
    assert lossy.config() is inner.config()
    assert inner.ticks == [25]