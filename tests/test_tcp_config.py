from spongenet.address import Address
from spongenet.tcp_config import FdAdapterConfig, TCPConfig


def test_tcp_config_defaults():
    cfg = TCPConfig()
    assert cfg.rt_timeout == TCPConfig.TIMEOUT_DFLT == 1000
    assert cfg.recv_capacity == TCPConfig.DEFAULT_CAPACITY == 64000
    assert cfg.send_capacity == TCPConfig.DEFAULT_CAPACITY
    assert cfg.fixed_isn is None


def test_tcp_config_limits():
    cfg = TCPConfig()
    assert cfg.MAX_PAYLOAD_SIZE == 1000
    assert cfg.MAX_RETX_ATTEMPTS == 8
    assert cfg.recv_capacity // cfg.MAX_PAYLOAD_SIZE == 64


def test_tcp_config_instances_are_independent():
    a = TCPConfig()
    b = TCPConfig()
    a.recv_capacity = 65000
    a.fixed_isn = 5
    assert b.recv_capacity == TCPConfig.DEFAULT_CAPACITY
    assert b.fixed_isn is None


def test_adapter_config_defaults():
    cfg = FdAdapterConfig()
    assert cfg.loss_rate_dn == 0
    assert cfg.loss_rate_up == 0
    assert cfg.source.port() == 0
    assert cfg.destination == Address("0", 0)


def test_adapter_config_fields_are_settable():
    cfg = FdAdapterConfig()
    cfg.destination = Address("127.0.0.1", 9000)
    other = FdAdapterConfig()
    assert cfg.destination.port() == 9000
    assert other.destination.port() == 0