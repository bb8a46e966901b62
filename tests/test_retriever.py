from unittest import mock

import pytest
import serial

from mindviewer.retriever import (
    Retriever,
    SerialSettings,
    available_ports,
    parity_from_index,
)


class FakePort:
    def __init__(self, **options):
        self.options = options
        self.is_open = True
        self.pending = bytearray(b"\xaa\xaa\x04")
        self.flushed_in = False
        self.flushed_out = False

    @property
    def in_waiting(self):
        return len(self.pending)

    def read(self, size):
        data = bytes(self.pending[:size])
        del self.pending[:size]
        return data

    def reset_input_buffer(self):
        self.flushed_in = True

    def reset_output_buffer(self):
        self.flushed_out = True

    def close(self):
        self.is_open = False


def make_retriever(**kwargs):
    created = []

    def factory(**options):
        port = FakePort(**options)
        created.append(port)
        return port

    return Retriever(SerialSettings("ttyFAKE0", **kwargs), factory), created


@pytest.mark.parametrize(
    "index, expected",
    [
        (0, serial.PARITY_NONE),
        (1, serial.PARITY_EVEN),
        (2, serial.PARITY_ODD),
        (3, serial.PARITY_SPACE),
        (4, serial.PARITY_MARK),
        (9, serial.PARITY_NONE),
        (-1, serial.PARITY_NONE),
    ],
)
def test_parity_from_index(index, expected):
    assert parity_from_index(index) == expected


def test_available_ports_lists_devices():
    ports = [mock.Mock(device="ttyFAKE0"), mock.Mock(device="ttyFAKE1")]
    with mock.patch("mindviewer.retriever.list_ports.comports", return_value=ports):
        assert available_ports() == ["ttyFAKE0", "ttyFAKE1"]


def test_open_passes_settings_to_port():
    retriever, created = make_retriever(baudrate=9600, parity=1, stopbits=2, flow_control=1)
    retriever.open()
    options = created[0].options
    assert options["port"] == "ttyFAKE0"
    assert options["baudrate"] == 9600
    assert options["parity"] == serial.PARITY_EVEN
    assert options["stopbits"] == serial.STOPBITS_TWO
    assert options["rtscts"] is True
    assert options["xonxoff"] is False
    assert retriever.is_open


def test_software_flow_control():
    retriever, created = make_retriever(flow_control=2)
    retriever.open()
    assert created[0].options["xonxoff"] is True
    assert created[0].options["rtscts"] is False


def test_open_twice_keeps_one_port():
    retriever, created = make_retriever()
    retriever.open()
    retriever.open()
    assert len(created) == 1


def test_open_failure_raises_oserror():
    def failing(**options):
        raise serial.SerialException("no such device")

    retriever = Retriever(SerialSettings("ttyFAKE9"), failing)
    with pytest.raises(OSError, match="ttyFAKE9"):
        retriever.open()
    assert not retriever.is_open


def test_read_returns_waiting_bytes_then_nothing():
    retriever, _ = make_retriever()
    retriever.open()
    assert retriever.read() == b"\xaa\xaa\x04"
    assert retriever.read() == b""


def test_read_on_closed_port_raises():
    retriever, _ = make_retriever()
    with pytest.raises(RuntimeError):
        retriever.read()


def test_close_flushes_and_closes():
    retriever, created = make_retriever()
    retriever.open()
    retriever.close()
    port = created[0]
    assert port.flushed_in and port.flushed_out
    assert port.is_open is False
    assert not retriever.is_open


def test_context_manager_opens_and_closes():
    retriever, created = make_retriever()
    with retriever as opened:
        assert opened.is_open
    assert created[0].is_open is False


@pytest.mark.parametrize(
    "kwargs",
    [{"bytesize": 9}, {"stopbits": 3}, {"baudrate": 0}, {"flow_control": 5}],
)
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ValueError):
        SerialSettings("ttyFAKE0", **kwargs)