"""Serial-port source of the headset byte stream."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import serial
from serial.tools import list_ports

_PARITIES = (
    serial.PARITY_NONE,
    serial.PARITY_EVEN,
    serial.PARITY_ODD,
    serial.PARITY_SPACE,
    serial.PARITY_MARK,
)

_STOP_BITS = {
    1: serial.STOPBITS_ONE,
    1.5: serial.STOPBITS_ONE_POINT_FIVE,
    2: serial.STOPBITS_TWO,
}

_BYTE_SIZES = (5, 6, 7, 8)

# Flow-control choices in the order the settings index them.
FLOW_NONE = 0
FLOW_HARDWARE = 1
FLOW_SOFTWARE = 2


def available_ports() -> list[str]:
    """Return the device names of the serial ports present on the system."""
    return [port.device for port in list_ports.comports()]


def parity_from_index(index: int) -> str:
    """Map a parity choice (none, even, odd, space, mark) to its serial constant."""
    if 0 <= index < len(_PARITIES):
        return _PARITIES[index]
    return serial.PARITY_NONE


@dataclass
class SerialSettings:
    """How to open the serial port."""

    port: str
    baudrate: int = 57600
    bytesize: int = 8
    stopbits: float = 1
    parity: int = 0
    flow_control: int = FLOW_NONE

    def __post_init__(self) -> None:
        if self.baudrate <= 0:
            raise ValueError(f"baud rate must be positive, got {self.baudrate}")
        if self.bytesize not in _BYTE_SIZES:
            raise ValueError(f"data bits must be 5 to 8, got {self.bytesize}")
        if self.stopbits not in _STOP_BITS:
            raise ValueError(f"stop bits must be 1, 1.5 or 2, got {self.stopbits}")
        if self.flow_control not in (FLOW_NONE, FLOW_HARDWARE, FLOW_SOFTWARE):
            raise ValueError(f"unknown flow control: {self.flow_control}")

    def port_options(self) -> dict[str, Any]:
        """Keyword arguments for opening a serial port with these settings."""
        return {
            "port": self.port,
            "baudrate": self.baudrate,
            "bytesize": self.bytesize,
            "parity": parity_from_index(self.parity),
            "stopbits": _STOP_BITS[self.stopbits],
            "rtscts": self.flow_control == FLOW_HARDWARE,
            "xonxoff": self.flow_control == FLOW_SOFTWARE,
            "timeout": 0,
        }


class Retriever:
    """Reads whatever bytes the serial port has received."""

    def __init__(
        self,
        settings: SerialSettings,
        port_factory: Callable[..., Any] | None = None,
    ) -> None:
        self.settings = settings
        self._factory = port_factory if port_factory is not None else serial.Serial
        self._port: Any = None

    @property
    def is_open(self) -> bool:
        return self._port is not None and bool(self._port.is_open)

    def open(self) -> None:
        """Open the port; raises OSError when it cannot be opened."""
        if self.is_open:
            return
        try:
            self._port = self._factory(**self.settings.port_options())
        except (serial.SerialException, OSError, ValueError) as exc:
            self._port = None
            raise OSError(f"cannot open {self.settings.port}: {exc}") from exc

    def close(self) -> None:
        """Discard pending data and close the port if it is open."""
        if self.is_open:
            self._port.reset_input_buffer()
            self._port.reset_output_buffer()
            self._port.close()
        self._port = None

    def read(self) -> bytes:
        """Return every byte waiting on the port, possibly none."""
        if not self.is_open:
            raise RuntimeError("serial port is not open")
        waiting = self._port.in_waiting
        if not waiting:
            return b""
        return bytes(self._port.read(waiting))

    def __enter__(self) -> Retriever:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()