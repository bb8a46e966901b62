"""Viewer state: data source, run/pause control, counters, gauges and curves."""

from __future__ import annotations

from dataclasses import dataclass

from .curve import Curve
from .dataparser import DataParser
from .icd import DataSourceType, EEGPacket
from .indicator import Indicator

STATUS_STOPPED = "stopped"
STATUS_RUNNING = "running"
STATUS_PAUSED = "paused"

_COUNTERS = (
    ("power", "Power"),
    ("signal", "Signal"),
    ("total", "Total packets"),
    ("loss", "Lost packets"),
    ("raw_count", "Raw packets"),
    ("eeg_count", "EEG packets"),
    ("noise", "Noise"),
)


class ViewerError(RuntimeError):
    """An action that the viewer's current state does not allow."""


@dataclass
class Clock:
    """Running time counted in packets shown, one second per packet."""

    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def tick(self) -> None:
        """Advance by one second, carrying into minutes, hours and days."""
        self.seconds += 1
        if self.seconds > 59:
            self.minutes += 1
            self.seconds = 0
        if self.minutes > 59:
            self.hours += 1
            self.minutes = 0
        if self.hours > 23:
            self.days += 1
            self.hours = 0

    def reset(self) -> None:
        """Set the clock back to zero."""
        self.days = self.hours = self.minutes = self.seconds = 0

    def __str__(self) -> str:
        return f"{self.days} d {self.hours} h {self.minutes} m {self.seconds} s"


class Viewer:
    """Holds what the screen shows and reacts to the user's controls."""

    def __init__(self, parser: DataParser | None = None) -> None:
        self.parser = parser if parser is not None else DataParser()
        self.curve = Curve()
        self.attention = Indicator("Attention")
        self.meditation = Indicator("Meditation")
        self.clock = Clock()
        self.source = DataSourceType.NONE
        self.running = False
        self.status = STATUS_STOPPED
        self.values: dict[str, int] = {key: 0 for key, _ in _COUNTERS}

    def select_source(self, source: DataSourceType | int) -> None:
        """Switch to a data source and start showing its packets."""
        source = DataSourceType(source)
        if source is DataSourceType.NONE:
            raise ViewerError("no data source selected")
        if source is DataSourceType.COM:
            self.parser.open_capture()
        self.running = True
        self.status = STATUS_RUNNING
        self.source = source

    def _require_source(self, message: str) -> None:
        if self.source is DataSourceType.NONE:
            raise ViewerError(message)

    def play(self) -> None:
        """Resume showing packets, starting from cleared data."""
        self._require_source("select a data source first")
        if self.running:
            raise ViewerError("already running")
        self.running = True
        self.status = STATUS_RUNNING
        self.clear()

    def pause(self) -> None:
        """Stop showing new packets."""
        self._require_source("select a data source first")
        if not self.running:
            raise ViewerError("already paused")
        self.running = False
        self.status = STATUS_PAUSED

    def clear(self) -> None:
        """Zero the counters, empty the curves and drop buffered bytes."""
        self._require_source("no data to clear")
        for key in self.values:
            self.values[key] = 0
        self.curve.clear()
        self.parser.clear()

    def save(self) -> None:
        """Keep the recording of the serial stream."""
        self._require_source("no data to save")
        if self.source is DataSourceType.COM:
            self.parser.save_capture()
        elif self.source is DataSourceType.SIM:
            raise ViewerError("simulated data need not be saved")
        elif self.source is DataSourceType.LOCAL:
            raise ViewerError("data read from a file is already saved")

    def update(self, packet: EEGPacket) -> bool:
        """Show a decoded packet; returns False when paused and nothing changed."""
        if not self.running:
            return False
        self.clock.tick()
        for key in self.values:
            self.values[key] = int(getattr(packet, key))
        self.attention.set_value(packet.attention)
        self.meditation.set_value(packet.meditation)
        self.curve.update(packet)
        return True

    def render(self) -> str:
        """Draw the whole view as text."""
        lines = [
            f"Status: {self.status}",
            f"Source: {self.source.name.lower()}",
            f"Time: {self.clock}",
        ]
        lines.extend(f"{label}: {self.values[key]}" for key, label in _COUNTERS)
        lines.append(self.attention.render())
        lines.append(self.meditation.render())
        lines.append(self.curve.render())
        return "\n".join(lines)