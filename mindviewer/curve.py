"""Rolling buffers of raw samples and EEG band powers, drawn as text sparklines."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from .icd import EEGPacket

RAW_POINTS = 500
EEG_POINTS = 250
CURVE_COUNT = 9

RAW_RANGE = (-32768.0, 32767.0)
EEG_RANGE = (-10737423.0, 10737423.0)

_BLOCKS = "▁▂▃▄▅▆▇█"

# Band series in drawing order, with the packet field each one follows.
_BAND_FIELDS = (
    "delta",
    "high_alpha",
    "high_beta",
    "low_alpha",
    "low_beta",
    "low_gamma",
    "mid_gamma",
    "theta",
)

_TITLES = {
    "raw": "Raw",
    "delta": "δ",
    "high_alpha": "α↑",
    "high_beta": "α↓",
    "low_alpha": "β↑",
    "low_beta": "β↓",
    "low_gamma": "γ↓",
    "mid_gamma": "γ-",
    "theta": "θ",
}


class Curve:
    """Keeps the visible window of every plotted series."""

    def __init__(self) -> None:
        self._raw: list[float] = []
        self._bands: dict[str, deque[float]] = {
            name: deque(maxlen=EEG_POINTS) for name in _BAND_FIELDS
        }

    def update(self, packet: EEGPacket) -> None:
        """Append the raw samples and band powers carried by a packet."""
        new_raw: Iterable[float] = packet.raw
        if len(self._raw) >= RAW_POINTS:
            del self._raw[: min(len(packet.raw), len(self._raw))]
        self._raw.extend(float(value) for value in new_raw)
        for name, values in self._bands.items():
            values.append(float(getattr(packet, name)))

    def clear(self) -> None:
        """Empty every series."""
        self._raw.clear()
        for values in self._bands.values():
            values.clear()

    def series(self) -> dict[str, list[float]]:
        """Return a copy of every series, in drawing order."""
        result = {"raw": list(self._raw)}
        result.update({name: list(values) for name, values in self._bands.items()})
        return result

    def _values(self, name: str) -> list[float]:
        if name == "raw":
            return list(self._raw)
        try:
            return list(self._bands[name])
        except KeyError:
            raise KeyError(f"unknown series: {name!r}") from None

    def sparkline(self, name: str, width: int | None = None) -> str:
        """Draw the newest values of a series as block characters.

        With a width, the line holds the last ``width`` values right-aligned
        and padded with spaces.
        """
        values = self._values(name)
        low, high = RAW_RANGE if name == "raw" else EEG_RANGE
        if width is not None:
            if width <= 0:
                raise ValueError(f"width must be positive, got {width}")
            values = values[-width:]
        top = len(_BLOCKS) - 1
        chars = []
        for value in values:
            level = round((value - low) / (high - low) * top)
            chars.append(_BLOCKS[max(0, min(top, level))])
        line = "".join(chars)
        return line.rjust(width) if width is not None else line

    def render(self, width: int = 60) -> str:
        """Draw all series, one titled line each."""
        lines = []
        for name in self.series():
            title = _TITLES[name].ljust(3)
            lines.append(f"{title} {self.sparkline(name, width)}")
        return "\n".join(lines)