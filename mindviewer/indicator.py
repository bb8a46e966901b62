"""Read-only gauge for values such as attention and meditation."""

from __future__ import annotations

ORIGIN = 135.0
SCALE_ARC = 270.0
STEP = 20.0


class Indicator:
    """A dial with a label, a fixed scale and a value clamped to it."""

    def __init__(self, label: str = "", minimum: float = 0.0, maximum: float = 100.0) -> None:
        if minimum >= maximum:
            raise ValueError(f"minimum {minimum} must be below maximum {maximum}")
        self.label = label
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self._value = self.minimum

    @property
    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> None:
        """Move the needle, clamping to the scale since the dial does not wrap."""
        self._value = max(self.minimum, min(self.maximum, float(value)))

    @property
    def fraction(self) -> float:
        """Position of the needle along the scale, from 0 to 1."""
        return (self._value - self.minimum) / (self.maximum - self.minimum)

    @property
    def angle(self) -> float:
        """Needle angle in degrees, measured like the dial's scale arc."""
        return ORIGIN + self.fraction * SCALE_ARC

    @property
    def ticks(self) -> list[float]:
        """Major tick positions along the scale."""
        result = []
        tick = self.minimum
        while tick <= self.maximum + 1e-9:
            result.append(tick)
            tick += STEP
        return result

    def render(self, width: int = 20) -> str:
        """Draw the gauge as a labelled text bar."""
        if width < 1:
            raise ValueError(f"width must be positive, got {width}")
        filled = round(self.fraction * width)
        bar = "#" * filled + "-" * (width - filled)
        return f"{self.label} [{bar}] {self._value:g}"