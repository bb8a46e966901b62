"""Protocol constants, packet record and byte helpers for the headset stream."""

from __future__ import annotations

import enum
import random
from dataclasses import MISSING, dataclass, field, fields

# Parser types
PARSER_TYPE_NULL = 0x00
PARSER_TYPE_PACKETS = 0x01
PARSER_TYPE_2BYTERAW = 0x02

# Data codes
PARSER_CODE_BATTERY = 0x01
PARSER_CODE_POOR_QUALITY = 0x02
PARSER_CODE_HEART_RATE = 0x03
PARSER_CODE_ATTENTION = 0x04
PARSER_CODE_MEDITATION = 0x05
PARSER_CODE_8BITRAW_SIGNAL = 0x06
PARSER_CODE_RAW_MARKER = 0x07
PARSER_CODE_RAW_SIGNAL = 0x80
PARSER_CODE_EEG_POWERS = 0x81
PARSER_CODE_ASIC_EEG_POWER_INT = 0x83

# Decoder states
PARSER_STATE_NULL = 0x00
PARSER_STATE_SYNC = 0x01
PARSER_STATE_SYNC_CHECK = 0x02
PARSER_STATE_PAYLOAD_LENGTH = 0x03
PARSER_STATE_CHKSUM = 0x04
PARSER_STATE_PAYLOAD = 0x05
PARSER_STATE_WAIT_HIGH = 0x06
PARSER_STATE_WAIT_LOW = 0x07

PARSER_SYNC_BYTE = 0xAA
PARSER_EXCODE_BYTE = 0x55


class DataSourceType(enum.IntEnum):
    """Where the byte stream comes from."""

    NONE = 0
    COM = 1
    SIM = 2
    LOCAL = 3


@dataclass
class EEGPacket:
    """Every value a decoded packet can carry, plus running statistics."""

    delta: int = 0
    theta: int = 0
    low_alpha: int = 0
    high_alpha: int = 0
    low_beta: int = 0
    high_beta: int = 0
    low_gamma: int = 0
    mid_gamma: int = 0
    attention: int = 0
    meditation: int = 0
    blink: int = 0
    mwl: int = 0
    signal: int = 0
    power: int = 0
    noise: int = 0
    total: int = 0
    loss: int = 0
    raw_count: int = 0
    eeg_count: int = 0
    raw: list[float] = field(default_factory=list)

    def reset(self) -> None:
        """Set every field back to zero and empty the raw samples."""
        for f in fields(self):
            if f.default_factory is not MISSING:
                setattr(self, f.name, f.default_factory())
            else:
                setattr(self, f.name, f.default)


def random_byte(maximum: int = 256) -> int:
    """Return a random integer in [0, maximum)."""
    if not 0 < maximum <= 256:
        raise ValueError(f"maximum must be in 1..256, got {maximum}")
    return random.randrange(maximum)


def hex_digit(char: str) -> int:
    """Return the value of one hexadecimal digit."""
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    raise ValueError(f"not a hexadecimal digit: {char!r}")


def hex_to_byte(text: str) -> int:
    """Convert a two-character hexadecimal string to a byte value."""
    if len(text) != 2:
        raise ValueError(f"expected two hexadecimal digits, got {text!r}")
    return hex_digit(text[0]) * 16 + hex_digit(text[1])


def checksum(payload: bytes) -> int:
    """Return the one's-complement checksum of a packet payload."""
    return ~(sum(payload) & 0xFF) & 0xFF