"""Generator of synthetic headset packets."""

from __future__ import annotations

import random
from collections.abc import Iterator

from .icd import (
    PARSER_CODE_ASIC_EEG_POWER_INT,
    PARSER_CODE_ATTENTION,
    PARSER_CODE_BATTERY,
    PARSER_CODE_HEART_RATE,
    PARSER_CODE_MEDITATION,
    PARSER_CODE_POOR_QUALITY,
    PARSER_CODE_RAW_SIGNAL,
    PARSER_SYNC_BYTE,
    checksum,
)

EEG_EVERY = 512
COUNTER_LIMIT = 3_000_000
EEG_BAND_BYTES = 0x18
TICK_INTERVAL = 0.002


class Simulator:
    """Produces raw-sample packets with an EEG power packet every 512th."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._count = 0

    def _byte(self, maximum: int = 256) -> int:
        return self._rng.randrange(maximum)

    def _noise(self) -> bytes:
        return bytes(self._byte() for _ in range(self._byte()))

    def module(self, model_index: int, maximum: int) -> bytes:
        """Return a two-byte data row: code followed by a value in [0, maximum)."""
        return bytes([model_index & 0xFF, self._byte(maximum)])

    def raw_packet(self, noise: bool = False) -> bytes:
        """Return a packet carrying one 16-bit raw sample."""
        payload = bytes([PARSER_CODE_RAW_SIGNAL, 0x02, self._byte(), self._byte()])
        packet = bytearray([PARSER_SYNC_BYTE, PARSER_SYNC_BYTE, len(payload)])
        packet += payload
        packet.append(checksum(payload))
        if noise:
            packet += self._noise()
            packet.append(PARSER_SYNC_BYTE)
        return bytes(packet)

    def eeg_packet(self, noise: bool = False) -> bytes:
        """Return a packet with power, signal, heart rate, EEG bands and meters."""
        payload = bytearray()
        payload += self.module(PARSER_CODE_BATTERY, 128)
        payload += self.module(PARSER_CODE_POOR_QUALITY, 256)
        payload += self.module(PARSER_CODE_HEART_RATE, 256)
        payload += bytes([PARSER_CODE_ASIC_EEG_POWER_INT, EEG_BAND_BYTES])
        payload += bytes(self._byte() for _ in range(EEG_BAND_BYTES))
        payload += self.module(PARSER_CODE_ATTENTION, 100)
        payload += self.module(PARSER_CODE_MEDITATION, 100)

        packet = bytearray([PARSER_SYNC_BYTE, PARSER_SYNC_BYTE, len(payload)])
        packet += payload
        packet.append(checksum(payload))
        if noise:
            packet += self._noise()
        return bytes(packet)

    def next_packet(self) -> bytes:
        """Return the next packet of the stream."""
        if self._count % EEG_EVERY == 0:
            packet = self.eeg_packet()
        else:
            packet = self.raw_packet()
        if self._count > COUNTER_LIMIT:
            self._count = 0
        self._count += 1
        return packet

    def __iter__(self) -> Iterator[bytes]:
        while True:
            yield self.next_packet()