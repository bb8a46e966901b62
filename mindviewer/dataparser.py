"""Stream decoder that splits the headset byte stream into packets."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO

from .icd import (
    PARSER_CODE_ASIC_EEG_POWER_INT,
    PARSER_CODE_ATTENTION,
    PARSER_CODE_BATTERY,
    PARSER_CODE_HEART_RATE,
    PARSER_CODE_MEDITATION,
    PARSER_CODE_POOR_QUALITY,
    PARSER_CODE_RAW_SIGNAL,
    PARSER_STATE_CHKSUM,
    PARSER_STATE_PAYLOAD,
    PARSER_STATE_PAYLOAD_LENGTH,
    PARSER_STATE_SYNC,
    PARSER_STATE_SYNC_CHECK,
    PARSER_SYNC_BYTE,
    EEGPacket,
    checksum,
)

log = logging.getLogger(__name__)

MIN_PACKET_SIZE = 6
MAX_PAYLOAD_LENGTH = 170
POLL_INTERVAL = 0.015

_RAW_ROW_SIZE = 5
_EEG_ROW_SIZE = 26
_EEG_BAND_BYTES = 0x18

_SINGLE_VALUE_FIELDS: dict[int, str | None] = {
    PARSER_CODE_BATTERY: "power",
    PARSER_CODE_POOR_QUALITY: "signal",
    PARSER_CODE_HEART_RATE: None,
    PARSER_CODE_ATTENTION: "attention",
    PARSER_CODE_MEDITATION: "meditation",
}

_BANDS = (
    "delta",
    "theta",
    "low_alpha",
    "high_alpha",
    "low_beta",
    "high_beta",
    "low_gamma",
    "mid_gamma",
)


@dataclass
class ParseResult:
    """Outcome of decoding one packet."""

    valid: bool
    raw: bool
    packet: EEGPacket = field(default_factory=EEGPacket)


class DataParser:
    """Buffers incoming bytes and decodes them into EEG packets."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._lock = threading.RLock()
        self._raw_data: list[float] = []
        self._capture: BinaryIO | None = None
        self._capture_path: str | os.PathLike[str] | None = None
        self._saved = False
        self.noise = 0
        self.total = 0
        self.loss = 0
        self.raw_count = 0
        self.eeg_count = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def feed(self, data: bytes) -> None:
        """Append received bytes to the buffer, recording them if capturing."""
        if self._capture is not None and not self._capture.closed:
            self._capture.write(data)
        with self._lock:
            self._buffer += data

    def clear(self) -> None:
        """Drop buffered bytes, pending raw samples and all statistics."""
        with self._lock:
            self._buffer.clear()
        self._raw_data.clear()
        self.noise = 0
        self.total = 0
        self.loss = 0
        self.raw_count = 0
        self.eeg_count = 0

    def skip_invalid_bytes(self) -> None:
        """Discard bytes until the buffer starts with a complete packet header."""
        with self._lock:
            buf = self._buffer
            if not buf:
                return
            if len(buf) <= MIN_PACKET_SIZE:
                buf.clear()
                return
            while len(buf) >= MIN_PACKET_SIZE:
                if buf[0] == buf[1] == buf[2] == PARSER_SYNC_BYTE:
                    log.debug("three sync bytes found")
                elif buf[0] == buf[1] == PARSER_SYNC_BYTE:
                    if buf[2] + 4 <= len(buf):
                        break
                    log.debug("packet shorter than its declared size")
                self.noise += 1
                del buf[0]

    def parse_packet(self, data: bytes) -> ParseResult:
        """Decode a single packet, updating the running statistics."""
        self.total += 1
        packet = EEGPacket()
        raw = False
        if not data:
            return ParseResult(False, False, packet)

        buff = bytearray(data)
        state = PARSER_STATE_SYNC
        length = 0
        consumed = 0
        while buff:
            if state == PARSER_STATE_SYNC:
                if buff[0] == PARSER_SYNC_BYTE:
                    state = PARSER_STATE_SYNC_CHECK
                del buff[0]
            elif state == PARSER_STATE_SYNC_CHECK:
                if buff[0] == PARSER_SYNC_BYTE:
                    state = PARSER_STATE_PAYLOAD_LENGTH
                    del buff[0]
                else:
                    state = PARSER_STATE_SYNC
            elif state == PARSER_STATE_PAYLOAD_LENGTH:
                length = buff[0]
                if length >= MAX_PAYLOAD_LENGTH:
                    log.debug("payload length %d is too large", length)
                    state = PARSER_STATE_SYNC
                else:
                    state = PARSER_STATE_CHKSUM
                del buff[0]
            elif state == PARSER_STATE_CHKSUM:
                if length + 1 > len(buff):
                    log.debug("packet is incomplete")
                    state = PARSER_STATE_SYNC
                    continue
                if checksum(bytes(buff[:length])) != buff[length]:
                    self.loss += 1
                    log.debug("checksum failed")
                    return ParseResult(False, raw, packet)
                state = PARSER_STATE_PAYLOAD
            elif state == PARSER_STATE_PAYLOAD:
                if consumed >= length:
                    del buff[0]
                    continue
                code = buff[0]
                second = buff[1] if len(buff) > 1 else None
                if code in _SINGLE_VALUE_FIELDS:
                    if len(buff) < 2:
                        state = PARSER_STATE_SYNC
                        continue
                    name = _SINGLE_VALUE_FIELDS[code]
                    if name is not None:
                        setattr(packet, name, buff[1])
                    del buff[:2]
                    consumed += 2
                elif code == PARSER_CODE_RAW_SIGNAL and second == 0x02:
                    if len(buff) < _RAW_ROW_SIZE:
                        raw = False
                        state = PARSER_STATE_SYNC
                        continue
                    self.raw_count += 1
                    raw = True
                    self._raw_data.append(
                        float(int.from_bytes(buff[2:4], "big", signed=True))
                    )
                    del buff[:_RAW_ROW_SIZE]
                elif code == PARSER_CODE_ASIC_EEG_POWER_INT and second == _EEG_BAND_BYTES:
                    if len(buff) < _EEG_ROW_SIZE:
                        state = PARSER_STATE_SYNC
                        continue
                    for index, name in enumerate(_BANDS):
                        start = 2 + 3 * index
                        setattr(packet, name, int.from_bytes(buff[start:start + 3], "big"))
                    del buff[:_EEG_ROW_SIZE]
                    consumed += _EEG_ROW_SIZE
                    self.eeg_count += 1
                else:
                    # Rows that carry nothing shown on screen are skipped whole.
                    if code < 0x80 or second is None:
                        size = 2
                    else:
                        size = 2 + second
                    if len(buff) < size:
                        state = PARSER_STATE_SYNC
                        continue
                    del buff[:size]
                    consumed += size
            else:
                del buff[0]

        return ParseResult(True, raw, packet)

    def _take_chunk(self) -> bytes | None:
        with self._lock:
            if len(self._buffer) < MIN_PACKET_SIZE:
                return None
            self.skip_invalid_bytes()
            buf = self._buffer
            if len(buf) < MIN_PACKET_SIZE:
                return None
            if buf[0] != PARSER_SYNC_BYTE or buf[1] != PARSER_SYNC_BYTE:
                return None
            size = buf[2] + 4
            chunk = bytes(buf[:size])
            del buf[:size]
            return chunk

    def packets(self) -> Iterator[EEGPacket]:
        """Decode buffered packets, yielding each one that carries no raw sample."""
        with self._lock:
            if not self._buffer:
                return
            self.skip_invalid_bytes()
        while (chunk := self._take_chunk()) is not None:
            result = self.parse_packet(chunk)
            if not result.valid:
                log.debug("cannot parse data")
            if result.raw:
                continue
            packet = result.packet
            packet.noise = self.noise
            packet.total = self.total
            packet.loss = self.loss
            packet.raw_count = self.raw_count
            packet.eeg_count = self.eeg_count
            packet.raw = list(self._raw_data)
            self._raw_data.clear()
            yield packet

    def open_capture(self, path: str | os.PathLike[str] | None = None) -> None:
        """Start recording fed bytes to a file named by the current time by default."""
        if path is None:
            path = datetime.now().strftime("%Y-%m-%d-%H-%M-%S") + ".txt"
        if self._capture is not None:
            self._capture.close()
        try:
            self._capture = open(path, "wb")
        except OSError:
            log.debug("cannot open local file %s", path)
            self._capture = None
            self._capture_path = None
            raise
        self._capture_path = path
        self._saved = False

    def save_capture(self) -> None:
        """Finish the recording and keep the file."""
        if self._capture is not None:
            self._capture.close()
        self._saved = True

    def close(self) -> None:
        """Close the recording, deleting it unless it was saved."""
        if self._capture is None:
            return
        was_open = not self._capture.closed
        self._capture.close()
        if not self._saved and was_open and self._capture_path is not None:
            try:
                os.remove(self._capture_path)
            except FileNotFoundError:
                pass
        self._capture = None

    def run(
        self,
        callback: Callable[[EEGPacket], object],
        stop_event: threading.Event,
        interval: float = POLL_INTERVAL,
    ) -> None:
        """Poll the buffer and hand each decoded packet to callback until stopped."""
        while not stop_event.is_set():
            for packet in self.packets():
                callback(packet)
            stop_event.wait(interval)