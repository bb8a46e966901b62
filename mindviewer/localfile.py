"""Reader for captured streams stored as lines of space-separated hex bytes."""

from __future__ import annotations

import os
from collections.abc import Iterator

from .icd import hex_to_byte


def parse_line(line: str) -> bytes:
    """Convert one line of space-separated hex pairs to bytes."""
    cleaned = line.replace("\r", "").replace("\n", "")
    return bytes(hex_to_byte(token) for token in cleaned.split(" ") if token)


class LocalFile:
    """A capture file whose lines are replayed as chunks of the stream."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = path

    def packets(self) -> Iterator[bytes]:
        """Yield the bytes of each line in the file, in order."""
        with open(self.path, encoding="latin-1", newline="") as handle:
            for line in handle:
                yield parse_line(line)