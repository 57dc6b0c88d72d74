"""Shared constants and range structures for chunked reading."""

from dataclasses import dataclass

# 1MB read window for efficient I/O.
BUFFER_SIZE = 1024 * 1024

# Smallest read window accepted from configuration.
MIN_WINDOW_SIZE = 4096

# Bytes read at a time while probing forward for a line boundary.
PROBE_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class ByteRange:
    """Half-open span [start, end) of the input file assigned to one worker."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Window:
    """
    One buffered read of a byte range.

    ``data[:end]`` holds complete lines only (the last may lack a newline when
    it is the last line of the range). Bytes past ``end`` are the start of a
    line that continues in the next window.
    """

    offset: int
    data: bytes
    end: int
