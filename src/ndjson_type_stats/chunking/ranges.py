"""Split the input file into line-aligned byte ranges for parallel workers."""

import os
from typing import BinaryIO

from ndjson_type_stats.chunking.types import PROBE_SIZE, ByteRange
from ndjson_type_stats.errors import ScanIOError


def file_size(path: str) -> int:
    """Return the size of ``path`` in bytes, raising ScanIOError on failure."""
    try:
        return os.stat(path).st_size
    except OSError as exc:
        raise ScanIOError(path, 0, str(exc)) from exc


def next_line_start(handle: BinaryIO, offset: int, size: int) -> int:
    """
    Return the first line start at or after ``offset``.

    Probing begins one byte early so a candidate that already sits right after
    a newline is kept as is. Returns ``size`` when no newline follows.
    """
    pos = offset - 1
    handle.seek(pos)
    while pos < size:
        block = handle.read(PROBE_SIZE)
        if not block:
            break
        idx = block.find(b"\n")
        if idx != -1:
            return pos + idx + 1
        pos += len(block)
    return size


def plan_ranges(input_path: str, workers: int) -> list[ByteRange]:
    """
    Partition the file into at most ``workers`` contiguous byte ranges.

    Candidate split points are spread evenly (``size * i // workers``) and each
    is pushed forward to the next line start, so no line straddles two ranges
    and imbalance is bounded by the longest line. The ranges cover
    ``[0, size)`` exactly once; empty ranges are dropped, so an empty file
    yields no ranges and a file with fewer lines than workers yields fewer
    ranges.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    size = file_size(input_path)
    if size == 0:
        return []

    boundaries = [0]
    offset = 0
    try:
        with open(input_path, "rb") as handle:
            for i in range(1, workers):
                offset = size * i // workers
                if offset <= boundaries[-1]:
                    continue
                boundary = next_line_start(handle, offset, size)
                if boundary > boundaries[-1]:
                    boundaries.append(boundary)
    except OSError as exc:
        raise ScanIOError(input_path, offset, str(exc)) from exc

    if boundaries[-1] != size:
        boundaries.append(size)

    return [ByteRange(start, end) for start, end in zip(boundaries, boundaries[1:])]
