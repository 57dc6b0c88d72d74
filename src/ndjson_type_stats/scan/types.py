"""Shared type definitions for line scanning and aggregation."""

from typing import TypeAlias
from dataclasses import dataclass, field
from enum import Enum

from ndjson_type_stats.chunking.types import ByteRange

# Extracted ``type`` value: a borrowed memoryview slice of the read window when
# the value had no escapes, otherwise an owned bytes copy. Either way the bytes
# are the UTF-8 encoding of the decoded value.
TypeKey: TypeAlias = bytes | memoryview

# (line_start, line_end, terminator_len) within a read window.
LineSpan: TypeAlias = tuple[int, int, int]


class Outcome(Enum):
    """Why a line could not be attributed to a type key."""

    MISSING = "missing"
    MALFORMED = "malformed"


Extraction: TypeAlias = TypeKey | Outcome


@dataclass(slots=True)
class TypeStats:
    """Occurrence count and summed line bytes for one type key."""

    count: int
    total_bytes: int


@dataclass(slots=True)
class ScanStats:
    """Line tallies for a scan, including the lines that were skipped."""

    lines_read: int = 0
    malformed_lines: int = 0
    missing_type_lines: int = 0

    @property
    def skipped_lines(self) -> int:
        return self.malformed_lines + self.missing_type_lines

    @property
    def counted_lines(self) -> int:
        return self.lines_read - self.skipped_lines

    def add(self, other: "ScanStats") -> None:
        self.lines_read += other.lines_read
        self.malformed_lines += other.malformed_lines
        self.missing_type_lines += other.missing_type_lines


@dataclass(slots=True)
class PartialResult:
    """One worker's aggregation over its byte range, valid until merged."""

    byte_range: ByteRange
    types: dict[bytes, TypeStats]
    scan: ScanStats


@dataclass(slots=True)
class GlobalResult:
    """Run-wide aggregation keyed by decoded type string."""

    types: dict[str, TypeStats] = field(default_factory=dict)
    scan: ScanStats = field(default_factory=ScanStats)

    @property
    def skipped_lines(self) -> int:
        return self.scan.skipped_lines

    @property
    def total_count(self) -> int:
        return sum(stats.count for stats in self.types.values())

    @property
    def total_bytes(self) -> int:
        return sum(stats.total_bytes for stats in self.types.values())
