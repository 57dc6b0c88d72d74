"""Per-range worker: read, split lines, extract types, aggregate."""

from typing import TypeAlias
import threading
from multiprocessing.synchronize import Event as ProcessEvent

from ndjson_type_stats.chunking.types import BUFFER_SIZE, ByteRange
from ndjson_type_stats.chunking.windows import iter_windows
from ndjson_type_stats.errors import ScanCancelled
from ndjson_type_stats.scan.aggregate import PartialAggregator
from ndjson_type_stats.scan.extract import extract_type
from ndjson_type_stats.scan.lines import iter_line_spans
from ndjson_type_stats.scan.types import Outcome, PartialResult, ScanStats

CancelEvent: TypeAlias = threading.Event | ProcessEvent

# Set by the executor initializer; checked between read windows.
_cancel_event: CancelEvent | None = None


def install_cancel_event(event: CancelEvent | None) -> None:
    """Executor initializer sharing the run's cancel event with this worker."""
    global _cancel_event
    _cancel_event = event


def process_range(
    input_path: str,
    byte_range: ByteRange,
    include_terminator: bool = True,
    window_size: int = BUFFER_SIZE,
) -> PartialResult:
    """
    Aggregate every line of ``byte_range`` into a PartialResult.

    Missing and malformed lines are tallied in the scan stats and never raise.
    Only I/O failures (ScanIOError) and cancellation (ScanCancelled) escape.
    """
    aggregator = PartialAggregator()
    record = aggregator.record
    scan = ScanStats()

    for window in iter_windows(input_path, byte_range, window_size):
        if _cancel_event is not None and _cancel_event.is_set():
            raise ScanCancelled(input_path, window.offset)

        buf = window.data
        for line_start, line_end, terminator_len in iter_line_spans(buf, 0, window.end):
            scan.lines_read += 1
            key = extract_type(buf, line_start, line_end)
            if key is Outcome.MISSING:
                scan.missing_type_lines += 1
                continue
            if key is Outcome.MALFORMED:
                scan.malformed_lines += 1
                continue

            line_length = line_end - line_start
            if include_terminator:
                line_length += terminator_len
            if not record(key, line_length):
                scan.malformed_lines += 1

    return PartialResult(byte_range, aggregator.result(), scan)
