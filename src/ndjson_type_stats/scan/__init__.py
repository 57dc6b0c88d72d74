"""Line scanning, type extraction and per-worker aggregation."""

from ndjson_type_stats.scan.aggregate import PartialAggregator
from ndjson_type_stats.scan.extract import extract_type
from ndjson_type_stats.scan.lines import iter_line_spans
from ndjson_type_stats.scan.process_range import install_cancel_event, process_range
from ndjson_type_stats.scan.types import (
    GlobalResult,
    Outcome,
    PartialResult,
    ScanStats,
    TypeStats,
)

__all__ = [
    "GlobalResult",
    "Outcome",
    "PartialAggregator",
    "PartialResult",
    "ScanStats",
    "TypeStats",
    "extract_type",
    "install_cancel_event",
    "iter_line_spans",
    "process_range",
]
