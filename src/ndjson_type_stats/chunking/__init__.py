"""Chunked reading: line-aligned byte ranges and bounded read windows."""

from ndjson_type_stats.chunking.ranges import file_size, plan_ranges
from ndjson_type_stats.chunking.types import BUFFER_SIZE, ByteRange, Window
from ndjson_type_stats.chunking.windows import iter_windows

__all__ = ["BUFFER_SIZE", "ByteRange", "Window", "file_size", "iter_windows", "plan_ranges"]
