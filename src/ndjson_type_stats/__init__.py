"""NDJSON Type Stats - count records and bytes per `type` value in large NDJSON files."""

from ndjson_type_stats.errors import ScanIOError
from ndjson_type_stats.scan.types import GlobalResult, TypeStats
from ndjson_type_stats.solver import count_types, main_count

__all__ = ["GlobalResult", "ScanIOError", "TypeStats", "count_types", "main_count"]
