"""Console table rendering for the final type statistics."""

from collections.abc import Mapping

from tabulate import tabulate

from ndjson_type_stats.scan.types import TypeStats

HEADERS = ("Type", "Count", "Size Bytes")


def sorted_rows(types: Mapping[str, TypeStats]) -> list[tuple[str, int, int]]:
    """Rows ordered by count (highest first), then by type name."""
    rows = [(name, stats.count, stats.total_bytes) for name, stats in types.items()]
    rows.sort(key=lambda row: (-row[1], row[0]))
    return rows


def render_table(types: Mapping[str, TypeStats], tablefmt: str = "grid") -> str:
    """Render ``Type | Count | Size Bytes`` with every column right-aligned."""
    return tabulate(
        sorted_rows(types),
        headers=HEADERS,
        tablefmt=tablefmt,
        colalign=("right", "right", "right"),
        disable_numparse=True,
    )
