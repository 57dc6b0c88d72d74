"""Union-with-sum merge of worker partial results."""

from collections.abc import Iterable

from ndjson_type_stats.scan.types import GlobalResult, PartialResult, ScanStats, TypeStats


def merge_partials(partials: Iterable[PartialResult]) -> GlobalResult:
    """
    Fold partial results into one GlobalResult.

    Each key's count and bytes are summed across the partials that contain it.
    Addition is commutative, so the order in which workers finished does not
    matter. Stats are copied into a fresh accumulator, never aliased, so the
    partials are left untouched and merging them again gives the same result.
    """
    merged: dict[bytes, TypeStats] = {}
    scan = ScanStats()

    for partial in partials:
        scan.add(partial.scan)
        for key, stats in partial.types.items():
            total = merged.get(key)
            if total is None:
                merged[key] = TypeStats(stats.count, stats.total_bytes)
            else:
                total.count += stats.count
                total.total_bytes += stats.total_bytes

    # Keys were validated as UTF-8 when first recorded.
    types = {key.decode("utf-8"): stats for key, stats in merged.items()}
    return GlobalResult(types, scan)
