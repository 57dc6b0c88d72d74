"""Tests for merging partial results."""

import copy

from ndjson_type_stats.chunking import ByteRange
from ndjson_type_stats.scan.types import GlobalResult, PartialResult, ScanStats, TypeStats
from ndjson_type_stats.solver.merge import merge_partials


def _partials() -> list[PartialResult]:
    return [
        PartialResult(
            ByteRange(0, 100),
            {b"nulla": TypeStats(2, 48), b"dolore": TypeStats(1, 25)},
            ScanStats(lines_read=4, malformed_lines=1),
        ),
        PartialResult(
            ByteRange(100, 180),
            {b"nulla": TypeStats(1, 25), b"caf\xc3\xa9": TypeStats(3, 60)},
            ScanStats(lines_read=5, missing_type_lines=1),
        ),
        PartialResult(ByteRange(180, 190), {}, ScanStats(lines_read=1, malformed_lines=1)),
    ]


class TestMergePartials:
    """Test cases for merge_partials function."""

    def test_sums_counts_and_bytes_per_key(self) -> None:
        result = merge_partials(_partials())

        assert result.types == {
            "nulla": TypeStats(3, 73),
            "dolore": TypeStats(1, 25),
            "café": TypeStats(3, 60),
        }
        assert result.scan == ScanStats(lines_read=10, malformed_lines=2, missing_type_lines=1)
        assert result.skipped_lines == 3
        assert result.total_count == 7
        assert result.total_bytes == 158

    def test_inputs_are_not_mutated(self) -> None:
        """Test that merging twice gives the same answer and leaves partials intact."""
        partials = _partials()
        before = copy.deepcopy(partials)

        first = merge_partials(partials)
        second = merge_partials(partials)

        assert first == second
        assert partials == before

    def test_order_does_not_matter(self) -> None:
        partials = _partials()
        assert merge_partials(partials) == merge_partials(list(reversed(partials)))

    def test_no_partials(self) -> None:
        result = merge_partials([])
        assert result == GlobalResult()
        assert result.skipped_lines == 0
