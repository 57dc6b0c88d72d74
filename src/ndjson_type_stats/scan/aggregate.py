"""Worker-local aggregation of type keys."""

from ndjson_type_stats.scan.types import TypeKey, TypeStats


class PartialAggregator:
    """
    Map from type key to TypeStats for a single worker.

    Lookups accept a borrowed memoryview; the key is copied to owned bytes only
    the first time it is seen, so the map stays valid after the read window it
    came from is dropped. One instance is never shared between workers, so
    there is no locking.
    """

    def __init__(self) -> None:
        self._types: dict[bytes, TypeStats] = {}

    def __len__(self) -> int:
        return len(self._types)

    def record(self, key: TypeKey, line_length: int) -> bool:
        """
        Count one line of ``line_length`` bytes under ``key``.

        Returns False without recording anything when a first-seen key is not
        valid UTF-8.
        """
        stats = self._types.get(key)
        if stats is not None:
            stats.count += 1
            stats.total_bytes += line_length
            return True

        owned = bytes(key)
        try:
            owned.decode("utf-8")
        except UnicodeDecodeError:
            return False
        self._types[owned] = TypeStats(1, line_length)
        return True

    def result(self) -> dict[bytes, TypeStats]:
        return self._types
