"""Run orchestration: executor policy, parallel scan and merge."""

from ndjson_type_stats.solver.merge import merge_partials
from ndjson_type_stats.solver.solve import count_types, main_count

__all__ = ["count_types", "main_count", "merge_partials"]
