import logging
import multiprocessing
import os
import threading
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from functools import partial
from pathlib import Path

import psutil

from ndjson_type_stats.chunking import BUFFER_SIZE, ByteRange, plan_ranges
from ndjson_type_stats.errors import ScanCancelled
from ndjson_type_stats.report import render_table
from ndjson_type_stats.scan import GlobalResult, PartialResult, install_cancel_event, process_range
from ndjson_type_stats.solver.execution import (
    NTS_EXECUTOR_ENV,
    ExecutorClass,
    default_worker_count,
    describe_executor,
    get_executor_class,
    is_gil_enabled,
)
from ndjson_type_stats.solver.merge import merge_partials

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024


def count_types(
    input_path: str,
    workers: int | None = None,
    include_terminator: bool = True,
    window_size: int = BUFFER_SIZE,
    executor: str | None = None,
) -> GlobalResult:
    """
    Count lines and bytes per top-level ``type`` value of an NDJSON file.

    Map/reduce over the file:
    1. Plan one line-aligned byte range per worker
    2. Scan every range in parallel into a worker-local partial result
    3. Merge the partials once every worker has finished

    Raises ScanIOError when the file cannot be read; nothing partial is
    returned in that case.
    """
    total_start = time.perf_counter()
    input_file = Path(input_path)
    input_path = str(input_file.resolve())

    if workers is None:
        workers = default_worker_count()
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    # Select executor based on policy.
    executor_class = get_executor_class(executor)
    executor_name = describe_executor(executor_class)

    gil_status = "enabled" if is_gil_enabled() else "disabled"
    executor_override = os.environ.get(NTS_EXECUTOR_ENV, "")
    override_info = f", NTS_EXECUTOR={executor_override}" if executor_override else ""

    logger.info(
        f"Starting: file={input_file.name}, workers={workers}, executor={executor_name}, "
        f"GIL={gil_status}{override_info}"
    )

    # Pass 1: plan line-aligned ranges.
    t1_start = time.perf_counter()
    ranges = plan_ranges(input_path, workers)
    t1 = time.perf_counter() - t1_start
    size = ranges[-1].end if ranges else 0
    logger.info("Planned %d ranges over %d bytes in %.2fs", len(ranges), size, t1)

    if not ranges:
        total_time = time.perf_counter() - total_start
        logger.info("Result: empty input (total %.2fs)", total_time)
        return GlobalResult()

    # Pass 2: scan ranges in parallel, then merge once all have finished.
    t2_start = time.perf_counter()
    task = partial(
        process_range,
        input_path,
        include_terminator=include_terminator,
        window_size=window_size,
    )
    partials = run_ranges(executor_class, task, ranges, workers)
    t2 = time.perf_counter() - t2_start

    t3_start = time.perf_counter()
    result = merge_partials(partials)
    t3 = time.perf_counter() - t3_start

    logger.debug("Timing breakdown: plan=%.2fs, scan=%.2fs, merge=%.3fs", t1, t2, t3)

    if result.skipped_lines > 0:
        logger.warning(
            "%d lines skipped (malformed=%d, missing type=%d, read=%d)",
            result.skipped_lines,
            result.scan.malformed_lines,
            result.scan.missing_type_lines,
            result.scan.lines_read,
        )

    log_summary(result, size, time.perf_counter() - total_start)
    return result


def run_ranges(
    executor_class: ExecutorClass,
    task: partial[PartialResult],
    ranges: list[ByteRange],
    workers: int,
) -> list[PartialResult]:
    """
    Run ``task`` over every range and collect the partial results.

    The first failing task sets the shared cancel event and cancels pending
    tasks; running tasks stop at their next read window. Once every task has
    terminated the first failure is re-raised, so a failed run never returns
    partial results.
    """
    if executor_class is None:
        install_cancel_event(None)
        return [task(byte_range) for byte_range in ranges]

    if executor_class is ProcessPoolExecutor:
        cancel_event = multiprocessing.Event()
    else:
        cancel_event = threading.Event()

    partials: list[PartialResult] = []
    failure: BaseException | None = None

    with executor_class(
        max_workers=min(workers, len(ranges)),
        initializer=install_cancel_event,
        initargs=(cancel_event,),
    ) as executor:
        futures = [executor.submit(task, byte_range) for byte_range in ranges]
        for future in as_completed(futures):
            if future.cancelled():
                continue

            error = future.exception()
            if error is None:
                partial_result = future.result()
                partials.append(partial_result)
                logger.debug(
                    "Range [%d, %d) done: %d lines, %d types",
                    partial_result.byte_range.start,
                    partial_result.byte_range.end,
                    partial_result.scan.lines_read,
                    len(partial_result.types),
                )
                continue

            if failure is None and not isinstance(error, ScanCancelled):
                failure = error
                cancel_event.set()
                for pending in futures:
                    pending.cancel()

    # Thread workers share this module's event slot with the caller.
    install_cancel_event(None)

    if failure is not None:
        raise failure
    return partials


def log_summary(result: GlobalResult, size: int, elapsed: float) -> None:
    """Log run throughput and resource figures."""
    size_mb = size / BYTES_PER_MB
    throughput = size_mb / elapsed if elapsed > 0 else 0.0
    rss_mb = psutil.Process().memory_info().rss / BYTES_PER_MB
    logger.info(
        "Result: time=%.2fs, file_size=%.1fMB, throughput=%.2fMB/s, lines=%d, "
        "unique_types=%d, skipped=%d, rss=%.1fMB",
        elapsed,
        size_mb,
        throughput,
        result.total_count,
        len(result.types),
        result.skipped_lines,
        rss_mb,
    )


def main_count(
    input_path: str,
    workers: int | None = None,
    include_terminator: bool = True,
    window_size: int = BUFFER_SIZE,
    executor: str | None = None,
) -> None:
    """Main entry point that prints the type table to stdout."""
    result = count_types(
        input_path,
        workers=workers,
        include_terminator=include_terminator,
        window_size=window_size,
        executor=executor,
    )
    print(render_table(result.types))
