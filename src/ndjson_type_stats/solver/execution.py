"""Execution policy and executor selection utilities."""

from typing import TypeAlias
import os
import sys
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

ExecutorClass: TypeAlias = type[ThreadPoolExecutor] | type[ProcessPoolExecutor] | None

# Environment variable to override executor selection.
NTS_EXECUTOR_ENV = "NTS_EXECUTOR"

# Policy name -> executor class; None scans in the calling thread.
EXECUTORS: dict[str, ExecutorClass] = {
    "threads": ThreadPoolExecutor,
    "processes": ProcessPoolExecutor,
    "serial": None,
}

EXECUTOR_NAMES = tuple(EXECUTORS)


def is_gil_enabled() -> bool:
    """Whether this interpreter runs with the GIL (always true before 3.13)."""
    gil_check = getattr(sys, "_is_gil_enabled", None)
    return True if gil_check is None else gil_check()


def default_worker_count() -> int:
    """Worker count used when none is configured: the available CPUs."""
    return os.cpu_count() or 1


def get_executor_class(configured: str | None = None) -> ExecutorClass:
    """
    Select the appropriate executor class.

    Priority:
    1. NTS_EXECUTOR env var override ("threads", "processes", or "serial")
    2. ``configured`` executor name from the config file
    3. Auto-select based on GIL status (disabled -> threads, enabled -> processes)

    "serial" mode scans every range in the main thread - useful for debugging
    with breakpoints.
    """
    executor_override = os.environ.get(NTS_EXECUTOR_ENV, "").lower()
    if executor_override in EXECUTORS:
        return EXECUTORS[executor_override]

    if configured is not None:
        if configured not in EXECUTORS:
            raise ValueError(f"unknown executor {configured!r}, expected one of {EXECUTOR_NAMES}")
        return EXECUTORS[configured]

    return ProcessPoolExecutor if is_gil_enabled() else ThreadPoolExecutor


def describe_executor(executor_class: ExecutorClass) -> str:
    """Policy name for ``executor_class``, as accepted by NTS_EXECUTOR."""
    for name, candidate in EXECUTORS.items():
        if candidate is executor_class:
            return name
    raise ValueError(f"unsupported executor {executor_class!r}")
