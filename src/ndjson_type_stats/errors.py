"""Exceptions raised by the type statistics pipeline."""


class TypeStatsError(Exception):
    """Base class for all errors raised by this package."""


class ScanIOError(TypeStatsError):
    """
    Fatal I/O failure while reading the input file.

    Carries the failing byte offset so the caller can report where the read
    broke. Constructor arguments are kept in ``args`` so the error survives
    pickling across a process pool.
    """

    def __init__(self, path: str, offset: int, reason: str):
        super().__init__(path, offset, reason)
        self.path = path
        self.offset = offset
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.path}: I/O error at byte {self.offset}: {self.reason}"


class ScanCancelled(TypeStatsError):
    """A worker stopped early because another worker failed."""

    def __init__(self, path: str, offset: int):
        super().__init__(path, offset)
        self.path = path
        self.offset = offset

    def __str__(self) -> str:
        return f"{self.path}: scan cancelled at byte {self.offset}"


class ConfigError(TypeStatsError):
    """Configuration file could not be read or failed validation."""
