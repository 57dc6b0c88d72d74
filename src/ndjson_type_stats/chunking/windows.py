"""Bounded, line-aligned buffered reads over one byte range."""

from collections.abc import Iterator

from ndjson_type_stats.chunking.types import BUFFER_SIZE, ByteRange, Window
from ndjson_type_stats.errors import ScanIOError


def iter_windows(
    input_path: str,
    byte_range: ByteRange,
    window_size: int = BUFFER_SIZE,
) -> Iterator[Window]:
    """
    Read ``byte_range`` lazily in windows of about ``window_size`` bytes.

    Every window ends right after a newline, except the last one which ends at
    the range end. The incomplete tail of a read is carried into the next
    window. A line longer than ``window_size`` keeps growing its window until
    its newline shows up, so memory stays at one window plus one line.
    """
    end = byte_range.end
    read_pos = byte_range.start
    window_start = read_pos
    carry = b""

    try:
        with open(input_path, "rb", buffering=0) as handle:
            handle.seek(read_pos)
            while read_pos < end:
                block = handle.read(min(window_size, end - read_pos))
                if not block:
                    raise ScanIOError(input_path, read_pos, "file truncated during scan")
                read_pos += len(block)
                data = carry + block if carry else block

                if read_pos >= end:
                    yield Window(window_start, data, len(data))
                    return

                cut = data.rfind(b"\n") + 1
                if cut == 0:
                    carry = data
                    continue

                yield Window(window_start, data, cut)
                carry = data[cut:]
                window_start += cut
    except OSError as exc:
        raise ScanIOError(input_path, read_pos, str(exc)) from exc
