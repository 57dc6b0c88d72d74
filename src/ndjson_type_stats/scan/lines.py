"""Line boundary scanning inside a read window."""

from collections.abc import Iterator

from ndjson_type_stats.scan.types import LineSpan


def iter_line_spans(buf: bytes, start: int, end: int) -> Iterator[LineSpan]:
    """
    Yield ``(line_start, line_end, terminator_len)`` for each line in buf[start:end].

    The newline is excluded from the span; ``terminator_len`` is 1 when the
    line ended on a newline and 0 for a final unterminated line. A trailing
    newline does not produce an extra empty line, but blank lines in between
    are yielded like any other line.
    """
    find = buf.find
    pos = start
    while pos < end:
        newline = find(b"\n", pos, end)
        if newline == -1:
            yield pos, end, 0
            return
        yield pos, newline, 1
        pos = newline + 1
