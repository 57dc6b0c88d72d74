"""Tests for top-level type extraction."""

from ndjson_type_stats.scan.extract import decode_escaped, extract_type
from ndjson_type_stats.scan.types import Outcome


def _extract(line: bytes):
    return extract_type(line, 0, len(line))


class TestExtractFound:
    """Lines whose top-level type value is recovered."""

    def test_plain_value_is_borrowed(self) -> None:
        """Test that an escape-free value comes back as a view, not a copy."""
        result = _extract(b'{"type":"nulla","x":1}')
        assert isinstance(result, memoryview)
        assert bytes(result) == b"nulla"

    def test_type_after_other_keys(self) -> None:
        assert bytes(_extract(b'{"id":7,"payload":"abc","type":"dolore"}')) == b"dolore"

    def test_whitespace_around_tokens(self) -> None:
        assert bytes(_extract(b'  { "type" : "spaced" , "x": 1}')) == b"spaced"

    def test_nested_type_keys_are_ignored(self) -> None:
        line = b'{"a":{"type":"inner"},"b":[{"type":"x"}],"type":"outer"}'
        assert bytes(_extract(line)) == b"outer"

    def test_type_text_inside_string_values_is_ignored(self) -> None:
        """Test that quoted braces and a fake key inside a value do not confuse the scan."""
        line = b'{"note":"{\\"type\\":\\"fake\\"}","kind":"type","type":"real"}'
        assert bytes(_extract(line)) == b"real"

    def test_first_top_level_occurrence_wins(self) -> None:
        assert bytes(_extract(b'{"type":"first","type":"second"}')) == b"first"

    def test_empty_string_value(self) -> None:
        assert bytes(_extract(b'{"type":""}')) == b""

    def test_respects_line_bounds(self) -> None:
        buf = b'xx{"type":"a"}yy'
        assert bytes(extract_type(buf, 2, 14)) == b"a"

    def test_non_ascii_value(self) -> None:
        line = '{"type":"café"}'.encode("utf-8")
        assert bytes(_extract(line)) == "café".encode("utf-8")

    def test_valid_non_ascii_before_type(self) -> None:
        line = '{"note":"naïve ☃","type":"a"}'.encode("utf-8")
        assert bytes(_extract(line)) == b"a"


class TestExtractEscapes:
    """Values containing JSON escape sequences are decoded into owned bytes."""

    def test_escaped_quote(self) -> None:
        result = _extract(b'{"type":"a\\"b"}')
        assert isinstance(result, bytes)
        assert result == b'a"b'

    def test_unicode_escape_matches_plain_key(self) -> None:
        assert _extract(b'{"type":"a\\u0062"}') == b"ab"

    def test_simple_escapes(self) -> None:
        line = b'{"type":"\\\\\\/\\b\\f\\n\\r\\t"}'
        assert _extract(line) == b"\\/\b\f\n\r\t"

    def test_surrogate_pair(self) -> None:
        assert _extract(b'{"type":"\\ud83d\\ude00"}') == "\U0001f600".encode("utf-8")

    def test_lone_surrogate_is_malformed(self) -> None:
        assert _extract(b'{"type":"\\ud83d"}') is Outcome.MALFORMED
        assert _extract(b'{"type":"\\ude00x"}') is Outcome.MALFORMED

    def test_unknown_escape_is_malformed(self) -> None:
        assert _extract(b'{"type":"\\x41"}') is Outcome.MALFORMED
        assert _extract(b'{"type":"\\u12"}') is Outcome.MALFORMED

    def test_invalid_utf8_with_escape_is_malformed(self) -> None:
        assert _extract(b'{"type":"\xff\\n"}') is Outcome.MALFORMED

    def test_decode_escaped_direct(self) -> None:
        assert decode_escaped(b"tab\\there") == b"tab\there"


class TestExtractMissing:
    """Well-formed-enough objects without a top-level type key."""

    def test_no_type_key(self) -> None:
        assert _extract(b'{"x":1}') is Outcome.MISSING

    def test_empty_object(self) -> None:
        assert _extract(b"{}") is Outcome.MISSING

    def test_only_nested_type(self) -> None:
        assert _extract(b'{"a":{"type":"inner"}}') is Outcome.MISSING

    def test_type_only_as_value(self) -> None:
        assert _extract(b'{"kind":"type"}') is Outcome.MISSING


class TestExtractMalformed:
    """Lines that cannot be attributed to a type."""

    def test_not_json(self) -> None:
        assert _extract(b"not a json object at all") is Outcome.MALFORMED

    def test_blank_lines(self) -> None:
        assert _extract(b"") is Outcome.MALFORMED
        assert _extract(b"   ") is Outcome.MALFORMED

    def test_top_level_array(self) -> None:
        assert _extract(b'[{"type":"a"}]') is Outcome.MALFORMED

    def test_non_string_values(self) -> None:
        assert _extract(b'{"type":1}') is Outcome.MALFORMED
        assert _extract(b'{"type":null}') is Outcome.MALFORMED
        assert _extract(b'{"type":{"name":"a"}}') is Outcome.MALFORMED

    def test_unterminated_value(self) -> None:
        assert _extract(b'{"type":"abc') is Outcome.MALFORMED

    def test_object_runs_off_line(self) -> None:
        assert _extract(b'{"x":1') is Outcome.MALFORMED
        assert _extract(b'{"x":"}') is Outcome.MALFORMED

    def test_value_cut_by_line_end(self) -> None:
        buf = b'{"type":"ab"}'
        assert extract_type(buf, 0, 10) is Outcome.MALFORMED

    def test_invalid_utf8_before_type(self) -> None:
        """Test that bad bytes the scan walks over reject the line, not just bad values."""
        assert _extract(b'{"x":"\xff\xfe","type":"a"}') is Outcome.MALFORMED
        assert _extract(b'{"\xc3":1,"type":"a"}') is Outcome.MALFORMED

    def test_invalid_utf8_in_plain_value(self) -> None:
        assert _extract(b'{"type":"\xff"}') is Outcome.MALFORMED

    def test_key_without_colon(self) -> None:
        assert _extract(b'{"type" "a"}') is Outcome.MALFORMED
        assert _extract(b'{"x":1 , "y" 2,"type":"a"}') is Outcome.MALFORMED

    def test_string_value_named_type_is_not_a_key(self) -> None:
        assert _extract(b'{"kind" : "type" }') is Outcome.MISSING
